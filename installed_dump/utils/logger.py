"""installed_dump 日志配置

库代码只通过 logging.getLogger(__name__) 输出日志。
作为宿主插件运行时不安装任何 handler，沿用宿主的日志配置；
离线重建入口调用 setup_logging()，只接管 installed_dump 命名空间，
不改动根日志器。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

PACKAGE_LOGGER = "installed_dump"

PLAIN_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON 行格式，每条日志一个对象

    字段: timestamp / level / logger / message / module / line，有异常时追加 exception。
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    """为 installed_dump 命名空间安装唯一的 stderr handler

    重复调用会替换而不是叠加 handler；未知级别回退为 INFO。
    返回配置好的包日志器。
    """
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in pkg_logger.handlers[:]:
        pkg_logger.removeHandler(handler)
        handler.close()

    pkg_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    # 已有自己的 handler，避免经根日志器重复输出
    pkg_logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))
    pkg_logger.addHandler(handler)
    return pkg_logger
