"""集中配置管理

提供 vendor 目录、清单文件名、开发模式、日志等统一配置入口。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import yaml

from installed_dump.core.exceptions import ConfigError
from installed_dump.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

# 清单所在子目录，相对 vendor_dir
MANIFEST_SUBDIR = "composer"


@dataclass
class Config:
    """全局配置"""

    # 目录 / 文件
    vendor_dir: str = "vendor"
    manifest_file: str = "installed.php"
    graph_file: str = "installed.yml"

    # 生成
    dev_mode: bool = True

    # 日志
    log_level: str = "INFO"
    log_json: bool = False

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "installed_dump.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认

        异常:
            ConfigError: 文件无法解析或顶层不是映射
        """
        try:
            data = load_yaml(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"无法读取配置文件 {path}: {e}") from e
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg


# 全局单例，首次 import 时不加载文件；由入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "installed_dump.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current


def reset_config() -> None:
    """恢复为未初始化状态（测试用）"""
    global _current  # noqa: PLW0603
    _current = None
