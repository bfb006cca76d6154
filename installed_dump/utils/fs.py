"""清单文件写入

installed.php 由宿主运行时（可能是另一个系统用户）读取，写入需满足:
  - 原子替换: 读取方永远看不到半截文件
  - 权限: 新文件遵循 umask（等同普通 open 创建），已有文件保留原权限
  - 差量: 内容未变化不写入，mtime 保持不变
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# 普通文件创建时的基础权限，实际值再经 umask 过滤
DEFAULT_FILE_MODE = 0o666


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def target_mode(path: Path) -> int:
    """计算替换后文件应有的权限位"""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return DEFAULT_FILE_MODE & ~_current_umask()


def atomic_write(path: Path, content: str) -> None:
    """同目录临时文件 + os.replace 原子写入

    mkstemp 创建的临时文件权限固定为 0600，替换前按 target_mode 修正。

    异常:
        OSError: 文件写入、授权或移动失败
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = target_mode(path)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        # newline="" 保证写入字节与内容逐一对应
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp, mode)
        os.replace(tmp, str(path))
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    logger.debug("已写入 %s (mode=%o)", path, mode)


def write_if_modified(path: str | Path, content: str) -> bool:
    """内容与磁盘现有内容不同时才写入

    返回:
        bool: 实际发生写入返回 True，内容相同跳过返回 False
    """
    p = Path(path)
    if p.is_file() and p.read_bytes() == content.encode("utf-8"):
        logger.debug("内容未变化，跳过写入: %s", p)
        return False
    atomic_write(p, content)
    return True
