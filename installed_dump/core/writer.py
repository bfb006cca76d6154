"""清单写入

先完整渲染再写入：序列化失败时磁盘上的旧清单保持不变。
内容未变化时不触碰文件，避免刷新 mtime 触发下游无意义的重建。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from installed_dump.core.php_dump import render_installed_file
from installed_dump.utils.fs import write_if_modified

logger = logging.getLogger(__name__)


class ManifestWriter:
    """installed.php 写入器"""

    def __init__(self, reference_dir: str | Path, filename: str = "installed.php") -> None:
        self.path = Path(reference_dir) / filename

    def write(self, manifest: dict[str, Any]) -> bool:
        """渲染并差量写入，返回是否实际写入"""
        content = render_installed_file(manifest)
        written = write_if_modified(self.path, content)
        if written:
            logger.info("清单已更新: %s", self.path)
        else:
            logger.info("清单未变化: %s", self.path)
        return written
