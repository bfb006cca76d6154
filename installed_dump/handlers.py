"""宿主生命周期钩子

宿主在自动加载导出完成后派发 post-autoload-dump 事件，
PostAutoloadDumpHandler 据此重建 installed.php。
订阅注册由宿主完成，这里只声明订阅关系并处理事件。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from installed_dump.core.generator import InstalledVersionsGenerator

if TYPE_CHECKING:
    from installed_dump.core.models import AnyPackage
    from installed_dump.core.protocols import (
        InstallationManager,
        InstalledRepository,
        OutputSink,
    )

logger = logging.getLogger(__name__)

POST_AUTOLOAD_DUMP = "post-autoload-dump"


@dataclass
class AutoloadDumpEvent:
    """post-autoload-dump 事件携带的宿主上下文"""

    repository: InstalledRepository
    installation_manager: InstallationManager
    root_package: AnyPackage | None
    vendor_dir: str
    dev_mode: bool
    sink: OutputSink | None = None


class PostAutoloadDumpHandler:
    """自动加载导出后重建已安装包清单"""

    def __init__(self, cwd: str = "") -> None:
        self.cwd = cwd

    @staticmethod
    def subscribed_events() -> dict[str, str]:
        return {POST_AUTOLOAD_DUMP: "handle"}

    def handle(self, event: object) -> bool:
        """处理事件，返回清单是否实际写入；非本类事件直接忽略"""
        if not isinstance(event, AutoloadDumpEvent):
            logger.debug("忽略非 post-autoload-dump 事件: %s", type(event).__name__)
            return False

        generator = InstalledVersionsGenerator(
            event.repository,
            event.installation_manager,
            event.root_package,
            vendor_dir=event.vendor_dir,
            dev_mode=event.dev_mode,
            sink=event.sink,
            cwd=self.cwd,
        )
        return generator.write()
