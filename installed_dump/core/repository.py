"""宿主协作方的内存实现

离线重建（从 YAML 快照）和测试使用这些实现；
真实宿主只需提供满足 core/protocols.py 的对象即可。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from installed_dump.core.models import AnyPackage, Package

logger = logging.getLogger(__name__)


class PackageRepository:
    """已安装包仓库"""

    def __init__(
        self,
        packages: list[AnyPackage] | None = None,
        dev_package_names: list[str] | None = None,
    ) -> None:
        self.packages: list[AnyPackage] = list(packages or [])
        self.dev_package_names: list[str] = list(dev_package_names or [])

    def add_package(self, package: AnyPackage, *, dev: bool = False) -> None:
        self.packages.append(package)
        if dev and package.name not in self.dev_package_names:
            self.dev_package_names.append(package.name)

    def get_packages(self) -> list[AnyPackage]:
        return list(self.packages)

    def get_canonical_packages(self) -> list[Package]:
        return [p for p in self.packages if not p.is_alias]

    def get_dev_package_names(self) -> list[str]:
        return list(self.dev_package_names)


class PathInstallationManager:
    """按包名查表的安装路径管理器"""

    def __init__(self, install_paths: dict[str, str | None] | None = None) -> None:
        self.install_paths: dict[str, str | None] = dict(install_paths or {})

    def set_install_path(self, name: str, path: str | None) -> None:
        self.install_paths[name] = path

    def get_install_path(self, package: AnyPackage) -> str | None:
        return self.install_paths.get(package.name)


class LoggingSink:
    """把进度行转发到日志"""

    def __init__(self, name: str = "installed_dump") -> None:
        self._logger = logging.getLogger(name)

    def write(self, message: str) -> None:
        self._logger.info("%s", message)
