"""已安装包清单生成器

把宿主已解析的包图转换为 installed.php 清单，数据单向流动:

  安装路径解析 → 版本记录合成 → 关系聚合 → 别名折叠 → 规范排序 → 序列化 → 差量写入

用法:
    from installed_dump.core.generator import InstalledVersionsGenerator

    gen = InstalledVersionsGenerator(
        repository, installation_manager, root_package,
        vendor_dir="/app/vendor", dev_mode=True,
    )
    manifest = gen.generate()   # 仅生成内存结构
    gen.write()                 # 生成并写入 <vendor>/composer/installed.php
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from installed_dump.core.aliases import expand_root_aliases, fold_aliases
from installed_dump.core.config import MANIFEST_SUBDIR, get_config
from installed_dump.core.exceptions import MissingRootPackageError
from installed_dump.core.paths import absolute_path, build_install_path_index
from installed_dump.core.php_dump import render_installed_file
from installed_dump.core.records import dump_installed_package, dump_root_package
from installed_dump.core.relations import aggregate_relations
from installed_dump.core.repository import LoggingSink
from installed_dump.core.sorting import sort_manifest
from installed_dump.core.writer import ManifestWriter

if TYPE_CHECKING:
    from installed_dump.core.models import AnyPackage
    from installed_dump.core.protocols import (
        InstallationManager,
        InstalledRepository,
        OutputSink,
    )

logger = logging.getLogger(__name__)


class InstalledVersionsGenerator:
    """installed.php 清单生成器

    每次调用都从当前包图重新构建，不保留任何跨调用状态。
    未显式传入的 vendor_dir / dev_mode / manifest_file 取自全局配置。
    """

    def __init__(
        self,
        repository: InstalledRepository,
        installation_manager: InstallationManager,
        root_package: AnyPackage | None,
        *,
        vendor_dir: str = "",
        dev_mode: bool | None = None,
        manifest_file: str = "",
        sink: OutputSink | None = None,
        cwd: str = "",
    ) -> None:
        cfg = get_config()
        self.repository = repository
        self.installation_manager = installation_manager
        self.root_package = root_package
        self.dev_mode = cfg.dev_mode if dev_mode is None else dev_mode
        self.manifest_file = manifest_file or cfg.manifest_file
        self.sink = sink if sink is not None else LoggingSink()
        self.cwd = cwd or str(Path.cwd())
        vendor = absolute_path(vendor_dir or cfg.vendor_dir, self.cwd)
        self.reference_dir = f"{vendor}/{MANIFEST_SUBDIR}"

    def install_paths(self) -> dict[str, str | None]:
        return build_install_path_index(
            self.repository, self.installation_manager, self.reference_dir, self.cwd,
        )

    def generate(self) -> dict[str, Any]:
        """生成清单的内存结构

        异常:
            MissingRootPackageError: 未提供根包
        """
        if self.root_package is None:
            raise MissingRootPackageError(
                "It should not be possible to dump packages if no root package is given",
            )

        dev_packages = set(self.repository.get_dev_package_names())
        packages = list(self.repository.get_packages())
        root_chain = expand_root_aliases(self.root_package)
        packages.extend(root_chain)
        root = root_chain[-1]

        install_paths = self.install_paths()
        options = {"reference_dir": self.reference_dir, "cwd": self.cwd, "sink": self.sink}

        manifest: dict[str, Any] = {
            "root": dump_root_package(
                root, install_paths, dev_packages, dev_mode=self.dev_mode, **options,
            ),
            "versions": {},
        }

        # 实体包（别名包只贡献 aliases）
        for package in packages:
            if package.is_alias:
                continue
            manifest["versions"][package.name] = dump_installed_package(
                package, install_paths, dev_packages, **options,
            )

        aggregate_relations(manifest["versions"], packages, dev_packages)
        fold_aliases(manifest, packages)

        manifest = sort_manifest(manifest)
        logger.info(
            "清单已生成: root=%s, 记录数=%d", root.name, len(manifest["versions"]),
        )
        return manifest

    def dump(self) -> str:
        """生成 installed.php 文件内容"""
        return render_installed_file(self.generate())

    def write(self) -> bool:
        """生成并差量写入清单，返回是否实际写入"""
        writer = ManifestWriter(self.reference_dir, self.manifest_file)
        return writer.write(self.generate())
