"""版本记录合成

把单个包转换为清单中的 VersionRecord，根包额外生成 RootRecord。
记录的键顺序即最终清单中的输出顺序。
"""

from __future__ import annotations

import logging
from collections.abc import Container
from typing import TYPE_CHECKING, Any

from installed_dump.core.paths import root_install_path

if TYPE_CHECKING:
    from installed_dump.core.models import AnyPackage
    from installed_dump.core.protocols import OutputSink

logger = logging.getLogger(__name__)


def resolve_reference(package: AnyPackage) -> str | None:
    """推导包的引用（commit-ish）

    优先取与 installation_source 匹配的引用；
    仍为 None 时回退到非空的 source / dist 引用，都没有则为 None。
    """
    reference = None
    if package.installation_source:
        if package.installation_source == "source":
            reference = package.source_reference
        else:
            reference = package.dist_reference
    if reference is None:
        reference = package.source_reference or package.dist_reference or None
    return reference


def dump_installed_package(
    package: AnyPackage,
    install_paths: dict[str, str | None],
    dev_packages: Container[str],
    *,
    reference_dir: str,
    cwd: str,
    sink: OutputSink | None = None,
) -> dict[str, Any]:
    """生成单个包的版本记录"""
    if package.is_root:
        install_path = root_install_path(reference_dir, cwd)
    else:
        install_path = install_paths.get(package.name)

    if package.extra and sink is not None:
        sink.write(f"[HIT] 📦 {package.name} ({package.pretty_version})")

    return {
        "pretty_version": package.pretty_version,
        "version": package.version,
        "reference": resolve_reference(package),
        "type": package.type,
        "install_path": install_path,
        "aliases": [],
        "dev_requirement": package.name in dev_packages,
    }


def dump_root_package(
    package: AnyPackage,
    install_paths: dict[str, str | None],
    dev_packages: Container[str],
    *,
    dev_mode: bool,
    reference_dir: str,
    cwd: str,
    sink: OutputSink | None = None,
) -> dict[str, Any]:
    """生成根记录：在版本记录基础上换用 name / dev，并携带 extra"""
    data = dump_installed_package(
        package, install_paths, dev_packages,
        reference_dir=reference_dir, cwd=cwd, sink=sink,
    )
    return {
        "name": package.name,
        "pretty_version": data["pretty_version"],
        "version": data["version"],
        "reference": data["reference"],
        "type": data["type"],
        "install_path": data["install_path"],
        "aliases": data["aliases"],
        "dev": dev_mode,
        "extra": package.extra,
    }
