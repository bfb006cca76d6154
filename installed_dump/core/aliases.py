"""别名折叠

别名包不产生独立记录，只把自己的 pretty_version 追加到目标包的 aliases；
根包的别名同时追加到 root.aliases。根别名可以层层嵌套（别名的别名），
每一层都要收集。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from installed_dump.core.models import AnyPackage


def expand_root_aliases(root: AnyPackage) -> list[AnyPackage]:
    """展开根别名链

    返回:
        list: 从最外层别名到实体根包的完整链条，实体根包在最后
    """
    chain = [root]
    while root.is_alias and root.is_root:
        root = root.alias_of
        chain.append(root)
    return chain


def fold_aliases(manifest: dict[str, Any], packages: list[AnyPackage]) -> None:
    """把全部别名包的 pretty_version 折叠进 aliases（原地修改）"""
    versions = manifest["versions"]
    for package in packages:
        if not package.is_alias:
            continue
        versions.setdefault(package.name, {}).setdefault("aliases", []).append(package.pretty_version)
        if package.is_root:
            manifest["root"]["aliases"].append(package.pretty_version)
