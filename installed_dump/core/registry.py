"""依赖图快照加载

从 YAML 快照文件加载宿主已解析的包图，用于离线重建清单和测试夹具。

快照格式:
    root:
      name: acme/app
      pretty_version: 1.0.0
      aliases: [1.0.x-dev]          # 逐层包裹根包的别名
      extra: {...}
    packages:
      monolog/monolog:
        pretty_version: 3.5.0
        install_path: vendor/monolog/monolog
        dev: false
        replace: {psr/log-implementation: self.version}
        aliases: [dev-main]

别名项可以是字符串（pretty_version 与 version 相同）或
{pretty_version, version} 映射。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from installed_dump.core.exceptions import ConfigError
from installed_dump.core.models import (
    AliasPackage,
    AnyPackage,
    Link,
    Package,
    RootAliasPackage,
    RootPackage,
)
from installed_dump.core.repository import PackageRepository, PathInstallationManager
from installed_dump.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)


@dataclass
class ResolvedGraph:
    """已解析包图：宿主三件协作方的打包"""

    repository: PackageRepository
    installation_manager: PathInstallationManager
    root_package: AnyPackage | None


def _text(value: Any, where: str) -> str:
    """版本号与约束必须是字符串

    YAML 会把未加引号的 2.10 解析为浮点数 2.1，str() 之后无法还原，
    因此非字符串一律拒绝，由用户在快照里加引号。
    """
    if not isinstance(value, str):
        raise ConfigError(
            f"{where} 必须是字符串 (实际类型: {type(value).__name__}, 值: {value!r})，"
            f"请在 YAML 中加引号",
        )
    return value


def _links(name: str, info: dict[str, Any], section: str) -> list[Link]:
    return [
        Link(target=target, pretty_constraint=_text(constraint, f"{name} {section}.{target}"))
        for target, constraint in (info.get(section) or {}).items()
    ]


def _alias_versions(name: str, item: Any) -> tuple[str, str]:
    if isinstance(item, dict):
        pretty = _text(item.get("pretty_version"), f"{name} 别名 pretty_version")
        return pretty, _text(item.get("version", pretty), f"{name} 别名 version")
    pretty = _text(item, f"{name} 别名")
    return pretty, pretty


def _package_kwargs(name: str, info: dict[str, Any]) -> dict[str, Any]:
    pretty = _text(info.get("pretty_version", "dev-main"), f"{name} pretty_version")
    kwargs: dict[str, Any] = {
        "name": name,
        "pretty_version": pretty,
        "version": _text(info.get("version", pretty), f"{name} version"),
        "source_reference": info.get("source_reference"),
        "dist_reference": info.get("dist_reference"),
        "installation_source": info.get("installation_source"),
        "provides": _links(name, info, "provide"),
        "replaces": _links(name, info, "replace"),
        "extra": info.get("extra") or {},
    }
    if "type" in info:
        kwargs["type"] = info["type"]
    return kwargs


class PackageRegistry:
    """依赖图注册表 - 从快照文件加载包图"""

    def __init__(self, graph_path: str | Path) -> None:
        self.graph_path = Path(graph_path)

    def load(self) -> ResolvedGraph:
        """从快照文件加载包图

        异常:
            ConfigError: 快照文件不存在或格式无效
        """
        if not self.graph_path.exists():
            raise ConfigError(f"依赖图快照不存在: {self.graph_path}")
        try:
            data = load_yaml(self.graph_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"无法读取依赖图快照 {self.graph_path}: {e}") from e
        return self.build(data)

    @staticmethod
    def build(data: dict[str, Any]) -> ResolvedGraph:
        """从已解析的字典构建包图"""
        repository = PackageRepository()
        manager = PathInstallationManager()

        for name, info in (data.get("packages") or {}).items():
            info = info or {}
            if not isinstance(info, dict):
                raise ConfigError(f"包 '{name}' 的定义必须是映射")
            package = Package(**_package_kwargs(name, info))
            dev = bool(info.get("dev", False))
            repository.add_package(package, dev=dev)
            for item in info.get("aliases") or []:
                pretty, version = _alias_versions(name, item)
                repository.add_package(AliasPackage(package, version, pretty), dev=dev)
            manager.set_install_path(name, info.get("install_path"))

        root: AnyPackage | None = None
        root_info = data.get("root")
        if root_info:
            if "name" not in root_info:
                raise ConfigError("根包缺少 name 字段")
            root = RootPackage(**_package_kwargs(root_info["name"], root_info))
            for item in root_info.get("aliases") or []:
                pretty, version = _alias_versions(root_info["name"], item)
                root = RootAliasPackage(root, version, pretty)

        logger.info("已加载 %d 个包", len(repository.get_canonical_packages()))
        return ResolvedGraph(repository=repository, installation_manager=manager, root_package=root)
