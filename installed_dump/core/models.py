"""核心数据模型

宿主已解析的包图在此建模，清单生成各步骤统一从此处导入。
模型对生成流程只读：生成器从不修改包对象，只读取其属性。

包的三种形态:
  - Package:          普通已安装包
  - RootPackage:      项目根包（未被安装，位于当前工作目录）
  - AliasPackage:     别名包，除版本外的属性全部委托给被别名的目标包
  - RootAliasPackage: 根包的别名，可多层嵌套（别名的别名）
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

# 版本约束哨兵：表示"使用声明该关系的包自身的版本"
SELF_VERSION = "self.version"


@dataclass(frozen=True)
class Link:
    """provide / replace 关系"""

    target: str
    pretty_constraint: str


@dataclass
class Package:
    """单个已解析包的元信息"""

    name: str
    pretty_version: str
    version: str
    type: str = "library"
    source_reference: str | None = None
    dist_reference: str | None = None
    installation_source: str | None = None  # "source", "dist" 或 None
    provides: list[Link] = field(default_factory=list)
    replaces: list[Link] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    is_alias = False
    is_root = False


@dataclass
class RootPackage(Package):
    """项目根包"""

    type: str = "project"

    is_root = True


class AliasPackage:
    """别名包

    仅拥有自己的 version / pretty_version，其余属性委托给 alias_of。
    """

    is_alias = True
    is_root = False

    def __init__(self, alias_of: AnyPackage, version: str, pretty_version: str) -> None:
        self.alias_of = alias_of
        self.version = version
        self.pretty_version = pretty_version

    @property
    def name(self) -> str:
        return self.alias_of.name

    @property
    def type(self) -> str:
        return self.alias_of.type

    @property
    def source_reference(self) -> str | None:
        return self.alias_of.source_reference

    @property
    def dist_reference(self) -> str | None:
        return self.alias_of.dist_reference

    @property
    def installation_source(self) -> str | None:
        return self.alias_of.installation_source

    @property
    def provides(self) -> list[Link]:
        return self.alias_of.provides

    @property
    def replaces(self) -> list[Link]:
        return self.alias_of.replaces

    @property
    def extra(self) -> dict[str, Any]:
        return self.alias_of.extra

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.pretty_version!r} -> {self.alias_of.pretty_version!r})"


class RootAliasPackage(AliasPackage):
    """根包的别名，alias_of 可以是 RootPackage 或另一个 RootAliasPackage"""

    is_root = True


AnyPackage = Union[Package, AliasPackage]
