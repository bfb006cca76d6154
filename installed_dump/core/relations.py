"""provide / replace 关系聚合

把每个包声明的 replace / provide 关系折叠到目标（虚拟）包的记录上:

  1. replace 全量一轮，再 provide 全量一轮，各自按包遍历顺序
  2. 平台包目标跳过（其存在与否无法验证）
  3. self.version 约束替换为声明方自身的 pretty_version
  4. dev_requirement 按"非开发优先"合并：只要有一个非开发包声明即为 False
  5. 约束字符串去重追加到 replaced / provided

目标包不存在时新建合成记录，只含 dev_requirement 与关系列表。
"""

from __future__ import annotations

import logging
from collections.abc import Container, Iterable
from enum import Enum
from typing import TYPE_CHECKING, Any

from installed_dump.core.models import SELF_VERSION
from installed_dump.core.platform import is_platform_package

if TYPE_CHECKING:
    from installed_dump.core.models import AnyPackage, Link

logger = logging.getLogger(__name__)


class DevFlag(Enum):
    """目标记录的开发依赖状态"""

    UNSET = "unset"
    DEV = "dev"
    NON_DEV = "non_dev"

    @classmethod
    def of(cls, record: dict[str, Any]) -> DevFlag:
        if "dev_requirement" not in record:
            return cls.UNSET
        return cls.DEV if record["dev_requirement"] else cls.NON_DEV

    def merge(self, is_dev: bool) -> DevFlag:
        """合并一个声明方；NON_DEV 为吸收态，一旦出现不可回退"""
        if self is DevFlag.NON_DEV or not is_dev:
            return DevFlag.NON_DEV
        return DevFlag.DEV


def resolve_constraint(link: Link, package: AnyPackage) -> str:
    """self.version 替换为声明方自身版本"""
    if link.pretty_constraint == SELF_VERSION:
        return package.pretty_version
    return link.pretty_constraint


def _fold(
    versions: dict[str, dict[str, Any]],
    package: AnyPackage,
    links: Iterable[Link],
    list_key: str,
    is_dev: bool,
) -> None:
    for link in links:
        if is_platform_package(link.target):
            continue
        record = versions.setdefault(link.target, {})
        record["dev_requirement"] = DevFlag.of(record).merge(is_dev) is DevFlag.DEV

        constraint = resolve_constraint(link, package)
        values = record.setdefault(list_key, [])
        if constraint not in values:
            values.append(constraint)


def aggregate_relations(
    versions: dict[str, dict[str, Any]],
    packages: list[AnyPackage],
    dev_packages: Container[str],
) -> None:
    """把全部包的 replace / provide 关系折叠进 versions（原地修改）"""
    for package in packages:
        _fold(versions, package, package.replaces, "replaced", package.name in dev_packages)
    for package in packages:
        _fold(versions, package, package.provides, "provided", package.name in dev_packages)
    logger.debug("关系聚合完成，当前记录数: %d", len(versions))
