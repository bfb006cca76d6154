"""平台包名判定

平台包（运行时、扩展、系统库）由宿主环境提供，
其存在与否无法通过已安装清单验证，因此不参与 provide/replace 聚合。
"""

from __future__ import annotations

import re

PLATFORM_PACKAGE_RE = re.compile(
    r"(?:php(?:-64bit|-ipv6|-zts|-debug)?|hhvm|"
    r"(?:ext|lib)-[a-z0-9](?:[_.-]?[a-z0-9]+)*|"
    r"composer(?:-(?:plugin|runtime)-api)?)",
    re.IGNORECASE,
)


def is_platform_package(name: str) -> bool:
    """判断包名是否为保留的平台包名（整串匹配，结尾换行不算）"""
    return PLATFORM_PACKAGE_RE.fullmatch(name) is not None
