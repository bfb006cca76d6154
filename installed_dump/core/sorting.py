"""规范排序

保证相同输入无论遍历顺序如何都生成逐字节一致的清单（可复现构建）。
"""

from __future__ import annotations

import re
from typing import Any

MULTI_VALUED_KEYS = ("aliases", "replaced", "provided")

_DIGITS_RE = re.compile(r"(\d+)")


def natural_key(value: str) -> tuple[list[Any], str]:
    """自然序比较键：数字段按数值比较，"2" < "10"

    re.split 的结果奇数位是数字段、偶数位是文本段，
    两个键逐段比较时同位类型一致。原字符串作为最终决胜，保证全序。
    """
    parts: list[Any] = [
        int(chunk) if i % 2 else chunk
        for i, chunk in enumerate(_DIGITS_RE.split(value))
    ]
    return parts, value


def natural_sorted(values: list[str]) -> list[str]:
    return sorted(values, key=natural_key)


def sort_manifest(manifest: dict[str, Any]) -> dict[str, Any]:
    """多值列表自然排序，versions 与清单本身按键排序

    返回新的顶层字典，记录内部的列表原地排序。
    """
    versions = manifest["versions"]
    for record in versions.values():
        for key in MULTI_VALUED_KEYS:
            if key in record:
                record[key] = natural_sorted(record[key])

    result = dict(manifest)
    result["versions"] = {name: versions[name] for name in sorted(versions)}
    return {key: result[key] for key in sorted(result)}
