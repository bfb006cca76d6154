"""PHP 数组字面量序列化

把嵌套字典渲染为可被 PHP 直接 include 的 array(...) 字面量。

值类型是封闭集合: dict / list / str / bool / None。
其他类型（包括 int、float）说明上游数据模型被破坏，直接抛出
UnexpectedTypeError，绝不静默转字符串。

渲染规则:
  - int 键裸写（数组下标），str 键加引号
  - list 视为以 0..n-1 为键的数组
  - 非空容器递归缩进一级，空容器写为 array()
  - install_path 的相对路径写为 __DIR__ . '/<rel>'，清单随目录整体搬移后仍有效
  - 每个元素后都有 ",\\n"，最外层 ")" 之后没有
"""

from __future__ import annotations

from typing import Any

from installed_dump.core.exceptions import UnexpectedTypeError
from installed_dump.core.paths import is_absolute_path

INDENT = "    "
INSTALL_PATH_KEY = "install_path"


def export_string(value: str) -> str:
    """按 PHP var_export 规则给字符串加单引号"""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    # NUL 在单引号字符串中无法表达，拼接双引号片段
    escaped = escaped.replace("\0", "' . \"\\0\" . '")
    return f"'{escaped}'"


def _export_key(key: Any) -> str:
    if isinstance(key, bool):
        raise UnexpectedTypeError(key)
    if isinstance(key, int):
        return str(key)
    if isinstance(key, str):
        return export_string(key)
    raise UnexpectedTypeError(key)


def _items(data: dict[Any, Any] | list[Any]) -> list[tuple[Any, Any]]:
    if isinstance(data, dict):
        return list(data.items())
    return list(enumerate(data))


def dump_php_array(data: dict[Any, Any] | list[Any], level: int = 0) -> str:
    """递归渲染嵌套结构为 PHP 数组字面量

    异常:
        UnexpectedTypeError: 键或值不在支持的类型集合内
    """
    lines = "array(\n"
    level += 1

    for key, value in _items(data):
        lines += INDENT * level
        lines += _export_key(key) + " => "

        if isinstance(value, (dict, list)):
            if value:
                lines += dump_php_array(value, level)
            else:
                lines += "array(),\n"
        elif key == INSTALL_PATH_KEY and isinstance(value, str):
            if is_absolute_path(value):
                lines += export_string(value) + ",\n"
            else:
                lines += "__DIR__ . " + export_string("/" + value) + ",\n"
        elif isinstance(value, str):
            lines += export_string(value) + ",\n"
        elif isinstance(value, bool):
            lines += ("true" if value else "false") + ",\n"
        elif value is None:
            lines += "null,\n"
        else:
            raise UnexpectedTypeError(value, key)

    lines += INDENT * (level - 1) + ")" + ("" if level - 1 == 0 else ",\n")
    return lines


def render_installed_file(manifest: dict[str, Any]) -> str:
    """生成 installed.php 完整文件内容"""
    return "<?php return " + dump_php_array(manifest) + ";\n"
