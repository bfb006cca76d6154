"""安装路径解析

计算每个包的安装目录相对于清单目录（<vendor>/composer）的最短路径。

路径规则:
  - 统一使用 "/" 分隔符，跨平台生成一致的清单
  - 相对路径通过 "../" 逐级向上表达
  - 只有文件系统根目录可作为公共祖先时（跨盘符，或顶层目录相距较远）
    保留绝对路径，便于 Docker 等挂载场景
"""

from __future__ import annotations

import logging
import posixpath
import re
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from installed_dump.core.protocols import InstallationManager, InstalledRepository

logger = logging.getLogger(__name__)

# 协议前缀（file://、phar://C: 等）或 Windows 盘符
_PREFIX_RE = re.compile(r"^([0-9a-z]{2,}:(?://(?:[a-z]:)?)?|[a-z]:)", re.IGNORECASE)
_DRIVE_LETTER_RE = re.compile(r"(?:^|://)[a-z]:$", re.IGNORECASE)
_DRIVE_ROOT_RE = re.compile(r"^[a-z]:/?$", re.IGNORECASE)


def is_absolute_path(path: str) -> bool:
    """判断是否为绝对路径：/ 开头、盘符（C:）或 UNC（\\\\）"""
    return path.startswith("/") or path[1:2] == ":" or path.startswith("\\\\")


def normalize_path(path: str) -> str:
    """规范化路径

    反斜杠转为 "/"，折叠 "."、".." 与空段；保留协议/盘符前缀（盘符大写）
    和开头的 "/"。相对路径开头无法折叠的 ".." 原样保留。
    """
    path = path.replace("\\", "/")
    prefix = ""
    absolute = ""

    # UNC 路径 //server/share
    if path.startswith("//") and len(path) > 2:
        absolute = "//"
        path = path[2:]

    m = _PREFIX_RE.match(path)
    if m:
        prefix = m.group(1)
        path = path[len(prefix):]

    if path.startswith("/"):
        absolute = "/"
        path = path[1:]

    parts: list[str] = []
    up = False
    for chunk in path.split("/"):
        if chunk == ".." and (absolute or up):
            if parts:
                parts.pop()
            up = not (not parts or parts[-1] == "..")
        elif chunk not in (".", ""):
            parts.append(chunk)
            up = chunk != ".."

    prefix = _DRIVE_LETTER_RE.sub(lambda mm: mm.group(0).upper(), prefix)
    return prefix + absolute + "/".join(parts)


def absolute_path(path: str, cwd: str) -> str:
    """相对路径按 cwd 补全为绝对路径并规范化"""
    if not is_absolute_path(path):
        path = f"{cwd}/{path}"
    return normalize_path(path)


def find_shortest_path(from_dir: str, to: str, prefer_relative: bool = False) -> str:
    """计算从目录 from_dir 到 to 的最短路径表达

    参数:
        from_dir: 起点目录（绝对路径）
        to: 目标路径（绝对路径）
        prefer_relative: 为 True 时即使公共祖先是 "/" 也返回相对路径

    返回:
        str: 同一目录返回 "./"；可相对表达时返回 "../.." 形式；否则返回 to 本身

    异常:
        ValueError: 任一参数不是绝对路径
    """
    if not is_absolute_path(from_dir) or not is_absolute_path(to):
        raise ValueError(f"需要绝对路径: from={from_dir!r}, to={to!r}")

    # 以目录内的虚拟文件为起点，统一"目录 → 路径"的层级计算
    source = normalize_path(from_dir).rstrip("/") + "/dummy_file"
    to = normalize_path(to)

    if posixpath.dirname(source) == to:
        return "./"

    common = to
    while (
        not (source + "/").startswith(common + "/")
        and common != "/"
        and not _DRIVE_ROOT_RE.match(common)
    ):
        common = posixpath.dirname(common)

    # 没有任何公共部分（不同盘符）
    if not source.startswith(common):
        return to

    common = common.rstrip("/") + "/"
    depth = source[len(common):].count("/")

    # 顶层目录 /foo 与 /bar 之间保留绝对路径
    if not prefer_relative and common == "/" and depth > 1:
        return to

    return "../" * depth + to[len(common):] or "./"


def build_install_path_index(
    repository: InstalledRepository,
    installation_manager: InstallationManager,
    reference_dir: str,
    cwd: str,
) -> dict[str, str | None]:
    """为每个实体包计算相对清单目录的安装路径

    返回:
        dict: {包名: 相对路径 | 绝对路径 | None}，元包等无安装目录的包为 None
    """
    index: dict[str, str | None] = {}
    for package in repository.get_canonical_packages():
        path = installation_manager.get_install_path(package)
        install_path = None
        if path:
            install_path = find_shortest_path(reference_dir, absolute_path(path, cwd))
        index[package.name] = install_path
    logger.debug("已计算 %d 个包的安装路径", len(index))
    return index


def root_install_path(reference_dir: str, cwd: str) -> str:
    """根包未被安装，其安装路径为当前工作目录的真实路径"""
    real = normalize_path(str(Path(cwd).resolve()))
    return find_shortest_path(reference_dir, real)
