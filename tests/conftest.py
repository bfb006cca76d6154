"""测试共享 fixture — 依赖图样例 + PHP 字面量解析

整体结构:

  SAMPLE_GRAPH (dict)       conftest.py                    测试用例
  ┌──────────────┐     ┌────────────────────┐     ┌─────────────────────────┐
  │ root:        │────>│ make_graph()       │<────│ graph = make_graph(     │
  │   aliases    │     │   合并 overrides   │     │   packages={...})       │
  │ packages:    │     │   PackageRegistry  │     │ gen = make_generator(   │
  │   install_   │     ├────────────────────┤     │   graph)                │
  │   path ...   │     │ load_php_literal() │     │ load_php_literal(text)  │
  └──────────────┘     └────────────────────┘     └─────────────────────────┘
"""

from __future__ import annotations

import logging
import re
from copy import deepcopy
from pathlib import Path
from typing import Any

import pytest

from installed_dump.core.config import reset_config
from installed_dump.core.generator import InstalledVersionsGenerator
from installed_dump.core.registry import PackageRegistry, ResolvedGraph
from installed_dump.utils.logger import PACKAGE_LOGGER

# =========================================================================
# 依赖图样例
# =========================================================================

SAMPLE_GRAPH: dict[str, Any] = {
    "root": {
        "name": "acme/app",
        "pretty_version": "1.0.0",
        "version": "1.0.0.0",
        "source_reference": "abc123",
        "installation_source": "source",
        "extra": {"branch-alias": {"dev-main": "1.0.x-dev"}},
        "replace": {"acme/legacy": "self.version"},
    },
    "packages": {
        "monolog/monolog": {
            "pretty_version": "3.5.0",
            "version": "3.5.0.0",
            "dist_reference": "c915e2634718dbc8a4a15c61b0e62e7a44e14448",
            "installation_source": "dist",
            "install_path": "vendor/monolog/monolog",
            "provide": {"psr/log-implementation": "3.0.0"},
        },
        "psr/log": {
            "pretty_version": "3.0.0",
            "version": "3.0.0.0",
            "source_reference": "fe5ea303b0887d5caefd3d431c3e61ad47037001",
            "installation_source": "source",
            "install_path": "vendor/psr/log",
        },
        "phpunit/phpunit": {
            "pretty_version": "10.5.0",
            "version": "10.5.0.0",
            "install_path": "vendor/phpunit/phpunit",
            "dev": True,
            "provide": {"psr/log-implementation": "1.0|2.0"},
        },
        "acme/meta": {
            "pretty_version": "2.0.0",
            "type": "metapackage",
        },
    },
}


def _make_graph(**overrides: Any) -> ResolvedGraph:
    """从 SAMPLE_GRAPH 构建包图，root / packages 可整体覆盖"""
    data = deepcopy(SAMPLE_GRAPH)
    data.update(overrides)
    return PackageRegistry.build(data)


@pytest.fixture(autouse=True)
def _clean_config():
    """每个用例使用默认配置"""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """setup_logging 会接管 installed_dump 日志器，用例结束后还原"""
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level, propagate = pkg_logger.handlers[:], pkg_logger.level, pkg_logger.propagate
    yield
    for handler in pkg_logger.handlers[:]:
        pkg_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


@pytest.fixture()
def make_graph():
    """包图工厂 fixture

    用法:
        def test_xxx(make_graph):
            graph = make_graph(packages={...})
    """
    return _make_graph


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    """项目根目录（真实路径，避免符号链接影响相对路径计算）"""
    root = tmp_path.resolve() / "project"
    (root / "vendor" / "composer").mkdir(parents=True)
    return root


@pytest.fixture()
def make_generator(project_dir: Path):
    """生成器工厂 fixture，vendor 目录固定为 <project>/vendor"""

    def _factory(graph: ResolvedGraph, **kwargs: Any) -> InstalledVersionsGenerator:
        kwargs.setdefault("vendor_dir", str(project_dir / "vendor"))
        kwargs.setdefault("dev_mode", True)
        kwargs.setdefault("cwd", str(project_dir))
        return InstalledVersionsGenerator(
            graph.repository, graph.installation_manager, graph.root_package, **kwargs,
        )

    return _factory


# =========================================================================
# PHP 字面量解析 — 只覆盖清单使用的子集，用于往返校验
# =========================================================================

_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<open>array\()
      | (?P<close>\))
      | (?P<arrow>=>)
      | (?P<comma>,)
      | (?P<dot>\.)
      | (?P<dir>__DIR__)
      | (?P<str>'(?:[^'\\]|\\.)*')
      | (?P<nul>"\\0")
      | (?P<int>-?\d+)
      | (?P<const>true|false|null)
    )""",
    re.VERBOSE | re.DOTALL,
)

_CONSTANTS = {"true": True, "false": False, "null": None}


def _tokenize(text: str) -> list[tuple[str, str]]:
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ValueError(f"无法解析的 PHP 片段: {text[pos:pos + 20]!r}")
        tokens.append((m.lastgroup or "", m.group(m.lastgroup or 0)))
        pos = m.end()
    return tokens


class _Parser:
    def __init__(self, tokens: list[tuple[str, str]], file_dir: str) -> None:
        self.tokens = tokens
        self.pos = 0
        self.file_dir = file_dir

    def _next(self) -> tuple[str, str]:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _peek(self) -> str:
        return self.tokens[self.pos][0] if self.pos < len(self.tokens) else ""

    def value(self) -> Any:
        result = self._term()
        while self._peek() == "dot":
            self._next()
            result = result + self._term()
        return result

    def _term(self) -> Any:
        kind, text = self._next()
        if kind == "open":
            return self._array()
        if kind == "str":
            return re.sub(r"\\([\\'])", r"\1", text[1:-1])
        if kind == "nul":
            return "\0"
        if kind == "int":
            return int(text)
        if kind == "const":
            return _CONSTANTS[text]
        if kind == "dir":
            return self.file_dir
        raise ValueError(f"意外的 token: {text!r}")

    def _array(self) -> Any:
        items: dict[Any, Any] = {}
        while self._peek() != "close":
            key = self._term()
            assert self._next()[0] == "arrow"
            items[key] = self.value()
            if self._peek() == "comma":
                self._next()
        self._next()
        if list(items) == list(range(len(items))):
            return list(items.values())
        return items


def load_php_literal(text: str, file_dir: str = "/__DIR__") -> Any:
    """解析 installed.php 内容，返回对应的 Python 结构

    空数组统一解析为 []，__DIR__ 替换为 file_dir。
    """
    body = text.removeprefix("<?php return ").rstrip().removesuffix(";")
    parser = _Parser(_tokenize(body), file_dir)
    result = parser.value()
    assert parser.pos == len(parser.tokens)
    return result


@pytest.fixture()
def php_loader():
    return load_php_literal


@pytest.fixture()
def sample_graph() -> dict[str, Any]:
    """SAMPLE_GRAPH 的独立副本，可随意修改"""
    return deepcopy(SAMPLE_GRAPH)
