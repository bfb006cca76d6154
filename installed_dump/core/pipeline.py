"""离线重建入口

不经过宿主生命周期，直接从 YAML 快照重建清单:

    from installed_dump.core.pipeline import regenerate

    regenerate("installed_dump.yml")   # 配置中的 graph_file 指向依赖图快照
"""

from __future__ import annotations

import logging
from pathlib import Path

from installed_dump.core.config import get_config, init_config
from installed_dump.core.generator import InstalledVersionsGenerator
from installed_dump.core.registry import PackageRegistry
from installed_dump.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def regenerate(config_path: str = "", *, cwd: str = "") -> bool:
    """加载配置与依赖图快照并写入清单，返回是否实际写入"""
    cfg = init_config(config_path) if config_path else get_config()
    setup_logging(level=cfg.log_level, json_output=cfg.log_json)

    # 相对路径以项目根目录为基准
    graph_path = Path(cwd or Path.cwd()) / cfg.graph_file
    graph = PackageRegistry(graph_path).load()
    generator = InstalledVersionsGenerator(
        graph.repository,
        graph.installation_manager,
        graph.root_package,
        vendor_dir=cfg.vendor_dir,
        dev_mode=cfg.dev_mode,
        manifest_file=cfg.manifest_file,
        cwd=cwd,
    )
    return generator.write()
