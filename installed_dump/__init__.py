"""installed_dump - 在自动加载导出后重建 installed.php 清单"""

__version__ = "0.1.0"
