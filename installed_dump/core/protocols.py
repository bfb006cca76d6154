"""宿主协作方协议定义

清单生成只依赖这些抽象：宿主包管理器（或测试中的内存实现）
提供已解析包图、安装路径查询和进度输出。

使用 typing.Protocol 而非 ABC，宿主适配对象无需继承即可满足协议。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from installed_dump.core.models import AnyPackage, Package


# =========================================================================
# 已安装仓库协议
# =========================================================================

class InstalledRepository(Protocol):
    """已安装包仓库协议

    get_packages() 包含别名包；get_canonical_packages() 只含实体包。
    """

    def get_packages(self) -> list[AnyPackage]:
        """返回全部已安装包（含别名包）"""
        ...

    def get_canonical_packages(self) -> list[Package]:
        """返回去除别名后的实体包"""
        ...

    def get_dev_package_names(self) -> list[str]:
        """返回仅因开发依赖而安装的包名"""
        ...


# =========================================================================
# 安装路径协议
# =========================================================================

class InstallationManager(Protocol):
    """安装路径查询协议"""

    def get_install_path(self, package: AnyPackage) -> str | None:
        """返回包的安装目录（绝对或相对当前工作目录），元包返回 None"""
        ...


# =========================================================================
# 进度输出协议
# =========================================================================

class OutputSink(Protocol):
    """进度输出协议，仅用于展示，不影响清单内容"""

    def write(self, message: str) -> None:
        ...
