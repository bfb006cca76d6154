"""统一异常体系

所有清单生成相关异常继承 InstalledDumpError。
宿主集成层可据此区分"逻辑错误"与"数据契约破坏"，统一输出提示。
"""

from __future__ import annotations


class InstalledDumpError(Exception):
    """清单生成基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class MissingRootPackageError(InstalledDumpError):
    """未提供根包，无法导出已安装包清单"""

    code = "MISSING_ROOT"


class UnexpectedTypeError(InstalledDumpError):
    """序列化时遇到封闭类型集合之外的值"""

    code = "UNEXPECTED_TYPE"

    def __init__(self, value: object, key: object = None) -> None:
        super().__init__(f"Unexpected type {type(value).__name__}")
        self.value = value
        self.key = key


class ConfigError(InstalledDumpError):
    """配置文件或依赖图快照缺失、内容无效"""

    code = "CONFIG_ERROR"
