"""统一异常体系

所有业务异常继承 PrdepsError，核心层只负责抛出，
CLI 层据此映射退出码并输出友好提示。
"""

from __future__ import annotations


class PrdepsError(Exception):
    """prdeps 基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ResolutionError(PrdepsError):
    """导入路径无法解析为包元信息（致命，整个调用中止）"""

    code = "RESOLUTION_ERROR"

    def __init__(self, import_path: str, cause: object) -> None:
        super().__init__(f"could not locate {import_path!r}: {cause}")
        self.import_path = import_path
        self.cause = cause


class ConfigError(PrdepsError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class TemplateError(ConfigError):
    """输出模板语法错误或引用了未知字段"""

    code = "TEMPLATE_ERROR"


class UsageError(PrdepsError):
    """调用方式错误，例如无法推导默认根路径"""

    code = "USAGE_ERROR"


class CycleError(PrdepsError):
    """导入环在不限深度时导致递归过深"""

    code = "CYCLE_ERROR"

    def __init__(self, import_path: str) -> None:
        self.import_path = import_path
        super().__init__(
            f"import cycle exceeds recursion limit at {import_path!r}, use -d to limit depth"
        )
