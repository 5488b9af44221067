"""统一异常体系

所有业务异常继承 SspModError，CLI 层据此输出友好提示并以非零码退出。
模块校验类异常同时继承 ValueError，对应参数非法的语义。
"""

from __future__ import annotations


class SspModError(Exception):
    """插件基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(SspModError):
    """配置文件或包清单缺失、内容无效"""

    code = "CONFIG_ERROR"


class HostPackageNotFound(SspModError):
    """已解析的包集合中找不到宿主包，无法计算 modules 目录"""

    code = "HOST_NOT_FOUND"

    def __init__(self, host_name: str) -> None:
        super().__init__(f"错误: 在已安装包中找不到 {host_name}")
        self.host_name = host_name


class InvalidModuleError(SspModError, ValueError):
    """单个模块包的输入校验失败"""

    code = "INVALID_MODULE"

    def __init__(self, package_name: str, reason: str) -> None:
        super().__init__(f"无法安装模块 {package_name}，{reason}")
        self.package_name = package_name


class MalformedModuleName(InvalidModuleError):
    code = "MALFORMED_NAME"


class InvalidModuleDirName(InvalidModuleError):
    code = "INVALID_DIR_NAME"


class LeadingDotNotAllowed(InvalidModuleError):
    code = "LEADING_DOT"


class InvalidOverrideType(InvalidModuleError):
    code = "INVALID_OVERRIDE_TYPE"


class OverrideMismatch(InvalidModuleError):
    code = "OVERRIDE_MISMATCH"


class BatchInstallError(SspModError):
    """批量安装（keep_going 模式）结束后汇总的失败"""

    code = "BATCH_FAILED"

    def __init__(self, failures: dict[str, Exception]) -> None:
        lines = [f"{len(failures)} 个模块安装失败:"]
        lines += [f"  - {name}: {exc}" for name, exc in failures.items()]
        super().__init__("\n".join(lines))
        self.failures = failures
