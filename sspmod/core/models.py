"""领域数据模型

数据类:
- ResolvedPackage: 已解析依赖包（只读）
- Operation: 触发钩子的安装/更新/卸载操作
- PackageEvent / ScriptEvent: 宿主包管理器传入的事件载荷
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sspmod.core.config import Config

if TYPE_CHECKING:
    from sspmod.core.protocols import InstallationManager, PackageRepository, ProgressIO

JOB_INSTALL = "install"
JOB_UPDATE = "update"
JOB_UNINSTALL = "uninstall"


@dataclass(frozen=True)
class ResolvedPackage:
    """依赖解析后的单个包

    pretty_name 保留大小写（如 Acme/simplesamlphp-module-Foo），
    name 为其小写规范形式。
    """

    pretty_name: str
    version: str = ""
    type: str = "library"
    extra: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)
    install_path: str = ""    # 包管理器给出的安装目录提示，可为空

    @property
    def name(self) -> str:
        return self.pretty_name.lower()

    def __str__(self) -> str:
        return f"{self.pretty_name} ({self.version})" if self.version else self.pretty_name


@dataclass
class Operation:
    """一次包操作；update 时 package 为目标版本，initial_package 为旧版本"""

    job: str
    package: ResolvedPackage
    initial_package: ResolvedPackage | None = None

    def __post_init__(self) -> None:
        if self.job not in (JOB_INSTALL, JOB_UPDATE, JOB_UNINSTALL):
            raise ValueError(f"未知的操作类型: {self.job}")


@dataclass
class ScriptEvent:
    """脚本事件：依赖解析完成后触发一次，不指向具体包"""

    repository: PackageRepository
    installer: InstallationManager
    io: ProgressIO
    config: Config = field(default_factory=Config)
    name: str = ""


@dataclass
class PackageEvent(ScriptEvent):
    """包事件：单个包安装 / 更新 / 卸载后触发"""

    operation: Operation | None = None

    @property
    def package(self) -> ResolvedPackage:
        if self.operation is None:
            raise ValueError("包事件缺少 operation")
        return self.operation.package
