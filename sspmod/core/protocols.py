"""宿主包管理器协作方的接口契约

核心逻辑只依赖这里的 Protocol，具体实现见 sspmod.adapters。
使用 typing.Protocol 而非 ABC，测试可以直接传入任意鸭子类型对象。
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sspmod.core.models import ResolvedPackage


class PackageRepository(Protocol):
    """已解析依赖图查询"""

    def find_package(self, name: str) -> ResolvedPackage | None:
        """按规范名查找包，版本不限；找不到返回 None"""
        ...

    def get_packages(self) -> list[ResolvedPackage]:
        """按解析顺序返回全部包"""
        ...


class InstallationManager(Protocol):
    """安装路径解析"""

    def get_install_path(self, package: ResolvedPackage) -> Path:
        """返回包文件所在（或将要所在）的目录"""
        ...


class ProgressIO(Protocol):
    """进度输出，仅用于展示，不影响控制流"""

    def write(self, message: str) -> None:
        ...

    def write_error(self, message: str) -> None:
        ...
