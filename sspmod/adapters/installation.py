"""安装路径解析

包自带 install_path 时直接使用，否则按 vendor 目录约定
<vendor_dir>/<规范包名> 计算。
"""

from __future__ import annotations

from pathlib import Path

from sspmod.core.models import ResolvedPackage


class VendorInstallationManager:
    """vendor 目录约定的安装路径解析器"""

    def __init__(self, vendor_dir: str | Path = "vendor") -> None:
        self.vendor_dir = Path(vendor_dir)

    def get_install_path(self, package: ResolvedPackage) -> Path:
        if package.install_path:
            return Path(package.install_path)
        return self.vendor_dir / package.name
