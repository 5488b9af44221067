"""宿主包管理器协作方的具体实现

- repository.py: 已解析包仓库 + 清单加载
- installation.py: 安装路径解析
- io.py: 进度输出
"""

from sspmod.adapters.installation import VendorInstallationManager
from sspmod.adapters.io import BufferIO, ConsoleIO
from sspmod.adapters.repository import ArrayRepository, load_repository

__all__ = [
    "ArrayRepository",
    "BufferIO",
    "ConsoleIO",
    "VendorInstallationManager",
    "load_repository",
]
