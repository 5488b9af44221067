"""已解析包定位

- find_host(): 定位宿主包（缺失即致命错误）
- find_modules(): 按类型筛选模块包，保持解析顺序
"""

from __future__ import annotations

import logging

from sspmod.core.config import HOST_PACKAGE, MODULE_TYPE
from sspmod.core.exceptions import HostPackageNotFound
from sspmod.core.models import ResolvedPackage
from sspmod.core.protocols import PackageRepository

logger = logging.getLogger(__name__)


def find_host(
    repository: PackageRepository, host_name: str = HOST_PACKAGE,
) -> ResolvedPackage:
    """按规范名精确查找宿主包，版本不限。

    同一宿主包同时解析出多个版本时，返回仓库给出的那一个（通常是第一个），
    不做进一步裁决。
    """
    package = repository.find_package(host_name.lower())
    if package is None:
        raise HostPackageNotFound(host_name)
    logger.debug("宿主包: %s", package)
    return package


def find_modules(
    repository: PackageRepository, module_type: str = MODULE_TYPE,
) -> list[ResolvedPackage]:
    return [p for p in repository.get_packages() if p.type == module_type]
