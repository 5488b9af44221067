"""包管理器生命周期钩子

宿主包管理器在以下时机调用:
  post-package-install / post-package-update -> install_module_hook
  pre-package-uninstall                      -> uninstall_module_hook
  post-install-cmd / post-update-cmd         -> install_all_modules

旧版本提供过的其它脚本名统一走 deprecated_script()，只输出提示。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from sspmod.core import synchronizer
from sspmod.core.models import JOB_UNINSTALL, PackageEvent, ResolvedPackage, ScriptEvent

logger = logging.getLogger(__name__)

UPGRADE_NOTES_URL = "https://github.com/sgomez/simplesamlphp-base/blob/master/UPDATE.md"


def _is_module(event: ScriptEvent, package: ResolvedPackage) -> bool:
    return package.type == event.config.module_type


def install_module_hook(event: PackageEvent) -> Path | None:
    """单个包安装/更新后，若为模块包则复制到 modules"""
    package = event.package
    if not _is_module(event, package):
        logger.debug("非模块包，跳过: %s", package.name)
        return None
    return synchronizer.install(event, package)


def uninstall_module_hook(event: PackageEvent) -> Path | None:
    """单个包卸载前，若为模块包则从 modules 删除"""
    package = event.package
    if event.operation is not None and event.operation.job != JOB_UNINSTALL:
        logger.warning("卸载钩子收到 %s 操作: %s", event.operation.job, package.name)
    if not _is_module(event, package):
        logger.debug("非模块包，跳过: %s", package.name)
        return None
    return synchronizer.uninstall(event, package)


def install_all_modules(event: ScriptEvent, *, keep_going: bool = False) -> list[Path]:
    """依赖解析完成后同步全部模块包"""
    return synchronizer.install_all(event, keep_going=keep_going)


def deprecated_script(event: ScriptEvent) -> None:
    """已下线脚本的统一入口：提示用户查看升级说明，不做任何操作"""
    logger.warning("调用了已下线的脚本: %s", event.name or "<unknown>")
    event.io.write_error(
        f"脚本 {event.name} 已不再提供。请阅读 {UPGRADE_NOTES_URL}",
    )


SCRIPTS: dict[str, Callable[..., Any]] = {
    "install-module": install_module_hook,
    "uninstall-module": uninstall_module_hook,
    "install-all": install_all_modules,
}


def run_script(name: str, event: ScriptEvent) -> Any:
    """按名称分发脚本；未知名称走 deprecated_script"""
    handler = SCRIPTS.get(name)
    if handler is None:
        event.name = event.name or name
        return deprecated_script(event)
    if handler is not install_all_modules and not isinstance(event, PackageEvent):
        raise TypeError(f"脚本 {name} 需要包事件")
    return handler(event)
