"""模块目录同步

把模块包从自身安装目录同步到宿主包的 modules/<模块目录名>：

  1. 从 pretty_name 提取模块目录名（VENDOR/simplesamlphp-module-<名称>）
  2. 校验字符集 [a-z0-9_.-]，且不能以 "." 开头
  3. extra 中的 ssp-mixedcase-module-name 只允许改变大小写
  4. 目标路径 = <宿主安装目录>/modules/<模块目录名>

历史上很多模块目录名带大写字母，而包名按约定全小写，
第 3 步就是为这些模块保留的入口。

所有函数都是无状态的，每次调用都重新计算目标路径。

用法:
    from sspmod.core import synchronizer

    dest = synchronizer.destination_for(Path("/app"), package)
    synchronizer.install(event, package)
    synchronizer.install_all(event, keep_going=True)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from sspmod.core.config import MIXEDCASE_KEY, MODULE_NAME_PREFIX, MODULES_DIR
from sspmod.core.exceptions import (
    BatchInstallError,
    InvalidModuleDirName,
    InvalidModuleError,
    InvalidOverrideType,
    LeadingDotNotAllowed,
    MalformedModuleName,
    OverrideMismatch,
)
from sspmod.core.locator import find_host, find_modules
from sspmod.core.models import ResolvedPackage, ScriptEvent
from sspmod.utils.fs import mirror, remove_tree

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r".+/" + re.escape(MODULE_NAME_PREFIX) + r"(.+)")
_DIR_NAME_RE = re.compile(r"[a-z0-9_.-]+")


def module_dir_name(
    module: ResolvedPackage, mixedcase_key: str = MIXEDCASE_KEY,
) -> str:
    """计算并校验模块目录名（不含宿主路径）"""
    name = module.pretty_name
    m = _NAME_RE.fullmatch(name)
    if m is None:
        raise MalformedModuleName(
            name,
            f'包名必须形如 "VENDOR/{MODULE_NAME_PREFIX}MODULENAME"',
        )
    dir_name = m.group(1)

    if not _DIR_NAME_RE.fullmatch(dir_name):
        raise InvalidModuleDirName(
            name, '模块名只能包含 a-z、0-9、"_"、"." 和 "-"',
        )
    if dir_name[0] == ".":
        raise LeadingDotNotAllowed(name, '模块名不能以 "." 开头')

    # 值为 None 视同未设置
    override = module.extra.get(mixedcase_key)
    if override is not None:
        if not isinstance(override, str):
            raise InvalidOverrideType(name, f'"{mixedcase_key}" 必须是字符串')
        if override.lower() != dir_name:
            raise OverrideMismatch(
                name, f'"{mixedcase_key}" 除大小写外必须与包名一致',
            )
        dir_name = override

    return dir_name


def destination_for(
    host_install_path: str | Path,
    module: ResolvedPackage,
    *,
    modules_dir: str = MODULES_DIR,
    mixedcase_key: str = MIXEDCASE_KEY,
) -> Path:
    """返回模块在宿主应用中的目标目录"""
    return Path(host_install_path) / modules_dir / module_dir_name(module, mixedcase_key)


def _host_install_path(event: ScriptEvent) -> Path:
    host = find_host(event.repository, event.config.host_package)
    return Path(event.installer.get_install_path(host))


def _destination(event: ScriptEvent, module: ResolvedPackage, host_path: Path) -> Path:
    return destination_for(
        host_path, module,
        modules_dir=event.config.modules_dir,
        mixedcase_key=event.config.mixedcase_key,
    )


def _mirror_module(
    event: ScriptEvent, module: ResolvedPackage, host_path: Path,
) -> Path:
    dest = _destination(event, module, host_path)
    source = Path(event.installer.get_install_path(module))
    event.io.write(
        f"  - 复制 {module.name} ({module.version}) 到 {event.config.modules_dir}",
    )
    logger.info("镜像模块: %s -> %s", source, dest, extra={"package": module.name})
    mirror(source, dest)
    return dest


def install(event: ScriptEvent, module: ResolvedPackage) -> Path:
    """把模块镜像到宿主 modules 目录，返回目标目录"""
    return _mirror_module(event, module, _host_install_path(event))


def uninstall(event: ScriptEvent, module: ResolvedPackage) -> Path:
    """删除模块在宿主 modules 目录下的副本，目录不存在时不报错"""
    dest = _destination(event, module, _host_install_path(event))
    event.io.write(
        f"  - 从 {event.config.modules_dir} 删除 {module.name} ({module.version})",
    )
    if remove_tree(dest):
        logger.info("已删除: %s", dest, extra={"package": module.name})
    else:
        logger.debug("目标目录不存在，跳过: %s", dest)
    return dest


def install_all(event: ScriptEvent, *, keep_going: bool = False) -> list[Path]:
    """同步全部模块包，按解析顺序处理

    默认遇到第一个错误即中止；keep_going=True 时继续处理其余模块，
    最后以 BatchInstallError 汇总抛出。宿主包缺失始终立即中止。
    """
    host_path = _host_install_path(event)
    modules = find_modules(event.repository, event.config.module_type)
    logger.info("发现 %d 个模块包", len(modules))

    installed: list[Path] = []
    failures: dict[str, Exception] = {}
    for module in modules:
        try:
            installed.append(_mirror_module(event, module, host_path))
        except (InvalidModuleError, OSError) as exc:
            if not keep_going:
                raise
            logger.error("模块同步失败: %s: %s", module.pretty_name, exc)
            event.io.write_error(f"  - 跳过 {module.pretty_name}: {exc}")
            failures[module.pretty_name] = exc

    if failures:
        logger.warning(
            "同步汇总: %d 成功, %d 失败", len(installed), len(failures),
        )
        raise BatchInstallError(failures)
    return installed
