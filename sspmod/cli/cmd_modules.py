"""CLI：模块同步命令"""

from __future__ import annotations

import logging

import click

from sspmod.cli import CliContext, cli_errors
from sspmod.core import hooks
from sspmod.core.exceptions import InvalidModuleError
from sspmod.core.locator import find_host, find_modules
from sspmod.core.models import JOB_INSTALL, JOB_UNINSTALL
from sspmod.core.synchronizer import destination_for

logger = logging.getLogger(__name__)
pass_cli = click.make_pass_decorator(CliContext)


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(uninstall)
    group.add_command(install_all)
    group.add_command(list_modules)
    group.add_command(destination)


@click.command()
@click.argument("name")
@pass_cli
def install(cli: CliContext, name: str) -> None:
    """把单个模块包复制到宿主 modules 目录"""
    with cli_errors():
        event = cli.package_event(JOB_INSTALL, name, name="install-module")
        dest = hooks.install_module_hook(event)
    if dest is None:
        click.echo(f"{name} 不是模块包，未做处理。")


@click.command()
@click.argument("name")
@click.option(
    "--mixedcase-name", default=None,
    help="包已不在清单中时，指定模块目录的大小写形式（对应 ssp-mixedcase-module-name）",
)
@pass_cli
def uninstall(cli: CliContext, name: str, mixedcase_name: str | None) -> None:
    """从宿主 modules 目录删除单个模块包

    包已从清单移除时（composer remove 之后）按模块包处理，仅凭包名计算目标目录。
    """
    with cli_errors():
        package = cli.repository.find_package(name)
        if package is None:
            logger.warning("包 %s 不在清单中，按模块包清理残留目录", name)
            package = cli.removed_module(name, mixedcase_name)
        event = cli.package_event(JOB_UNINSTALL, name, name="uninstall-module", package=package)
        dest = hooks.uninstall_module_hook(event)
    if dest is None:
        click.echo(f"{name} 不是模块包，未做处理。")


@click.command(name="install-all")
@click.option("--keep-going", is_flag=True, help="单个模块失败时继续处理其余模块，最后汇总报错")
@pass_cli
def install_all(cli: CliContext, keep_going: bool) -> None:
    """同步全部模块包（依赖解析完成后调用）"""
    with cli_errors():
        installed = hooks.install_all_modules(
            cli.script_event("install-all"), keep_going=keep_going,
        )
    click.echo(f"已同步 {len(installed)} 个模块。")


@click.command(name="modules")
@pass_cli
def list_modules(cli: CliContext) -> None:
    """列出全部模块包及其目标目录"""
    with cli_errors():
        cfg = cli.config
        repo = cli.repository
        event = cli.script_event()
        host_path = event.installer.get_install_path(find_host(repo, cfg.host_package))
        modules = find_modules(repo, cfg.module_type)

    if not modules:
        click.echo("没有模块包。")
        return
    for m in modules:
        try:
            dest = str(destination_for(
                host_path, m,
                modules_dir=cfg.modules_dir, mixedcase_key=cfg.mixedcase_key,
            ))
        except InvalidModuleError as e:
            dest = f"[INVALID] {e}"
        click.echo(f"  {m.pretty_name:45s} {m.version:12s} {dest}")


@click.command()
@click.argument("name")
@pass_cli
def destination(cli: CliContext, name: str) -> None:
    """输出模块包的目标目录（不做任何修改）"""
    with cli_errors():
        cfg = cli.config
        event = cli.script_event()
        module = cli.find(name)
        host_path = event.installer.get_install_path(find_host(cli.repository, cfg.host_package))
        dest = destination_for(
            host_path, module,
            modules_dir=cfg.modules_dir, mixedcase_key=cfg.mixedcase_key,
        )
    click.echo(str(dest))
