"""CLI：按脚本名调用钩子（兼容包管理器脚本配置）"""

from __future__ import annotations

import click

from sspmod.adapters import ArrayRepository, ConsoleIO, VendorInstallationManager
from sspmod.cli import CliContext, cli_errors
from sspmod.core import hooks
from sspmod.core.models import JOB_INSTALL, JOB_UNINSTALL, ScriptEvent

pass_cli = click.make_pass_decorator(CliContext)


def register(group: click.Group) -> None:
    group.add_command(run_script)


@click.command(name="run-script")
@click.argument("script")
@click.option("--package", "package_name", default=None, help="触发事件的包名（包级脚本必填）")
@pass_cli
def run_script(cli: CliContext, script: str, package_name: str | None) -> None:
    """执行指定脚本；已下线的脚本名只输出升级提示"""
    if script not in hooks.SCRIPTS:
        # 已下线脚本不读取包清单
        hooks.run_script(script, ScriptEvent(
            repository=ArrayRepository(),
            installer=VendorInstallationManager(),
            io=ConsoleIO(quiet=cli.quiet),
            name=script,
        ))
        return

    if script == "install-all":
        with cli_errors():
            hooks.run_script(script, cli.script_event(script))
        return

    if not package_name:
        raise click.UsageError(f"脚本 {script} 需要 --package")
    job = JOB_UNINSTALL if script == "uninstall-module" else JOB_INSTALL
    with cli_errors():
        hooks.run_script(script, cli.package_event(job, package_name, name=script))
