"""sspmod 命令行接口

全局选项在 main group 上解析，保存到 CliContext；
各领域子模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import click

from sspmod import __version__
from sspmod.adapters import ConsoleIO, VendorInstallationManager, load_repository
from sspmod.adapters.repository import ArrayRepository
from sspmod.core.config import Config, init_config
from sspmod.core.exceptions import SspModError
from sspmod.core.models import Operation, PackageEvent, ResolvedPackage, ScriptEvent
from sspmod.utils.logger import setup_logging


@contextmanager
def cli_errors() -> Iterator[None]:
    """把业务异常转换为 click 错误输出（退出码 1）"""
    try:
        yield
    except SspModError as e:
        raise click.ClickException(str(e)) from e


@dataclass
class CliContext:
    """命令共享的配置与协作方，按需加载"""

    config_path: str
    installed: str | None = None
    vendor_dir: str | None = None
    quiet: bool = False
    _config: Config | None = field(default=None, repr=False)
    _repository: ArrayRepository | None = field(default=None, repr=False)

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = init_config(self.config_path)
        return self._config

    @property
    def repository(self) -> ArrayRepository:
        if self._repository is None:
            self._repository = load_repository(self.installed or self.config.installed_file)
        return self._repository

    def script_event(self, name: str = "") -> ScriptEvent:
        return ScriptEvent(
            repository=self.repository,
            installer=VendorInstallationManager(self.vendor_dir or self.config.vendor_dir),
            io=ConsoleIO(quiet=self.quiet),
            config=self.config,
            name=name,
        )

    def package_event(
        self, job: str, package_name: str, name: str = "",
        package: ResolvedPackage | None = None,
    ) -> PackageEvent:
        if package is None:
            package = self.find(package_name)
        base = self.script_event(name)
        return PackageEvent(
            repository=base.repository,
            installer=base.installer,
            io=base.io,
            config=base.config,
            name=name,
            operation=Operation(job=job, package=package),
        )

    def find(self, package_name: str) -> ResolvedPackage:
        package = self.repository.find_package(package_name)
        if package is None:
            raise click.ClickException(f"包 '{package_name}' 不在已解析包清单中")
        return package

    def removed_module(self, package_name: str, mixedcase_name: str | None = None) -> ResolvedPackage:
        """已从清单移除的模块包：仅凭包名构造，用于清理残留目录"""
        extra = {self.config.mixedcase_key: mixedcase_name} if mixedcase_name else {}
        return ResolvedPackage(
            pretty_name=package_name, type=self.config.module_type, extra=extra,
        )


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default="sspmod.yml", help="配置文件路径")
@click.option("--installed", default=None, help="已解析包清单（.json 或 .yml），默认取配置 installed_file")
@click.option("--vendor-dir", default=None, help="vendor 目录，默认取配置 vendor_dir")
@click.option("--quiet", "-q", is_flag=True, help="不输出进度信息")
@click.pass_context
def main(
    ctx: click.Context, config_path: str, installed: str | None,
    vendor_dir: str | None, quiet: bool,
) -> None:
    """sspmod - 把 SimpleSAMLphp 模块包同步到宿主 modules 目录"""
    setup_logging(
        level=os.getenv("SSPMOD_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("SSPMOD_LOG_JSON", "") == "1",
    )
    ctx.obj = CliContext(
        config_path=config_path, installed=installed,
        vendor_dir=vendor_dir, quiet=quiet,
    )


# 注册各领域子命令
from sspmod.cli.cmd_modules import register as _reg_modules  # noqa: E402
from sspmod.cli.cmd_scripts import register as _reg_scripts  # noqa: E402

_reg_modules(main)
_reg_scripts(main)
