"""共享 fixture：宿主包 + 模块包 + 内存仓库

  tmp_path/
    app/                     宿主包安装目录（host_dir）
    vendor/<vendor>/<name>/  模块包安装目录（make_module_src 创建）
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from sspmod.adapters import ArrayRepository, BufferIO, VendorInstallationManager
from sspmod.core.config import HOST_PACKAGE, MODULE_TYPE
from sspmod.core.models import Operation, PackageEvent, ResolvedPackage, ScriptEvent


@pytest.fixture()
def host_dir(tmp_path: Path) -> Path:
    d = tmp_path / "app"
    d.mkdir()
    return d


@pytest.fixture()
def vendor_dir(tmp_path: Path) -> Path:
    return tmp_path / "vendor"


@pytest.fixture()
def make_package():
    """包工厂，默认构造模块包"""

    def _make(
        name: str,
        *,
        type: str = MODULE_TYPE,  # noqa: A002
        version: str = "1.0.0",
        extra: dict[str, Any] | None = None,
        install_path: str | Path = "",
    ) -> ResolvedPackage:
        return ResolvedPackage(
            pretty_name=name, version=version, type=type,
            extra=extra or {}, install_path=str(install_path),
        )

    return _make


@pytest.fixture()
def host_package(host_dir: Path, make_package) -> ResolvedPackage:
    return make_package(HOST_PACKAGE, type="project", version="2.1.0", install_path=host_dir)


@pytest.fixture()
def make_module_src(vendor_dir: Path):
    """在 vendor/<规范名> 下创建模块源文件，files 为 {相对路径: 内容}"""

    def _make(name: str, files: dict[str, str]) -> Path:
        root = vendor_dir / name.lower()
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            f = root / rel
            f.parent.mkdir(parents=True, exist_ok=True)
            f.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture()
def make_event(vendor_dir: Path, host_package: ResolvedPackage):
    """事件工厂：仓库 = 宿主包 + 传入的包；传 job 时构造包事件"""

    def _make(
        *packages: ResolvedPackage,
        job: str | None = None,
        with_host: bool = True,
    ) -> ScriptEvent:
        repo = ArrayRepository(([host_package] if with_host else []) + list(packages))
        installer = VendorInstallationManager(vendor_dir)
        if job is None:
            return ScriptEvent(repository=repo, installer=installer, io=BufferIO())
        return PackageEvent(
            repository=repo, installer=installer, io=BufferIO(),
            operation=Operation(job=job, package=packages[0]),
        )

    return _make
