"""CLI 端到端测试：YAML 清单 + 真实目录"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

import sspmod.core.config as cfgmod
from sspmod.cli import main
from sspmod.utils.logger import reset_logging


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cfgmod, "_current", None)
    monkeypatch.delenv("SSPMOD_LOG_JSON", raising=False)
    yield
    reset_logging()


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    """tmp_path/app 为宿主；tmp_path/src/* 为模块源；installed.yml 为包清单"""
    (tmp_path / "app").mkdir()
    foo = tmp_path / "src" / "foo"
    foo.mkdir(parents=True)
    (foo / "bar.txt").write_text("bar", encoding="utf-8")
    mixed = tmp_path / "src" / "mixed"
    mixed.mkdir(parents=True)
    (mixed / "m.txt").write_text("m", encoding="utf-8")

    (tmp_path / "installed.yml").write_text(yaml.dump({"packages": [
        {"name": "simplesamlphp/simplesamlphp", "version": "v2.1.0",
         "type": "project", "install_path": "app"},
        {"name": "acme/simplesamlphp-module-foo", "version": "1.0.0",
         "type": "simplesamlphp-module", "install_path": "src/foo"},
        {"name": "acme/simplesamlphp-module-mixed", "version": "0.3.0",
         "type": "simplesamlphp-module", "install_path": "src/mixed",
         "extra": {"ssp-mixedcase-module-name": "MiXeD"}},
        {"name": "acme/library", "version": "3.0.0", "type": "library"},
    ]}))
    return tmp_path


def _invoke(workspace: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(main, [
        "--config", str(workspace / "sspmod.yml"),
        "--installed", str(workspace / "installed.yml"),
        "--vendor-dir", str(workspace / "vendor"),
        *args,
    ])


class TestModuleCommands:
    def test_install_and_uninstall(self, workspace: Path) -> None:
        result = _invoke(workspace, "install", "acme/simplesamlphp-module-foo")
        assert result.exit_code == 0, result.output
        assert "复制 acme/simplesamlphp-module-foo (1.0.0)" in result.output
        target = workspace / "app" / "modules" / "foo" / "bar.txt"
        assert target.read_text(encoding="utf-8") == "bar"

        result = _invoke(workspace, "uninstall", "acme/simplesamlphp-module-foo")
        assert result.exit_code == 0, result.output
        assert not (workspace / "app" / "modules" / "foo").exists()

        result = _invoke(workspace, "uninstall", "acme/simplesamlphp-module-foo")
        assert result.exit_code == 0, result.output

    def test_uninstall_after_removed_from_manifest(self, workspace: Path) -> None:
        assert _invoke(workspace, "install-all").exit_code == 0
        data = yaml.safe_load((workspace / "installed.yml").read_text())
        data["packages"] = data["packages"][:1]
        (workspace / "installed.yml").write_text(yaml.dump(data))

        result = _invoke(workspace, "uninstall", "acme/simplesamlphp-module-foo")
        assert result.exit_code == 0, result.output
        assert not (workspace / "app" / "modules" / "foo").exists()

        result = _invoke(
            workspace, "uninstall", "acme/simplesamlphp-module-mixed",
            "--mixedcase-name", "MiXeD",
        )
        assert result.exit_code == 0, result.output
        assert not (workspace / "app" / "modules" / "MiXeD").exists()

    def test_uninstall_removed_package_with_bad_name(self, workspace: Path) -> None:
        result = _invoke(workspace, "uninstall", "acme/nope")
        assert result.exit_code == 1
        assert "acme/nope" in result.output

    def test_install_non_module(self, workspace: Path) -> None:
        result = _invoke(workspace, "install", "acme/library")
        assert result.exit_code == 0
        assert "不是模块包" in result.output

    def test_unknown_package(self, workspace: Path) -> None:
        result = _invoke(workspace, "install", "acme/nope")
        assert result.exit_code == 1
        assert "不在已解析包清单中" in result.output

    def test_install_all(self, workspace: Path) -> None:
        result = _invoke(workspace, "install-all")
        assert result.exit_code == 0, result.output
        assert "已同步 2 个模块" in result.output
        assert (workspace / "app" / "modules" / "MiXeD" / "m.txt").exists()
        assert (workspace / "app" / "modules" / "foo" / "bar.txt").exists()

    def test_quiet(self, workspace: Path) -> None:
        result = _invoke(workspace, "--quiet", "install", "acme/simplesamlphp-module-foo")
        assert result.exit_code == 0
        assert "复制" not in result.output

    def test_modules_listing(self, workspace: Path) -> None:
        result = _invoke(workspace, "modules")
        assert result.exit_code == 0, result.output
        assert "acme/simplesamlphp-module-foo" in result.output
        assert str(Path("modules") / "MiXeD") in result.output
        assert "acme/library" not in result.output

    def test_destination(self, workspace: Path) -> None:
        result = _invoke(workspace, "destination", "acme/simplesamlphp-module-mixed")
        assert result.exit_code == 0, result.output
        assert Path(result.output.strip()) == workspace / "app" / "modules" / "MiXeD"
        assert not (workspace / "app" / "modules").exists()


class TestErrors:
    def test_missing_host(self, workspace: Path) -> None:
        data = yaml.safe_load((workspace / "installed.yml").read_text())
        data["packages"] = data["packages"][1:]
        (workspace / "installed.yml").write_text(yaml.dump(data))

        result = _invoke(workspace, "install-all")
        assert result.exit_code == 1
        assert "simplesamlphp/simplesamlphp" in result.output

    def test_invalid_module_aborts_batch(self, workspace: Path) -> None:
        data = yaml.safe_load((workspace / "installed.yml").read_text())
        data["packages"].insert(1, {
            "name": "acme/simplesamlphp-module-.hidden", "type": "simplesamlphp-module",
        })
        (workspace / "installed.yml").write_text(yaml.dump(data))

        result = _invoke(workspace, "install-all")
        assert result.exit_code == 1
        assert "acme/simplesamlphp-module-.hidden" in result.output
        assert not (workspace / "app" / "modules" / "foo").exists()

        result = _invoke(workspace, "install-all", "--keep-going")
        assert result.exit_code == 1
        assert "1 个模块安装失败" in result.output
        assert (workspace / "app" / "modules" / "foo").exists()

    def test_missing_manifest(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, [
            "--config", str(tmp_path / "sspmod.yml"),
            "--installed", str(tmp_path / "nope.yml"),
            "install-all",
        ])
        assert result.exit_code == 1
        assert "包清单不存在" in result.output

    def test_broken_manifest(self, workspace: Path) -> None:
        (workspace / "installed.yml").write_text("packages: [\n  - name: x\n  bad: : :\n")
        result = _invoke(workspace, "install-all")
        assert result.exit_code == 1
        assert "解析" in result.output
        assert "Traceback" not in result.output

    def test_broken_config(self, workspace: Path) -> None:
        (workspace / "sspmod.yml").write_text("vendor_dir: [unclosed\n")
        result = _invoke(workspace, "install-all")
        assert result.exit_code == 1
        assert "解析配置文件" in result.output

    def test_unquoted_version(self, workspace: Path) -> None:
        text = (workspace / "installed.yml").read_text()
        (workspace / "installed.yml").write_text(text.replace("version: 1.0.0", "version: 1.10"))
        result = _invoke(workspace, "install-all")
        assert result.exit_code == 1
        assert "version" in result.output


class TestRunScript:
    def test_install_module_script(self, workspace: Path) -> None:
        result = _invoke(
            workspace, "run-script", "install-module",
            "--package", "acme/simplesamlphp-module-foo",
        )
        assert result.exit_code == 0, result.output
        assert (workspace / "app" / "modules" / "foo" / "bar.txt").exists()

    def test_package_script_requires_package(self, workspace: Path) -> None:
        result = _invoke(workspace, "run-script", "uninstall-module")
        assert result.exit_code == 2
        assert "--package" in result.output

    def test_install_all_script(self, workspace: Path) -> None:
        result = _invoke(workspace, "run-script", "install-all")
        assert result.exit_code == 0, result.output
        assert (workspace / "app" / "modules" / "MiXeD").exists()

    def test_deprecated_script(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, [
            "--installed", str(tmp_path / "nope.yml"), "run-script", "postInstallCmd",
        ])
        assert result.exit_code == 0
        assert "postInstallCmd 已不再提供" in result.output
        assert "UPDATE.md" in result.output
