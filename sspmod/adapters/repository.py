"""已解析包仓库

职责:
- ArrayRepository: 内存中的已解析包列表
- load_repository(): 从包清单文件加载

支持两种清单格式:
  - *.json: Composer 的 vendor/composer/installed.json
            （列表，或 {"packages": [...]}；install-path 相对于文件所在目录）
  - 其他:   YAML 清单，packages 段为包列表；install_path 相对于清单所在目录
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from sspmod.core.exceptions import ConfigError
from sspmod.core.models import ResolvedPackage
from sspmod.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)


class ArrayRepository:
    """按解析顺序保存的包列表"""

    def __init__(self, packages: list[ResolvedPackage] | None = None) -> None:
        self._packages: list[ResolvedPackage] = list(packages or [])

    def add_package(self, package: ResolvedPackage) -> None:
        self._packages.append(package)

    def find_package(self, name: str) -> ResolvedPackage | None:
        """按规范名查找，同名多版本时返回第一个"""
        wanted = name.lower()
        for package in self._packages:
            if package.name == wanted:
                return package
        return None

    def get_packages(self) -> list[ResolvedPackage]:
        return list(self._packages)

    def __len__(self) -> int:
        return len(self._packages)


def _to_package(entry: Any, base_dir: Path, path_key: str, source: Path) -> ResolvedPackage:
    if not isinstance(entry, dict):
        raise ConfigError(f"包条目必须是映射: {source}: {entry!r}")
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ConfigError(f"包条目缺少 name: {source}: {entry!r}")
    extra = entry.get("extra") or {}
    if not isinstance(extra, dict):
        raise ConfigError(f"包 {name} 的 extra 必须是映射: {source}")

    # 未加引号的 1.10 会被 YAML 读成 1.1
    version = entry.get("version")
    if version is None:
        version = ""
    elif not isinstance(version, str):
        raise ConfigError(f"包 {name} 的 version 必须是字符串（YAML 中请加引号）: {source}")

    install_path = entry.get(path_key) or ""
    if install_path:
        install_path = os.path.normpath(base_dir / str(install_path))

    return ResolvedPackage(
        pretty_name=name,
        version=version,
        type=str(entry.get("type", "library")),
        extra=extra,
        install_path=install_path,
    )


def _load_installed_json(path: Path) -> list[Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"解析 {path} 失败: {e}") from e
    if isinstance(data, dict):
        data = data.get("packages", [])
    if not isinstance(data, list):
        raise ConfigError(f"{path} 中没有包列表")
    return data


def load_repository(path: str | Path) -> ArrayRepository:
    """从包清单文件加载已解析包"""
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"包清单不存在: {p}")

    if p.suffix == ".json":
        entries = _load_installed_json(p)
        path_key = "install-path"
    else:
        try:
            entries = load_yaml(p).get("packages") or []
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"解析 {p} 失败: {e}") from e
        path_key = "install_path"
        if not isinstance(entries, list):
            raise ConfigError(f"{p} 的 packages 段必须是列表")

    repo = ArrayRepository(
        [_to_package(e, p.parent, path_key, p) for e in entries],
    )
    logger.info("已加载 %d 个已解析包: %s", len(repo), p)
    return repo
