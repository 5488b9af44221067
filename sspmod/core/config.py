"""集中配置管理

宿主包名、模块类型等常量的统一入口，支持从 YAML 文件加载。
核心组件只接收显式参数；Config 由 CLI 入口读取后传入。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

import yaml

from sspmod.core.exceptions import ConfigError
from sspmod.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

HOST_PACKAGE = "simplesamlphp/simplesamlphp"
MODULE_TYPE = "simplesamlphp-module"
MODULE_NAME_PREFIX = "simplesamlphp-module-"
MIXEDCASE_KEY = "ssp-mixedcase-module-name"
MODULES_DIR = "modules"


@dataclass
class Config:
    """插件配置"""

    # 包识别
    host_package: str = HOST_PACKAGE
    module_type: str = MODULE_TYPE
    mixedcase_key: str = MIXEDCASE_KEY

    # 目录
    modules_dir: str = MODULES_DIR
    vendor_dir: str = "vendor"
    installed_file: str = "vendor/composer/installed.json"

    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "sspmod.yml") -> Config:
        """从 YAML 文件加载配置，文件不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"解析配置文件 {path} 失败: {e}") from e
        if not data:
            return cls()
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        for k, v in matched.items():
            if not isinstance(v, str) or not v:
                raise ConfigError(f"配置项 {k} 必须是非空字符串: {path}")
        cfg = cls(**matched)
        cfg.extra = {k: v for k, v in data.items() if k not in known}
        return cfg

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "sspmod.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
