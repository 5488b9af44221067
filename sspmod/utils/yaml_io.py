"""YAML 读取工具

配置文件和已解析包清单都通过 load_yaml() 读取。
统一 encoding="utf-8"、大小限制、空值保护。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# 清单文件最大 10MB
MAX_YAML_SIZE = 10 * 1024 * 1024


def load_yaml(path: str | Path) -> dict[str, Any]:
    """安全读取 YAML 文件

    返回:
        dict: 解析结果。文件不存在、为空或顶层不是映射时返回空字典

    异常:
        ValueError: 文件超过 MAX_YAML_SIZE
        yaml.YAMLError: YAML 格式错误
        OSError: 读取失败
    """
    p = Path(path)
    if not p.exists():
        return {}

    file_size = p.stat().st_size
    if file_size > MAX_YAML_SIZE:
        raise ValueError(
            f"YAML 文件过大: {p} ({file_size} 字节), "
            f"超过限制 {MAX_YAML_SIZE} 字节"
        )

    try:
        with open(p, encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("解析 YAML 文件失败: %s, 错误: %s", p, e)
        raise

    if result is None:
        return {}
    if not isinstance(result, dict):
        logger.warning(
            "%s 顶层不是映射 (实际类型: %s)，按空文件处理",
            p, type(result).__name__,
        )
        return {}
    return result
