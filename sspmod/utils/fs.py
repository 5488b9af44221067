"""目录同步工具

- mirror(): 让目标目录成为源目录的精确递归副本
- remove_tree(): 递归删除，目标不存在时静默返回

两者都是阻塞操作，中途失败时目标目录处于部分更新状态。
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def _entry_kind(path: Path) -> str:
    if path.is_symlink():
        return "link"
    if path.is_dir():
        return "dir"
    return "file"


def remove_tree(path: str | Path) -> bool:
    """递归删除文件或目录，返回是否实际删除了内容"""
    p = Path(path)
    if p.is_symlink() or p.is_file():
        p.unlink()
        return True
    if p.is_dir():
        shutil.rmtree(p)
        return True
    return False


def mirror(source: str | Path, dest: str | Path) -> None:
    """把 source 镜像到 dest

    - dest 不存在时自动创建（含父目录）
    - 同名条目直接覆盖，类型不同（文件/目录/链接）时先删除再复制
    - dest 中 source 没有的条目会被删除
    - 符号链接按链接本身复制，不跟随
    """
    src = Path(source)
    dst = Path(dest)
    if not src.is_dir():
        raise FileNotFoundError(f"源目录不存在: {src}")
    if dst.resolve() == src.resolve():
        logger.debug("源目录与目标目录相同，跳过: %s", src)
        return

    if dst.exists() or dst.is_symlink():
        if _entry_kind(dst) != "dir":
            remove_tree(dst)
    dst.mkdir(parents=True, exist_ok=True)
    _sync_dir(src, dst)


def _sync_dir(src: Path, dst: Path) -> None:
    wanted = {entry.name: entry for entry in src.iterdir()}

    # 先清理目标中多余或类型冲突的条目
    for existing in list(dst.iterdir()):
        entry = wanted.get(existing.name)
        if entry is None or _entry_kind(entry) != _entry_kind(existing):
            logger.debug("删除多余条目: %s", existing)
            remove_tree(existing)

    for name, entry in wanted.items():
        target = dst / name
        kind = _entry_kind(entry)
        if kind == "link":
            if target.is_symlink():
                target.unlink()
            os.symlink(os.readlink(entry), target)
        elif kind == "dir":
            target.mkdir(exist_ok=True)
            _sync_dir(entry, target)
        else:
            shutil.copy2(entry, target)
