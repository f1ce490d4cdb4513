"""目录遍历：以显式栈实现先序遍历，输出扁平的文件与目录列表。

隔离目录（按相对路径的片段匹配）不会出现在结果中；
非根目录读取失败只记录日志并视为空目录，根目录读取失败则抛出 ``ScanSetupError``。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from app.packages.catalog.core.exceptions import ScanSetupError
from app.packages.catalog.core.logger import logger
from app.packages.catalog.utils.path_utils import is_under_dir_name, relative_path


@dataclass
class WalkResult:
    files: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)
    unreadable: list[Path] = field(default_factory=list)


def _list_dir(path: Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def walk_tree(root: str | os.PathLike, *, exclude_dir_name: Optional[str] = None) -> WalkResult:
    root_path = Path(root)
    result = WalkResult()

    try:
        top_entries = _list_dir(root_path)
    except OSError as exc:
        raise ScanSetupError(f"无法读取索引根目录 {root_path}: {exc}") from exc

    # 栈中元素为 (条目路径, 是否目录)，逆序压栈保证按名称顺序出栈
    stack: list[tuple[Path, bool]] = []

    def _push(entries: list[os.DirEntry]) -> None:
        for entry in reversed(entries):
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            stack.append((Path(entry.path), is_dir))

    _push(top_entries)
    while stack:
        path, is_dir = stack.pop()
        if exclude_dir_name and is_under_dir_name(relative_path(path, root_path), exclude_dir_name):
            continue
        if not is_dir:
            result.files.append(path)
            continue

        result.directories.append(path)
        try:
            children = _list_dir(path)
        except OSError as exc:
            logger.error("readdir failed for %s: %s", path, exc)
            result.unreadable.append(path)
            continue
        _push(children)

    logger.debug(
        "walk.done root=%s files=%s directories=%s",
        root_path, len(result.files), len(result.directories),
    )
    return result
