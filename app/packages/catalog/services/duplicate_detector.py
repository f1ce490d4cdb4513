"""重复文件与副本文件识别。

- 重复组：按规范名（去掉副本标记后小写）分组，成员数大于 1 的组全部视为可疑；
- 副本变体：原始文件名本身带有 " - Copy" / " (N)" 标记的文件。
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Collection, Iterable

from app.packages.catalog.utils.path_utils import canonical_key, is_copy_variant, name_without_extension


def find_duplicate_groups(files: Iterable[Path]) -> dict[str, list[Path]]:
    """返回 规范名 -> 成员列表，仅包含成员数大于 1 的组。"""
    groups: dict[str, list[Path]] = defaultdict(list)
    for path in files:
        groups[canonical_key(path)].append(path)
    return {key: members for key, members in groups.items() if len(members) > 1}


def find_copy_variants(files: Iterable[Path], *, exclude: Collection[str] = ()) -> list[Path]:
    """在未被隔离的文件中找出名称本身带副本标记的文件。"""
    return [
        path
        for path in files
        if str(path) not in exclude and is_copy_variant(name_without_extension(path))
    ]


def select_for_quarantine(members: list[Path], *, keep_original: bool = False) -> list[Path]:
    """决定重复组中需要隔离的成员。

    默认全部隔离：无法判断哪一份可信。``keep_original`` 时，若组内恰有一个
    文件名不带副本标记，则保留它，其余隔离。
    """
    if not keep_original:
        return list(members)
    originals = [p for p in members if not is_copy_variant(name_without_extension(p))]
    if len(originals) != 1:
        return list(members)
    return [p for p in members if p != originals[0]]
