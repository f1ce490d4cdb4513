"""隔离目录：把可疑的重复/副本文件移入保留目录，目标重名时追加 ``__dupN``。"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from app.packages.catalog.core.exceptions import ScanSetupError
from app.packages.catalog.core.logger import logger


def ensure_quarantine_dir(quarantine_dir: str | os.PathLike) -> Path:
    path = Path(quarantine_dir)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ScanSetupError(f"无法创建隔离目录 {path}: {exc}") from exc
    return path


def free_destination(quarantine_dir: Path, basename: str) -> Path:
    """返回隔离目录中尚未被占用的目标路径，从 ``__dup2`` 开始递增。"""
    candidate = quarantine_dir / basename
    if not candidate.exists():
        return candidate
    stem, ext = os.path.splitext(basename)
    n = 2
    while True:
        candidate = quarantine_dir / f"{stem}__dup{n}{ext}"
        if not candidate.exists():
            return candidate
        n += 1


def quarantine_file(source: str | os.PathLike, quarantine_dir: str | os.PathLike) -> Optional[Path]:
    """移动文件到隔离目录并返回目标路径。

    移动失败只记录日志并返回 ``None``；调用方仍应把源路径排除在索引之外。
    """
    src = Path(source)
    target_dir = ensure_quarantine_dir(quarantine_dir)
    destination = free_destination(target_dir, src.name)
    try:
        src.rename(destination)
    except OSError as exc:
        logger.warning("quarantine.move_failed src=%s dst=%s err=%s", src, destination, exc)
        return None
    logger.info("quarantine.moved %s -> %s", src, destination)
    return destination
