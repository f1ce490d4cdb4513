"""目录同步服务：扫描索引根目录并把文件系统状态与数据库对齐。

一次扫描的阶段严格有序：
1. 确保隔离目录存在；
2. 遍历根目录（跳过隔离目录）；
3. 重复组成员全部移入隔离目录；
4. 剩余文件中的副本变体移入隔离目录；
5. 按深度由浅到深索引目录，记录 path -> id；
6. 索引未被隔离的文件；
7. （仅完全同步）批量删除磁盘上已不存在的文件记录；
8. （仅完全同步）删除找不到同名文件记录的孤立条目。

同一时刻只允许一次扫描，重复触发抛出 ``ScanInProgressError``。
"""

from __future__ import annotations

import os
import threading
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import (
    DUPLICATE_POLICY_ALL,
    DUPLICATE_POLICY_KEEP_ORIGINAL,
    STATUS_ERROR,
    STATUS_INDEXED,
    STATUS_UPDATED,
)
from app.packages.catalog.core.exceptions import ScanInProgressError
from app.packages.catalog.core.logger import logger, scan_context
from app.packages.catalog.crud.file_entry import file_entry_crud
from app.packages.catalog.crud.item import item_crud
from app.packages.catalog.services.duplicate_detector import (
    find_copy_variants,
    find_duplicate_groups,
    select_for_quarantine,
)
from app.packages.catalog.services.indexer import Indexer, IndexResult
from app.packages.catalog.services.quarantine import ensure_quarantine_dir, quarantine_file
from app.packages.catalog.services.tree_walker import walk_tree
from app.packages.catalog.utils.path_utils import is_under_dir_name, parent_of, relative_path

_scan_lock = threading.Lock()


@dataclass
class ScanSummary:
    full_sync: bool
    indexed: int = 0
    updated: int = 0
    errors: int = 0
    quarantined: list[str] = field(default_factory=list)
    stale_removed: int = 0
    orphans_removed: int = 0
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.errors == 0

    def record(self, result: IndexResult) -> None:
        if result.status == STATUS_INDEXED:
            self.indexed += 1
        elif result.status == STATUS_UPDATED:
            self.updated += 1
        elif result.status == STATUS_ERROR:
            self.errors += 1

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["ok"] = self.ok
        return payload


class Reconciler:
    """协调一次完整扫描；数据库访问通过注入的会话工厂完成。"""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        root: str | os.PathLike,
        quarantine_dir_name: str,
        duplicate_policy: str = DUPLICATE_POLICY_ALL,
    ):
        self._session_factory = session_factory
        self.duplicate_policy = duplicate_policy
        self.root = Path(root)
        self.quarantine_dir_name = quarantine_dir_name
        self.quarantine_dir = self.root / quarantine_dir_name
        self._indexer = Indexer(session_factory, self.root)

    def scan(self, *, full_sync: bool = True) -> ScanSummary:
        started = time.monotonic()
        summary = ScanSummary(full_sync=full_sync)
        logger.info("scan.start root=%s full_sync=%s", self.root, full_sync)

        ensure_quarantine_dir(self.quarantine_dir)
        walked = walk_tree(self.root, exclude_dir_name=self.quarantine_dir_name)

        quarantined: set[str] = set()
        self._quarantine_duplicates(walked.files, quarantined, summary)
        self._quarantine_copy_variants(walked.files, quarantined, summary)

        dir_ids = self._index_directories(walked.directories, summary)
        self._index_files(walked.files, quarantined, dir_ids, summary)

        if full_sync:
            summary.stale_removed = self._remove_stale_files(quarantined, summary)
            summary.orphans_removed = self._remove_orphan_items(summary)

        summary.duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            "scan.done indexed=%s updated=%s errors=%s quarantined=%s stale=%s orphans=%s",
            summary.indexed, summary.updated, summary.errors, len(summary.quarantined),
            summary.stale_removed, summary.orphans_removed,
        )
        return summary

    # ------------------------------------------------------------------
    # 隔离
    # ------------------------------------------------------------------

    def _quarantine(self, path: Path, quarantined: set[str], summary: ScanSummary) -> None:
        # 移动失败也记为已隔离，文件留在原处但不会被索引
        quarantine_file(path, self.quarantine_dir)
        quarantined.add(str(path))
        summary.quarantined.append(relative_path(path, self.root))

    def _quarantine_duplicates(self, files: list[Path], quarantined: set[str], summary: ScanSummary) -> None:
        groups = find_duplicate_groups(files)
        for key, members in groups.items():
            logger.info("scan.duplicate_group key=%s members=%s", key, len(members))
            keep_original = self.duplicate_policy == DUPLICATE_POLICY_KEEP_ORIGINAL
            for path in select_for_quarantine(members, keep_original=keep_original):
                self._quarantine(path, quarantined, summary)

    def _quarantine_copy_variants(self, files: list[Path], quarantined: set[str], summary: ScanSummary) -> None:
        for path in find_copy_variants(files, exclude=quarantined):
            logger.info("scan.copy_variant %s", path)
            self._quarantine(path, quarantined, summary)

    # ------------------------------------------------------------------
    # 索引
    # ------------------------------------------------------------------

    def _index_directories(self, directories: list[Path], summary: ScanSummary) -> dict[str, int]:
        dir_ids: dict[str, int] = {}
        # sorted 是稳定排序：同一深度内保持遍历顺序
        ordered = sorted(directories, key=lambda p: relative_path(p, self.root).count("/"))
        for path in ordered:
            rel = relative_path(path, self.root)
            result = self._indexer.index(path, dir_ids.get(parent_of(rel)))
            summary.record(result)
            if result.id is not None:
                dir_ids[rel] = result.id
        return dir_ids

    def _index_files(
        self,
        files: list[Path],
        quarantined: set[str],
        dir_ids: dict[str, int],
        summary: ScanSummary,
    ) -> None:
        for path in files:
            if str(path) in quarantined:
                continue
            rel = relative_path(path, self.root)
            summary.record(self._indexer.index(path, dir_ids.get(parent_of(rel))))

    # ------------------------------------------------------------------
    # 清理（仅完全同步）
    # ------------------------------------------------------------------

    def _remove_stale_files(self, quarantined: set[str], summary: ScanSummary) -> int:
        # 隔离失败的文件仍留在原处，其旧记录同样视为过期
        quarantined_rel = {relative_path(p, self.root) for p in quarantined}
        try:
            with self._session_factory() as db:
                with db.begin():
                    stale_ids = [
                        entry_id
                        for entry_id, path in file_entry_crud.list_file_paths(db)
                        if not is_under_dir_name(path, self.quarantine_dir_name)
                        and (path in quarantined_rel or not (self.root / path.lstrip("/")).exists())
                    ]
                    removed = file_entry_crud.delete_by_ids(db, stale_ids)
        except SQLAlchemyError:
            logger.exception("scan.stale_cleanup_failed")
            summary.errors += 1
            return 0
        if removed:
            logger.info("scan.stale_removed count=%s", removed)
        return removed

    def _remove_orphan_items(self, summary: ScanSummary) -> int:
        try:
            with self._session_factory() as db:
                with db.begin():
                    removed = item_crud.delete_orphans(db)
        except SQLAlchemyError:
            logger.exception("scan.orphan_cleanup_failed")
            summary.errors += 1
            return 0
        if removed:
            logger.info("scan.orphans_removed count=%s", removed)
        return removed


def run_scan(
    session_factory: Callable[[], Session],
    *,
    root: str | os.PathLike,
    quarantine_dir_name: str,
    full_sync: bool = True,
    duplicate_policy: str = DUPLICATE_POLICY_ALL,
) -> ScanSummary:
    """串行执行一次扫描；已有扫描进行中时立即拒绝。"""
    if not _scan_lock.acquire(blocking=False):
        raise ScanInProgressError("已有扫描正在进行")
    try:
        reconciler = Reconciler(session_factory, root, quarantine_dir_name, duplicate_policy)
        with scan_context():
            return reconciler.scan(full_sync=full_sync)
    finally:
        _scan_lock.release()


def initial_index(
    session_factory: Callable[[], Session],
    *,
    root: str | os.PathLike,
    quarantine_dir_name: str,
    duplicate_policy: str = DUPLICATE_POLICY_ALL,
) -> Optional[ScanSummary]:
    """一次性初始索引：``files`` 表已有数据时跳过。"""
    with session_factory() as db:
        total = file_entry_crud.count(db)
    if total > 0:
        logger.info("Skipping indexing as files already exist (count=%s)", total)
        return None
    return run_scan(
        session_factory,
        root=root,
        quarantine_dir_name=quarantine_dir_name,
        full_sync=False,
        duplicate_policy=duplicate_policy,
    )


def is_scan_running() -> bool:
    return _scan_lock.locked()
