"""启动期索引：按配置在服务启动时执行一次扫描。"""

from __future__ import annotations

from typing import Optional

from app.packages.catalog.core.config import get_settings
from app.packages.catalog.core.exceptions import ScanError
from app.packages.catalog.core.logger import logger
from app.packages.catalog.db import session as db_session
from app.packages.catalog.services.sync_service import ScanSummary, initial_index, run_scan


def run_startup_index() -> Optional[ScanSummary]:
    """``INDEX_ON_STARTUP`` 关闭时直接返回；扫描失败只记录日志，不阻止服务启动。"""
    settings = get_settings()
    if not settings.index_on_startup:
        return None

    logger.info("Indexing %s", settings.index_root)
    try:
        if settings.full_sync_on_startup:
            summary = run_scan(
                db_session.SessionLocal,
                root=settings.index_root,
                quarantine_dir_name=settings.quarantine_dir_name,
                duplicate_policy=settings.duplicate_policy,
                full_sync=True,
            )
        else:
            summary = initial_index(
                db_session.SessionLocal,
                root=settings.index_root,
                quarantine_dir_name=settings.quarantine_dir_name,
                duplicate_policy=settings.duplicate_policy,
            )
    except ScanError:
        logger.error("Startup index failed", exc_info=True)
        return None

    if summary is not None and not summary.ok:
        logger.warning("Startup index finished with %s errors", summary.errors)
    return summary
