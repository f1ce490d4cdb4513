"""服务状态路由：数据库可用性与索引目录。"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.packages.catalog.api.v1.schemas.files import StatusResponse
from app.packages.catalog.core.config import Settings
from app.packages.catalog.core.constants import HTTP_STATUS_INTERNAL_SERVER_ERROR, HTTP_STATUS_OK
from app.packages.catalog.core.dependencies import get_app_settings, get_db
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.logger import logger
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.services.sync_service import is_scan_running

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
def service_status(db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    try:
        ready = db.execute(text("SELECT 1")).scalar() == 1
    except SQLAlchemyError as exc:
        logger.warning("status.db_unreachable: %s", exc)
        raise AppException("无法连接数据库", HTTP_STATUS_INTERNAL_SERVER_ERROR, {"details": str(exc)}) from exc
    data = {
        "database": {"ready": ready},
        "indexFolder": str(settings.index_root),
        "scanRunning": is_scan_running(),
    }
    return create_response("OK", data, HTTP_STATUS_OK)
