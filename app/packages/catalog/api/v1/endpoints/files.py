"""文件路由：列表、详情、上传、删除、移动与扫描。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from app.packages.catalog.api.v1.schemas.files import (
    FileDetailResponse,
    FileListResponse,
    MoveBody,
    MoveMultipleBody,
    MoveMultipleResponse,
    ScanResponse,
)
from app.packages.catalog.core.config import Settings
from app.packages.catalog.core.constants import (
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_OK,
)
from app.packages.catalog.core.dependencies import get_app_settings, get_db
from app.packages.catalog.core.exceptions import AppException, ScanInProgressError, ScanSetupError
from app.packages.catalog.core.logger import logger
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.db import session as db_session
from app.packages.catalog.services.file_service import file_service
from app.packages.catalog.services.sync_service import run_scan

router = APIRouter(prefix="/files", tags=["files"])


@router.get("", response_model=FileListResponse)
def list_files(
    type: Optional[str] = Query(None, pattern=r"^(file|directory)$"),
    subtype: Optional[str] = Query(None),
    parent_id: Optional[int] = Query(None, alias="parentId"),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return file_service.list_files(db, entry_type=type, subtype=subtype, parent_id=parent_id, search=search)


@router.post("/scan", response_model=ScanResponse)
def scan_files(
    full_sync: bool = Query(True, alias="fullSync"),
    settings: Settings = Depends(get_app_settings),
):
    """扫描索引目录并同步数据库；完全同步模式会清理失效记录与孤立条目。"""
    try:
        summary = run_scan(
            db_session.SessionLocal,
            root=settings.index_root,
            quarantine_dir_name=settings.quarantine_dir_name,
            duplicate_policy=settings.duplicate_policy,
            full_sync=full_sync,
        )
    except ScanInProgressError as exc:
        raise AppException(str(exc), HTTP_STATUS_CONFLICT) from exc
    except ScanSetupError as exc:
        logger.error("files.scan setup failed: %s", exc)
        raise AppException(str(exc), HTTP_STATUS_INTERNAL_SERVER_ERROR) from exc
    msg = "扫描完成" if summary.ok else "扫描完成，部分条目失败"
    return create_response(msg, summary.to_dict(), HTTP_STATUS_OK)


@router.post("/upload", response_model=FileDetailResponse, status_code=201)
async def upload_file(
    file: UploadFile = File(...),
    folder: Optional[str] = Query("/"),
    db: Session = Depends(get_db),
):
    content = await file.read()
    return file_service.upload_file(db, filename=file.filename or "", content=content, folder=folder)


@router.post("/move", response_model=FileDetailResponse)
def move_file(payload: MoveBody, db: Session = Depends(get_db)):
    return file_service.move_file(db, file_id=payload.fileId, new_folder=payload.newFolder)


@router.post("/move-multiple", response_model=MoveMultipleResponse)
def move_multiple(payload: MoveMultipleBody, db: Session = Depends(get_db)):
    return file_service.move_multiple(db, file_ids=payload.fileIds, new_folder=payload.newFolder)


@router.get("/{file_id}", response_model=FileDetailResponse)
def get_file(file_id: int, db: Session = Depends(get_db)):
    return file_service.get_file(db, file_id=file_id)


@router.delete("/{file_id}", response_model=FileDetailResponse)
def delete_file(file_id: int, db: Session = Depends(get_db)):
    return file_service.delete_file(db, file_id=file_id)
