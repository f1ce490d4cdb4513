"""文件操作服务：上传、删除、移动文件并同步 ``files`` / ``items`` 两张表。"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.packages.catalog.core.config import get_settings
from app.packages.catalog.core.constants import (
    ENTRY_TYPE_FILE,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CREATED,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
    MOVE_STATUS_ERROR,
    MOVE_STATUS_MOVED,
    MOVE_STATUS_NOT_FOUND,
)
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.logger import logger
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.core.timezone import to_iso
from app.packages.catalog.crud.file_entry import file_entry_crud
from app.packages.catalog.crud.item import item_crud
from app.packages.catalog.models.file_entry import FileEntry
from app.packages.catalog.services.indexer import index_entry
from app.packages.catalog.utils.path_utils import norm_abs_path, parent_of, relative_path


def serialize_file(entry: FileEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "path": entry.path,
        "type": entry.type,
        "parent_id": entry.parent_id,
        "size": entry.size,
        "last_modified": to_iso(entry.last_modified),
        "subtype": entry.subtype,
        "name": entry.name,
    }


class FileService:
    def __init__(self, root: Optional[os.PathLike] = None, quarantine_dir_name: Optional[str] = None):
        self._root = Path(root) if root is not None else None
        self._quarantine_dir_name = quarantine_dir_name

    @property
    def root(self) -> Path:
        root = self._root if self._root is not None else get_settings().index_root
        return root.resolve()

    @property
    def quarantine_dir_name(self) -> str:
        return self._quarantine_dir_name or get_settings().quarantine_dir_name

    # 统一的安全路径拼接，防止路径遍历
    def _resolve(self, rel: str) -> Path:
        rel_norm = norm_abs_path(rel).lstrip("/")
        candidate = (self.root / rel_norm).resolve()
        try:
            candidate.relative_to(self.root)
        except ValueError as exc:
            raise AppException("非法路径: 越权访问", HTTP_STATUS_BAD_REQUEST) from exc
        if self.quarantine_dir_name in candidate.relative_to(self.root).parts:
            raise AppException("隔离目录不允许直接操作", HTTP_STATUS_BAD_REQUEST)
        return candidate

    def _parent_id_for(self, db: Session, rel_path: str) -> Optional[int]:
        parent = parent_of(rel_path)
        if parent == "/":
            return None
        node = file_entry_crud.get_by_path(db, path=parent)
        if node is None:
            # 父目录尚未入库时先索引父目录链
            parent_abs = self.root / parent.lstrip("/")
            result = index_entry(db, parent_abs, self.root, self._parent_id_for(db, parent))
            return result.id
        return node.id

    def _get_file_or_404(self, db: Session, file_id: int) -> FileEntry:
        entry = file_entry_crud.get(db, file_id)
        if entry is None:
            raise AppException("文件不存在", HTTP_STATUS_NOT_FOUND)
        return entry

    # ----------------------------
    # 查询
    # ----------------------------
    def list_files(
        self,
        db: Session,
        *,
        entry_type: Optional[str] = None,
        subtype: Optional[str] = None,
        parent_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        entries = file_entry_crud.list_filtered(
            db, entry_type=entry_type, subtype=subtype, parent_id=parent_id, search=search
        )
        return create_response("获取文件列表成功", [serialize_file(e) for e in entries], HTTP_STATUS_OK)

    def get_file(self, db: Session, *, file_id: int) -> Dict[str, Any]:
        entry = self._get_file_or_404(db, file_id)
        return create_response("获取文件成功", serialize_file(entry), HTTP_STATUS_OK)

    # ----------------------------
    # 变更
    # ----------------------------
    def upload_file(self, db: Session, *, filename: str, content: bytes, folder: Optional[str] = "/") -> Dict[str, Any]:
        """保存上传文件到索引目录并立即索引，使目录条目按名称自愈。"""
        safe_name = os.path.basename((filename or "").replace("\\", "/")).strip()
        if not safe_name:
            raise AppException("文件名不能为空", HTTP_STATUS_BAD_REQUEST)

        target_dir = self._resolve(folder or "/")
        target_dir.mkdir(parents=True, exist_ok=True)
        destination = target_dir / safe_name
        if destination.exists():
            raise AppException("上传失败：文件名已存在", HTTP_STATUS_BAD_REQUEST)

        with open(destination, "wb") as f:
            f.write(content)

        rel = relative_path(destination, self.root)
        try:
            result = index_entry(db, destination, self.root, self._parent_id_for(db, rel))
            db.commit()
        except Exception:
            db.rollback()
            destination.unlink(missing_ok=True)
            raise
        logger.info("files.upload path=%s status=%s", rel, result.status)
        entry = file_entry_crud.get(db, result.id)
        return create_response("文件上传成功", serialize_file(entry), HTTP_STATUS_CREATED)

    def delete_file(self, db: Session, *, file_id: int) -> Dict[str, Any]:
        entry = self._get_file_or_404(db, file_id)
        if entry.type != ENTRY_TYPE_FILE:
            raise AppException("仅支持删除文件", HTTP_STATUS_BAD_REQUEST)
        snapshot = serialize_file(entry)
        target = self._resolve(entry.path)

        file_entry_crud.hard_delete(db, entry, auto_commit=False)
        remaining = (
            file_entry_crud.query(db)
            .filter(FileEntry.type == ENTRY_TYPE_FILE, FileEntry.name == snapshot["name"])
            .count()
        )
        if remaining == 0:
            item_crud.delete_file_items_by_name(db, name=snapshot["name"])
        db.commit()

        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("files.delete unlink failed path=%s err=%s", target, exc)
        return create_response("文件删除成功", snapshot, HTTP_STATUS_OK)

    def _move_one(self, db: Session, entry: FileEntry, new_folder: str) -> FileEntry:
        if entry.type != ENTRY_TYPE_FILE:
            raise AppException("仅支持移动文件", HTTP_STATUS_BAD_REQUEST)
        source = self._resolve(entry.path)
        if not source.exists():
            raise AppException(f"源文件不存在: {entry.path}", HTTP_STATUS_NOT_FOUND)
        dst_dir = self._resolve(new_folder)
        dst_dir.mkdir(parents=True, exist_ok=True)
        destination = dst_dir / source.name
        if destination.exists():
            raise AppException(f"目标已存在: {relative_path(destination, self.root)}", HTTP_STATUS_BAD_REQUEST)

        source.rename(destination)
        new_rel = relative_path(destination, self.root)
        try:
            entry.path = new_rel
            entry.parent_id = self._parent_id_for(db, new_rel)
            file_entry_crud.save(db, entry, auto_commit=False)
            item_crud.repoint_link_by_name(db, name=entry.name, link=new_rel)
            db.commit()
        except Exception:
            db.rollback()
            destination.rename(source)
            raise
        db.refresh(entry)
        logger.info("files.move id=%s -> %s", entry.id, new_rel)
        return entry

    def move_file(self, db: Session, *, file_id: int, new_folder: str) -> Dict[str, Any]:
        entry = self._get_file_or_404(db, file_id)
        moved = self._move_one(db, entry, new_folder)
        return create_response("文件移动成功", serialize_file(moved), HTTP_STATUS_OK)

    def move_multiple(self, db: Session, *, file_ids: List[int], new_folder: str) -> Dict[str, Any]:
        results: list[dict] = []
        for file_id in file_ids:
            entry = file_entry_crud.get(db, file_id)
            if entry is None:
                results.append({"fileId": file_id, "status": MOVE_STATUS_NOT_FOUND})
                continue
            try:
                moved = self._move_one(db, entry, new_folder)
                results.append({"fileId": file_id, "status": MOVE_STATUS_MOVED, "newPath": moved.path})
            except AppException as exc:
                results.append({"fileId": file_id, "status": MOVE_STATUS_ERROR, "message": exc.detail})
            except OSError as exc:
                logger.warning("files.move_multiple failed id=%s err=%s", file_id, exc)
                results.append({"fileId": file_id, "status": MOVE_STATUS_ERROR, "message": str(exc)})
        return create_response("批量移动完成", results, HTTP_STATUS_OK)


file_service = FileService()
