"""FileEntry CRUD。"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import ENTRY_TYPE_FILE
from app.packages.catalog.crud.base import CRUDBase
from app.packages.catalog.models.file_entry import FileEntry


class CRUDFileEntry(CRUDBase[FileEntry]):
    def get_by_path(self, db: Session, *, path: str) -> FileEntry | None:
        return self.query(db).filter(FileEntry.path == path).first()

    def count(self, db: Session) -> int:
        return self.query(db).count()

    def list_filtered(
        self,
        db: Session,
        *,
        entry_type: Optional[str] = None,
        subtype: Optional[str] = None,
        parent_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> List[FileEntry]:
        query = self.query(db)
        if entry_type:
            query = query.filter(FileEntry.type == entry_type)
        if subtype:
            query = query.filter(FileEntry.subtype == subtype)
        if parent_id is not None:
            query = query.filter(FileEntry.parent_id == parent_id)
        if search:
            trimmed = search.strip()
            if trimmed:
                query = query.filter(FileEntry.path.ilike(f"%{trimmed}%"))
        return query.order_by(FileEntry.path.asc()).all()

    def list_file_paths(self, db: Session) -> list[tuple[int, str]]:
        """返回全部 ``type='file'`` 条目的 (id, path)。"""
        rows = db.execute(
            select(FileEntry.id, FileEntry.path).where(FileEntry.type == ENTRY_TYPE_FILE)
        ).all()
        return [(row[0], row[1]) for row in rows]

    def delete_by_ids(self, db: Session, ids: Iterable[int]) -> int:
        """单条语句批量删除，返回删除行数。"""
        id_list = list(ids)
        if not id_list:
            return 0
        result = db.execute(
            delete(FileEntry).where(FileEntry.id.in_(id_list)).execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)


file_entry_crud = CRUDFileEntry(FileEntry)

__all__ = ["file_entry_crud"]
