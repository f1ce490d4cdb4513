"""Item CRUD：包含扫描器按名称自愈的写入方法。"""

from __future__ import annotations

from sqlalchemy import delete, exists, select, update
from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import ENTRY_TYPE_FILE, ITEM_TYPE_FILE
from app.packages.catalog.crud.base import CRUDBase
from app.packages.catalog.models.file_entry import FileEntry
from app.packages.catalog.models.item import Item


class CRUDItem(CRUDBase[Item]):
    def repoint_link_by_name(self, db: Session, *, name: str, link: str) -> int:
        """按名称更新文件类条目的链接，返回受影响行数。"""
        result = db.execute(
            update(Item)
            .where(Item.type == ITEM_TYPE_FILE, Item.name == name)
            .values(link=link)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def delete_file_items_by_name(self, db: Session, *, name: str) -> int:
        result = db.execute(
            delete(Item)
            .where(Item.type == ITEM_TYPE_FILE, Item.name == name)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def delete_orphans(self, db: Session) -> int:
        """删除名称在 ``files`` 中找不到对应文件条目的文件类条目。

        其它类型的条目由上层 CRUD 维护，这里不触碰。
        """
        has_file = exists(
            select(FileEntry.id).where(FileEntry.type == ENTRY_TYPE_FILE, FileEntry.name == Item.name)
        )
        result = db.execute(
            delete(Item)
            .where(Item.type == ITEM_TYPE_FILE, ~has_file)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)


item_crud = CRUDItem(Item)

__all__ = ["item_crud"]
