"""目录条目服务：``items`` 表的增删改查。"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_NOT_FOUND, HTTP_STATUS_OK
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.crud.item import item_crud
from app.packages.catalog.models.item import Item


def serialize_item(item: Item) -> Dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "link": item.link,
        "image_url": item.image_url,
        "type": item.type,
    }


class ItemService:
    """封装目录条目的业务逻辑；扫描器写入的文件条目同样可以在此编辑。"""

    def _get_or_404(self, db: Session, item_id: int) -> Item:
        item = item_crud.get(db, item_id)
        if item is None:
            raise AppException("条目不存在", HTTP_STATUS_NOT_FOUND)
        return item

    @staticmethod
    def _normalize_name(name: Optional[str]) -> str:
        trimmed = (name or "").strip()
        if not trimmed:
            raise AppException("名称不能为空", HTTP_STATUS_BAD_REQUEST)
        return trimmed

    def list_items(self, db: Session) -> Dict[str, Any]:
        items = item_crud.get_multi(db)
        return create_response("获取条目列表成功", [serialize_item(i) for i in items], HTTP_STATUS_OK)

    def get_item(self, db: Session, *, item_id: int) -> Dict[str, Any]:
        return create_response("获取条目成功", serialize_item(self._get_or_404(db, item_id)), HTTP_STATUS_OK)

    def create_item(
        self,
        db: Session,
        *,
        name: str,
        link: Optional[str] = None,
        image_url: Optional[str] = None,
        type: str = "file",
    ) -> Dict[str, Any]:
        created = item_crud.create(
            db,
            {"name": self._normalize_name(name), "link": link, "image_url": image_url, "type": type or "file"},
        )
        return create_response("创建条目成功", serialize_item(created), HTTP_STATUS_OK)

    def update_item(
        self,
        db: Session,
        *,
        item_id: int,
        name: str,
        link: Optional[str] = None,
        image_url: Optional[str] = None,
        type: str = "file",
    ) -> Dict[str, Any]:
        item = self._get_or_404(db, item_id)
        saved = item_crud.update(
            db,
            item,
            {"name": self._normalize_name(name), "link": link, "image_url": image_url, "type": type or "file"},
        )
        return create_response("更新条目成功", serialize_item(saved), HTTP_STATUS_OK)

    def delete_item(self, db: Session, *, item_id: int) -> Dict[str, Any]:
        item = self._get_or_404(db, item_id)
        snapshot = serialize_item(item)
        item_crud.hard_delete(db, item)
        return create_response("删除条目成功", snapshot, HTTP_STATUS_OK)


item_service = ItemService()
