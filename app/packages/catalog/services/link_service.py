"""关联关系服务：条目-标签、标签组-标签、主题-标签组、主题-条目。"""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import HTTP_STATUS_CONFLICT, HTTP_STATUS_NOT_FOUND, HTTP_STATUS_OK
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.crud.base import CRUDBase
from app.packages.catalog.crud.item import item_crud
from app.packages.catalog.crud.links import (
    CRUDLink,
    item_tag_crud,
    tag_group_tag_crud,
    topic_item_crud,
    topic_tag_group_crud,
)
from app.packages.catalog.crud.tag import tag_crud, tag_group_crud, topic_crud


class LinkService:
    """一张关联表对应一个实例；创建前校验两端记录存在且关联尚未建立。"""

    def __init__(self, crud: CRUDLink, left: CRUDBase, right: CRUDBase, label: str):
        self.crud = crud
        self.left = left
        self.right = right
        self.label = label

    def list_links(self, db: Session) -> Dict[str, Any]:
        data = [self.crud.serialize(row) for row in self.crud.list_all(db)]
        return create_response(f"获取{self.label}列表成功", data, HTTP_STATUS_OK)

    def get_link(self, db: Session, *, left_id: int, right_id: int) -> Dict[str, Any]:
        row = self.crud.get_pair(db, left_id, right_id)
        if row is None:
            raise AppException(f"{self.label}不存在", HTTP_STATUS_NOT_FOUND)
        return create_response(f"获取{self.label}成功", self.crud.serialize(row), HTTP_STATUS_OK)

    def create_link(self, db: Session, *, left_id: int, right_id: int) -> Dict[str, Any]:
        if self.left.get(db, left_id) is None or self.right.get(db, right_id) is None:
            raise AppException("关联的记录不存在", HTTP_STATUS_NOT_FOUND)
        if self.crud.get_pair(db, left_id, right_id) is not None:
            raise AppException(f"{self.label}已存在", HTTP_STATUS_CONFLICT)
        row = self.crud.create(db, left_id, right_id)
        return create_response(f"创建{self.label}成功", self.crud.serialize(row), HTTP_STATUS_OK)

    def delete_link(self, db: Session, *, left_id: int, right_id: int) -> Dict[str, Any]:
        snapshot = self.crud.delete_pair(db, left_id, right_id)
        if snapshot is None:
            raise AppException(f"{self.label}不存在", HTTP_STATUS_NOT_FOUND)
        return create_response(f"删除{self.label}成功", snapshot, HTTP_STATUS_OK)


item_tag_service = LinkService(item_tag_crud, item_crud, tag_crud, "条目标签")
tag_group_tag_service = LinkService(tag_group_tag_crud, tag_group_crud, tag_crud, "标签组标签")
topic_tag_group_service = LinkService(topic_tag_group_crud, topic_crud, tag_group_crud, "主题标签组")
topic_item_service = LinkService(topic_item_crud, topic_crud, item_crud, "主题条目")
