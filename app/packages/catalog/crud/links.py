"""关联表 CRUD：以复合主键 (left_id, right_id) 读写。"""

from __future__ import annotations

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from app.packages.catalog.models.base import Base
from app.packages.catalog.models.links import ItemTag, TagGroupTag, TopicItem, TopicTagGroup

LinkType = TypeVar("LinkType", bound=Base)


class CRUDLink(Generic[LinkType]):
    """关联表没有自增主键，按左右两列定位一行。"""

    def __init__(self, model: Type[LinkType], left: str, right: str):
        self.model = model
        self.left = left
        self.right = right

    def list_all(self, db: Session) -> List[LinkType]:
        left_col = getattr(self.model, self.left)
        right_col = getattr(self.model, self.right)
        return db.query(self.model).order_by(left_col.asc(), right_col.asc()).all()

    def get_pair(self, db: Session, left_id: int, right_id: int) -> Optional[LinkType]:
        return db.get(self.model, (left_id, right_id))

    def create(self, db: Session, left_id: int, right_id: int) -> LinkType:
        db_obj = self.model(**{self.left: left_id, self.right: right_id})
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete_pair(self, db: Session, left_id: int, right_id: int) -> Optional[dict]:
        """删除一行关联并返回删除前的快照；不存在时返回 ``None``。"""
        db_obj = self.get_pair(db, left_id, right_id)
        if db_obj is None:
            return None
        snapshot = self.serialize(db_obj)
        db.delete(db_obj)
        db.commit()
        return snapshot

    def serialize(self, db_obj: LinkType) -> dict:
        return {self.left: getattr(db_obj, self.left), self.right: getattr(db_obj, self.right)}


item_tag_crud = CRUDLink(ItemTag, "item_id", "tag_id")
tag_group_tag_crud = CRUDLink(TagGroupTag, "tag_group_id", "tag_id")
topic_tag_group_crud = CRUDLink(TopicTagGroup, "topic_id", "tag_group_id")
topic_item_crud = CRUDLink(TopicItem, "topic_id", "item_id")

__all__ = ["item_tag_crud", "tag_group_tag_crud", "topic_tag_group_crud", "topic_item_crud"]
