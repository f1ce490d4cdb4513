"""聚合视图：标签组+标签、主题结构、条目+标签。"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable

from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import HTTP_STATUS_NOT_FOUND, HTTP_STATUS_OK
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.crud.item import item_crud
from app.packages.catalog.crud.tag import topic_crud
from app.packages.catalog.models.links import ItemTag, TagGroupTag, TopicTagGroup
from app.packages.catalog.models.tag import Tag, TagGroup
from app.packages.catalog.services.item_service import serialize_item
from app.packages.catalog.services.tag_service import serialize_tag, serialize_topic


class ViewService:
    def _groups_with_tags(self, db: Session, groups: Iterable[TagGroup]) -> list[dict]:
        groups = list(groups)
        group_ids = [g.id for g in groups]
        tags_by_group: dict[int, list[dict]] = defaultdict(list)
        if group_ids:
            rows = (
                db.query(TagGroupTag.tag_group_id, Tag)
                .join(Tag, Tag.id == TagGroupTag.tag_id)
                .filter(TagGroupTag.tag_group_id.in_(group_ids))
                .order_by(Tag.id.asc())
                .all()
            )
            for group_id, tag in rows:
                tags_by_group[group_id].append(serialize_tag(tag))
        return [{"id": g.id, "name": g.name, "tags": tags_by_group.get(g.id, [])} for g in groups]

    def tag_groups_with_tags(self, db: Session) -> Dict[str, Any]:
        groups = db.query(TagGroup).order_by(TagGroup.id.asc()).all()
        return create_response("获取标签组视图成功", self._groups_with_tags(db, groups), HTTP_STATUS_OK)

    def topic_schema(self, db: Session, *, topic_id: int) -> Dict[str, Any]:
        topic = topic_crud.get(db, topic_id)
        if topic is None:
            raise AppException("主题不存在", HTTP_STATUS_NOT_FOUND)
        groups = (
            db.query(TagGroup)
            .join(TopicTagGroup, TopicTagGroup.tag_group_id == TagGroup.id)
            .filter(TopicTagGroup.topic_id == topic_id)
            .order_by(TagGroup.id.asc())
            .all()
        )
        payload = {**serialize_topic(topic), "tag_groups": self._groups_with_tags(db, groups)}
        return create_response("获取主题结构成功", payload, HTTP_STATUS_OK)

    def item_with_tags(self, db: Session, *, item_id: int) -> Dict[str, Any]:
        item = item_crud.get(db, item_id)
        if item is None:
            raise AppException("条目不存在", HTTP_STATUS_NOT_FOUND)
        tags = (
            db.query(Tag)
            .join(ItemTag, ItemTag.tag_id == Tag.id)
            .filter(ItemTag.item_id == item_id)
            .order_by(Tag.id.asc())
            .all()
        )
        payload = {**serialize_item(item), "tags": [serialize_tag(t) for t in tags]}
        return create_response("获取条目标签成功", payload, HTTP_STATUS_OK)


view_service = ViewService()
