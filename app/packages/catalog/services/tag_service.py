"""标签、标签组与主题服务。"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_NOT_FOUND, HTTP_STATUS_OK
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.crud.tag import tag_crud, tag_group_crud, topic_crud
from app.packages.catalog.models.tag import Tag, TagGroup
from app.packages.catalog.models.topic import Topic


def serialize_tag(tag: Tag) -> Dict[str, Any]:
    return {"id": tag.id, "group": tag.group, "name": tag.name}


def serialize_tag_group(group: TagGroup) -> Dict[str, Any]:
    return {"id": group.id, "name": group.name}


def serialize_topic(topic: Topic) -> Dict[str, Any]:
    return {"id": topic.id, "name": topic.name, "description": topic.description}


def _required(value: Optional[str], label: str) -> str:
    trimmed = (value or "").strip()
    if not trimmed:
        raise AppException(f"{label}不能为空", HTTP_STATUS_BAD_REQUEST)
    return trimmed


class TagService:
    def _get_or_404(self, db: Session, tag_id: int) -> Tag:
        tag = tag_crud.get(db, tag_id)
        if tag is None:
            raise AppException("标签不存在", HTTP_STATUS_NOT_FOUND)
        return tag

    def list_tags(self, db: Session) -> Dict[str, Any]:
        return create_response("获取标签列表成功", [serialize_tag(t) for t in tag_crud.get_multi(db)], HTTP_STATUS_OK)

    def get_tag(self, db: Session, *, tag_id: int) -> Dict[str, Any]:
        return create_response("获取标签成功", serialize_tag(self._get_or_404(db, tag_id)), HTTP_STATUS_OK)

    def create_tag(self, db: Session, *, group: str, name: str) -> Dict[str, Any]:
        created = tag_crud.create(db, {"group": _required(group, "分组"), "name": _required(name, "名称")})
        return create_response("创建标签成功", serialize_tag(created), HTTP_STATUS_OK)

    def update_tag(self, db: Session, *, tag_id: int, group: str, name: str) -> Dict[str, Any]:
        tag = self._get_or_404(db, tag_id)
        saved = tag_crud.update(db, tag, {"group": _required(group, "分组"), "name": _required(name, "名称")})
        return create_response("更新标签成功", serialize_tag(saved), HTTP_STATUS_OK)

    def delete_tag(self, db: Session, *, tag_id: int) -> Dict[str, Any]:
        tag = self._get_or_404(db, tag_id)
        snapshot = serialize_tag(tag)
        tag_crud.hard_delete(db, tag)
        return create_response("删除标签成功", snapshot, HTTP_STATUS_OK)


class TagGroupService:
    def _get_or_404(self, db: Session, group_id: int) -> TagGroup:
        group = tag_group_crud.get(db, group_id)
        if group is None:
            raise AppException("标签组不存在", HTTP_STATUS_NOT_FOUND)
        return group

    def list_groups(self, db: Session) -> Dict[str, Any]:
        data = [serialize_tag_group(g) for g in tag_group_crud.get_multi(db)]
        return create_response("获取标签组列表成功", data, HTTP_STATUS_OK)

    def get_group(self, db: Session, *, group_id: int) -> Dict[str, Any]:
        return create_response("获取标签组成功", serialize_tag_group(self._get_or_404(db, group_id)), HTTP_STATUS_OK)

    def create_group(self, db: Session, *, name: str) -> Dict[str, Any]:
        created = tag_group_crud.create(db, {"name": _required(name, "名称")})
        return create_response("创建标签组成功", serialize_tag_group(created), HTTP_STATUS_OK)

    def update_group(self, db: Session, *, group_id: int, name: str) -> Dict[str, Any]:
        group = self._get_or_404(db, group_id)
        saved = tag_group_crud.update(db, group, {"name": _required(name, "名称")})
        return create_response("更新标签组成功", serialize_tag_group(saved), HTTP_STATUS_OK)

    def delete_group(self, db: Session, *, group_id: int) -> Dict[str, Any]:
        group = self._get_or_404(db, group_id)
        snapshot = serialize_tag_group(group)
        tag_group_crud.hard_delete(db, group)
        return create_response("删除标签组成功", snapshot, HTTP_STATUS_OK)


class TopicService:
    def _get_or_404(self, db: Session, topic_id: int) -> Topic:
        topic = topic_crud.get(db, topic_id)
        if topic is None:
            raise AppException("主题不存在", HTTP_STATUS_NOT_FOUND)
        return topic

    def list_topics(self, db: Session) -> Dict[str, Any]:
        return create_response("获取主题列表成功", [serialize_topic(t) for t in topic_crud.get_multi(db)], HTTP_STATUS_OK)

    def get_topic(self, db: Session, *, topic_id: int) -> Dict[str, Any]:
        return create_response("获取主题成功", serialize_topic(self._get_or_404(db, topic_id)), HTTP_STATUS_OK)

    def create_topic(self, db: Session, *, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        created = topic_crud.create(db, {"name": _required(name, "名称"), "description": description})
        return create_response("创建主题成功", serialize_topic(created), HTTP_STATUS_OK)

    def update_topic(self, db: Session, *, topic_id: int, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        topic = self._get_or_404(db, topic_id)
        saved = topic_crud.update(db, topic, {"name": _required(name, "名称"), "description": description})
        return create_response("更新主题成功", serialize_topic(saved), HTTP_STATUS_OK)

    def delete_topic(self, db: Session, *, topic_id: int) -> Dict[str, Any]:
        topic = self._get_or_404(db, topic_id)
        snapshot = serialize_topic(topic)
        topic_crud.hard_delete(db, topic)
        return create_response("删除主题成功", snapshot, HTTP_STATUS_OK)


tag_service = TagService()
tag_group_service = TagGroupService()
topic_service = TopicService()
