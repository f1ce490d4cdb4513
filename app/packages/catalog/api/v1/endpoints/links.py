"""关联表路由：列表、按两端 ID 查询、创建与删除。"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.packages.catalog.api.v1.schemas.links import (
    ItemTagPayload,
    LinkListResponse,
    LinkResponse,
    TagGroupTagPayload,
    TopicItemPayload,
    TopicTagGroupPayload,
)
from app.packages.catalog.core.dependencies import get_db
from app.packages.catalog.services.link_service import (
    item_tag_service,
    tag_group_tag_service,
    topic_item_service,
    topic_tag_group_service,
)

item_tags_router = APIRouter(prefix="/item-tags", tags=["item-tags"])
tag_group_tags_router = APIRouter(prefix="/tag-group-tags", tags=["tag-group-tags"])
topic_tag_groups_router = APIRouter(prefix="/topic-tag-groups", tags=["topic-tag-groups"])
topic_items_router = APIRouter(prefix="/topic-items", tags=["topic-items"])


@item_tags_router.get("", response_model=LinkListResponse)
def list_item_tags(db: Session = Depends(get_db)):
    return item_tag_service.list_links(db)


@item_tags_router.get("/{item_id}/{tag_id}", response_model=LinkResponse)
def get_item_tag(item_id: int, tag_id: int, db: Session = Depends(get_db)):
    return item_tag_service.get_link(db, left_id=item_id, right_id=tag_id)


@item_tags_router.post("", response_model=LinkResponse)
def create_item_tag(payload: ItemTagPayload, db: Session = Depends(get_db)):
    return item_tag_service.create_link(db, left_id=payload.itemId, right_id=payload.tagId)


@item_tags_router.delete("/{item_id}/{tag_id}", response_model=LinkResponse)
def delete_item_tag(item_id: int, tag_id: int, db: Session = Depends(get_db)):
    return item_tag_service.delete_link(db, left_id=item_id, right_id=tag_id)


@tag_group_tags_router.get("", response_model=LinkListResponse)
def list_tag_group_tags(db: Session = Depends(get_db)):
    return tag_group_tag_service.list_links(db)


@tag_group_tags_router.get("/{tag_group_id}/{tag_id}", response_model=LinkResponse)
def get_tag_group_tag(tag_group_id: int, tag_id: int, db: Session = Depends(get_db)):
    return tag_group_tag_service.get_link(db, left_id=tag_group_id, right_id=tag_id)


@tag_group_tags_router.post("", response_model=LinkResponse)
def create_tag_group_tag(payload: TagGroupTagPayload, db: Session = Depends(get_db)):
    return tag_group_tag_service.create_link(db, left_id=payload.tagGroupId, right_id=payload.tagId)


@tag_group_tags_router.delete("/{tag_group_id}/{tag_id}", response_model=LinkResponse)
def delete_tag_group_tag(tag_group_id: int, tag_id: int, db: Session = Depends(get_db)):
    return tag_group_tag_service.delete_link(db, left_id=tag_group_id, right_id=tag_id)


@topic_tag_groups_router.get("", response_model=LinkListResponse)
def list_topic_tag_groups(db: Session = Depends(get_db)):
    return topic_tag_group_service.list_links(db)


@topic_tag_groups_router.get("/{topic_id}/{tag_group_id}", response_model=LinkResponse)
def get_topic_tag_group(topic_id: int, tag_group_id: int, db: Session = Depends(get_db)):
    return topic_tag_group_service.get_link(db, left_id=topic_id, right_id=tag_group_id)


@topic_tag_groups_router.post("", response_model=LinkResponse)
def create_topic_tag_group(payload: TopicTagGroupPayload, db: Session = Depends(get_db)):
    return topic_tag_group_service.create_link(db, left_id=payload.topicId, right_id=payload.tagGroupId)


@topic_tag_groups_router.delete("/{topic_id}/{tag_group_id}", response_model=LinkResponse)
def delete_topic_tag_group(topic_id: int, tag_group_id: int, db: Session = Depends(get_db)):
    return topic_tag_group_service.delete_link(db, left_id=topic_id, right_id=tag_group_id)


@topic_items_router.get("", response_model=LinkListResponse)
def list_topic_items(db: Session = Depends(get_db)):
    return topic_item_service.list_links(db)


@topic_items_router.get("/{topic_id}/{item_id}", response_model=LinkResponse)
def get_topic_item(topic_id: int, item_id: int, db: Session = Depends(get_db)):
    return topic_item_service.get_link(db, left_id=topic_id, right_id=item_id)


@topic_items_router.post("", response_model=LinkResponse)
def create_topic_item(payload: TopicItemPayload, db: Session = Depends(get_db)):
    return topic_item_service.create_link(db, left_id=payload.topicId, right_id=payload.itemId)


@topic_items_router.delete("/{topic_id}/{item_id}", response_model=LinkResponse)
def delete_topic_item(topic_id: int, item_id: int, db: Session = Depends(get_db)):
    return topic_item_service.delete_link(db, left_id=topic_id, right_id=item_id)
