"""标签、标签组与主题路由。"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.packages.catalog.api.v1.schemas.tags import (
    TagGroupListResponse,
    TagGroupPayload,
    TagGroupResponse,
    TagListResponse,
    TagPayload,
    TagResponse,
    TopicListResponse,
    TopicPayload,
    TopicResponse,
)
from app.packages.catalog.core.dependencies import get_db
from app.packages.catalog.services.tag_service import tag_group_service, tag_service, topic_service

router = APIRouter(prefix="/tags", tags=["tags"])
group_router = APIRouter(prefix="/tag-groups", tags=["tag-groups"])
topic_router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=TagListResponse)
def list_tags(db: Session = Depends(get_db)):
    return tag_service.list_tags(db)


@router.get("/{tag_id}", response_model=TagResponse)
def get_tag(tag_id: int, db: Session = Depends(get_db)):
    return tag_service.get_tag(db, tag_id=tag_id)


@router.post("", response_model=TagResponse)
def create_tag(payload: TagPayload, db: Session = Depends(get_db)):
    return tag_service.create_tag(db, group=payload.group, name=payload.name)


@router.put("/{tag_id}", response_model=TagResponse)
def update_tag(tag_id: int, payload: TagPayload, db: Session = Depends(get_db)):
    return tag_service.update_tag(db, tag_id=tag_id, group=payload.group, name=payload.name)


@router.delete("/{tag_id}", response_model=TagResponse)
def delete_tag(tag_id: int, db: Session = Depends(get_db)):
    return tag_service.delete_tag(db, tag_id=tag_id)


@group_router.get("", response_model=TagGroupListResponse)
def list_tag_groups(db: Session = Depends(get_db)):
    return tag_group_service.list_groups(db)


@group_router.get("/{group_id}", response_model=TagGroupResponse)
def get_tag_group(group_id: int, db: Session = Depends(get_db)):
    return tag_group_service.get_group(db, group_id=group_id)


@group_router.post("", response_model=TagGroupResponse)
def create_tag_group(payload: TagGroupPayload, db: Session = Depends(get_db)):
    return tag_group_service.create_group(db, name=payload.name)


@group_router.put("/{group_id}", response_model=TagGroupResponse)
def update_tag_group(group_id: int, payload: TagGroupPayload, db: Session = Depends(get_db)):
    return tag_group_service.update_group(db, group_id=group_id, name=payload.name)


@group_router.delete("/{group_id}", response_model=TagGroupResponse)
def delete_tag_group(group_id: int, db: Session = Depends(get_db)):
    return tag_group_service.delete_group(db, group_id=group_id)


@topic_router.get("", response_model=TopicListResponse)
def list_topics(db: Session = Depends(get_db)):
    return topic_service.list_topics(db)


@topic_router.get("/{topic_id}", response_model=TopicResponse)
def get_topic(topic_id: int, db: Session = Depends(get_db)):
    return topic_service.get_topic(db, topic_id=topic_id)


@topic_router.post("", response_model=TopicResponse)
def create_topic(payload: TopicPayload, db: Session = Depends(get_db)):
    return topic_service.create_topic(db, name=payload.name, description=payload.description)


@topic_router.put("/{topic_id}", response_model=TopicResponse)
def update_topic(topic_id: int, payload: TopicPayload, db: Session = Depends(get_db)):
    return topic_service.update_topic(db, topic_id=topic_id, name=payload.name, description=payload.description)


@topic_router.delete("/{topic_id}", response_model=TopicResponse)
def delete_topic(topic_id: int, db: Session = Depends(get_db)):
    return topic_service.delete_topic(db, topic_id=topic_id)
