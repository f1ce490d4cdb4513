"""聚合视图路由。"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.packages.catalog.api.v1.schemas.links import ViewResponse
from app.packages.catalog.core.dependencies import get_db
from app.packages.catalog.services.view_service import view_service

router = APIRouter(prefix="/view", tags=["view"])


@router.get("/tag-groups", response_model=ViewResponse)
def tag_groups_with_tags(db: Session = Depends(get_db)):
    return view_service.tag_groups_with_tags(db)


@router.get("/topics/{topic_id}/schema", response_model=ViewResponse)
def topic_schema(topic_id: int, db: Session = Depends(get_db)):
    return view_service.topic_schema(db, topic_id=topic_id)


@router.get("/items/{item_id}/tags", response_model=ViewResponse)
def item_with_tags(item_id: int, db: Session = Depends(get_db)):
    return view_service.item_with_tags(db, item_id=item_id)
