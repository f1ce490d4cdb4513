"""目录条目路由。"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.packages.catalog.api.v1.schemas.items import ItemListResponse, ItemPayload, ItemResponse
from app.packages.catalog.core.dependencies import get_db
from app.packages.catalog.services.item_service import item_service

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=ItemListResponse)
def list_items(db: Session = Depends(get_db)):
    return item_service.list_items(db)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    return item_service.get_item(db, item_id=item_id)


@router.post("", response_model=ItemResponse)
def create_item(payload: ItemPayload, db: Session = Depends(get_db)):
    return item_service.create_item(
        db, name=payload.name, link=payload.link, image_url=payload.imageUrl, type=payload.type
    )


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(item_id: int, payload: ItemPayload, db: Session = Depends(get_db)):
    return item_service.update_item(
        db, item_id=item_id, name=payload.name, link=payload.link, image_url=payload.imageUrl, type=payload.type
    )


@router.delete("/{item_id}", response_model=ItemResponse)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    return item_service.delete_item(db, item_id=item_id)
