"""目录条目请求/响应模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope


class ItemPayload(BaseModel):
    name: str = Field(..., min_length=1)
    link: Optional[str] = None
    imageUrl: Optional[str] = None
    type: str = "file"


class ItemOut(BaseModel):
    id: int
    name: str
    link: Optional[str] = None
    image_url: Optional[str] = None
    type: str


ItemListResponse = ResponseEnvelope[list[ItemOut]]
ItemResponse = ResponseEnvelope[ItemOut]
