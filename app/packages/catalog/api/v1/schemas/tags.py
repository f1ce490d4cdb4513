"""标签、标签组与主题的请求/响应模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope


class TagPayload(BaseModel):
    group: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class TagOut(BaseModel):
    id: int
    group: str
    name: str


class TagGroupPayload(BaseModel):
    name: str = Field(..., min_length=1)


class TagGroupOut(BaseModel):
    id: int
    name: str


class TopicPayload(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class TopicOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None


TagListResponse = ResponseEnvelope[list[TagOut]]
TagResponse = ResponseEnvelope[TagOut]
TagGroupListResponse = ResponseEnvelope[list[TagGroupOut]]
TagGroupResponse = ResponseEnvelope[TagGroupOut]
TopicListResponse = ResponseEnvelope[list[TopicOut]]
TopicResponse = ResponseEnvelope[TopicOut]
