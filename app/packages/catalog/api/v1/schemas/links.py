"""关联表请求模型。"""

from typing import Any

from pydantic import BaseModel

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope


class ItemTagPayload(BaseModel):
    itemId: int
    tagId: int


class TagGroupTagPayload(BaseModel):
    tagGroupId: int
    tagId: int


class TopicTagGroupPayload(BaseModel):
    topicId: int
    tagGroupId: int


class TopicItemPayload(BaseModel):
    topicId: int
    itemId: int


LinkListResponse = ResponseEnvelope[list[dict[str, int]]]
LinkResponse = ResponseEnvelope[dict[str, int]]
ViewResponse = ResponseEnvelope[Any]
