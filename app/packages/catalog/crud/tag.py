"""标签、标签组与主题的数据访问对象。"""

from __future__ import annotations

from app.packages.catalog.crud.base import CRUDBase
from app.packages.catalog.models.tag import Tag, TagGroup
from app.packages.catalog.models.topic import Topic

tag_crud = CRUDBase(Tag)
tag_group_crud = CRUDBase(TagGroup)
topic_crud = CRUDBase(Topic)

__all__ = ["tag_crud", "tag_group_crud", "topic_crud"]
