"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from app.packages.catalog.models.file_entry import FileEntry
from app.packages.catalog.models.item import Item
from app.packages.catalog.models.links import ItemTag, TagGroupTag, TopicItem, TopicTagGroup
from app.packages.catalog.models.tag import Tag, TagGroup
from app.packages.catalog.models.topic import Topic

__all__ = [
    "FileEntry",
    "Item",
    "ItemTag",
    "Tag",
    "TagGroup",
    "TagGroupTag",
    "Topic",
    "TopicItem",
    "TopicTagGroup",
]
