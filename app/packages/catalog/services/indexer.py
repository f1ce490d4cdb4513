"""单条目索引：把一个文件或目录写入 ``files`` 表，并为文件维护 ``items`` 条目。

条目按名称自愈：文件在别处重新出现时，已有条目的链接被改指向新路径，
其标签、主题关联因此得以保留。
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import (
    ENTRY_TYPE_DIRECTORY,
    ENTRY_TYPE_FILE,
    ITEM_TYPE_FILE,
    STATUS_ERROR,
    STATUS_INDEXED,
    STATUS_UPDATED,
)
from app.packages.catalog.core.logger import logger
from app.packages.catalog.core.timezone import from_timestamp
from app.packages.catalog.crud.file_entry import file_entry_crud
from app.packages.catalog.crud.item import item_crud
from app.packages.catalog.utils.file_types import SUBTYPE_TEXT, classify_subtype
from app.packages.catalog.utils.path_utils import name_without_extension, relative_path


@dataclass(frozen=True)
class IndexResult:
    id: Optional[int]
    status: str
    type: Optional[str]
    path: Optional[str] = None


def heal_catalog_entry(db: Session, *, name: str, link: str) -> None:
    """先按名称改链接，没有命中再插入新条目。"""
    if item_crud.repoint_link_by_name(db, name=name, link=link) == 0:
        item_crud.create(db, {"name": name, "link": link, "type": ITEM_TYPE_FILE}, auto_commit=False)
        logger.info("Created item: %s with link %s", name, link)


def index_entry(
    db: Session,
    full_path: str | os.PathLike,
    root: str | os.PathLike,
    parent_id: Optional[int] = None,
) -> IndexResult:
    """在给定会话内索引一个条目，不提交事务；异常向上抛出。"""
    rel = relative_path(full_path, root)
    # 不跟随符号链接，与遍历器的分类保持一致
    stats = os.lstat(full_path)
    is_directory = stat.S_ISDIR(stats.st_mode)
    entry_type = ENTRY_TYPE_DIRECTORY if is_directory else ENTRY_TYPE_FILE
    subtype = SUBTYPE_TEXT if is_directory else classify_subtype(full_path)
    size = None if is_directory else int(stats.st_size)
    last_modified = from_timestamp(stats.st_mtime)
    name = os.path.basename(os.fspath(full_path)) if is_directory else name_without_extension(full_path)

    existing = file_entry_crud.get_by_path(db, path=rel)
    if existing is not None:
        existing.type = entry_type
        existing.size = size
        existing.last_modified = last_modified
        existing.subtype = subtype
        existing.name = name
        file_entry_crud.save(db, existing, auto_commit=False)
        entry_id, status = existing.id, STATUS_UPDATED
    else:
        created = file_entry_crud.create(
            db,
            {
                "path": rel,
                "type": entry_type,
                "parent_id": parent_id,
                "size": size,
                "last_modified": last_modified,
                "subtype": subtype,
                "name": name,
            },
            auto_commit=False,
        )
        entry_id, status = created.id, STATUS_INDEXED
        logger.info("Indexed: %s (%s)", rel, subtype)

    if not is_directory:
        heal_catalog_entry(db, name=name, link=rel)

    return IndexResult(id=entry_id, status=status, type=entry_type, path=rel)


class Indexer:
    """每个条目使用独立的会话与事务，失败只影响该条目。"""

    def __init__(self, session_factory: Callable[[], Session], root: str | os.PathLike):
        self._session_factory = session_factory
        self._root = root

    def index(self, full_path: str | os.PathLike, parent_id: Optional[int] = None) -> IndexResult:
        try:
            with self._session_factory() as db:
                with db.begin():
                    return index_entry(db, full_path, self._root, parent_id)
        except Exception as exc:
            logger.error("Failed to index %s: %s", full_path, exc, exc_info=True)
            return IndexResult(id=None, status=STATUS_ERROR, type=None)
