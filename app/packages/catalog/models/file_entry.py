"""文件系统条目模型（文件与目录合并存储于 ``files`` 表）。

存储规则：
- path：相对索引根目录，以 '/' 开头、使用 '/' 分隔，全表唯一；
- type：``file`` 或 ``directory``；
- parent_id：指向父目录条目，根目录下的条目为 NULL；
- size：目录为 NULL；
- name：展示名，文件为去掉扩展名的基名。
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.catalog.models.base import Base, IdMixin


class FileEntry(IdMixin, Base):
    __tablename__ = "files"

    path: Mapped[str] = mapped_column(String(1024), unique=True, index=True)
    type: Mapped[str] = mapped_column(String(32), index=True)
    parent_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("files.id", ondelete="SET NULL"), nullable=True, index=True
    )
    size: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    last_modified: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    subtype: Mapped[str] = mapped_column(String(32), default="text")
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
