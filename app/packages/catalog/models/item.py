"""目录条目模型：``items`` 表，扫描器只写入 ``type='file'`` 的行。"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.catalog.models.base import Base, IdMixin


class Item(IdMixin, Base):
    __tablename__ = "items"

    name: Mapped[str] = mapped_column(String(255), index=True)
    # 文件类条目指向相对根目录的访问路径
    link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(32), default="file", server_default="file", index=True)
