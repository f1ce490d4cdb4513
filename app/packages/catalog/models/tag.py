"""标签与标签组模型。"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.catalog.models.base import Base, IdMixin


class Tag(IdMixin, Base):
    __tablename__ = "tags"

    # 列名为保留字 "group"，由 SQLAlchemy 负责加引号
    group: Mapped[str] = mapped_column("group", String(255))
    name: Mapped[str] = mapped_column(String(255))


class TagGroup(IdMixin, Base):
    __tablename__ = "tag_groups"

    name: Mapped[str] = mapped_column(String(255))
