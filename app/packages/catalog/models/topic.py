"""主题模型。"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.catalog.models.base import Base, IdMixin


class Topic(IdMixin, Base):
    __tablename__ = "topics"

    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
