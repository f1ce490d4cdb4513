"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from app.packages.catalog.db import session as db_session
from app.packages.catalog.models.base import Base
import app.packages.catalog.models  # noqa: F401  注册全部表

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all catalog tables if they do not exist."""
    try:
        Base.metadata.create_all(bind=db_session.engine)
    except Exception:
        logger.exception("Failed to ensure database schema")
        raise
    logger.info("Database schema ensured")
