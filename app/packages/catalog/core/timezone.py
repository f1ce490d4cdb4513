"""时间换算：文件修改时间统一按 UTC 入库，对外按配置时区输出 ISO-8601。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from app.packages.catalog.core.config import get_settings


def from_timestamp(ts: float) -> datetime:
    """``st_mtime`` 等 POSIX 时间戳转为带 UTC 时区的 ``datetime``。"""
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    # SQLite 读回的值不带时区，入库时即为 UTC
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(get_settings().timezone_info).isoformat()
