"""Database engine and session factory configuration."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.packages.catalog.core.config import get_settings

settings = get_settings()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False, pool_size: int = 5):
    """Create an engine with a bounded pool.

    ``pool_pre_ping`` keeps the pool healthy. SQLite URLs (used by tests) skip
    pool sizing and get foreign key enforcement so junction rows cascade.
    """
    if url.startswith("sqlite"):
        engine = create_engine(url, echo=echo, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, pool_pre_ping=True, pool_size=pool_size, max_overflow=0, echo=echo)


engine = build_engine(
    settings.sql_database_url,
    echo=settings.database_echo,
    pool_size=settings.database_pool_size,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
