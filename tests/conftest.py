"""测试夹具：为 pytest 提供数据库、索引目录与客户端的共享配置。"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

_TEST_ROOT = tempfile.mkdtemp(prefix="catalog_tests_")
TEST_DB_PATH = os.path.join(_TEST_ROOT, "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"
TEST_INDEX_FOLDER = os.path.join(_TEST_ROOT, "public")

# 必须在导入应用之前设置，配置对象会被缓存
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["INDEX_FOLDER"] = TEST_INDEX_FOLDER
os.environ["INDEX_ON_STARTUP"] = "false"
os.environ["LOG_DIR"] = os.path.join(_TEST_ROOT, "log")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from app.main import app  # noqa: E402
from app.packages.catalog.core.dependencies import get_db  # noqa: E402
from app.packages.catalog.db import session as db_session  # noqa: E402
from app.packages.catalog.db.init_db import init_db  # noqa: E402
from app.packages.catalog.models.base import Base  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    engine = db_session.build_engine(TEST_DATABASE_URL)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal

    init_db()
    yield

    engine.dispose()
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_state() -> Generator[None, None, None]:
    """每个用例使用空表与空索引目录。"""
    Base.metadata.drop_all(bind=db_session.engine)
    Base.metadata.create_all(bind=db_session.engine)
    index_root = Path(TEST_INDEX_FOLDER)
    shutil.rmtree(index_root, ignore_errors=True)
    index_root.mkdir(parents=True, exist_ok=True)
    yield


@pytest.fixture()
def index_root() -> Path:
    return Path(TEST_INDEX_FOLDER).resolve()


@pytest.fixture()
def session_factory():
    """扫描器使用的会话工厂。"""
    return db_session.SessionLocal


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    """提供给测试用例使用的数据库会话。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session_fixture):
    """构建 FastAPI TestClient，并注入测试专用的数据库依赖。"""
    def override_get_db() -> Generator[Session, None, None]:
        session = db_session.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
