"""单条目索引与启动期索引测试。"""

import os

from app.packages.catalog.core.config import get_settings
from app.packages.catalog.db import session as db_session
from app.packages.catalog.models.file_entry import FileEntry
from app.packages.catalog.models.item import Item
from app.packages.catalog.services.indexer import Indexer, heal_catalog_entry, index_entry
from app.packages.catalog.services.startup import run_startup_index


def test_index_entry_creates_then_updates(tmp_path, db_session_fixture):
    target = tmp_path / "photo.PNG"
    target.write_bytes(b"12345")

    first = index_entry(db_session_fixture, target, tmp_path)
    db_session_fixture.commit()
    assert first.status == "indexed"
    assert first.type == "file"
    assert first.path == "/photo.PNG"

    target.write_bytes(b"123")
    second = index_entry(db_session_fixture, target, tmp_path)
    db_session_fixture.commit()
    assert second.status == "updated"
    assert second.id == first.id

    row = db_session_fixture.get(FileEntry, first.id)
    assert row.size == 3
    assert row.subtype == "image"
    assert row.name == "photo"
    assert db_session_fixture.query(Item).filter(Item.name == "photo").count() == 1


def test_index_entry_refreshes_type_when_file_becomes_directory(tmp_path, db_session_fixture):
    target = tmp_path / "x"
    target.write_bytes(b"abc")
    first = index_entry(db_session_fixture, target, tmp_path)
    db_session_fixture.commit()
    assert first.type == "file"

    target.unlink()
    target.mkdir()
    second = index_entry(db_session_fixture, target, tmp_path)
    db_session_fixture.commit()

    assert second.id == first.id
    assert second.type == "directory"
    row = db_session_fixture.get(FileEntry, first.id)
    db_session_fixture.refresh(row)
    assert row.type == "directory"
    assert row.size is None


def test_heal_only_touches_file_items(db_session_fixture):
    db_session_fixture.add(Item(name="guide", link="https://example.com/guide", type="link"))
    db_session_fixture.add(Item(name="guide", link="/old/guide.pdf", type="file"))
    db_session_fixture.commit()

    heal_catalog_entry(db_session_fixture, name="guide", link="/new/guide.pdf")
    db_session_fixture.commit()

    links = {i.type: i.link for i in db_session_fixture.query(Item).all()}
    assert links == {"link": "https://example.com/guide", "file": "/new/guide.pdf"}


def test_indexer_reports_error_for_missing_path(tmp_path):
    result = Indexer(db_session.SessionLocal, tmp_path).index(tmp_path / "missing.txt")
    assert result.status == "error"
    assert result.id is None


def test_startup_index_is_disabled_by_setting():
    assert get_settings().index_on_startup is False
    assert run_startup_index() is None


def test_startup_index_runs_full_sync_when_enabled(index_root, monkeypatch):
    (index_root / "welcome.txt").write_text("hi")
    monkeypatch.setattr(get_settings(), "index_on_startup", True)

    summary = run_startup_index()

    assert summary is not None
    assert summary.full_sync is True
    assert summary.indexed == 1
    with db_session.SessionLocal() as db:
        assert [row.path for row in db.query(FileEntry).all()] == ["/welcome.txt"]


def test_index_root_is_resolved_from_environment(index_root):
    assert get_settings().index_root == index_root
    assert os.environ["INDEX_ON_STARTUP"] == "false"
