"""文件接口集成测试：上传、查询、移动、删除、扫描与静态访问。"""

import io

from fastapi.testclient import TestClient

from app.packages.catalog.services import sync_service

API = "/api"


def _upload(client: TestClient, name: str, content: bytes = b"hello", folder: str = "/"):
    return client.post(
        f"{API}/files/upload",
        params={"folder": folder},
        files={"file": (name, io.BytesIO(content), "application/octet-stream")},
    )


def test_upload_indexes_file_and_creates_catalog_entry(client: TestClient, index_root):
    resp = _upload(client, "report.pdf", b"%PDF", folder="/docs")
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["path"] == "/docs/report.pdf"
    assert data["subtype"] == "text"
    assert data["size"] == 4
    assert data["name"] == "report"
    assert (index_root / "docs" / "report.pdf").read_bytes() == b"%PDF"

    listing = client.get(f"{API}/files").json()["data"]
    by_path = {row["path"]: row for row in listing}
    assert by_path["/docs"]["type"] == "directory"
    assert by_path["/docs/report.pdf"]["parent_id"] == by_path["/docs"]["id"]

    items = client.get(f"{API}/items").json()["data"]
    assert [(i["name"], i["link"]) for i in items] == [("report", "/docs/report.pdf")]


def test_upload_repoints_existing_catalog_entry(client: TestClient):
    created = client.post(f"{API}/items", json={"name": "cover", "link": "/old/cover.png"}).json()["data"]

    assert _upload(client, "cover.png", b"png").status_code == 201

    item = client.get(f"{API}/items/{created['id']}").json()["data"]
    assert item["link"] == "/cover.png"
    assert len(client.get(f"{API}/items").json()["data"]) == 1


def test_upload_rejects_existing_name_and_bad_folders(client: TestClient):
    assert _upload(client, "a.txt").status_code == 201
    dup = _upload(client, "a.txt")
    assert dup.status_code == 400
    assert dup.json()["code"] == 400

    assert _upload(client, "b.txt", folder="../outside").status_code == 400
    assert _upload(client, "c.txt", folder="/_duplicates").status_code == 400


def test_list_filters_and_get(client: TestClient):
    _upload(client, "clip.mp4", folder="/media")
    _upload(client, "notes.md")

    videos = client.get(f"{API}/files", params={"subtype": "video"}).json()["data"]
    assert [v["path"] for v in videos] == ["/media/clip.mp4"]

    dirs = client.get(f"{API}/files", params={"type": "directory"}).json()["data"]
    assert [d["path"] for d in dirs] == ["/media"]

    found = client.get(f"{API}/files", params={"search": "NOTES"}).json()["data"]
    assert [f["path"] for f in found] == ["/notes.md"]

    children = client.get(f"{API}/files", params={"parentId": dirs[0]["id"]}).json()["data"]
    assert [c["path"] for c in children] == ["/media/clip.mp4"]

    detail = client.get(f"{API}/files/{found[0]['id']}")
    assert detail.status_code == 200
    assert detail.json()["data"]["subtype"] == "text"

    assert client.get(f"{API}/files/99999").status_code == 404
    assert client.get(f"{API}/files", params={"type": "socket"}).status_code == 422


def test_move_file_updates_disk_row_and_catalog(client: TestClient, index_root):
    uploaded = _upload(client, "track.mp3").json()["data"]

    resp = client.post(f"{API}/files/move", json={"fileId": uploaded["id"], "newFolder": "/music"})
    assert resp.status_code == 200
    moved = resp.json()["data"]
    assert moved["path"] == "/music/track.mp3"
    assert not (index_root / "track.mp3").exists()
    assert (index_root / "music" / "track.mp3").exists()

    music = client.get(f"{API}/files", params={"type": "directory"}).json()["data"][0]
    assert moved["parent_id"] == music["id"]
    items = client.get(f"{API}/items").json()["data"]
    assert items[0]["link"] == "/music/track.mp3"


def test_move_multiple_reports_per_file_status(client: TestClient):
    first = _upload(client, "one.txt").json()["data"]
    second = _upload(client, "two.txt").json()["data"]
    _upload(client, "two.txt", folder="/archive")

    resp = client.post(
        f"{API}/files/move-multiple",
        json={"fileIds": [first["id"], second["id"], 4242], "newFolder": "/archive"},
    )
    assert resp.status_code == 200
    results = {r["fileId"]: r for r in resp.json()["data"]}
    assert results[first["id"]]["status"] == "moved"
    assert results[first["id"]]["newPath"] == "/archive/one.txt"
    assert results[second["id"]]["status"] == "error"
    assert results[4242]["status"] == "not_found"


def test_delete_file_removes_row_disk_and_catalog_entry(client: TestClient, index_root):
    uploaded = _upload(client, "old.txt").json()["data"]

    resp = client.delete(f"{API}/files/{uploaded['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["path"] == "/old.txt"
    assert not (index_root / "old.txt").exists()
    assert client.get(f"{API}/files/{uploaded['id']}").status_code == 404
    assert client.get(f"{API}/items").json()["data"] == []

    assert client.delete(f"{API}/files/{uploaded['id']}").status_code == 404


def test_delete_rejects_directories(client: TestClient):
    _upload(client, "x.txt", folder="/folder")
    folder = client.get(f"{API}/files", params={"type": "directory"}).json()["data"][0]
    assert client.delete(f"{API}/files/{folder['id']}").status_code == 400


def test_scan_endpoint_returns_summary(client: TestClient, index_root):
    (index_root / "a.txt").write_text("a")
    (index_root / "a (2).txt").write_text("a2")
    (index_root / "keep.md").write_text("k")

    resp = client.post(f"{API}/files/scan", params={"fullSync": "true"})
    assert resp.status_code == 200
    summary = resp.json()["data"]
    assert summary["ok"] is True
    assert summary["full_sync"] is True
    assert set(summary["quarantined"]) == {"/a.txt", "/a (2).txt"}
    assert summary["indexed"] == 1
    assert (index_root / "_duplicates" / "a.txt").exists()

    paths = [row["path"] for row in client.get(f"{API}/files").json()["data"]]
    assert paths == ["/keep.md"]


def test_scan_endpoint_rejects_concurrent_scan(client: TestClient):
    assert sync_service._scan_lock.acquire(blocking=False)
    try:
        resp = client.post(f"{API}/files/scan")
        assert resp.status_code == 409
        assert resp.json()["code"] == 409
        status = client.get(f"{API}/status").json()["data"]
        assert status["scanRunning"] is True
    finally:
        sync_service._scan_lock.release()


def test_status_and_health(client: TestClient, index_root):
    resp = client.get(f"{API}/status")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["database"]["ready"] is True
    assert data["indexFolder"] == str(index_root)
    assert data["scanRunning"] is False

    health = client.get("/health")
    assert health.json()["data"] == {"status": "healthy"}


def test_indexed_files_are_served_statically(client: TestClient):
    _upload(client, "page.html", b"<p>hi</p>")
    resp = client.get("/served/page.html")
    assert resp.status_code == 200
    assert resp.content == b"<p>hi</p>"


def test_request_id_header_is_echoed(client: TestClient):
    resp = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "abc-123"

    generated = client.get("/health").headers["X-Request-ID"]
    assert len(generated) == 36
