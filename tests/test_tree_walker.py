"""目录遍历单元测试。"""

import os

import pytest

from app.packages.catalog.core.exceptions import ScanSetupError
from app.packages.catalog.services import tree_walker
from app.packages.catalog.services.tree_walker import walk_tree


def _touch(path, content=b"x"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def test_walk_lists_files_and_directories_in_preorder(tmp_path):
    _touch(tmp_path / "b.txt")
    _touch(tmp_path / "a" / "x.txt")
    _touch(tmp_path / "a" / "deep" / "y.txt")

    result = walk_tree(tmp_path)

    rel = lambda paths: [p.relative_to(tmp_path).as_posix() for p in paths]  # noqa: E731
    assert rel(result.directories) == ["a", "a/deep"]
    assert rel(result.files) == ["a/deep/y.txt", "a/x.txt", "b.txt"]
    assert result.unreadable == []


def test_walk_skips_quarantine_directory(tmp_path):
    _touch(tmp_path / "_duplicates" / "old.txt")
    _touch(tmp_path / "nested" / "_duplicates" / "old2.txt")
    _touch(tmp_path / "keep.txt")

    result = walk_tree(tmp_path, exclude_dir_name="_duplicates")

    names = {p.name for p in result.files} | {p.name for p in result.directories}
    assert names == {"keep.txt", "nested"}


def test_walk_handles_deep_nesting_without_recursion(tmp_path):
    current = tmp_path
    for i in range(200):
        current = current / f"d{i}"
    _touch(current / "leaf.txt")

    result = walk_tree(tmp_path)

    assert len(result.directories) == 200
    assert [p.name for p in result.files] == ["leaf.txt"]


def test_unreadable_subdirectory_is_treated_as_empty(tmp_path, monkeypatch):
    _touch(tmp_path / "ok" / "a.txt")
    _touch(tmp_path / "locked" / "secret.txt")
    original = tree_walker._list_dir

    def fake_list_dir(path):
        if path.name == "locked":
            raise PermissionError("denied")
        return original(path)

    monkeypatch.setattr(tree_walker, "_list_dir", fake_list_dir)

    result = walk_tree(tmp_path)

    assert [p.name for p in result.files] == ["a.txt"]
    assert {p.name for p in result.directories} == {"locked", "ok"}
    assert [p.name for p in result.unreadable] == ["locked"]


def test_missing_root_raises_setup_error(tmp_path):
    with pytest.raises(ScanSetupError):
        walk_tree(tmp_path / "missing")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinked_directory_is_not_followed(tmp_path):
    outside = tmp_path / "outside"
    _touch(outside / "external.txt")
    root = tmp_path / "root"
    root.mkdir()
    try:
        os.symlink(outside, root / "link", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlink")

    result = walk_tree(root)

    assert result.directories == []
    assert [p.name for p in result.files] == ["link"]
