"""路径工具与文件类型分类的单元测试。"""

import pytest

from app.packages.catalog.core.exceptions import PathOutsideRootError
from app.packages.catalog.utils.file_types import classify_subtype
from app.packages.catalog.utils.path_utils import (
    canonical_key,
    canonicalize,
    is_copy_variant,
    is_under_dir_name,
    name_without_extension,
    norm_abs_path,
    parent_of,
    relative_path,
)


def test_relative_path_uses_leading_slash(tmp_path):
    target = tmp_path / "sub" / "a.txt"
    assert relative_path(target, tmp_path) == "/sub/a.txt"
    assert relative_path(tmp_path, tmp_path) == "/"


def test_relative_path_rejects_paths_outside_root(tmp_path):
    root = tmp_path / "root"
    with pytest.raises(PathOutsideRootError):
        relative_path(tmp_path / "other" / "a.txt", root)
    # 前缀相同但不是子目录
    with pytest.raises(PathOutsideRootError):
        relative_path(tmp_path / "root2" / "a.txt", root)
    with pytest.raises(PathOutsideRootError):
        relative_path(root / ".." / "escape.txt", root)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a", "a"),
        ("a - Copy", "a"),
        ("a - copy", "a"),
        ("a - Copy (2)", "a"),
        ("a (1)", "a"),
        ("a (2) (3)", "a"),
        ("a - Copy (2) (4)", "a"),
        ("holiday(2)", "holiday(2)"),
        ("Copy", "Copy"),
    ],
)
def test_canonicalize_strips_trailing_markers(raw, expected):
    assert canonicalize(raw) == expected


def test_canonicalize_is_idempotent():
    for raw in ["a - Copy (2) (4)", "report (3)", "notes", "x - copy - Copy"]:
        once = canonicalize(raw)
        assert canonicalize(once) == once


def test_canonical_key_ignores_extension_and_case():
    assert canonical_key("/dir/Report.txt") == "report"
    assert canonical_key("/other/report - Copy.pdf") == "report"
    assert canonical_key("/x/REPORT (2).md") == "report"


def test_is_copy_variant():
    assert is_copy_variant("a - Copy")
    assert is_copy_variant("a (3)")
    assert is_copy_variant("a - copy (2)")
    assert not is_copy_variant("a")
    assert not is_copy_variant("holiday(2)")
    assert not is_copy_variant("copy")


def test_name_without_extension():
    assert name_without_extension("/x/a.b.txt") == "a.b"
    assert name_without_extension("/x/README") == "README"


def test_parent_of_and_dir_name_checks():
    assert parent_of("/a.txt") == "/"
    assert parent_of("/x/y/a.txt") == "/x/y"
    assert is_under_dir_name("/_duplicates/a.txt", "_duplicates")
    assert is_under_dir_name("/x/_duplicates/a.txt", "_duplicates")
    assert not is_under_dir_name("/x/_Duplicates/a.txt", "_duplicates")
    assert not is_under_dir_name("/x/my_duplicates/a.txt", "_duplicates")


def test_norm_abs_path():
    assert norm_abs_path(None) == "/"
    assert norm_abs_path("docs") == "/docs"
    assert norm_abs_path("\\docs\\\\sub/") == "/docs/sub"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("movie.MKV", "video"),
        ("clip.mp4", "video"),
        ("song.flac", "audio"),
        ("pic.webp", "image"),
        ("photo.JPG", "image"),
        ("notes.md", "text"),
        ("archive.zip", "text"),
        ("README", "text"),
    ],
)
def test_classify_subtype(path, expected):
    assert classify_subtype(path) == expected
