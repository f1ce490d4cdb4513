"""重复识别与隔离目录移动的单元测试。"""

from pathlib import Path

from app.packages.catalog.services.duplicate_detector import (
    find_copy_variants,
    find_duplicate_groups,
    select_for_quarantine,
)
from app.packages.catalog.services.quarantine import free_destination, quarantine_file


def test_duplicate_groups_are_symmetric():
    files = [Path("/r/a.txt"), Path("/r/sub/a - Copy.txt"), Path("/r/b.txt")]
    groups = find_duplicate_groups(files)
    assert groups == {"a": [Path("/r/a.txt"), Path("/r/sub/a - Copy.txt")]}

    reversed_groups = find_duplicate_groups(list(reversed(files)))
    assert set(reversed_groups["a"]) == set(groups["a"])


def test_same_name_in_different_folders_and_extensions_is_a_group():
    files = [Path("/r/x/Notes.md"), Path("/r/y/notes.txt")]
    assert list(find_duplicate_groups(files)) == ["notes"]


def test_copy_variants_exclude_already_quarantined():
    files = [Path("/r/c (1).txt"), Path("/r/d - Copy.png"), Path("/r/e.txt")]
    variants = find_copy_variants(files, exclude={"/r/d - Copy.png"})
    assert variants == [Path("/r/c (1).txt")]


def test_select_for_quarantine_policies():
    members = [Path("/r/a.txt"), Path("/r/a - Copy.txt"), Path("/r/a (2).txt")]
    assert select_for_quarantine(members) == members
    assert select_for_quarantine(members, keep_original=True) == members[1:]

    two_originals = [Path("/r/x/a.txt"), Path("/r/y/a.txt")]
    assert select_for_quarantine(two_originals, keep_original=True) == two_originals


def test_free_destination_appends_dup_suffix(tmp_path):
    assert free_destination(tmp_path, "a.txt") == tmp_path / "a.txt"
    (tmp_path / "a.txt").write_text("1")
    assert free_destination(tmp_path, "a.txt") == tmp_path / "a__dup2.txt"
    (tmp_path / "a__dup2.txt").write_text("2")
    assert free_destination(tmp_path, "a.txt") == tmp_path / "a__dup3.txt"


def test_quarantine_file_moves_and_never_overwrites(tmp_path):
    qdir = tmp_path / "_duplicates"
    first = tmp_path / "one" / "a.txt"
    second = tmp_path / "two" / "a.txt"
    for path, content in ((first, "first"), (second, "second")):
        path.parent.mkdir(parents=True)
        path.write_text(content)

    assert quarantine_file(first, qdir) == qdir / "a.txt"
    assert quarantine_file(second, qdir) == qdir / "a__dup2.txt"
    assert not first.exists() and not second.exists()
    assert (qdir / "a.txt").read_text() == "first"
    assert (qdir / "a__dup2.txt").read_text() == "second"


def test_quarantine_file_returns_none_when_move_fails(tmp_path):
    qdir = tmp_path / "_duplicates"
    assert quarantine_file(tmp_path / "missing.txt", qdir) is None
    assert qdir.is_dir()
