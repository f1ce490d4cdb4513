"""Path utilities: root-relative paths, display names and copy-marker handling.

Rules shared by the scanner and the file endpoints:
- A root-relative path always starts with a single '/' and uses '/' separators;
- The display name of a file is its basename without the final extension;
- The canonical name strips trailing " - Copy", " - Copy (N)" and " (N)" markers.
"""

from __future__ import annotations

import os
import re

from app.packages.catalog.core.exceptions import PathOutsideRootError

_COPY_MARKER = re.compile(r"\s+-\s+copy(?:\s*\(\d+\))?$", re.IGNORECASE)
_NUMBERED_MARKER = re.compile(r"\s+\(\d+\)$")


def _posix_abs(p: str | os.PathLike) -> str:
    return os.path.normpath(os.path.abspath(os.fspath(p))).replace("\\", "/")


def relative_path(full_path: str | os.PathLike, root: str | os.PathLike) -> str:
    """Return ``full_path`` relative to ``root`` as ``/a/b.txt``.

    Raises ``PathOutsideRootError`` when the path is not under the root.
    """
    full = _posix_abs(full_path)
    base = _posix_abs(root).rstrip("/")
    if full == base or base == "":
        rel = full[len(base):] if base else full
    elif full.startswith(base + "/"):
        rel = full[len(base):]
    else:
        raise PathOutsideRootError(f"{full} is not under {base}")
    return "/" + rel.lstrip("/")


def norm_abs_path(p: str | None) -> str:
    """Normalize a client supplied path to the ``/a/b`` form."""
    s = (p or "/").strip().replace("\\", "/") or "/"
    if not s.startswith("/"):
        s = "/" + s
    while "//" in s:
        s = s.replace("//", "/")
    return s.rstrip("/") or "/"


def name_without_extension(full_path: str | os.PathLike) -> str:
    base = os.path.basename(os.fspath(full_path).rstrip("/\\"))
    stem, _ = os.path.splitext(base)
    return stem


def canonicalize(name_no_ext: str) -> str:
    """Strip trailing copy markers until none remain.

    Repeating until a fixed point keeps the result stable for names like
    ``"a (2) (3)"``.
    """
    current = (name_no_ext or "").strip()
    while True:
        stripped = _COPY_MARKER.sub("", current)
        stripped = _NUMBERED_MARKER.sub("", stripped).strip()
        if stripped == current:
            return current
        current = stripped


def canonical_key(full_path: str | os.PathLike) -> str:
    """Grouping key used for duplicate detection."""
    return canonicalize(name_without_extension(full_path)).lower()


def is_copy_variant(name_no_ext: str) -> bool:
    trimmed = (name_no_ext or "").strip()
    return bool(_COPY_MARKER.search(trimmed) or _NUMBERED_MARKER.search(trimmed))


def is_under_dir_name(rel_path: str, dir_name: str) -> bool:
    """True when any segment of a root-relative path equals ``dir_name`` (case-sensitive)."""
    return dir_name in rel_path.split("/")


def parent_of(rel_path: str) -> str:
    """Parent of a root-relative path; entries directly under the root yield ``'/'``."""
    parent = rel_path.rsplit("/", 1)[0]
    return parent or "/"
