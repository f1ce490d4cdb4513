"""文件类型分类：按扩展名映射到 video/audio/image/text。"""

from __future__ import annotations

import os

SUBTYPE_VIDEO = "video"
SUBTYPE_AUDIO = "audio"
SUBTYPE_IMAGE = "image"
SUBTYPE_TEXT = "text"

VIDEO_EXTENSIONS = {".mp4", ".avi", ".mkv", ".mov", ".wmv", ".webm", ".flv"}
AUDIO_EXTENSIONS = {".mp3", ".wav", ".flac", ".aac", ".ogg", ".wma"}
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".svg", ".webp"}
TEXT_EXTENSIONS = {".txt", ".md", ".pdf", ".docx", ".rtf", ".html", ".json", ".csv"}

_GROUPS = (
    (VIDEO_EXTENSIONS, SUBTYPE_VIDEO),
    (AUDIO_EXTENSIONS, SUBTYPE_AUDIO),
    (IMAGE_EXTENSIONS, SUBTYPE_IMAGE),
    (TEXT_EXTENSIONS, SUBTYPE_TEXT),
)


def classify_subtype(path: str | os.PathLike) -> str:
    """未知扩展名或无扩展名统一归为 ``text``。"""
    ext = os.path.splitext(os.fspath(path))[1].lower()
    for extensions, subtype in _GROUPS:
        if ext in extensions:
            return subtype
    return SUBTYPE_TEXT
