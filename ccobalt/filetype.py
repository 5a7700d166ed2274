"""Detection of media file types from their leading bytes."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class FileType(Enum):
    GIF = "gif"
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    MP4 = "mp4"
    WEBM = "webm"
    MP3 = "mp3"
    ZIP = "zip"

    def extension(self) -> str:
        return self.value

    def mime(self) -> str:
        return _MIME_TYPES[self]

    def is_video(self) -> bool:
        return self in (FileType.MP4, FileType.WEBM)


_MIME_TYPES = {
    FileType.GIF: "image/gif",
    FileType.JPEG: "image/jpeg",
    FileType.PNG: "image/png",
    FileType.WEBP: "image/webp",
    FileType.MP4: "video/mp4",
    FileType.WEBM: "video/webm",
    FileType.MP3: "audio/mpeg",
    FileType.ZIP: "application/x-zip",
}

_PREFIXES = (
    (b"GIF", FileType.GIF),
    (b"\xff\xd8\xff", FileType.JPEG),
    (b"\x89PNG\r\n\x1a\n", FileType.PNG),
    (b"\x1a\x45\xdf\xa3", FileType.WEBM),
    (b"ID3", FileType.MP3),
    (b"\xff\xfb", FileType.MP3),
    (b"PK", FileType.ZIP),
)


def detect_file_type(data: bytes) -> Optional[FileType]:
    """Return the type whose signature the data starts with, or None."""
    data = bytes(data)
    for prefix, file_type in _PREFIXES:
        if data.startswith(prefix):
            return file_type
    if data[8:12] == b"WEBP":
        return FileType.WEBP
    if data[4:8] == b"ftyp":
        return FileType.MP4
    return None