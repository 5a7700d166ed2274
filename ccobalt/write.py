"""Saving downloaded bytes to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from .filetype import detect_file_type


def save_to_file(
    data: bytes, base_name: str, directory: Union[str, Path]
) -> Path:
    """Write the bytes to directory/base_name.<ext>, the extension from the detected type.

    Unknown types get the extension "bin". Returns the path written.
    """
    file_type = detect_file_type(data)
    extension = file_type.extension() if file_type is not None else "bin"
    path = Path(directory) / f"{base_name}.{extension}"
    with path.open("wb") as handle:
        handle.write(data)
    return path