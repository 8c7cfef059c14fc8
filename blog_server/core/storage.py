# blog_server/core/storage.py

"""
Storage for uploaded cover images: local disk, plus an in-memory variant for
tests and development.

Paths handed out look like ``uploads/<name>`` and double as the public URL
path the files are served under.
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


URL_PREFIX = "uploads"


class UploadStorage(Protocol):
    """Defines the operations the API needs from upload storage."""

    def save(self, data: bytes, suffix: str = "") -> str:
        ...

    def load(self, path: str) -> bytes:
        ...

    def delete(self, path: str) -> None:
        ...


def _new_name(suffix: str) -> str:
    return uuid.uuid4().hex + suffix


def _name_from_path(path: str) -> str:
    """
    Strips the ``uploads/`` prefix and rejects anything that is not a plain
    file name.
    """
    name = path.removeprefix(f"{URL_PREFIX}/")
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        raise FileNotFoundError(path)
    return name


@dataclass
class InMemoryUploadStorage:
    """Test double for upload storage."""

    stored_objects: dict[str, bytes] = field(default_factory=dict)

    def save(self, data: bytes, suffix: str = "") -> str:
        name = _new_name(suffix)
        self.stored_objects[name] = bytes(data)
        return f"{URL_PREFIX}/{name}"

    def load(self, path: str) -> bytes:
        stored = self.stored_objects.get(_name_from_path(path))
        if stored is None:
            raise FileNotFoundError(path)
        return stored

    def delete(self, path: str) -> None:
        if self.stored_objects.pop(_name_from_path(path), None) is None:
            raise FileNotFoundError(path)


@dataclass
class LocalUploadStorage:
    """
    Stores uploads as files in a single directory.
    """

    root: Path

    def __post_init__(self):
        self.root = Path(self.root)
        os.makedirs(self.root, exist_ok=True)

    def save(self, data: bytes, suffix: str = "") -> str:
        name = _new_name(suffix)
        with (self.root / name).open("wb") as buffer:
            buffer.write(data)
        return f"{URL_PREFIX}/{name}"

    def load(self, path: str) -> bytes:
        return (self.root / _name_from_path(path)).read_bytes()

    def delete(self, path: str) -> None:
        os.remove(self.root / _name_from_path(path))
