"""
Blob stores: named byte payloads.

The entity layer (src.storage.entities) decides how surveys, tests and
responses become bytes; stores only keep bytes under a key.
- DirectoryBlobStore: one file per key inside a directory
- MemoryBlobStore: a dict, for tests and scripted runs
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from loguru import logger


class BlobStore(Protocol):
    """Protocol for key -> bytes stores."""

    def put(self, key: str, data: bytes) -> None:
        """Store `data` under `key`, replacing any previous value."""
        ...

    def get(self, key: str) -> bytes:
        """Return the bytes stored under `key`. Raises KeyError if missing."""
        ...

    def exists(self, key: str) -> bool:
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """Sorted keys starting with `prefix`."""
        ...


class DirectoryBlobStore:
    """
    Stores each key as a file in a directory.

    Keys are plain file names. The directory is created on first write, so
    a store over a missing directory simply has no keys.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not key or Path(key).name != key:
            raise KeyError(f"Invalid key: {key!r}")
        return self.directory / key

    def put(self, key: str, data: bytes) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug(f"Wrote {len(data)} bytes to {path}")

    def get(self, key: str) -> bytes:
        path = self._path(key)
        if not path.is_file():
            raise KeyError(key)
        return path.read_bytes()

    def exists(self, key: str) -> bool:
        try:
            return self._path(key).is_file()
        except KeyError:
            return False

    def keys(self, prefix: str = "") -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            path.name
            for path in self.directory.iterdir()
            if path.is_file() and path.name.startswith(prefix)
        )

    def __repr__(self) -> str:
        return f"DirectoryBlobStore({str(self.directory)!r})"


class MemoryBlobStore:
    """In-memory store."""

    def __init__(self):
        self._blobs: dict[str, bytes] = {}

    def put(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)

    def get(self, key: str) -> bytes:
        return self._blobs[key]

    def exists(self, key: str) -> bool:
        return key in self._blobs

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(key for key in self._blobs if key.startswith(prefix))
