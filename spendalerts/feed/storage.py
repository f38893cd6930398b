"""String-keyed blob storage backing the dismissed/read id sets."""

from __future__ import annotations

import abc
import asyncio
import os
import re
import tempfile
from pathlib import Path

from spendalerts.core.config import StorageConfig
from spendalerts.feed.exceptions import StorageError

_SAFE_KEY = re.compile(r"^[A-Za-z0-9._-]+$")


class KeyValueStorage(abc.ABC):
    """Whole-blob get/set. Backends raise StorageError on failure."""

    @abc.abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored blob, or None if the key was never written."""

    @abc.abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Replace the blob for *key*; must never leave a partial value."""


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    @property
    def data(self) -> dict[str, str]:
        """Read-only copy of stored blobs."""
        return dict(self._data)

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage(KeyValueStorage):
    """One ``<key>.json`` file per key inside *directory*.

    Writes go to a temp file in the same directory and are moved into place
    with ``os.replace``, so a crash mid-write keeps the previous blob.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def _read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"cannot read {path}: {exc}") from exc

    def _write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{key}.", suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"cannot write {path}: {exc}") from exc

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)


def create_storage(config: StorageConfig) -> KeyValueStorage:
    """Build the configured storage backend."""
    if config.backend == "memory":
        return MemoryStorage()
    return JsonFileStorage(config.directory)
