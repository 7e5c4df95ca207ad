"""Persistence for the latest encoded snapshot.

The context store keeps exactly one buffer: the most recent snapshot. Readers
must see either the previous complete buffer or the new one, never a partial
write, so `FileContextStore` writes to a temporary file in the target
directory and swaps it in with `os.replace` (atomic on POSIX and Windows).

- Default path: `CRASHCTX_CONTEXT_PATH` or `artifacts/crash/context.json`
- Content:      the exact bytes produced by `CrashContext.to_bytes()`

Usage
-----
>>> store = FileContextStore()  # uses the configured path
>>> store.store(snapshot_bytes)
>>> store.load()
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol

from .settings import load_settings


class ContextStore(Protocol):
    """Interface the snapshot writer and the restart path rely on."""

    def store(self, data: bytes) -> None: ...

    def load(self) -> bytes | None: ...

    def purge(self) -> None: ...


class FileContextStore:
    """Keep the latest snapshot in a single file, replaced atomically."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path if path is not None else load_settings().context_path
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def store(self, data: bytes) -> None:
        """Replace the stored snapshot with ``data``."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def load(self) -> bytes | None:
        """Return the stored snapshot, or None when nothing was written yet."""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None

    def purge(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryContextStore:
    """In-process store; handy for tests and for hosts with their own persistence."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | None = None) -> None:
        self._data = data

    def store(self, data: bytes) -> None:
        self._data = bytes(data)

    def load(self) -> bytes | None:
        return self._data

    def purge(self) -> None:
        self._data = None


__all__ = ["ContextStore", "FileContextStore", "MemoryContextStore"]
