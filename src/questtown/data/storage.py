"""Key-value blob stores used to persist the game record."""
from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path
from typing import Dict, Protocol

from .errors import StorageError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class BlobStore(Protocol):
    """Minimal persistence capability: one text blob per key."""

    def read(self, key: str) -> str | None:
        """Return the stored text for key, or None when nothing is stored."""

    def write(self, key: str, text: str) -> None:
        """Store text under key, replacing any previous value."""


class MemoryBlobStore:
    """Process-local store, handy for tests and embedding."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._blobs: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._blobs.get(key)

    def write(self, key: str, text: str) -> None:
        self._blobs[key] = text

    def keys(self) -> list[str]:
        return sorted(self._blobs)


class FileBlobStore:
    """Stores each key as ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: Path | str) -> None:
        self._base_dir = Path(base_dir)

    def read(self, key: str) -> str | None:
        path = self._key_path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No blob stored for key %s at %s", key, path)
            return None
        except OSError as exc:
            raise StorageError(f"Unable to read blob '{key}' from {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise StorageError(f"Blob '{key}' at {path} is not valid UTF-8: {exc}") from exc

    def write(self, key: str, text: str) -> None:
        path = self._key_path(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Unable to write blob '{key}' to {path}: {exc}") from exc

    def _key_path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key '{key}'.")
        return self._base_dir / f"{key}.json"
