"""Snapshot persistence on top of a string key/value store.

Keys follow ``"{game}:{date-or-slug}"``. The engines never touch storage
directly: sessions hand their snapshots to :class:`SnapshotStore`, which
serializes them to compact JSON.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_SNAPSHOT_DIR = Path("local_db/collections/snapshots")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None``."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""


class MemoryKeyValueStore:
    """Dictionary-backed store, handy for tests and short-lived sessions."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class JsonFileKeyValueStore:
    """One file per key under ``store_dir``.

    Key characters outside ``[A-Za-z0-9_.-]`` are replaced so a key always
    maps to a single flat filename.
    """

    def __init__(self, store_dir: Path | str = DEFAULT_SNAPSHOT_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Snapshot read error (%s): %s", path.name, exc)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        path.write_text(value, encoding="utf-8")
        LOGGER.debug("Snapshot written: %s", path.name)

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    def _path(self, key: str) -> Path:
        filename = re.sub(r"[^A-Za-z0-9_.-]", "_", key).strip("._") or "_"
        return self.store_dir / f"{filename}.json"


class SnapshotStore:
    """Game-aware JSON snapshots over a :class:`KeyValueStore`."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @staticmethod
    def key_for(game: str, key: str) -> str:
        return f"{game}:{key}"

    def save(self, game: str, key: str, snapshot: Dict[str, Any]) -> None:
        payload = json.dumps(snapshot, ensure_ascii=False, separators=(",", ":"))
        self.store.set(self.key_for(game, key), payload)

    def load(self, game: str, key: str) -> Optional[Dict[str, Any]]:
        raw = self.store.get(self.key_for(game, key))
        if raw is None or not raw.strip():
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Discarding unreadable snapshot %s: %s", self.key_for(game, key), exc)
            return None
        if not isinstance(data, dict):
            LOGGER.warning("Discarding snapshot %s: not a JSON object", self.key_for(game, key))
            return None
        return data

    def clear(self, game: str, key: str) -> None:
        self.store.remove(self.key_for(game, key))

    def unlock_collection(self, name: str) -> None:
        self.store.set(f"collection:{name}", "1")

    def collection_unlocked(self, name: str) -> bool:
        value = self.store.get(f"collection:{name}")
        return bool(value and value.strip())
