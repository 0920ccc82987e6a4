"""Key-value backends for the local ephemeral cache.

Entries are stored under ``<namespace>:<key>`` and wrapped in a versioned
envelope, so a schema bump invalidates older entries instead of failing
to parse them.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Generic, TypeVar

import logfire
from pydantic import TypeAdapter, ValidationError

from mingle.domain.error import CacheError
from mingle.domain.repository import KeyValueStore

T = TypeVar("T")


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Used in tests and single-process development."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return [k for k in self._data if k.startswith(prefix)]


class JsonFileKeyValueStore(KeyValueStore):
    """Store backed by a single JSON object on disk.

    Every operation re-reads the file; writes replace it atomically.
    Read-modify-write is not coordinated across processes.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            raise CacheError(f"Cache file unreadable: {self.path}") from e
        if not isinstance(data, dict):
            raise CacheError(f"Cache file is not a JSON object: {self.path}")
        return data

    def _dump(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self.path)
        except OSError as e:
            raise CacheError(f"Cache file not writable: {self.path}") from e

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._dump(data)

    def keys(self, prefix: str = "") -> list[str]:
        with self._lock:
            return [k for k in self._load() if k.startswith(prefix)]


class NamespacedStore(Generic[T]):
    """Typed, versioned view of one namespace of a KeyValueStore.

    Entries written under another schema version, or that no longer
    validate, read as absent.
    """

    def __init__(
        self,
        store: KeyValueStore,
        namespace: str,
        adapter: TypeAdapter[T],
        version: int,
    ) -> None:
        self.store = store
        self.namespace = namespace
        self.adapter = adapter
        self.version = version

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> T | None:
        raw = self.store.get(self._key(key))
        if raw is None:
            return None
        try:
            envelope = json.loads(raw)
        except json.JSONDecodeError:
            logfire.warn("Discarding corrupt cache entry", namespace=self.namespace, key=key)
            return None
        if not isinstance(envelope, dict) or envelope.get("v") != self.version:
            return None
        try:
            return self.adapter.validate_python(envelope.get("data"))
        except ValidationError as e:
            logfire.warn(
                "Discarding invalid cache entry",
                namespace=self.namespace,
                key=key,
                error=str(e),
            )
            return None

    def set(self, key: str, value: T) -> None:
        envelope = {"v": self.version, "data": self.adapter.dump_python(value, mode="json")}
        self.store.set(self._key(key), json.dumps(envelope))

    def delete(self, key: str) -> None:
        self.store.delete(self._key(key))

    def keys(self) -> list[str]:
        prefix = self._key("")
        return [k[len(prefix) :] for k in self.store.keys(prefix)]
