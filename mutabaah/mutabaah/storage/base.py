"""
Key-value store interface and implementations.

The store mirrors a mobile async key-value storage: string keys, string
values, every call a suspend point.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path

from mutabaah._logging import get_logger
from mutabaah.exceptions import StorageError

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """Abstract asynchronous string key-value store."""

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """
        Read a value.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Raises:
            StorageError: If the store cannot be written
        """
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """
        Delete a value. Removing an absent key is not an error.

        Raises:
            StorageError: If the store cannot be written
        """
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, useful for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    File I/O runs in a worker thread so the event loop never blocks, and
    writes are serialized with a lock so concurrent updates are not lost.

    Example:
        store = JsonFileKeyValueStore("~/.mutabaah/store.json")
        await store.set_item("@quran_notes:voice_sessions_2024-01-15", "1")
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()
        self._lock = asyncio.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read store: {e}", context={"path": str(self.path)})

        if not isinstance(data, dict):
            raise StorageError("Store file does not hold a JSON object", context={"path": str(self.path)})
        return data

    def _write(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Failed to write store: {e}", context={"path": str(self.path)})

    async def get_item(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            data[key] = value
            await asyncio.to_thread(self._write, data)
        logger.debug(f"Stored {key} in {self.path}")

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            if data.pop(key, None) is not None:
                await asyncio.to_thread(self._write, data)
