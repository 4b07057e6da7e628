"""
Storage for Mutabaah library.

Provides the key-value store interface, key construction and the
repository of finished follow-along sessions.
"""

from mutabaah.storage.base import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from mutabaah.storage.keys import build_storage_key, daily_usage_key
from mutabaah.storage.repository import FollowAlongRepository

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "build_storage_key",
    "daily_usage_key",
    "FollowAlongRepository",
]
