"""
Storage layer.

KeyValueStore is the only persistence contract the data layer depends on.
Use InMemoryKeyValueStore during development/tests and RedisKeyValueStore when
REDIS_URL is configured; the choice is made in catalog_client.service only.
"""

import os
from typing import Optional

from .base import KeyValueStore
from .memory import InMemoryKeyValueStore
from .mode_store import ModeStore
from .preferences import ClientPreferences


def key_value_store_from_env(redis_url: Optional[str] = None, namespace: str = "catalog_client") -> KeyValueStore:
    url = redis_url or os.getenv("REDIS_URL")
    if url:
        from .redis_store import RedisKeyValueStore

        return RedisKeyValueStore(url=url, namespace=namespace)
    return InMemoryKeyValueStore()


__all__ = [
    "ClientPreferences", "InMemoryKeyValueStore", "KeyValueStore", "ModeStore",
    "key_value_store_from_env",
]
