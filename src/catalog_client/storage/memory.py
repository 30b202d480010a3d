"""
Lightweight in-memory KeyValueStore for local development and tests.

Implements the same interface as catalog_client.storage.redis_store so the
client can run without a Redis instance.
"""

from __future__ import annotations

from typing import Dict, Optional

from catalog_client.storage.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = str(value)

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)
