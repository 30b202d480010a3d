"""
Redis-backed KeyValueStore, used when REDIS_URL is set. Implements the same
interface as catalog_client.storage.memory (in-memory stub).
"""

from __future__ import annotations

from typing import Optional

import redis

from catalog_client.storage.base import KeyValueStore


class RedisKeyValueStore(KeyValueStore):
    """
    Stores client preferences under a namespace prefix so several clients can
    share one Redis database.
    """

    def __init__(self, url: str, namespace: str = "catalog_client", client=None) -> None:
        self._client = client or redis.from_url(url, decode_responses=True)
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        raw = self._client.get(self._key(key))
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)

    def set(self, key: str, value: str) -> None:
        self._client.set(self._key(key), str(value))

    def delete(self, key: str) -> None:
        self._client.delete(self._key(key))

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
