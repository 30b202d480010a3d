"""
Client preferences persisted in the KeyValueStore: backend base URL and the
locally generated device identifier used for review ownership.
"""

import logging
import random
import time
from typing import Optional

import httpx

from catalog_client.contracts.errors import ValidationError
from catalog_client.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

BASE_URL_KEY = "base_url"
DEVICE_ID_KEY = "device_id_v1"


def generate_device_id() -> str:
    """Return an identifier like ``dev-18f3a2b4c5d-9e8f7a6b5c4d``."""
    millis = int(time.time() * 1000)
    return f"dev-{millis:x}-{random.getrandbits(48):x}"


def normalize_base_url(url: str) -> str:
    """Trim and check a user-entered base URL; raises ValidationError if unusable."""
    cleaned = (url or "").strip().rstrip("/")
    try:
        parsed = httpx.URL(cleaned)
    except httpx.InvalidURL as e:
        raise ValidationError({"base_url": str(e)}, message="Invalid backend URL") from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ValidationError({"base_url": "Use http:// or https:// followed by a host."}, message="Invalid backend URL")
    if parsed.port is not None and not 0 < parsed.port <= 65535:
        raise ValidationError({"base_url": f"Port {parsed.port} is out of range."}, message="Invalid backend URL")
    return cleaned


class ClientPreferences:
    def __init__(self, store: KeyValueStore, default_base_url: str):
        self.store = store
        self.default_base_url = default_base_url.rstrip("/")
        self._device_id: Optional[str] = None

    def get_base_url(self) -> str:
        try:
            url = self.store.get(BASE_URL_KEY)
        except Exception as e:
            logger.warning("Error getting base URL: %s", e)
            return self.default_base_url
        return (url or self.default_base_url).rstrip("/")

    def set_base_url(self, url: str) -> None:
        cleaned = normalize_base_url(url)
        try:
            self.store.set(BASE_URL_KEY, cleaned)
        except Exception as e:
            logger.warning("Error setting base URL: %s", e)

    def get_device_id(self) -> str:
        if self._device_id:
            return self._device_id

        try:
            existing = self.store.get(DEVICE_ID_KEY)
        except Exception as e:
            logger.warning("Error reading device id: %s", e)
            existing = None

        if existing:
            self._device_id = existing
            return existing

        device_id = generate_device_id()
        try:
            self.store.set(DEVICE_ID_KEY, device_id)
        except Exception as e:
            # keep the generated id for this session even if it could not be persisted
            logger.warning("Error persisting device id: %s", e)
        self._device_id = device_id
        return device_id
