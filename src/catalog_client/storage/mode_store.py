"""
Persisted data-source mode (live | demo).

The flag only drives the "offline / demo" banner, so storage problems are
never allowed to abort a data operation: reads default to live, failed writes
are logged and dropped.
"""

import logging

from catalog_client.contracts.models import Mode
from catalog_client.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

DEMO_MODE_KEY = "demo_mode_active"


class ModeStore:
    def __init__(self, store: KeyValueStore, key: str = DEMO_MODE_KEY):
        self.store = store
        self.key = key

    def get(self) -> Mode:
        try:
            value = self.store.get(self.key)
        except Exception as e:
            logger.warning("Error reading demo mode flag, assuming live: %s", e)
            return Mode.LIVE
        return Mode.DEMO if (value or "").strip().lower() == "true" else Mode.LIVE

    def set(self, mode: Mode) -> None:
        try:
            self.store.set(self.key, "true" if mode == Mode.DEMO else "false")
        except Exception as e:
            logger.warning("Error persisting demo mode flag (%s): %s", mode.value, e)
