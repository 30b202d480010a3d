from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Durable, process-independent string storage.

    Implementations may raise on I/O problems; every caller in this package
    treats such errors as non-fatal.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is unset."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    def ping(self) -> bool:
        return True
