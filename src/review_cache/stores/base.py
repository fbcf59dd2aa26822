"""Store protocol — synchronous string key-value persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Store(ABC):
    """Abstract base for all durable storage backends.

    The store is completely agnostic to what is being stored — it just
    persists ``str`` values under ``str`` keys, the way browser local
    storage does.  Namespacing is done by the caller through key prefixes
    (e.g. ``"immich-swipe-reviewed:<hash>"``).
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or ``None`` if not found."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Create or overwrite a value.  Raises ``StoreError`` on failure."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a value.  No-op if the key does not exist."""
        ...

    @abstractmethod
    def keys(self, prefix: str = "") -> list[str]:
        """Return all keys starting with *prefix*, in insertion order."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Delete every key."""
        ...

    def exists(self, key: str) -> bool:
        """Return ``True`` if *key* holds a value."""
        return self.get(key) is not None
