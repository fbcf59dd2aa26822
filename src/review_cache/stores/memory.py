"""InMemoryStore — zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

from review_cache.exceptions import QuotaExceededError
from review_cache.stores.base import Store


def _size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class InMemoryStore(Store):
    """In-memory store using a plain dict.  Data is lost on process exit.

    Parameters:
        quota_bytes: Optional cap on the total size of all keys and values
                     (UTF-8 encoded).  A write that would exceed it raises
                     :class:`QuotaExceededError` and leaves the store
                     untouched, like a full browser ``localStorage``.
    """

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self._quota = quota_bytes

    @property
    def used_bytes(self) -> int:
        return sum(_size(k, v) for k, v in self._data.items())

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota is not None:
            current = self._data.get(key)
            needed = self.used_bytes + _size(key, value)
            if current is not None:
                needed -= _size(key, current)
            if needed > self._quota:
                raise QuotaExceededError(key, needed, self._quota)
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return [k for k in self._data if k.startswith(prefix)]

    def clear(self) -> None:
        self._data.clear()
