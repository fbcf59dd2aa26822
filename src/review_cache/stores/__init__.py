"""Durable key-value backends for decision records."""

from review_cache.stores.base import Store
from review_cache.stores.memory import InMemoryStore
from review_cache.stores.sqlite import SQLiteStore

__all__ = ["InMemoryStore", "SQLiteStore", "Store"]
