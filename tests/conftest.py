"""Shared test fixtures."""

import pytest

from review_cache import DecisionStore, SessionIdentity
from review_cache.exceptions import StoreError
from review_cache.stores import InMemoryStore


class FlakyStore(InMemoryStore):
    """Memory store whose reads and writes can be switched off."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_reads = False
        self.fail_writes = False
        self.writes: list[str] = []

    def get(self, key):
        if self.fail_reads:
            raise StoreError("get", key, "disk unavailable")
        return super().get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise StoreError("set", key, "disk unavailable")
        self.writes.append(key)
        super().set(key, value)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def flaky_store():
    return FlakyStore()


@pytest.fixture
def identity():
    session = SessionIdentity()
    session.set_config("http://server-a", "key-a", "Alice")
    return session


@pytest.fixture
def decisions(identity, store):
    return DecisionStore(identity, store)
