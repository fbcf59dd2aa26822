"""Tests for configuration schemas and the store factory."""

import pytest
from pydantic import ValidationError

from review_cache import (
    DEFAULT_PREFIX,
    CacheConfigSchema,
    ConfigError,
    DecisionStore,
    SessionIdentity,
    StoreConfigSchema,
    StoreFactory,
)
from review_cache.stores import InMemoryStore, SQLiteStore


class TestStoreFactory:
    """Tests for StoreFactory."""

    def test_registered_types(self):
        types = StoreFactory.registered_types()
        assert "memory" in types
        assert "sqlite" in types

    def test_create_memory_store(self):
        store = StoreFactory.create(StoreConfigSchema())
        assert isinstance(store, InMemoryStore)

    def test_create_sqlite_store(self, tmp_path):
        store = StoreFactory.create(StoreConfigSchema(type="sqlite", path=str(tmp_path / "c.db")))
        assert isinstance(store, SQLiteStore)
        store.close()

    def test_sqlite_requires_path(self):
        with pytest.raises(ConfigError, match="path"):
            StoreFactory.create(StoreConfigSchema(type="sqlite"))

    def test_unknown_type_raises_error(self):
        with pytest.raises(ConfigError, match="unknown store type 'redis'"):
            StoreFactory.create(StoreConfigSchema(type="redis"))

    def test_register_custom_type(self, monkeypatch):
        monkeypatch.setattr(StoreFactory, "_registry", dict(StoreFactory._registry))
        StoreFactory.register("custom", lambda config: InMemoryStore(quota_bytes=10))

        store = StoreFactory.create(StoreConfigSchema(type="custom"))
        assert isinstance(store, InMemoryStore)


class TestCacheConfig:
    """Tests for CacheConfigSchema."""

    def test_defaults(self):
        config = CacheConfigSchema()
        assert config.prefix == DEFAULT_PREFIX
        assert config.store.type == "memory"

    def test_from_json(self):
        config = CacheConfigSchema.model_validate_json(
            '{"prefix": "reviews", "store": {"type": "memory", "quota_bytes": 4096}}'
        )
        assert config.prefix == "reviews"
        assert config.store.quota_bytes == 4096

    def test_empty_prefix_rejected(self):
        with pytest.raises(ValidationError):
            CacheConfigSchema(prefix="")

    def test_negative_quota_rejected(self):
        with pytest.raises(ValidationError):
            StoreConfigSchema(quota_bytes=-1)

    def test_decision_store_from_config(self, tmp_path):
        session = SessionIdentity()
        session.set_config("http://server-a", "key-a", "Alice")
        config = CacheConfigSchema.model_validate(
            {"prefix": "reviews", "store": {"type": "sqlite", "path": str(tmp_path / "c.db")}}
        )

        decisions = DecisionStore.from_config(config, session)
        decisions.mark_reviewed("asset-1", "keep")

        assert decisions.storage_key.startswith("reviews:")
        assert isinstance(decisions.store, SQLiteStore)
        decisions.store.close()
