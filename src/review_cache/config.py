# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Configuration schemas and the store factory.

These Pydantic models describe how a decision cache is wired: which
durable backend it writes to and under which key prefix.  They can be
loaded from a dict or a JSON document.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from pydantic import BaseModel, Field

from review_cache.exceptions import ConfigError
from review_cache.stores import InMemoryStore, SQLiteStore, Store

DEFAULT_PREFIX = "immich-swipe-reviewed"

StoreBuilder = Callable[["StoreConfigSchema"], Store]


class StoreConfigSchema(BaseModel):
    """Durable store configuration.

    Attributes:
        type: Store type (``"memory"`` or ``"sqlite"``, or any type added
              with :meth:`StoreFactory.register`)
        path: Path to the SQLite database file (for sqlite type)
        quota_bytes: Size cap for the memory store, ``None`` for unlimited
    """

    type: str = "memory"
    path: str = ""
    quota_bytes: int | None = Field(default=None, ge=0)


class CacheConfigSchema(BaseModel):
    """Top-level decision cache configuration.

    Attributes:
        prefix: Application prefix for durable storage keys
        store: Backend configuration
    """

    prefix: str = Field(default=DEFAULT_PREFIX, min_length=1)
    store: StoreConfigSchema = Field(default_factory=StoreConfigSchema)


def _build_memory(config: StoreConfigSchema) -> Store:
    return InMemoryStore(quota_bytes=config.quota_bytes)


def _build_sqlite(config: StoreConfigSchema) -> Store:
    if not config.path:
        raise ConfigError("sqlite store requires a 'path'")
    return SQLiteStore(config.path)


class StoreFactory:
    """Creates store instances from configuration.

    Uses the Registry pattern: type strings map to builder callables at
    class level and can be extended via :meth:`register`.

    Example:
        store = StoreFactory.create(StoreConfigSchema(type="sqlite", path="cache.db"))
    """

    _registry: ClassVar[dict[str, StoreBuilder]] = {
        "memory": _build_memory,
        "sqlite": _build_sqlite,
    }

    @classmethod
    def register(cls, type_name: str, builder: StoreBuilder) -> None:
        """Register a custom store type.

        Args:
            type_name: Type string to use in configuration
            builder: Callable turning a :class:`StoreConfigSchema` into a store
        """
        cls._registry[type_name] = builder

    @classmethod
    def registered_types(cls) -> list[str]:
        return sorted(cls._registry)

    @classmethod
    def create(cls, config: StoreConfigSchema) -> Store:
        """Build the store described by *config*.

        Raises:
            ConfigError: If the type is unknown or its settings are invalid
        """
        builder = cls._registry.get(config.type)
        if builder is None:
            raise ConfigError(
                f"unknown store type '{config.type}' "
                f"(registered: {', '.join(cls.registered_types())})"
            )
        return builder(config)
