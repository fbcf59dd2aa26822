"""review_cache — a client-side cache of keep/delete review decisions.

Decisions are scoped to the active server account: each
``(server_url, user_name)`` pair gets its own namespace in durable
storage, and nothing recorded under one account is visible from another.
"""

from review_cache.config import DEFAULT_PREFIX, CacheConfigSchema, StoreConfigSchema, StoreFactory
from review_cache.decisions import DecisionStore
from review_cache.exceptions import (
    ConfigError,
    QuotaExceededError,
    ReviewCacheError,
    StoreError,
)
from review_cache.identity import (
    Identity,
    IdentityProvider,
    SessionIdentity,
    StaticIdentity,
    namespace_key,
)
from review_cache.record import Decision, DecisionRecord, DecisionRecordSchema

__all__ = [
    "DEFAULT_PREFIX",
    "CacheConfigSchema",
    "ConfigError",
    "Decision",
    "DecisionRecord",
    "DecisionRecordSchema",
    "DecisionStore",
    "Identity",
    "IdentityProvider",
    "QuotaExceededError",
    "ReviewCacheError",
    "SessionIdentity",
    "StaticIdentity",
    "StoreConfigSchema",
    "StoreError",
    "StoreFactory",
    "namespace_key",
]
