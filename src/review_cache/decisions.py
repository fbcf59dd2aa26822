"""DecisionStore — keep/delete decisions scoped to the active server account."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic_core import PydanticSerializationError

from review_cache.config import DEFAULT_PREFIX, CacheConfigSchema, StoreFactory
from review_cache.exceptions import StoreError
from review_cache.identity import current_namespace
from review_cache.record import Decision, DecisionRecord
from review_cache.stores.memory import InMemoryStore

if TYPE_CHECKING:
    from review_cache.identity import IdentityProvider
    from review_cache.stores.base import Store

logger = logging.getLogger(__name__)

Listener = Callable[["DecisionStore"], None]


def _check_asset_id(asset_id: str) -> None:
    try:
        asset_id.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"asset id {asset_id!r} is not valid UTF-8 text") from exc


class DecisionStore:
    """Remembers which assets the user decided to keep or delete.

    Decisions live in one :class:`DecisionRecord` per namespace, where a
    namespace is derived from the active ``(server_url, user_name)`` pair.
    Every public call first re-derives the namespace from the identity
    provider.  When it changed, the outgoing record is flushed (if it has
    unsaved changes) and the incoming one is loaded from the durable store,
    so decisions never leak between accounts.

    Each mutation writes the full record back under
    ``"<prefix>:<namespace>"``.  Write failures propagate to the caller of
    the mutating method; queries never raise.

    Parameters:
        identity: Provider of the currently signed-in identity.
        store:    Durable key-value backend.  Defaults to
                  :class:`InMemoryStore` when omitted.
        prefix:   Application prefix for storage keys.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        store: Store | None = None,
        *,
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._identity = identity
        self._store: Store = store if store is not None else InMemoryStore()
        self._prefix = prefix
        # empty until the first call loads a namespace
        self._namespace = ""
        self._record = DecisionRecord()
        self._dirty = False
        self._listeners: list[Listener] = []

    @classmethod
    def from_config(cls, config: CacheConfigSchema, identity: IdentityProvider) -> DecisionStore:
        """Build a decision store and its backend from *config*."""
        return cls(identity, StoreFactory.create(config.store), prefix=config.prefix)

    # ── mutations ────────────────────────────────────────────

    def mark_reviewed(self, asset_id: str, decision: Decision | str) -> None:
        """Record *decision* for *asset_id* and persist the namespace.

        Marking an asset moves it out of the opposite set.  Repeating the
        same decision leaves the record unchanged.

        Raises:
            ValueError: If *decision* is not ``"keep"`` or ``"delete"``, or if
                *asset_id* cannot be encoded as UTF-8.
            StoreError: If the durable write fails.
        """
        decision = Decision(decision)
        _check_asset_id(asset_id)
        changed = self._sync().mark(asset_id, decision)
        self._commit(changed)

    def unmark_reviewed(self, asset_id: str) -> None:
        """Forget any decision for *asset_id* and persist the namespace.

        Raises:
            StoreError: If the durable write fails.
        """
        changed = self._sync().unmark(asset_id)
        self._commit(changed)

    def clear(self) -> None:
        """Drop every decision of the active namespace.

        Raises:
            StoreError: If the durable write fails.
        """
        changed = self._sync().clear()
        self._commit(changed)

    def flush(self) -> None:
        """Persist the loaded record if it has unsaved changes.

        Raises:
            StoreError: If the durable write fails.
        """
        if self._dirty and self._namespace:
            self._persist()

    # ── queries ──────────────────────────────────────────────

    def is_reviewed(self, asset_id: str) -> bool:
        return asset_id in self._sync()

    def get_decision(self, asset_id: str) -> Decision | None:
        """Return the decision for *asset_id*, or ``None`` if it has none."""
        return self._sync().get(asset_id)

    @property
    def kept(self) -> list[str]:
        return self._sync().kept

    @property
    def deleted(self) -> list[str]:
        return self._sync().deleted

    @property
    def reviewed_count(self) -> int:
        return len(self._sync())

    @property
    def kept_count(self) -> int:
        return len(self.kept)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def namespace(self) -> str:
        self._sync()
        return self._namespace

    @property
    def storage_key(self) -> str:
        return self.storage_key_for(self.namespace)

    @property
    def store(self) -> Store:
        return self._store

    def storage_key_for(self, namespace: str) -> str:
        return f"{self._prefix}:{namespace}"

    def namespaces(self) -> list[str]:
        """Return the storage keys of every namespace written under this prefix."""
        return self._store.keys(f"{self._prefix}:")

    def export(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of the active namespace."""
        record = self._sync()
        return {
            "namespace": self.namespace,
            "storage_key": self.storage_key,
            "kept": record.kept,
            "deleted": record.deleted,
            "reviewed_count": len(record),
        }

    # ── change notification ──────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every change; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ── namespace handling ───────────────────────────────────

    def _sync(self) -> DecisionRecord:
        """Return the record of the active namespace, switching if needed."""
        namespace = current_namespace(self._identity)
        if namespace == self._namespace:
            return self._record

        if self._dirty and self._namespace:
            try:
                self._persist()
            except StoreError as exc:
                logger.warning(
                    "Dropping unsaved decisions for %s: %s",
                    self.storage_key_for(self._namespace),
                    exc,
                )

        logger.debug("Switching decision namespace %s -> %s", self._namespace, namespace)
        self._namespace = namespace
        self._record = self._load(namespace)
        self._dirty = False
        self._notify()
        return self._record

    def _load(self, namespace: str) -> DecisionRecord:
        key = self.storage_key_for(namespace)
        try:
            raw = self._store.get(key)
        except StoreError as exc:
            logger.warning("Could not read %s, starting empty: %s", key, exc)
            return DecisionRecord()

        record = DecisionRecord.from_json(raw)
        if raw is None or not record:
            # Register the namespace in durable storage, replacing anything unreadable.
            try:
                self._store.set(key, record.to_json())
            except StoreError as exc:
                logger.warning("Could not initialise %s: %s", key, exc)
        logger.debug("Loaded %d decisions from %s", len(record), key)
        return record

    def _persist(self) -> None:
        key = self.storage_key_for(self._namespace)
        try:
            payload = self._record.to_json()
        except PydanticSerializationError as exc:
            raise StoreError("set", key, str(exc)) from exc
        self._store.set(key, payload)
        self._dirty = False
        logger.debug("Persisted %d decisions to %s", len(self._record), key)

    def _commit(self, changed: bool) -> None:
        self._dirty = True
        try:
            self._persist()
        finally:
            if changed:
                self._notify()
