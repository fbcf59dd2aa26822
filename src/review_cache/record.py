"""DecisionRecord — the kept/deleted asset sets of one namespace."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class Decision(StrEnum):
    """What the reviewer chose to do with an asset."""

    KEEP = "keep"
    DELETE = "delete"


class DecisionRecordSchema(BaseModel):
    """Persisted entry format: ``{"kept": [...], "deleted": [...]}``."""

    kept: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)


class DecisionRecord:
    """Ordered ``asset_id -> Decision`` mapping for a single namespace.

    One mapping instead of two sets makes ``kept`` and ``deleted``
    disjoint by construction.  Iteration order is the order in which
    assets received their current decision.
    """

    def __init__(self) -> None:
        self._decisions: dict[str, Decision] = {}

    def __len__(self) -> int:
        return len(self._decisions)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._decisions

    def get(self, asset_id: str) -> Decision | None:
        return self._decisions.get(asset_id)

    def mark(self, asset_id: str, decision: Decision) -> bool:
        """Record *decision* for *asset_id*.  Returns ``True`` if anything changed."""
        if self._decisions.get(asset_id) is decision:
            return False
        self._decisions.pop(asset_id, None)
        self._decisions[asset_id] = decision
        return True

    def unmark(self, asset_id: str) -> bool:
        """Forget *asset_id*.  Returns ``True`` if it was present."""
        return self._decisions.pop(asset_id, None) is not None

    def clear(self) -> bool:
        changed = bool(self._decisions)
        self._decisions.clear()
        return changed

    @property
    def kept(self) -> list[str]:
        return [a for a, d in self._decisions.items() if d is Decision.KEEP]

    @property
    def deleted(self) -> list[str]:
        return [a for a, d in self._decisions.items() if d is Decision.DELETE]

    # ── serialization ────────────────────────────────────────

    def to_schema(self) -> DecisionRecordSchema:
        return DecisionRecordSchema(kept=self.kept, deleted=self.deleted)

    def to_json(self) -> str:
        return self.to_schema().model_dump_json()

    def to_dict(self) -> dict[str, Any]:
        return self.to_schema().model_dump()

    @classmethod
    def from_schema(cls, schema: DecisionRecordSchema) -> DecisionRecord:
        """Build a record, dropping duplicates.  ``deleted`` wins on overlap."""
        record = cls()
        for asset_id in schema.kept:
            if asset_id not in record:
                record.mark(asset_id, Decision.KEEP)
        for asset_id in schema.deleted:
            record.mark(asset_id, Decision.DELETE)
        return record

    @classmethod
    def from_json(cls, raw: str | None) -> DecisionRecord:
        """Parse a persisted entry, substituting an empty record if unusable.

        ``None`` (no entry) and malformed payloads both yield an empty
        record; this never raises.
        """
        if raw is None:
            return cls()
        try:
            schema = DecisionRecordSchema.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Discarding malformed decision record: %s", exc.errors()[:1])
            return cls()
        return cls.from_schema(schema)
