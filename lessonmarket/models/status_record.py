"""Immutable status-history snapshots."""

from __future__ import annotations

import enum
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Union

from lessonmarket.core.exceptions import ValidationError
from lessonmarket.utils.ids import new_status_id

logger = logging.getLogger(__name__)

JsonValue = Union[str, int, float, bool, None, dict[str, Any], list[Any]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _freeze(value: Any) -> Any:
    """Rebuild a JSON-like value out of read-only containers."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class StatusRecord:
    """One status value held by one entity at a point in time.

    Records are append-only history entries; a new one is created at entity
    creation and for every accepted transition, and none is ever edited.
    ``context`` is stored in read-only form, use ``get_context()`` for a
    plain, freely mutable copy.
    """

    id: str
    entity_id: str
    status: enum.Enum
    context: Any = None
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", _freeze(self.context))

    @classmethod
    def create(cls, entity_id: str, status: enum.Enum, context: JsonValue = None) -> "StatusRecord":
        return cls(
            id=new_status_id(),
            entity_id=entity_id,
            status=status,
            context=context,
        )

    @classmethod
    def from_db(cls, row: Mapping[str, Any], status_enum: type[enum.Enum]) -> "StatusRecord":
        """Rebuild a record from a raw storage row; any malformed field raises ValidationError."""
        record_id = row.get("id")
        raw_status = row.get("status")
        try:
            status = status_enum(raw_status)
        except ValueError:
            logger.error(
                "status_record.invalid_status",
                extra={"event": "status_record.invalid_status", "record_id": record_id, "status": raw_status},
            )
            raise ValidationError(
                f"Invalid status value '{raw_status}' encountered for status record {record_id}"
            ) from None

        missing = [name for name in ("id", "entity_id") if not row.get(name)]
        if missing:
            raise ValidationError(f"Status record row is missing {', '.join(missing)}.")

        created_at = row.get("created_at") or _utcnow()
        if isinstance(created_at, str):
            try:
                created_at = datetime.fromisoformat(created_at)
            except ValueError:
                raise ValidationError(
                    f"Invalid created_at '{created_at}' encountered for status record {record_id}"
                ) from None
        if not isinstance(created_at, datetime):
            raise ValidationError(f"Invalid created_at {created_at!r} encountered for status record {record_id}")

        return cls(
            id=str(row["id"]),
            entity_id=str(row["entity_id"]),
            status=status,
            context=row.get("context"),
            created_at=created_at,
        )

    def get_context(self) -> JsonValue:
        """Return a plain copy of the context, decoding it first if it was stored as a JSON string."""
        if not isinstance(self.context, str):
            return _thaw(self.context)
        try:
            return json.loads(self.context)
        except json.JSONDecodeError:
            logger.warning(
                "status_record.context_not_json",
                extra={"event": "status_record.context_not_json", "record_id": self.id},
            )
            return self.context
