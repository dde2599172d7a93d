"""Structured logging helpers for status lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class LogContext:
    """Normalized context fields expected in structured logs."""

    entity_kind: str | None = None
    entity_id: str | None = None
    actor_id: str | None = None
    trace_id: str | None = None


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """Build a normalized structured log payload."""
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "entity_kind": context.entity_kind,
        "entity_id": context.entity_id,
        "actor_id": context.actor_id,
        "trace_id": context.trace_id,
    }
    payload.update(fields)
    return payload
