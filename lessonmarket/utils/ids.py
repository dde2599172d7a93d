"""Identifier generation helpers."""

from __future__ import annotations

import uuid


def new_status_id() -> str:
    """Create a UUID4-based status record identifier."""
    return str(uuid.uuid4())


def new_entity_id() -> str:
    return str(uuid.uuid4())
