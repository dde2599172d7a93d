"""Human-readable labels for statuses and transitions."""

from __future__ import annotations

import enum
import logging

from lessonmarket.models.enums import GoalStatusValue

logger = logging.getLogger(__name__)

# Keyed by (enum class, member name): str enums of different kinds compare equal by value.
_STATUS_LABEL_OVERRIDES: dict[tuple[type, str], str] = {
    (GoalStatusValue, GoalStatusValue.CREATED.name): "Ready to Start",
}


def _title_words(value: str) -> str:
    return " ".join(word.capitalize() for word in value.split("_") if word)


def status_label(status: enum.Enum | str | None) -> str:
    """Display label for a status value, e.g. ``IN_PROGRESS`` -> ``In Progress``."""
    if not status:
        return "Unknown Status"
    if isinstance(status, enum.Enum):
        override = _STATUS_LABEL_OVERRIDES.get((type(status), status.name))
        if override is not None:
            return override
        status = status.value
    if not isinstance(status, str):
        logger.warning("labels.unexpected_status", extra={"event": "labels.unexpected_status", "status": repr(status)})
        return str(status)
    return _title_words(status)


def transition_label(transition: enum.Enum | str | None) -> str:
    if not transition:
        return "Unknown Action"
    if isinstance(transition, enum.Enum):
        transition = transition.value
    return _title_words(str(transition))
