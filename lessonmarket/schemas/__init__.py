"""Pydantic schema package for API contracts."""

from lessonmarket.schemas.status import (
    StatusRecordResponse,
    StatusTargetRequest,
    StatusTransitionRequest,
    TransitionOption,
    TransitionOptionsResponse,
    build_transition_options,
)

__all__ = [
    "StatusRecordResponse",
    "StatusTargetRequest",
    "StatusTransitionRequest",
    "TransitionOption",
    "TransitionOptionsResponse",
    "build_transition_options",
]
