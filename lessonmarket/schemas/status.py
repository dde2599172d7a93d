"""Status transition request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lessonmarket.models.status_record import StatusRecord
from lessonmarket.services.status_service import StatusHistoryService
from lessonmarket.status.labels import status_label, transition_label


class StatusTransitionRequest(BaseModel):
    transition: str = Field(min_length=2, max_length=40)
    context: Any = None

    @field_validator("transition")
    @classmethod
    def normalize_transition(cls, value: str) -> str:
        return value.strip().upper()


class StatusTargetRequest(BaseModel):
    status: str = Field(min_length=2, max_length=40)
    context: Any = None

    @field_validator("status")
    @classmethod
    def normalize_status(cls, value: str) -> str:
        return value.strip().upper()


class StatusRecordResponse(BaseModel):
    id: str
    entity_id: str
    status: str
    status_label: str
    context: Any = None
    created_at: datetime

    @classmethod
    def from_record(cls, record: StatusRecord) -> "StatusRecordResponse":
        return cls(
            id=record.id,
            entity_id=record.entity_id,
            status=record.status.value,
            status_label=status_label(record.status),
            context=record.get_context(),
            created_at=record.created_at,
        )


class TransitionOption(BaseModel):
    transition: str
    label: str
    resulting_status: str


class TransitionOptionsResponse(BaseModel):
    entity_kind: str
    entity_id: str
    status: str
    status_label: str
    is_terminal: bool
    transitions: list[TransitionOption] = Field(default_factory=list)


def build_transition_options(service: StatusHistoryService, entity_id: str) -> TransitionOptionsResponse:
    """Describe the entity's current status and the actions available from it."""
    machine = service.machine
    current = service.current_status(entity_id)
    options = [
        TransitionOption(
            transition=transition.value,
            label=transition_label(transition),
            resulting_status=machine.get_resulting_status(current, transition).value,
        )
        for transition in machine.valid_transitions(current)
    ]
    return TransitionOptionsResponse(
        entity_kind=service.kind.value,
        entity_id=entity_id,
        status=current.value,
        status_label=status_label(current),
        is_terminal=machine.is_terminal(current),
        transitions=options,
    )
