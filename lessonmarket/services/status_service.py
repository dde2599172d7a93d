"""Status history service: the caller side of the transition engine.

Keeps an append-only history of status records per entity together with the
entity's current-status pointer. Reading the current status, validating the
transition and appending the new record happen under one lock, so two
concurrent transitions can never both succeed against the same stale status.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from threading import Lock

from lessonmarket.core.config import get_config
from lessonmarket.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from lessonmarket.core.logging import LogContext, build_log_event
from lessonmarket.models.enums import EntityKind
from lessonmarket.models.status_record import JsonValue, StatusRecord
from lessonmarket.status.state_machine import StatusStateMachine
from lessonmarket.status.tables import get_state_machine
from lessonmarket.utils.ids import new_entity_id

logger = logging.getLogger(__name__)


@dataclass
class TrackedEntity:
    entity_id: str
    kind: EntityKind
    current_status_id: str
    history: list[StatusRecord] = field(default_factory=list)

    @property
    def current_record(self) -> StatusRecord:
        return next(record for record in reversed(self.history) if record.id == self.current_status_id)


class StatusHistoryService:
    """In-memory status history registry for one entity kind."""

    def __init__(self, kind: EntityKind | str, machine: StatusStateMachine | None = None) -> None:
        self.kind = EntityKind(kind)
        self.machine = machine or get_state_machine(self.kind)
        self._entities: dict[str, TrackedEntity] = {}
        self._lock = Lock()

    def create(
        self,
        entity_id: str | None = None,
        context: JsonValue = None,
        initial_status: enum.Enum | str | None = None,
    ) -> StatusRecord:
        """Register an entity together with its first status record."""
        if entity_id is None:
            entity_id = new_entity_id()
        elif not str(entity_id).strip():
            raise ValidationError(f"{self.kind.value} ID must not be empty.")
        status = self.machine.initial_status
        if initial_status is not None:
            status = self.machine.parse_status(initial_status)

        with self._lock:
            if entity_id in self._entities:
                raise ValidationError(f"{self.kind.value} with ID {entity_id} is already tracked.")
            record = StatusRecord.create(entity_id=entity_id, status=status, context=context)
            self._entities[entity_id] = TrackedEntity(
                entity_id=entity_id,
                kind=self.kind,
                current_status_id=record.id,
                history=[record],
            )
        self._log_event("status.created", entity_id, status=status.value, status_id=record.id)
        return record

    def current_record(self, entity_id: str) -> StatusRecord:
        with self._lock:
            return self._get(entity_id).current_record

    def current_status(self, entity_id: str) -> enum.Enum:
        return self.current_record(entity_id).status

    def history(self, entity_id: str) -> tuple[StatusRecord, ...]:
        """All status records for an entity, oldest first."""
        with self._lock:
            return tuple(self._get(entity_id).history)

    def available_transitions(self, entity_id: str) -> tuple[enum.Enum, ...]:
        return self.machine.valid_transitions(self.current_status(entity_id))

    def apply_transition(
        self,
        entity_id: str,
        transition: enum.Enum | str,
        context: JsonValue = None,
    ) -> StatusRecord:
        """Apply ``transition`` to the entity and return the new current record.

        Raises NotFoundError for an unknown entity and InvalidTransitionError
        when the table defines no outcome; in both cases nothing is written.
        """
        with self._lock:
            entity = self._get(entity_id)
            current = entity.current_record.status
            new_status = self.machine.get_resulting_status(current, transition)
            if new_status is None:
                action = getattr(transition, "value", transition)
                raise self._rejection(
                    entity_id,
                    f"Invalid status transition '{action}' for current status '{current.value}'.",
                    current,
                    action,
                )
            record = self._append(entity, new_status, context)

        self._log_event(
            "status.transition",
            entity_id,
            from_status=current.value,
            transition=self.machine.parse_transition(transition).value,
            to_status=new_status.value,
            status_id=record.id,
        )
        return record

    def transition_to_status(
        self,
        entity_id: str,
        target_status: enum.Enum | str,
        context: JsonValue = None,
    ) -> StatusRecord:
        """Move the entity to ``target_status`` through whichever transition leads there."""
        target = self.machine.parse_status(target_status)
        with self._lock:
            entity = self._get(entity_id)
            current = entity.current_record.status
            transition = self.machine.transition_to(current, target)
            if transition is None:
                raise self._rejection(
                    entity_id,
                    f"Transition from {current.value} to {target.value} is not defined.",
                    current,
                    None,
                )
            record = self._append(entity, target, context)

        self._log_event(
            "status.transition",
            entity_id,
            from_status=current.value,
            transition=transition.value,
            to_status=target.value,
            status_id=record.id,
        )
        return record

    def _get(self, entity_id: str) -> TrackedEntity:
        entity = self._entities.get(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.kind.value} with ID {entity_id} not found.")
        return entity

    def _append(self, entity: TrackedEntity, status: enum.Enum, context: JsonValue) -> StatusRecord:
        record = StatusRecord.create(entity_id=entity.entity_id, status=status, context=context)
        entity.history.append(record)
        entity.current_status_id = record.id
        return record

    def _rejection(
        self, entity_id: str, message: str, current: enum.Enum, transition: str | None
    ) -> InvalidTransitionError:
        logger.warning(
            message,
            extra=build_log_event(
                "status.transition_rejected",
                LogContext(entity_kind=self.kind.value, entity_id=entity_id),
                current_status=current.value,
                transition=transition,
            ),
        )
        return InvalidTransitionError(message, current_status=current.value, transition=transition)

    def _log_event(self, event: str, entity_id: str, **fields: object) -> None:
        if not get_config().LOG_TRANSITIONS:
            return
        logger.info(
            event,
            extra=build_log_event(event, LogContext(entity_kind=self.kind.value, entity_id=entity_id), **fields),
        )
