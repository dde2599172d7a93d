from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from lessonmarket.core.exceptions import BadRequestError, InvalidTransitionError, NotFoundError, ValidationError
from lessonmarket.models.enums import (
    EntityKind,
    LessonStatusTransition,
    LessonStatusValue,
    ObjectiveStatusValue,
    TeacherLessonHourlyRateStatusTransition,
    TeacherLessonHourlyRateStatusValue,
)
from lessonmarket.services.status_service import StatusHistoryService


def test_create_starts_at_initial_status():
    service = StatusHistoryService(EntityKind.LESSON)
    record = service.create("lesson-1", context={"requested_by": "student-9"})
    assert record.status is LessonStatusValue.REQUESTED
    assert service.current_status("lesson-1") is LessonStatusValue.REQUESTED
    assert service.history("lesson-1") == (record,)


def test_create_generates_id_and_accepts_explicit_initial_status():
    service = StatusHistoryService("TeacherLessonHourlyRate")
    record = service.create(initial_status="INACTIVE")
    assert record.entity_id
    assert record.status is TeacherLessonHourlyRateStatusValue.INACTIVE


def test_create_rejects_duplicate_entity():
    service = StatusHistoryService(EntityKind.LESSON)
    service.create("lesson-1")
    with pytest.raises(ValidationError):
        service.create("lesson-1")


def test_create_rejects_empty_entity_id():
    service = StatusHistoryService(EntityKind.LESSON)
    with pytest.raises(ValidationError, match="must not be empty"):
        service.create("")
    with pytest.raises(ValidationError):
        service.create("   ")


def test_history_returned_to_callers_cannot_rewrite_stored_records():
    service = StatusHistoryService(EntityKind.LESSON)
    service.create("lesson-1", context={"by": "student"})

    with pytest.raises(TypeError):
        service.history("lesson-1")[0].context["by"] = "someone else"
    with pytest.raises(TypeError):
        service.current_record("lesson-1").context["by"] = "someone else"
    service.current_record("lesson-1").get_context()["by"] = "someone else"

    assert service.history("lesson-1")[0].get_context() == {"by": "student"}
    assert service.current_record("lesson-1").get_context() == {"by": "student"}


def test_apply_transition_appends_record_and_moves_pointer():
    service = StatusHistoryService(EntityKind.LESSON)
    first = service.create("lesson-1")

    accepted = service.apply_transition("lesson-1", LessonStatusTransition.ACCEPT, context={"quote_id": "q-1"})
    completed = service.apply_transition("lesson-1", "COMPLETE")

    assert accepted.status is LessonStatusValue.ACCEPTED
    assert accepted.get_context() == {"quote_id": "q-1"}
    assert service.current_record("lesson-1") == completed
    assert [r.status for r in service.history("lesson-1")] == [
        LessonStatusValue.REQUESTED,
        LessonStatusValue.ACCEPTED,
        LessonStatusValue.COMPLETED,
    ]
    assert service.history("lesson-1")[0] is first


def test_rejected_transition_writes_nothing():
    service = StatusHistoryService(EntityKind.LESSON)
    service.create("lesson-1")

    with pytest.raises(InvalidTransitionError) as excinfo:
        service.apply_transition("lesson-1", LessonStatusTransition.COMPLETE)

    assert str(excinfo.value) == "Invalid status transition 'COMPLETE' for current status 'REQUESTED'."
    assert excinfo.value.current_status == "REQUESTED"
    assert excinfo.value.transition == "COMPLETE"
    assert isinstance(excinfo.value, BadRequestError)
    assert len(service.history("lesson-1")) == 1
    assert service.current_status("lesson-1") is LessonStatusValue.REQUESTED


def test_terminal_status_rejects_further_transitions():
    service = StatusHistoryService(EntityKind.LESSON)
    service.create("lesson-1")
    service.apply_transition("lesson-1", LessonStatusTransition.REJECT)
    service.apply_transition("lesson-1", LessonStatusTransition.VOID)

    assert service.available_transitions("lesson-1") == ()
    with pytest.raises(InvalidTransitionError):
        service.apply_transition("lesson-1", LessonStatusTransition.VOID)
    assert len(service.history("lesson-1")) == 3


def test_unknown_entity_raises_not_found():
    service = StatusHistoryService(EntityKind.GOAL)
    with pytest.raises(NotFoundError, match="Goal with ID missing not found"):
        service.apply_transition("missing", "START")


def test_transition_to_status_resolves_the_action():
    service = StatusHistoryService(EntityKind.OBJECTIVE)
    service.create("objective-1")

    record = service.transition_to_status("objective-1", "ACHIEVED")
    assert record.status is ObjectiveStatusValue.ACHIEVED

    with pytest.raises(InvalidTransitionError, match="Transition from ACHIEVED to IN_PROGRESS is not defined."):
        service.transition_to_status("objective-1", ObjectiveStatusValue.IN_PROGRESS)
    assert service.current_status("objective-1") is ObjectiveStatusValue.ACHIEVED


def test_transition_to_unknown_status_is_a_validation_error():
    service = StatusHistoryService(EntityKind.OBJECTIVE)
    service.create("objective-1")
    with pytest.raises(ValidationError):
        service.transition_to_status("objective-1", "FINISHED")


def test_concurrent_transitions_only_one_wins():
    service = StatusHistoryService(EntityKind.TEACHER_LESSON_HOURLY_RATE)
    service.create("rate-1")

    def _deactivate():
        try:
            service.apply_transition("rate-1", TeacherLessonHourlyRateStatusTransition.DEACTIVATE)
            return True
        except InvalidTransitionError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: _deactivate(), range(16)))

    assert results.count(True) == 1
    assert len(service.history("rate-1")) == 2


def test_transitions_are_logged(caplog):
    service = StatusHistoryService(EntityKind.LESSON)
    service.create("lesson-1")

    with caplog.at_level(logging.INFO, logger="lessonmarket.services.status_service"):
        service.apply_transition("lesson-1", LessonStatusTransition.ACCEPT)
        with pytest.raises(InvalidTransitionError):
            service.apply_transition("lesson-1", LessonStatusTransition.ACCEPT)

    events = [getattr(record, "event", None) for record in caplog.records]
    assert "status.transition" in events
    assert "status.transition_rejected" in events
    transition_record = next(r for r in caplog.records if getattr(r, "event", None) == "status.transition")
    assert transition_record.from_status == "REQUESTED"
    assert transition_record.to_status == "ACCEPTED"
    assert transition_record.entity_id == "lesson-1"
