"""Status transition engine and per-entity transition tables."""

from lessonmarket.status.labels import status_label, transition_label
from lessonmarket.status.state_machine import StatusStateMachine
from lessonmarket.status.tables import (
    GOAL_STATUS_MACHINE,
    LESSON_PLAN_STATUS_MACHINE,
    LESSON_QUOTE_STATUS_MACHINE,
    LESSON_STATUS_MACHINE,
    MILESTONE_STATUS_MACHINE,
    OBJECTIVE_STATUS_MACHINE,
    STATUS_MACHINES,
    TEACHER_LESSON_HOURLY_RATE_STATUS_MACHINE,
    get_state_machine,
)

__all__ = [
    "GOAL_STATUS_MACHINE",
    "LESSON_PLAN_STATUS_MACHINE",
    "LESSON_QUOTE_STATUS_MACHINE",
    "LESSON_STATUS_MACHINE",
    "MILESTONE_STATUS_MACHINE",
    "OBJECTIVE_STATUS_MACHINE",
    "STATUS_MACHINES",
    "StatusStateMachine",
    "TEACHER_LESSON_HOURLY_RATE_STATUS_MACHINE",
    "get_state_machine",
    "status_label",
    "transition_label",
]
