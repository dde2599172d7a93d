"""Transition tables for every lifecycle-tracked entity kind."""

from __future__ import annotations

from types import MappingProxyType

from lessonmarket.core.exceptions import ValidationError
from lessonmarket.models.enums import (
    EntityKind,
    GoalStatusTransition,
    GoalStatusValue,
    LessonPlanStatusTransition,
    LessonPlanStatusValue,
    LessonQuoteStatusTransition,
    LessonQuoteStatusValue,
    LessonStatusTransition,
    LessonStatusValue,
    MilestoneStatusTransition,
    MilestoneStatusValue,
    ObjectiveStatusTransition,
    ObjectiveStatusValue,
    TeacherLessonHourlyRateStatusTransition,
    TeacherLessonHourlyRateStatusValue,
)
from lessonmarket.status.state_machine import StatusStateMachine

LESSON_STATUS_MACHINE = StatusStateMachine(
    LessonStatusValue,
    LessonStatusTransition,
    {
        LessonStatusValue.REQUESTED: {
            LessonStatusTransition.ACCEPT: LessonStatusValue.ACCEPTED,
            LessonStatusTransition.REJECT: LessonStatusValue.REJECTED,
        },
        LessonStatusValue.ACCEPTED: {
            LessonStatusTransition.COMPLETE: LessonStatusValue.COMPLETED,
            LessonStatusTransition.VOID: LessonStatusValue.VOIDED,
        },
        LessonStatusValue.REJECTED: {
            LessonStatusTransition.VOID: LessonStatusValue.VOIDED,
        },
        LessonStatusValue.COMPLETED: {
            LessonStatusTransition.VOID: LessonStatusValue.VOIDED,
        },
        LessonStatusValue.VOIDED: {},
    },
    initial_status=LessonStatusValue.REQUESTED,
)

GOAL_STATUS_MACHINE = StatusStateMachine(
    GoalStatusValue,
    GoalStatusTransition,
    {
        GoalStatusValue.CREATED: {
            GoalStatusTransition.START: GoalStatusValue.IN_PROGRESS,
            GoalStatusTransition.ABANDON: GoalStatusValue.ABANDONED,
        },
        GoalStatusValue.IN_PROGRESS: {
            GoalStatusTransition.COMPLETE: GoalStatusValue.ACHIEVED,
            GoalStatusTransition.ABANDON: GoalStatusValue.ABANDONED,
        },
        # Abandoning an achieved goal retracts the achievement.
        GoalStatusValue.ACHIEVED: {
            GoalStatusTransition.ABANDON: GoalStatusValue.ABANDONED,
        },
        GoalStatusValue.ABANDONED: {},
    },
    initial_status=GoalStatusValue.CREATED,
)

OBJECTIVE_STATUS_MACHINE = StatusStateMachine(
    ObjectiveStatusValue,
    ObjectiveStatusTransition,
    {
        ObjectiveStatusValue.CREATED: {
            ObjectiveStatusTransition.START: ObjectiveStatusValue.IN_PROGRESS,
            ObjectiveStatusTransition.COMPLETE: ObjectiveStatusValue.ACHIEVED,
            ObjectiveStatusTransition.ABANDON: ObjectiveStatusValue.ABANDONED,
        },
        ObjectiveStatusValue.IN_PROGRESS: {
            ObjectiveStatusTransition.COMPLETE: ObjectiveStatusValue.ACHIEVED,
            ObjectiveStatusTransition.ABANDON: ObjectiveStatusValue.ABANDONED,
        },
        ObjectiveStatusValue.ACHIEVED: {
            ObjectiveStatusTransition.ABANDON: ObjectiveStatusValue.ABANDONED,
        },
        ObjectiveStatusValue.ABANDONED: {},
    },
    initial_status=ObjectiveStatusValue.CREATED,
)

TEACHER_LESSON_HOURLY_RATE_STATUS_MACHINE = StatusStateMachine(
    TeacherLessonHourlyRateStatusValue,
    TeacherLessonHourlyRateStatusTransition,
    {
        TeacherLessonHourlyRateStatusValue.ACTIVE: {
            TeacherLessonHourlyRateStatusTransition.DEACTIVATE: TeacherLessonHourlyRateStatusValue.INACTIVE,
        },
        TeacherLessonHourlyRateStatusValue.INACTIVE: {
            TeacherLessonHourlyRateStatusTransition.ACTIVATE: TeacherLessonHourlyRateStatusValue.ACTIVE,
        },
    },
    initial_status=TeacherLessonHourlyRateStatusValue.ACTIVE,
)

LESSON_QUOTE_STATUS_MACHINE = StatusStateMachine(
    LessonQuoteStatusValue,
    LessonQuoteStatusTransition,
    {
        LessonQuoteStatusValue.CREATED: {
            LessonQuoteStatusTransition.ACCEPT: LessonQuoteStatusValue.ACCEPTED,
            LessonQuoteStatusTransition.REJECT: LessonQuoteStatusValue.REJECTED,
        },
        LessonQuoteStatusValue.ACCEPTED: {},
        LessonQuoteStatusValue.REJECTED: {},
    },
    initial_status=LessonQuoteStatusValue.CREATED,
)

LESSON_PLAN_STATUS_MACHINE = StatusStateMachine(
    LessonPlanStatusValue,
    LessonPlanStatusTransition,
    {
        LessonPlanStatusValue.DRAFT: {
            LessonPlanStatusTransition.SUBMIT_FOR_APPROVAL: LessonPlanStatusValue.PENDING_APPROVAL,
            LessonPlanStatusTransition.CANCEL_PLAN: LessonPlanStatusValue.CANCELLED,
        },
        LessonPlanStatusValue.PENDING_APPROVAL: {
            LessonPlanStatusTransition.APPROVE: LessonPlanStatusValue.ACTIVE,
            LessonPlanStatusTransition.REJECT: LessonPlanStatusValue.REJECTED,
            LessonPlanStatusTransition.REVISE: LessonPlanStatusValue.DRAFT,
            LessonPlanStatusTransition.CANCEL_PLAN: LessonPlanStatusValue.CANCELLED,
        },
        LessonPlanStatusValue.ACTIVE: {
            LessonPlanStatusTransition.COMPLETE_PLAN: LessonPlanStatusValue.COMPLETED,
            LessonPlanStatusTransition.CANCEL_PLAN: LessonPlanStatusValue.CANCELLED,
        },
        LessonPlanStatusValue.REJECTED: {
            LessonPlanStatusTransition.REVISE: LessonPlanStatusValue.DRAFT,
            LessonPlanStatusTransition.CANCEL_PLAN: LessonPlanStatusValue.CANCELLED,
        },
        LessonPlanStatusValue.COMPLETED: {},
        LessonPlanStatusValue.CANCELLED: {},
    },
    initial_status=LessonPlanStatusValue.DRAFT,
)

MILESTONE_STATUS_MACHINE = StatusStateMachine(
    MilestoneStatusValue,
    MilestoneStatusTransition,
    {
        MilestoneStatusValue.CREATED: {
            MilestoneStatusTransition.START_PROGRESS: MilestoneStatusValue.IN_PROGRESS,
            MilestoneStatusTransition.CANCEL_MILESTONE: MilestoneStatusValue.CANCELLED,
        },
        MilestoneStatusValue.IN_PROGRESS: {
            MilestoneStatusTransition.MARK_COMPLETED: MilestoneStatusValue.COMPLETED,
            MilestoneStatusTransition.CANCEL_MILESTONE: MilestoneStatusValue.CANCELLED,
            MilestoneStatusTransition.RESET_TO_CREATED: MilestoneStatusValue.CREATED,
        },
        # A completed milestone is still cancelled when its plan is.
        MilestoneStatusValue.COMPLETED: {
            MilestoneStatusTransition.CANCEL_MILESTONE: MilestoneStatusValue.CANCELLED,
        },
        MilestoneStatusValue.CANCELLED: {},
    },
    initial_status=MilestoneStatusValue.CREATED,
)

STATUS_MACHINES = MappingProxyType(
    {
        EntityKind.LESSON: LESSON_STATUS_MACHINE,
        EntityKind.GOAL: GOAL_STATUS_MACHINE,
        EntityKind.OBJECTIVE: OBJECTIVE_STATUS_MACHINE,
        EntityKind.TEACHER_LESSON_HOURLY_RATE: TEACHER_LESSON_HOURLY_RATE_STATUS_MACHINE,
        EntityKind.LESSON_QUOTE: LESSON_QUOTE_STATUS_MACHINE,
        EntityKind.LESSON_PLAN: LESSON_PLAN_STATUS_MACHINE,
        EntityKind.MILESTONE: MILESTONE_STATUS_MACHINE,
    }
)


def get_state_machine(kind: EntityKind | str) -> StatusStateMachine:
    """Look up the transition machine for an entity kind."""
    try:
        return STATUS_MACHINES[EntityKind(kind)]
    except ValueError:
        raise ValidationError(f"Unknown entity kind: {kind!r}") from None
