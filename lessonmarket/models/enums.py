"""Canonical status and transition enums for lifecycle-tracked entities."""

from __future__ import annotations

import enum


class EntityKind(str, enum.Enum):
    LESSON = "Lesson"
    GOAL = "Goal"
    OBJECTIVE = "Objective"
    TEACHER_LESSON_HOURLY_RATE = "TeacherLessonHourlyRate"
    LESSON_QUOTE = "LessonQuote"
    LESSON_PLAN = "LessonPlan"
    MILESTONE = "Milestone"


class LessonStatusValue(str, enum.Enum):
    REQUESTED = "REQUESTED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"
    VOIDED = "VOIDED"


class LessonStatusTransition(str, enum.Enum):
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"
    COMPLETE = "COMPLETE"
    VOID = "VOID"


class GoalStatusValue(str, enum.Enum):
    CREATED = "CREATED"  # defined, not started
    IN_PROGRESS = "IN_PROGRESS"
    ACHIEVED = "ACHIEVED"
    ABANDONED = "ABANDONED"


class GoalStatusTransition(str, enum.Enum):
    START = "START"
    COMPLETE = "COMPLETE"
    ABANDON = "ABANDON"


class ObjectiveStatusValue(str, enum.Enum):
    CREATED = "CREATED"
    IN_PROGRESS = "IN_PROGRESS"
    ACHIEVED = "ACHIEVED"
    ABANDONED = "ABANDONED"


class ObjectiveStatusTransition(str, enum.Enum):
    START = "START"
    COMPLETE = "COMPLETE"
    ABANDON = "ABANDON"  # soft delete


class TeacherLessonHourlyRateStatusValue(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class TeacherLessonHourlyRateStatusTransition(str, enum.Enum):
    ACTIVATE = "ACTIVATE"
    DEACTIVATE = "DEACTIVATE"


class LessonQuoteStatusValue(str, enum.Enum):
    CREATED = "CREATED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class LessonQuoteStatusTransition(str, enum.Enum):
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"


class LessonPlanStatusValue(str, enum.Enum):
    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


class LessonPlanStatusTransition(str, enum.Enum):
    SUBMIT_FOR_APPROVAL = "SUBMIT_FOR_APPROVAL"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    REVISE = "REVISE"
    COMPLETE_PLAN = "COMPLETE_PLAN"
    CANCEL_PLAN = "CANCEL_PLAN"


class MilestoneStatusValue(str, enum.Enum):
    CREATED = "CREATED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MilestoneStatusTransition(str, enum.Enum):
    START_PROGRESS = "START_PROGRESS"
    MARK_COMPLETED = "MARK_COMPLETED"
    CANCEL_MILESTONE = "CANCEL_MILESTONE"
    RESET_TO_CREATED = "RESET_TO_CREATED"
