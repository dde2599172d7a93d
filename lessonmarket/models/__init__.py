"""Status enums and status-history records for lifecycle-tracked entities."""

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
from lessonmarket.models.status_record import StatusRecord

__all__ = [
    "EntityKind",
    "GoalStatusTransition",
    "GoalStatusValue",
    "LessonPlanStatusTransition",
    "LessonPlanStatusValue",
    "LessonQuoteStatusTransition",
    "LessonQuoteStatusValue",
    "LessonStatusTransition",
    "LessonStatusValue",
    "MilestoneStatusTransition",
    "MilestoneStatusValue",
    "ObjectiveStatusTransition",
    "ObjectiveStatusValue",
    "StatusRecord",
    "TeacherLessonHourlyRateStatusTransition",
    "TeacherLessonHourlyRateStatusValue",
]
