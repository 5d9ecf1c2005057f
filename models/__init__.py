from models.curriculum import Lesson, LessonBlock, LessonGroup, TeachingMethod, EnrichedLesson
from models.timetable import (
    Weekday, WEEKDAYS, CycleType, CycleWeek, TimeSlot, WeekTemplate, MasterSchedule,
)
from models.timeslot import AvailableSlot
from models.progress import CompletedLesson, MethodProgress, ProgressTracker
from models.schedule import (
    ScheduleStatus, ScheduledLesson, ScheduleException, WeeklyScheduleInstance,
)
from models.evaluation import CompletionCheck, ExtraProgress, Evaluation

__all__ = [
    "Lesson",
    "LessonBlock",
    "LessonGroup",
    "TeachingMethod",
    "EnrichedLesson",
    "Weekday",
    "WEEKDAYS",
    "CycleType",
    "CycleWeek",
    "TimeSlot",
    "WeekTemplate",
    "MasterSchedule",
    "AvailableSlot",
    "CompletedLesson",
    "MethodProgress",
    "ProgressTracker",
    "ScheduleStatus",
    "ScheduledLesson",
    "ScheduleException",
    "WeeklyScheduleInstance",
    "CompletionCheck",
    "ExtraProgress",
    "Evaluation",
]
