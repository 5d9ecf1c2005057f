"""Planungs-Engine: Wochengenerierung, Evaluation und Lektionssuche."""

from .lookup import LessonIndex, find_lesson_by_id, get_all_lessons_from_method
from .generator import (
    ScheduleGenerator, generate_week_schedule, determine_cycle_week, week_start_for,
)
from .evaluation import (
    apply_evaluation, initialize_progress_tracker, evaluation_from_schedule,
    missed_lesson_ids, next_available_lessons,
)
from .exceptions import build_exception, affected_slot_ids
from .moves import validate_lesson_move

__all__ = [
    "LessonIndex",
    "find_lesson_by_id",
    "get_all_lessons_from_method",
    "ScheduleGenerator",
    "generate_week_schedule",
    "determine_cycle_week",
    "week_start_for",
    "apply_evaluation",
    "initialize_progress_tracker",
    "evaluation_from_schedule",
    "missed_lesson_ids",
    "next_available_lessons",
    "build_exception",
    "affected_slot_ids",
    "validate_lesson_move",
]
