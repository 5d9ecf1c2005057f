"""Evaluationsverarbeitung: Wochenevaluation → neuer ProgressTracker.

Der eingehende Tracker wird nie verändert; es werden neue MethodProgress-
Objekte aus den alten Werten plus Änderungen aufgebaut.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from models.curriculum import EnrichedLesson, TeachingMethod
from models.evaluation import CompletionCheck, Evaluation, ExtraProgress
from models.progress import CompletedLesson, MethodProgress, ProgressTracker
from models.schedule import ScheduleException, WeeklyScheduleInstance
from planner.lookup import LessonIndex, get_all_lessons_from_method

logger = logging.getLogger(__name__)


def initialize_progress_tracker(
    school_year: str, group: str, teaching_methods: list[TeachingMethod]
) -> ProgressTracker:
    """Neuer Tracker: ein Eintrag pro Methode, Position 0, leere Historie."""
    return ProgressTracker(
        school_year=school_year,
        group=group,
        method_progress=[
            MethodProgress(method_id=m.id, subject=m.subject)
            for m in teaching_methods
        ],
    )


class _ProgressDraft:
    """Veränderbarer Zwischenstand eines MethodProgress während apply()."""

    def __init__(self, method_id: str, subject: str, position: int,
                 completed: list[CompletedLesson]) -> None:
        self.method_id = method_id
        self.subject = subject
        self.position = position
        self.completed = list(completed)
        self.completed_ids = {cl.lesson_id for cl in completed}

    def build(self) -> MethodProgress:
        return MethodProgress(
            method_id=self.method_id,
            subject=self.subject,
            current_sequence_position=self.position,
            completed_lessons=self.completed,
        )


def apply_evaluation(
    progress_tracker: ProgressTracker,
    evaluation: Evaluation,
    teaching_methods: list[TeachingMethod],
) -> ProgressTracker:
    """Überträgt abgeschlossene Lektionen einer Evaluation in einen neuen Tracker.

    - completed + additional IDs werden vereinigt (Duplikate zählen einmal)
    - unbekannte IDs werden übersprungen
    - bereits abgeschlossene Lektionen werden ignoriert (idempotent)
    - current_sequence_position steigt nur, sinkt nie (Hochwassermarke)
    """
    index = LessonIndex(teaching_methods)

    drafts: list[_ProgressDraft] = []
    by_method: dict[str, _ProgressDraft] = {}
    for mp in progress_tracker.method_progress:
        draft = _ProgressDraft(
            mp.method_id, mp.subject, mp.current_sequence_position, mp.completed_lessons
        )
        drafts.append(draft)
        by_method.setdefault(mp.method_id, draft)

    for lesson_id in evaluation.all_completed_ids:
        lesson = index.get(lesson_id)
        if lesson is None:
            logger.debug(f"Lektion '{lesson_id}' nicht im Curriculum – übersprungen")
            continue

        draft = by_method.get(lesson.method_id)
        if draft is None:
            draft = _ProgressDraft(lesson.method_id, lesson.subject, 0, [])
            drafts.append(draft)
            by_method[lesson.method_id] = draft

        if lesson_id in draft.completed_ids:
            continue

        draft.completed.append(CompletedLesson(
            lesson_id=lesson_id,
            completed_date=evaluation.evaluation_date,
            week_number=evaluation.week_number,
            notes="",
        ))
        draft.completed_ids.add(lesson_id)
        if lesson.sequence_order > draft.position:
            draft.position = lesson.sequence_order

    return ProgressTracker(
        school_year=progress_tracker.school_year,
        group=progress_tracker.group,
        method_progress=[d.build() for d in drafts],
    )


# ─── Evaluation aus einer Woche ableiten ──────────────────────────────────────

def missed_lesson_ids(
    schedule: WeeklyScheduleInstance, completed_ids: Iterable[str]
) -> list[str]:
    """Geplante, aber nicht abgeschlossene Lektionen (ohne Duplikate)."""
    done = set(completed_ids)
    missed = [sl.lesson_id for sl in schedule.scheduled_lessons if sl.lesson_id not in done]
    return list(dict.fromkeys(missed))


def evaluation_from_schedule(
    schedule: WeeklyScheduleInstance,
    evaluation_date: date,
    completed_ids: Optional[Iterable[str]] = None,
    extra_ids: Iterable[str] = (),
    exceptions: Iterable[ScheduleException] = (),
) -> Evaluation:
    """Baut eine Evaluation für eine geplante Woche.

    Ohne ``completed_ids`` gelten die im Wochenplan als completed markierten
    Lektionen als abgeschlossen.
    """
    if completed_ids is None:
        completed = [sl.lesson_id for sl in schedule.scheduled_lessons if sl.completed]
    else:
        completed = list(completed_ids)
    completed = list(dict.fromkeys(completed))

    return Evaluation(
        weekly_schedule_id=schedule.id,
        week_number=schedule.week_number,
        evaluation_date=evaluation_date,
        completion_check=CompletionCheck(
            completed_lesson_ids=completed,
            missed_lesson_ids=missed_lesson_ids(schedule, completed),
        ),
        extra_progress=ExtraProgress(additional_completed_lesson_ids=list(extra_ids)),
        next_week_exceptions=list(exceptions),
    )


def next_available_lessons(
    progress_tracker: ProgressTracker,
    teaching_methods: list[TeachingMethod],
    subject: str,
    exclude_ids: Iterable[str] = (),
    limit: int = 10,
) -> list[EnrichedLesson]:
    """Vorschläge für Zusatz-Fortschritt: noch offene Lektionen eines Fachs."""
    progress = progress_tracker.for_subject(subject)
    if progress is None:
        return []
    method = next((m for m in teaching_methods if m.id == progress.method_id), None)
    if method is None:
        return []

    skip = progress.completed_ids | set(exclude_ids)
    open_lessons = [l for l in get_all_lessons_from_method(method) if l.id not in skip]
    return open_lessons[:limit]
