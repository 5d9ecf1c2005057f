"""Wochenplan-Generator: expandiert das Stammrooster in eine konkrete Woche.

Ablauf pro Woche:
  1. Zykluswoche bestimmen (weekly → A; biweekly → A ungerade, B gerade)
  2. Verfügbare Slots: Pausen und durch Ausnahmen gesperrte Slots entfallen
  3. Slots nach Fach gruppieren (Reihenfolge Tag, dann Slot)
  4. Pro Fach: zuerst Backlog (verpasste Lektionen), dann die nächsten
     Lektionen der Methode ab current_sequence_position
"""

import logging
import uuid
from datetime import date, timedelta
from typing import Optional

from models.curriculum import EnrichedLesson, TeachingMethod
from models.evaluation import Evaluation
from models.progress import ProgressTracker
from models.schedule import (
    ScheduleException, ScheduledLesson, ScheduleStatus, WeeklyScheduleInstance,
)
from models.timeslot import AvailableSlot
from models.timetable import WEEKDAYS, CycleType, CycleWeek, MasterSchedule, WeekTemplate
from planner.lookup import LessonIndex, get_all_lessons_from_method

logger = logging.getLogger(__name__)


def week_start_for(day: date) -> date:
    """Montag der Woche, in der ``day`` liegt."""
    return day - timedelta(days=day.weekday())


def determine_cycle_week(master_schedule: MasterSchedule, week_number: int) -> CycleWeek:
    """A/B-Woche zur Wochennummer."""
    if master_schedule.cycle_type == CycleType.WEEKLY:
        return CycleWeek.A
    return CycleWeek.A if week_number % 2 == 1 else CycleWeek.B


def get_available_slots(
    template: WeekTemplate, exceptions: list[ScheduleException]
) -> list[AvailableSlot]:
    """Belegbare Slots Mo–Fr ohne Pausen und ohne durch Ausnahmen gesperrte Slots."""
    blocked = {
        (exc.day, slot_id)
        for exc in exceptions
        for slot_id in exc.affected_slot_ids
    }
    available: list[AvailableSlot] = []
    for day in WEEKDAYS:
        for slot in template.slots_for(day):
            if slot.is_break or (day, slot.id) in blocked:
                continue
            available.append(AvailableSlot(
                day=day,
                slot_id=slot.id,
                start_time=slot.start_time,
                end_time=slot.end_time,
                subject=slot.subject,
            ))
    return available


def group_slots_by_subject(slots: list[AvailableSlot]) -> dict[str, list[AvailableSlot]]:
    """Fach → Slots; Fächer und Slots in Reihenfolge des ersten Auftretens."""
    grouped: dict[str, list[AvailableSlot]] = {}
    for slot in slots:
        grouped.setdefault(slot.subject, []).append(slot)
    return grouped


def get_backlog_lessons_for_subject(
    missed_lesson_ids: list[str], subject: str, index: LessonIndex
) -> list[EnrichedLesson]:
    """Verpasste Lektionen eines Fachs, aufsteigend nach sequence_order."""
    unique_ids = list(dict.fromkeys(missed_lesson_ids))
    backlog = [l for l in index.resolve(unique_ids) if l.subject == subject]
    return sorted(backlog, key=lambda l: l.sequence_order)


def get_next_lessons_for_subject(
    progress_tracker: ProgressTracker,
    index: LessonIndex,
    subject: str,
    count: int,
) -> list[EnrichedLesson]:
    """Die nächsten ``count`` Lektionen nach current_sequence_position.

    Backlog-Lektionen derselben Woche werden nicht herausgefiltert; eine
    verpasste Lektion kann also zusätzlich als neue Lektion erscheinen.
    """
    if count <= 0:
        return []

    progress = progress_tracker.for_subject(subject)
    if progress is None:
        logger.debug(f"Kein Fortschrittseintrag für Fach '{subject}' – Slots bleiben leer")
        return []

    method = index.method(progress.method_id)
    if method is None:
        logger.debug(
            f"Methode '{progress.method_id}' für Fach '{subject}' nicht gefunden – Slots bleiben leer"
        )
        return []

    position = progress.current_sequence_position
    upcoming = [l for l in get_all_lessons_from_method(method) if l.sequence_order > position]
    return upcoming[:count]


class ScheduleGenerator:
    """Erzeugt WeeklyScheduleInstances aus Stammrooster, Methoden und Fortschritt.

    Verwendung:
        generator = ScheduleGenerator(master_schedule, teaching_methods)
        week = generator.generate(tracker, evaluation, week_number=2,
                                  week_start_date=date(2024, 9, 9))
    """

    def __init__(
        self,
        master_schedule: MasterSchedule,
        teaching_methods: list[TeachingMethod],
    ) -> None:
        self.master_schedule = master_schedule
        self.teaching_methods = teaching_methods
        self._index = LessonIndex(teaching_methods)

    def generate(
        self,
        progress_tracker: ProgressTracker,
        evaluation: Optional[Evaluation],
        week_number: int,
        week_start_date: date,
    ) -> WeeklyScheduleInstance:
        """Generiert die Woche ``week_number`` als Entwurf (status=draft)."""
        cycle_week = determine_cycle_week(self.master_schedule, week_number)
        template = self.master_schedule.template_for(cycle_week)
        exceptions = list(evaluation.next_week_exceptions) if evaluation else []
        missed_ids = evaluation.completion_check.missed_lesson_ids if evaluation else []

        slots_by_subject = group_slots_by_subject(get_available_slots(template, exceptions))

        scheduled: list[ScheduledLesson] = []
        backlog_total = 0
        for subject, slots in slots_by_subject.items():
            backlog = get_backlog_lessons_for_subject(missed_ids, subject, self._index)
            upcoming = get_next_lessons_for_subject(
                progress_tracker, self._index, subject, len(slots) - len(backlog)
            )
            lessons = backlog + upcoming

            for position, (slot, lesson) in enumerate(zip(slots, lessons)):
                scheduled.append(ScheduledLesson(
                    id=str(uuid.uuid4()),
                    day=slot.day,
                    slot_id=slot.slot_id,
                    lesson_id=lesson.id,
                    method_id=lesson.method_id,
                    subject=subject,
                    lesson_title=lesson.title,
                    lesson_number=lesson.number,
                    block_name=lesson.block_name,
                    is_backlog=position < len(backlog),
                    completed=False,
                ))
            backlog_total += min(len(backlog), len(slots))

            if len(lessons) < len(slots):
                logger.debug(
                    f"Fach '{subject}': {len(slots) - len(lessons)} von {len(slots)} Slots bleiben leer"
                )

        logger.info(
            f"Woche {week_number} ({cycle_week.value}): {len(scheduled)} Lektionen geplant, "
            f"davon {backlog_total} Backlog"
        )

        return WeeklyScheduleInstance(
            id=str(uuid.uuid4()),
            week_number=week_number,
            week_start_date=week_start_date,
            cycle_week=cycle_week,
            scheduled_lessons=scheduled,
            exceptions=exceptions,
            status=ScheduleStatus.DRAFT,
        )


def generate_week_schedule(
    master_schedule: MasterSchedule,
    teaching_methods: list[TeachingMethod],
    progress_tracker: ProgressTracker,
    evaluation: Optional[Evaluation],
    week_number: int,
    week_start_date: date,
) -> WeeklyScheduleInstance:
    """Funktionale Kurzform von ScheduleGenerator.generate()."""
    generator = ScheduleGenerator(master_schedule, teaching_methods)
    return generator.generate(progress_tracker, evaluation, week_number, week_start_date)
