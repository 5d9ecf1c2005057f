"""Konkrete Wochenplanung (WeeklyScheduleInstance) und Ausnahmen (Pydantic v2)."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from models.timetable import CycleWeek, Weekday, validate_hhmm


class ScheduleStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    EVALUATED = "evaluated"


class ScheduledLesson(BaseModel):
    """Eine Lektion, die einem konkreten Slot der Woche zugewiesen ist."""

    id: str
    day: Weekday
    slot_id: str
    lesson_id: str
    method_id: str
    subject: str
    lesson_title: str
    lesson_number: int
    block_name: str
    is_backlog: bool = False
    completed: bool = False


class ScheduleException(BaseModel):
    """Geplante Störung (z.B. Ausflug), die Slots für eine Woche sperrt."""

    id: str
    day: Weekday
    start_time: str
    end_time: str
    reason: str
    affected_slot_ids: list[str] = []

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        return validate_hhmm(v)


class WeeklyScheduleInstance(BaseModel):
    """Konkrete Woche: Lektionszuweisungen, Ausnahmen und Status."""

    id: str
    week_number: int = Field(ge=1)
    week_start_date: date               # Montag der Woche
    cycle_week: CycleWeek = CycleWeek.A
    scheduled_lessons: list[ScheduledLesson] = []
    exceptions: list[ScheduleException] = []
    status: ScheduleStatus = ScheduleStatus.DRAFT

    def lessons_for_subject(self, subject: str) -> list[ScheduledLesson]:
        """Alle Lektionen eines Fachs in Planungsreihenfolge."""
        return [sl for sl in self.scheduled_lessons if sl.subject == subject]

    def lessons_for_day(self, day: Weekday) -> list[ScheduledLesson]:
        """Alle Lektionen eines Tages in Planungsreihenfolge."""
        return [sl for sl in self.scheduled_lessons if sl.day == day]
