"""Kennzahlen einer geplanten Woche (gesamt und pro Fach)."""

from pydantic import BaseModel

from models.schedule import WeeklyScheduleInstance


class SubjectStats(BaseModel):
    total: int = 0
    backlog: int = 0
    new: int = 0
    completed: int = 0


class ScheduleStats(BaseModel):
    """Zählwerte einer WeeklyScheduleInstance."""

    total_lessons: int
    backlog_lessons: int
    new_lessons: int
    completed_lessons: int
    by_subject: dict[str, SubjectStats]

    @property
    def completion_rate(self) -> float:
        """Anteil abgeschlossener Lektionen (0.0–1.0)."""
        return self.completed_lessons / self.total_lessons if self.total_lessons else 0.0


def schedule_stats(schedule: WeeklyScheduleInstance) -> ScheduleStats:
    """Ein Durchlauf über alle geplanten Lektionen."""
    by_subject: dict[str, SubjectStats] = {}
    backlog = completed = 0

    for sl in schedule.scheduled_lessons:
        s = by_subject.setdefault(sl.subject, SubjectStats())
        s.total += 1
        if sl.is_backlog:
            s.backlog += 1
            backlog += 1
        else:
            s.new += 1
        if sl.completed:
            s.completed += 1
            completed += 1

    total = len(schedule.scheduled_lessons)
    return ScheduleStats(
        total_lessons=total,
        backlog_lessons=backlog,
        new_lessons=total - backlog,
        completed_lessons=completed,
        by_subject=by_subject,
    )
