"""Wochenevaluation: Eingabe für Fortschritts-Update und nächste Planung."""

from datetime import date

from pydantic import BaseModel, Field

from models.schedule import ScheduleException


class CompletionCheck(BaseModel):
    completed_lesson_ids: list[str] = []
    missed_lesson_ids: list[str] = []


class ExtraProgress(BaseModel):
    additional_completed_lesson_ids: list[str] = []


class Evaluation(BaseModel):
    """Evaluation einer Woche.

    Wird genau einmal auf den ProgressTracker angewendet und speist genau
    eine Generierung der Folgewoche (Backlog + Ausnahmen).
    """

    weekly_schedule_id: str
    week_number: int
    evaluation_date: date
    completion_check: CompletionCheck = Field(default_factory=CompletionCheck)
    extra_progress: ExtraProgress = Field(default_factory=ExtraProgress)
    next_week_exceptions: list[ScheduleException] = []

    @property
    def all_completed_ids(self) -> list[str]:
        """Abgeschlossene + zusätzlich erledigte IDs, Duplikate zusammengefasst."""
        ids = (
            self.completion_check.completed_lesson_ids
            + self.extra_progress.additional_completed_lesson_ids
        )
        return list(dict.fromkeys(ids))
