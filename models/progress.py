"""Lernfortschritt pro Fach/Methode (Pydantic v2)."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class CompletedLesson(BaseModel):
    """Eintrag in der Historie abgeschlossener Lektionen."""

    lesson_id: str
    completed_date: date
    week_number: int
    notes: str = ""


class MethodProgress(BaseModel):
    """Cursor einer Methode: höchste je abgeschlossene sequence_order + Historie."""

    method_id: str
    subject: str
    current_sequence_position: int = Field(0, ge=0)
    completed_lessons: list[CompletedLesson] = []

    @property
    def completed_ids(self) -> set[str]:
        return {cl.lesson_id for cl in self.completed_lessons}


class ProgressTracker(BaseModel):
    """Lernfortschritt einer Klasse (Groep) für ein Schuljahr."""

    school_year: str
    group: str
    method_progress: list[MethodProgress] = []

    def for_subject(self, subject: str) -> Optional[MethodProgress]:
        """Erster Fortschrittseintrag zum Fach (None wenn nicht vorhanden)."""
        return next((mp for mp in self.method_progress if mp.subject == subject), None)

    def for_method(self, method_id: str) -> Optional[MethodProgress]:
        """Erster Fortschrittseintrag zur Methode (None wenn nicht vorhanden)."""
        return next((mp for mp in self.method_progress if mp.method_id == method_id), None)
