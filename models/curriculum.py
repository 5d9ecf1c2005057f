"""Datenmodell für Lehrmethoden (Methodiek) und ihre Lektionen (Pydantic v2).

Aufbau einer Methode: Gruppen → Blöcke → Lektionen. Die Reihenfolge der
Lektionen im Lehrplan wird ausschließlich über ``sequence_order`` bestimmt.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class Lesson(BaseModel):
    """Eine einzelne Lektion einer Lehrmethode."""

    id: str
    sequence_order: int                     # Position im Lehrplan (eindeutig je Methode)
    title: str
    estimated_duration: int = Field(45, ge=0)  # Minuten
    lesson_number: Optional[int] = None     # Anzeige-Nummer, sonst sequence_order

    @property
    def number(self) -> int:
        """Lektionsnummer für die Anzeige."""
        return self.lesson_number if self.lesson_number is not None else self.sequence_order


class LessonBlock(BaseModel):
    """Ein Block (Kapitel) mit geordneten Lektionen."""

    name: str
    lessons: list[Lesson] = []


class LessonGroup(BaseModel):
    """Eine Gruppe (z.B. Jahrgang "Groep 4") mit geordneten Blöcken."""

    name: str
    blocks: list[LessonBlock] = []


class TeachingMethod(BaseModel):
    """Eine Lehrmethode für genau ein Fach (z.B. "Pluspunt" für Rekenen)."""

    id: str
    name: str
    subject: str
    groups: list[LessonGroup] = []

    @model_validator(mode='after')
    def _check_unique_sequence(self):
        seen: set[int] = set()
        for group in self.groups:
            for block in group.blocks:
                for lesson in block.lessons:
                    if lesson.sequence_order in seen:
                        raise ValueError(
                            f"Methode '{self.id}': sequence_order {lesson.sequence_order} "
                            f"ist mehrfach vergeben (Lektion '{lesson.id}')."
                        )
                    seen.add(lesson.sequence_order)
        return self

    @property
    def lesson_count(self) -> int:
        """Anzahl aller Lektionen über alle Gruppen und Blöcke."""
        return sum(len(b.lessons) for g in self.groups for b in g.blocks)


class EnrichedLesson(Lesson):
    """Lektion mit abgeleitetem Methoden-Kontext (wird nie gespeichert)."""

    method_id: str
    method_name: str
    subject: str
    block_name: str
