"""Methodenübergreifende Suche nach Lektionen.

Statt für jede Anfrage Methoden → Gruppen → Blöcke → Lektionen zu durchlaufen,
wird einmal pro Methoden-Snapshot ein flacher Index lesson_id → EnrichedLesson
aufgebaut.
"""

from typing import Iterable, Optional

from models.curriculum import EnrichedLesson, TeachingMethod


def _enrich(method: TeachingMethod) -> Iterable[EnrichedLesson]:
    """Alle Lektionen einer Methode in deklarierter Reihenfolge, angereichert."""
    for group in method.groups:
        for block in group.blocks:
            for lesson in block.lessons:
                yield EnrichedLesson(
                    **lesson.model_dump(),
                    method_id=method.id,
                    method_name=method.name,
                    subject=method.subject,
                    block_name=block.name,
                )


def get_all_lessons_from_method(method: TeachingMethod) -> list[EnrichedLesson]:
    """Alle Lektionen einer Methode, aufsteigend nach sequence_order.

    Kanonische Reihenfolge für die Bestimmung der "nächsten" Lektion.
    """
    return sorted(_enrich(method), key=lambda l: l.sequence_order)


class LessonIndex:
    """Flacher Index lesson_id → EnrichedLesson über alle Methoden.

    Lektions-IDs müssen global eindeutig sein; bei Duplikaten gewinnt das
    erste Vorkommen (wie bei einer linearen Suche).
    """

    def __init__(self, teaching_methods: list[TeachingMethod]) -> None:
        self._methods = {m.id: m for m in teaching_methods}
        self._lessons: dict[str, EnrichedLesson] = {}
        for method in teaching_methods:
            for lesson in _enrich(method):
                self._lessons.setdefault(lesson.id, lesson)

    def get(self, lesson_id: str) -> Optional[EnrichedLesson]:
        return self._lessons.get(lesson_id)

    def method(self, method_id: str) -> Optional[TeachingMethod]:
        return self._methods.get(method_id)

    def resolve(self, lesson_ids: Iterable[str]) -> list[EnrichedLesson]:
        """Löst IDs auf; unbekannte IDs werden übersprungen."""
        return [l for l in (self._lessons.get(i) for i in lesson_ids) if l is not None]

    def __contains__(self, lesson_id: str) -> bool:
        return lesson_id in self._lessons

    def __len__(self) -> int:
        return len(self._lessons)


def find_lesson_by_id(
    lesson_id: str, teaching_methods: list[TeachingMethod]
) -> Optional[EnrichedLesson]:
    """Sucht eine Lektion über alle Methoden (None wenn nicht gefunden).

    Für viele Abfragen auf demselben Methoden-Snapshot LessonIndex verwenden.
    """
    for method in teaching_methods:
        for lesson in _enrich(method):
            if lesson.id == lesson_id:
                return lesson
    return None
