"""Prüfung manueller Verschiebungen einer geplanten Lektion."""

from models.schedule import ScheduledLesson
from models.timetable import TimeSlot


def validate_lesson_move(lesson: ScheduledLesson, slot: TimeSlot) -> bool:
    """True wenn die Lektion in den Ziel-Slot verschoben werden darf.

    Erlaubt nur Slots desselben Fachs; Pausen sind nie belegbar.
    """
    if lesson.subject != slot.subject:
        return False
    if slot.is_break:
        return False
    return True
