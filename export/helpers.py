"""Gemeinsame Hilfsfunktionen für die Terminal-Ausgabe."""

from models.schedule import ScheduledLesson
from models.timetable import WEEKDAYS, WeekTemplate


def build_time_rows(template: WeekTemplate) -> list[tuple[str, str]]:
    """Alle (Beginn, Ende)-Paare der Vorlage über alle Tage, zeitlich sortiert."""
    rows = {
        (slot.start_time, slot.end_time)
        for day in WEEKDAYS
        for slot in template.slots_for(day)
    }
    return sorted(rows)


def format_lesson(lesson: ScheduledLesson, with_block: bool = False) -> str:
    """Zelleninhalt für eine geplante Lektion.

    Backlog-Lektionen werden mit "↺" markiert, abgeschlossene mit "✓".
    """
    marker = ""
    if lesson.completed:
        marker = "✓ "
    elif lesson.is_backlog:
        marker = "↺ "
    text = f"{marker}{lesson.subject}\n{lesson.lesson_title}"
    if with_block:
        text += f"\n[{lesson.block_name}]"
    return text
