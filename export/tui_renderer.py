"""Renderer für die Terminal-Anzeige von Stammrooster, Woche und Weektaak.

Liefert reine Tabellenzeilen (list[list[str]]); die CLI setzt sie in
Rich-Tabellen um.
"""

from typing import TYPE_CHECKING

from config.defaults import day_name
from export.helpers import build_time_rows, format_lesson
from models.timetable import WEEKDAYS

if TYPE_CHECKING:
    from analysis.weektaak import WeektaakTask
    from models.schedule import WeeklyScheduleInstance
    from models.timetable import WeekTemplate, MasterSchedule


def render_template_rows(template: "WeekTemplate") -> list[list[str]]:
    """Zeilen für die Wochenvorlage: [Zeit, Ma, Di, Wo, Do, Vr].

    Pausen erscheinen als "(Fach)".
    """
    rows: list[list[str]] = []
    for start, end in build_time_rows(template):
        cells = [f"{start}–{end}"]
        for day in WEEKDAYS:
            slot = next(
                (s for s in template.slots_for(day)
                 if s.start_time == start and s.end_time == end),
                None,
            )
            if slot is None:
                cells.append("")
            elif slot.is_break:
                cells.append(f"({slot.subject})")
            else:
                cells.append(slot.subject)
        rows.append(cells)
    return rows


def render_week_rows(
    schedule: "WeeklyScheduleInstance", master_schedule: "MasterSchedule"
) -> list[list[str]]:
    """Zeilen für eine geplante Woche: [Zeit, Ma, Di, Wo, Do, Vr].

    Leere Fach-Slots zeigen "—", gesperrte Slots (Ausnahmen) "✗".
    """
    template = master_schedule.template_for(schedule.cycle_week)
    by_slot = {sl.slot_id: sl for sl in schedule.scheduled_lessons}
    blocked = {
        (exc.day, slot_id) for exc in schedule.exceptions for slot_id in exc.affected_slot_ids
    }

    rows: list[list[str]] = []
    for start, end in build_time_rows(template):
        cells = [f"{start}–{end}"]
        for day in WEEKDAYS:
            slot = next(
                (s for s in template.slots_for(day)
                 if s.start_time == start and s.end_time == end),
                None,
            )
            if slot is None:
                cells.append("")
            elif slot.is_break:
                cells.append(f"({slot.subject})")
            elif (day, slot.id) in blocked:
                cells.append(f"✗ {slot.subject}")
            elif slot.id in by_slot:
                cells.append(format_lesson(by_slot[slot.id]))
            else:
                cells.append(f"{slot.subject}\n—")
        rows.append(cells)
    return rows


def render_weektaak_rows(weektaak: dict[str, list["WeektaakTask"]]) -> list[list[str]]:
    """Zeilen für die Weektaak nach Fach: [Fach, Lektion, Block, Tage]."""
    rows: list[list[str]] = []
    for subject, tasks in weektaak.items():
        for i, task in enumerate(tasks):
            title = f"↺ {task.lesson_title}" if task.is_backlog else task.lesson_title
            days = ", ".join(day_name(d, short=True) for d in task.days)
            rows.append([subject if i == 0 else "", title, task.block_name, days])
    return rows
