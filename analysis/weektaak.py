"""Weektaak: Aufgabenliste der Woche für die Schüler, gruppiert nach Fach oder Tag.

Eine Lektion, die mehrere Slots belegt (z.B. Übung an zwei Tagen), erscheint
in der Fach-Ansicht nur einmal; ``days`` sammelt alle Tage.
"""

from pydantic import BaseModel

from models.schedule import ScheduledLesson, WeeklyScheduleInstance
from models.timetable import WEEKDAYS, MasterSchedule, Weekday


class WeektaakTask(BaseModel):
    """Eine Aufgabe der Weektaak."""

    lesson_id: str
    lesson_title: str
    block_name: str
    lesson_number: int
    is_backlog: bool
    days: list[Weekday]


def derive_weektaak(schedule: WeeklyScheduleInstance) -> dict[str, list[WeektaakTask]]:
    """Fach → Aufgaben in Reihenfolge des ersten Auftretens im Wochenplan."""
    weektaak: dict[str, list[WeektaakTask]] = {}
    tasks_by_key: dict[tuple[str, str], WeektaakTask] = {}

    for sl in schedule.scheduled_lessons:
        tasks = weektaak.setdefault(sl.subject, [])
        key = (sl.subject, sl.lesson_id)
        task = tasks_by_key.get(key)
        if task is None:
            task = WeektaakTask(
                lesson_id=sl.lesson_id,
                lesson_title=sl.lesson_title,
                block_name=sl.block_name,
                lesson_number=sl.lesson_number,
                is_backlog=sl.is_backlog,
                days=[sl.day],
            )
            tasks_by_key[key] = task
            tasks.append(task)
        elif sl.day not in task.days:
            task.days.append(sl.day)

    return weektaak


def derive_weektaak_by_day(
    schedule: WeeklyScheduleInstance, master_schedule: MasterSchedule
) -> dict[Weekday, list[ScheduledLesson]]:
    """Tag → Lektionen, sortiert nach Beginn des Vorlage-Slots.

    Lektionen, deren Slot in der Vorlage nicht (mehr) existiert, stehen am
    Ende des Tages in ihrer ursprünglichen Reihenfolge.
    """
    template = master_schedule.template_for(schedule.cycle_week)
    start_by_slot = {
        slot.id: slot.start_time
        for day in WEEKDAYS
        for slot in template.slots_for(day)
    }

    by_day: dict[Weekday, list[ScheduledLesson]] = {}
    for day in WEEKDAYS:
        lessons = schedule.lessons_for_day(day)
        by_day[day] = sorted(
            lessons,
            key=lambda sl: (sl.slot_id not in start_by_slot, start_by_slot.get(sl.slot_id, "")),
        )
    return by_day
