"""Ausnahmen für die Folgewoche (z.B. Ausflug, Studientag)."""

import uuid

from models.schedule import ScheduleException
from models.timetable import CycleWeek, MasterSchedule, Weekday, validate_hhmm


def affected_slot_ids(
    master_schedule: MasterSchedule,
    cycle_week: CycleWeek,
    day: Weekday,
    start_time: str,
    end_time: str,
) -> list[str]:
    """Slots des Tages, die vollständig im Zeitfenster [start, end] liegen."""
    template = master_schedule.template_for(cycle_week)
    return [
        slot.id
        for slot in template.slots_for(day)
        if slot.start_time >= start_time and slot.end_time <= end_time
    ]


def build_exception(
    master_schedule: MasterSchedule,
    cycle_week: CycleWeek,
    day: Weekday,
    start_time: str,
    end_time: str,
    reason: str,
) -> ScheduleException:
    """Erzeugt eine Ausnahme inkl. der betroffenen Slot-IDs."""
    validate_hhmm(start_time)
    validate_hhmm(end_time)
    if end_time <= start_time:
        raise ValueError(f"Zeitfenster {start_time}–{end_time}: Ende muss nach Beginn liegen")
    if not reason.strip():
        raise ValueError("Für eine Ausnahme muss ein Grund angegeben werden")

    return ScheduleException(
        id=str(uuid.uuid4()),
        day=day,
        start_time=start_time,
        end_time=end_time,
        reason=reason.strip(),
        affected_slot_ids=affected_slot_ids(
            master_schedule, cycle_week, day, start_time, end_time
        ),
    )
