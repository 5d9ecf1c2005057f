"""Datenmodell für das Stammrooster (wiederkehrende Wochenvorlage, Pydantic v2)."""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"


# Reihenfolge Mo–Fr, bestimmt die Füllreihenfolge der Slots
WEEKDAYS: list[Weekday] = list(Weekday)


class CycleType(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"


class CycleWeek(str, Enum):
    A = "A"
    B = "B"


def validate_hhmm(value: str) -> str:
    """Prüft eine Uhrzeit im Format "HH:MM" (24h, mit führender Null)."""
    if not _TIME_RE.match(value):
        raise ValueError(f"Ungültige Uhrzeit '{value}' (erwartet HH:MM, z.B. 08:30)")
    return value


class TimeSlot(BaseModel):
    """Ein Zeitslot der Wochenvorlage, einem Fach zugeordnet oder Pause."""

    id: str
    start_time: str   # "HH:MM", lexikographisch vergleichbar
    end_time: str
    subject: str      # Fach-Label, bei Pausen z.B. "Pauze"
    is_break: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        return validate_hhmm(v)

    @model_validator(mode='after')
    def _check_order(self):
        if self.end_time <= self.start_time:
            raise ValueError(
                f"Slot '{self.id}': Ende {self.end_time} liegt nicht nach Beginn {self.start_time}"
            )
        return self


class WeekTemplate(BaseModel):
    """Wochenvorlage: Wochentag → geordnete Liste von Zeitslots."""

    days: dict[Weekday, list[TimeSlot]] = {}

    @model_validator(mode='after')
    def _check_unique_slot_ids(self):
        seen: set[str] = set()
        for slots in self.days.values():
            for slot in slots:
                if slot.id in seen:
                    raise ValueError(f"Slot-ID '{slot.id}' ist in der Wochenvorlage doppelt.")
                seen.add(slot.id)
        return self

    def slots_for(self, day: Weekday) -> list[TimeSlot]:
        """Slots eines Tages (leere Liste für nicht belegte Tage)."""
        return self.days.get(day, [])

    def find_slot(self, slot_id: str) -> Optional[TimeSlot]:
        """Sucht einen Slot über alle Tage."""
        for day in WEEKDAYS:
            for slot in self.slots_for(day):
                if slot.id == slot_id:
                    return slot
        return None

    @property
    def subjects(self) -> list[str]:
        """Alle Fächer der Vorlage (ohne Pausen) in Reihenfolge des ersten Auftretens."""
        seen: dict[str, None] = {}
        for day in WEEKDAYS:
            for slot in self.slots_for(day):
                if not slot.is_break:
                    seen.setdefault(slot.subject, None)
        return list(seen)


class MasterSchedule(BaseModel):
    """Stammrooster: eine (weekly) oder zwei (biweekly, A/B) Wochenvorlagen."""

    id: str
    school_year: str                        # "2024-2025"
    cycle_type: CycleType = CycleType.WEEKLY
    week_a: WeekTemplate
    week_b: Optional[WeekTemplate] = None
    teachers: dict[Weekday, str] = {}       # Lehrkraft pro Tag (optional)

    def template_for(self, cycle_week: CycleWeek) -> WeekTemplate:
        """Vorlage zur Zykluswoche; fehlt Woche B, gilt Woche A."""
        if cycle_week == CycleWeek.B and self.week_b is not None:
            return self.week_b
        return self.week_a
