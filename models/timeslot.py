"""Verfügbarer Slot einer konkreten Woche (Slot + Wochentag)."""

from dataclasses import dataclass

from models.timetable import Weekday

_DAY_SHORT = {
    Weekday.MONDAY: "Ma",
    Weekday.TUESDAY: "Di",
    Weekday.WEDNESDAY: "Wo",
    Weekday.THURSDAY: "Do",
    Weekday.FRIDAY: "Vr",
}


@dataclass(frozen=True)
class AvailableSlot:
    """Ein belegbarer Unterrichtsslot, annotiert mit seinem Wochentag.

    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    """

    day: Weekday
    slot_id: str
    start_time: str
    end_time: str
    subject: str

    @property
    def day_name(self) -> str:
        """Abgekürzter (niederländischer) Tagesname."""
        return _DAY_SHORT[self.day]

    def __repr__(self) -> str:
        return f"AvailableSlot({self.day_name} {self.start_time}, {self.subject})"

    def __str__(self) -> str:
        return f"{self.day_name} {self.start_time}–{self.end_time}"
