import uuid

from config.schema import (
    LoggingConfig,
    PlannerConfig,
    PlanningConfig,
    SchoolSettings,
    StorageConfig,
)
from models.timetable import (
    WEEKDAYS,
    CycleType,
    MasterSchedule,
    TimeSlot,
    Weekday,
    WeekTemplate,
)


# Vakken im niederländischen Basisonderwijs (Prüfung eigener Roosters)
DUTCH_SCHOOL_SUBJECTS: list[str] = [
    "Rekenen",
    "Taal",
    "Spelling",
    "Technisch lezen",
    "Begrijpend lezen",
    "Stillezen",
    "Schrijven",
    "Woordenschat",
    "Begrijpend luisteren",
    "Engels",
    "Gym",
    "Beeldende vorming",
    "Muziek",
    "Drama",
    "Wereldoriëntatie",
    "Natuur & Techniek",
    "Geschiedenis",
    "Aardrijkskunde",
    "Verkeer",
    "Kanjertraining",
    "Sociale vaardigheden",
    "Godsdienst/Levensbeschouwing",
    "Computational thinking",
    "Mediawijsheid",
    "Weekopening",
    "Weeksluiting",
    "Kringgesprek",
    "Pauze",
    "Eten",
]

# Tagesnamen (niederländisch) für Anzeige und Weektaak
DAY_NAMES: dict[Weekday, tuple[str, str]] = {
    Weekday.MONDAY: ("Maandag", "Ma"),
    Weekday.TUESDAY: ("Dinsdag", "Di"),
    Weekday.WEDNESDAY: ("Woensdag", "Wo"),
    Weekday.THURSDAY: ("Donderdag", "Do"),
    Weekday.FRIDAY: ("Vrijdag", "Vr"),
}


def unknown_subjects(master_schedule: MasterSchedule) -> list[str]:
    """Fach-Labels des Stammroosters (ohne Pausen), die nicht in DUTCH_SCHOOL_SUBJECTS stehen."""
    known = set(DUTCH_SCHOOL_SUBJECTS)
    templates = [master_schedule.week_a]
    if master_schedule.week_b is not None:
        templates.append(master_schedule.week_b)
    found: dict[str, None] = {}
    for template in templates:
        for subject in template.subjects:
            if subject not in known:
                found.setdefault(subject, None)
    return list(found)


def day_name(day: Weekday, short: bool = False) -> str:
    """Anzeigename eines Wochentags."""
    long_name, short_name = DAY_NAMES[day]
    return short_name if short else long_name


# (Beginn, Ende, Fach, Pause)
_CONTINUROOSTER_DAY: list[tuple[str, str, str, bool]] = [
    ("08:30", "09:00", "Weekopening", False),
    ("09:00", "10:00", "Rekenen", False),
    ("10:00", "10:15", "Pauze", True),
    ("10:15", "11:00", "Taal", False),
    ("11:00", "11:30", "Spelling", False),
    ("11:30", "12:00", "Technisch lezen", False),
    ("12:00", "12:15", "Eten", True),
    ("12:15", "12:30", "Pauze", True),
    ("12:30", "13:15", "Begrijpend lezen", False),
    ("13:15", "14:00", "Wereldoriëntatie", False),
    ("14:00", "14:15", "Weeksluiting", False),
]

# Tagesspezifische Abweichungen: Tag → {Beginn: Fach}
_DAY_OVERRIDES: dict[Weekday, dict[str, str]] = {
    Weekday.WEDNESDAY: {"12:30": "Gym"},
    Weekday.FRIDAY: {"12:30": "Beeldende vorming", "13:15": "Muziek"},
}


def default_continurooster(prefix: str = "") -> WeekTemplate:
    """Standard-Continurooster einer niederländischen Basisschool (08:30–14:15).

    Tagesraster:
      08:30 Weekopening      09:00 Rekenen          10:00 Pauze
      10:15 Taal             11:00 Spelling         11:30 Technisch lezen
      12:00 Eten             12:15 Pauze            12:30 Begrijpend lezen
      13:15 Wereldoriëntatie 14:00 Weeksluiting

    Mittwoch 12:30 Gym, Freitag 12:30 Beeldende vorming + 13:15 Muziek.
    Slot-IDs sind lesbar ("ma-02") und innerhalb der Vorlage eindeutig;
    ``prefix`` unterscheidet die IDs einer B-Woche.
    """
    days: dict[Weekday, list[TimeSlot]] = {}
    for day in WEEKDAYS:
        overrides = _DAY_OVERRIDES.get(day, {})
        short = DAY_NAMES[day][1].lower()
        days[day] = [
            TimeSlot(
                id=f"{prefix}{short}-{i:02d}",
                start_time=start,
                end_time=end,
                subject=overrides.get(start, subject),
                is_break=is_break,
            )
            for i, (start, end, subject, is_break) in enumerate(_CONTINUROOSTER_DAY, start=1)
        ]
    return WeekTemplate(days=days)


def default_master_schedule(
    school_year: str, cycle_type: CycleType = CycleType.WEEKLY
) -> MasterSchedule:
    """Stammrooster mit Continurooster; bei biweekly identische Woche B."""
    return MasterSchedule(
        id=str(uuid.uuid4()),
        school_year=school_year,
        cycle_type=cycle_type,
        week_a=default_continurooster(),
        week_b=default_continurooster(prefix="b-") if cycle_type == CycleType.BIWEEKLY else None,
        teachers={day: "" for day in WEEKDAYS},
    )


def default_planner_config() -> PlannerConfig:
    """Vollständige Default-Konfiguration."""
    return PlannerConfig(
        school=SchoolSettings(
            school_name="De Springplank",
            teacher_name="Juf Anna",
            group_name="Groep 4",
            school_year="2024-2025",
        ),
        storage=StorageConfig(),
        planning=PlanningConfig(),
        logging=LoggingConfig(),
    )
