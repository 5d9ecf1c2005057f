"""Tests für Weektaak-Ableitung, Wochenstatistik und Terminal-Renderer."""

from datetime import date

from analysis.statistics import schedule_stats
from analysis.weektaak import derive_weektaak, derive_weektaak_by_day
from export.tui_renderer import render_week_rows, render_weektaak_rows
from models.schedule import ScheduleException, ScheduledLesson, WeeklyScheduleInstance
from models.timetable import MasterSchedule, TimeSlot, Weekday, WeekTemplate


def _sl(lesson_id: str, subject: str, day: Weekday, slot_id: str,
        is_backlog: bool = False, completed: bool = False, number: int = 1) -> ScheduledLesson:
    return ScheduledLesson(
        id=f"sl-{lesson_id}-{slot_id}", day=day, slot_id=slot_id,
        lesson_id=lesson_id, method_id=subject.lower(), subject=subject,
        lesson_title=f"Les {number}", lesson_number=number, block_name="Blok 1",
        is_backlog=is_backlog, completed=completed,
    )


def _week(lessons: list[ScheduledLesson],
          exceptions: list[ScheduleException] | None = None) -> WeeklyScheduleInstance:
    return WeeklyScheduleInstance(
        id="w1", week_number=1, week_start_date=date(2024, 9, 2),
        scheduled_lessons=lessons, exceptions=exceptions or [],
    )


def _master() -> MasterSchedule:
    def day(prefix: str) -> list[TimeSlot]:
        return [
            TimeSlot(id=f"{prefix}-1", start_time="08:30", end_time="09:00", subject="Rekenen"),
            TimeSlot(id=f"{prefix}-2", start_time="09:00", end_time="09:45", subject="Taal"),
            TimeSlot(id=f"{prefix}-3", start_time="09:45", end_time="10:00", subject="Pauze",
                     is_break=True),
        ]
    return MasterSchedule(
        id="ms", school_year="2024-2025",
        week_a=WeekTemplate(days={Weekday.MONDAY: day("ma"), Weekday.TUESDAY: day("di")}),
    )


# ─── WEEKTAAK ─────────────────────────────────────────────────────────────────

class TestWeektaak:
    def test_lesson_on_several_days_listed_once(self):
        """Eine Lektion an drei Tagen ergibt eine Aufgabe mit drei Tagen."""
        week = _week([
            _sl("rek-1", "Rekenen", Weekday.MONDAY, "a"),
            _sl("rek-1", "Rekenen", Weekday.WEDNESDAY, "b"),
            _sl("rek-1", "Rekenen", Weekday.FRIDAY, "c"),
        ])
        weektaak = derive_weektaak(week)
        assert list(weektaak) == ["Rekenen"]
        assert len(weektaak["Rekenen"]) == 1
        assert weektaak["Rekenen"][0].days == [
            Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY,
        ]

    def test_same_day_twice_counts_once(self):
        week = _week([
            _sl("rek-1", "Rekenen", Weekday.MONDAY, "a"),
            _sl("rek-1", "Rekenen", Weekday.MONDAY, "b"),
        ])
        assert derive_weektaak(week)["Rekenen"][0].days == [Weekday.MONDAY]

    def test_first_encounter_order(self):
        """Reihenfolge folgt dem Wochenplan, nicht der Lektionsnummer."""
        week = _week([
            _sl("taal-1", "Taal", Weekday.MONDAY, "a"),
            _sl("rek-4", "Rekenen", Weekday.MONDAY, "b", is_backlog=True, number=4),
            _sl("rek-2", "Rekenen", Weekday.TUESDAY, "c", number=2),
        ])
        weektaak = derive_weektaak(week)
        assert list(weektaak) == ["Taal", "Rekenen"]
        assert [t.lesson_id for t in weektaak["Rekenen"]] == ["rek-4", "rek-2"]
        assert weektaak["Rekenen"][0].is_backlog is True
        assert weektaak["Rekenen"][0].lesson_number == 4

    def test_empty_schedule(self):
        assert derive_weektaak(_week([])) == {}

    def test_by_day_sorted_by_slot_start(self):
        week = _week([
            _sl("taal-1", "Taal", Weekday.MONDAY, "ma-2"),
            _sl("x-1", "Gym", Weekday.MONDAY, "verwijderd"),
            _sl("rek-1", "Rekenen", Weekday.MONDAY, "ma-1"),
            _sl("rek-2", "Rekenen", Weekday.TUESDAY, "di-1"),
        ])
        by_day = derive_weektaak_by_day(week, _master())
        assert list(by_day) == [
            Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY,
            Weekday.THURSDAY, Weekday.FRIDAY,
        ]
        assert [sl.lesson_id for sl in by_day[Weekday.MONDAY]] == ["rek-1", "taal-1", "x-1"]
        assert [sl.lesson_id for sl in by_day[Weekday.TUESDAY]] == ["rek-2"]
        assert by_day[Weekday.FRIDAY] == []


# ─── STATISTIK ────────────────────────────────────────────────────────────────

class TestScheduleStats:
    def test_counts_per_subject(self):
        week = _week([
            _sl("rek-1", "Rekenen", Weekday.MONDAY, "a", is_backlog=True, completed=True),
            _sl("rek-2", "Rekenen", Weekday.TUESDAY, "b"),
            _sl("taal-1", "Taal", Weekday.MONDAY, "c", completed=True),
        ])
        stats = schedule_stats(week)
        assert stats.total_lessons == 3
        assert stats.backlog_lessons == 1
        assert stats.new_lessons == 2
        assert stats.completed_lessons == 2
        assert stats.by_subject["Rekenen"].total == 2
        assert stats.by_subject["Rekenen"].backlog == 1
        assert stats.by_subject["Rekenen"].new == 1
        assert stats.by_subject["Taal"].completed == 1
        assert abs(stats.completion_rate - 2 / 3) < 1e-9

    def test_empty_week(self):
        stats = schedule_stats(_week([]))
        assert stats.total_lessons == 0
        assert stats.by_subject == {}
        assert stats.completion_rate == 0.0


# ─── RENDERER ─────────────────────────────────────────────────────────────────

class TestRenderer:
    def test_week_rows_mark_states(self):
        exc = ScheduleException(id="e", day=Weekday.TUESDAY, start_time="09:00",
                                end_time="09:45", reason="Uitje", affected_slot_ids=["di-2"])
        week = _week([_sl("rek-1", "Rekenen", Weekday.MONDAY, "ma-1", completed=True)], [exc])
        rows = render_week_rows(week, _master())

        assert [r[0] for r in rows] == ["08:30–09:00", "09:00–09:45", "09:45–10:00"]
        assert rows[0][1].startswith("✓ Rekenen")
        assert rows[0][2] == "Rekenen\n—"
        assert rows[1][2] == "✗ Taal"
        assert rows[2][1] == "(Pauze)"
        assert rows[0][3] == ""

    def test_weektaak_rows(self):
        week = _week([
            _sl("rek-1", "Rekenen", Weekday.MONDAY, "a", is_backlog=True),
            _sl("rek-1", "Rekenen", Weekday.TUESDAY, "b", is_backlog=True),
            _sl("rek-2", "Rekenen", Weekday.WEDNESDAY, "c", number=2),
        ])
        rows = render_weektaak_rows(derive_weektaak(week))
        assert rows == [
            ["Rekenen", "↺ Les 1", "Blok 1", "Ma, Di"],
            ["", "Les 2", "Blok 1", "Wo"],
        ]
