"""Tests für Konfiguration, Stammrooster-Defaults und Datenmodelle."""

from pathlib import Path

import pytest

from config.defaults import (
    DAY_NAMES,
    day_name,
    default_continurooster,
    default_master_schedule,
    default_planner_config,
    unknown_subjects,
)
from config.manager import ConfigManager
from config.schema import LoggingConfig, PlannerConfig, PlanningConfig, SchoolSettings
from models.timetable import (
    WEEKDAYS, CycleType, CycleWeek, MasterSchedule, TimeSlot, Weekday, WeekTemplate,
)


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_planner_config_valid(self):
        config = default_planner_config()
        assert config.school.school_name == "De Springplank"
        assert config.school.group_name == "Groep 4"
        assert config.storage.fallback_to_demo is True
        assert config.planning.cycle_type == CycleType.WEEKLY
        assert config.logging.level == "INFO"
        assert config.methods_path is None
        assert config.master_schedule_path is None

    def test_continurooster_structure(self):
        """Fünf Tage mit je 11 Slots, davon 3 Pausen."""
        template = default_continurooster()
        assert list(template.days) == WEEKDAYS
        for day in WEEKDAYS:
            slots = template.slots_for(day)
            assert len(slots) == 11
            assert sum(1 for s in slots if s.is_break) == 3
            assert slots[0].start_time == "08:30"
            assert slots[-1].end_time == "14:15"

    def test_continurooster_day_overrides(self):
        template = default_continurooster()
        wednesday = {s.start_time: s.subject for s in template.slots_for(Weekday.WEDNESDAY)}
        friday = {s.start_time: s.subject for s in template.slots_for(Weekday.FRIDAY)}
        monday = {s.start_time: s.subject for s in template.slots_for(Weekday.MONDAY)}
        assert wednesday["12:30"] == "Gym"
        assert friday["12:30"] == "Beeldende vorming"
        assert friday["13:15"] == "Muziek"
        assert monday["12:30"] == "Begrijpend lezen"

    def test_continurooster_slot_ids(self):
        template = default_continurooster()
        assert template.slots_for(Weekday.MONDAY)[1].id == "ma-02"
        assert default_continurooster(prefix="b-").slots_for(Weekday.FRIDAY)[0].id == "b-vr-01"
        assert template.find_slot("wo-09").subject == "Gym"
        assert template.find_slot("xx-01") is None

    def test_master_schedule_biweekly_has_week_b(self):
        weekly = default_master_schedule("2024-2025")
        biweekly = default_master_schedule("2024-2025", CycleType.BIWEEKLY)
        assert weekly.week_b is None
        assert biweekly.week_b is not None
        assert biweekly.template_for(CycleWeek.B).slots_for(Weekday.MONDAY)[0].id == "b-ma-01"
        assert set(biweekly.teachers) == set(WEEKDAYS)

    def test_day_names(self):
        assert day_name(Weekday.MONDAY) == "Maandag"
        assert day_name(Weekday.WEDNESDAY, short=True) == "Wo"
        assert set(DAY_NAMES) == set(WEEKDAYS)


# ─── VALIDIERUNG ──────────────────────────────────────────────────────────────

class TestValidation:
    def test_school_year_format(self):
        assert SchoolSettings(school_year="2025-2026").school_year == "2025-2026"
        with pytest.raises(ValueError):
            SchoolSettings(school_year="2025")
        with pytest.raises(ValueError):
            SchoolSettings(school_year="2025-2027")

    def test_logging_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValueError):
            LoggingConfig(level="LAUT")

    def test_suggestion_limit_bounds(self):
        with pytest.raises(ValueError):
            PlanningConfig(extra_suggestion_limit=0)

    def test_time_slot_hhmm(self):
        with pytest.raises(ValueError):
            TimeSlot(id="x", start_time="9:00", end_time="10:00", subject="Rekenen")
        with pytest.raises(ValueError):
            TimeSlot(id="x", start_time="09:00", end_time="25:00", subject="Rekenen")

    def test_time_slot_end_after_start(self):
        with pytest.raises(ValueError):
            TimeSlot(id="x", start_time="10:00", end_time="09:00", subject="Rekenen")

    def test_duplicate_slot_ids_in_template(self):
        """Slot-IDs müssen über alle Tage einer Vorlage eindeutig sein."""
        slot = TimeSlot(id="dup", start_time="09:00", end_time="10:00", subject="Rekenen")
        with pytest.raises(ValueError):
            WeekTemplate(days={Weekday.MONDAY: [slot], Weekday.TUESDAY: [slot]})

    def test_week_b_fallback(self):
        template = default_continurooster()
        master = MasterSchedule(id="m", school_year="2024-2025",
                                cycle_type=CycleType.BIWEEKLY, week_a=template)
        assert master.template_for(CycleWeek.B) is template


# ─── KONFIGURATIONSMANAGER ────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Speichern und Laden ergibt identische Config."""
        config = default_planner_config()
        config.planning.cycle_type = CycleType.BIWEEKLY
        mgr = ConfigManager()
        mgr.CONFIG_DIR = tmp_path
        mgr.DEFAULT_CONFIG = tmp_path / "planner_config.yaml"

        saved = mgr.save(config)
        assert saved.exists()
        text = saved.read_text(encoding="utf-8")
        assert "Weekplanner" in text
        assert "relativ zum Arbeitsverzeichnis" in text

        loaded = mgr.load()
        assert loaded == config

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager()
        mgr.CONFIG_DIR = tmp_path
        mgr.DEFAULT_CONFIG = tmp_path / "planner_config.yaml"
        assert mgr.first_run_check() is True
        mgr.save(default_planner_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ConfigManager().load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("school:\n  school_year: morgen\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager().load(path)

    def test_load_or_default_without_file(self, tmp_path: Path):
        config = ConfigManager().load_or_default(tmp_path / "nope.yaml")
        assert config == default_planner_config()

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "partial.yaml"
        path.write_text("school:\n  group_name: Groep 5\n", encoding="utf-8")
        config = ConfigManager().load(path)
        assert isinstance(config, PlannerConfig)
        assert config.school.group_name == "Groep 5"
        assert config.storage.data_path == "output/planner_data.json"

    def test_master_schedule_path_roundtrip(self, tmp_path: Path):
        config = default_planner_config().model_copy(
            update={"master_schedule_path": "rooster/eigen.json"}
        )
        mgr = ConfigManager()
        path = mgr.save(config, tmp_path / "planner_config.yaml")
        assert mgr.load(path).master_schedule_path == "rooster/eigen.json"


# ─── FÄCHERLISTE ──────────────────────────────────────────────────────────────

class TestKnownSubjects:
    def test_default_rooster_has_only_known_subjects(self):
        assert unknown_subjects(default_master_schedule("2024-2025", CycleType.BIWEEKLY)) == []

    def test_unknown_labels_reported_once(self):
        slots = [
            TimeSlot(id="a", start_time="08:30", end_time="09:00", subject="Rekenen"),
            TimeSlot(id="b", start_time="09:00", end_time="09:30", subject="Knutselen"),
            TimeSlot(id="c", start_time="09:30", end_time="09:45", subject="Speelkwartier",
                     is_break=True),
        ]
        master = MasterSchedule(
            id="m", school_year="2024-2025", cycle_type=CycleType.BIWEEKLY,
            week_a=WeekTemplate(days={Weekday.MONDAY: slots}),
            week_b=WeekTemplate(days={Weekday.TUESDAY: [
                TimeSlot(id="d", start_time="08:30", end_time="09:00", subject="Knutselen"),
            ]}),
        )
        assert unknown_subjects(master) == ["Knutselen"]
