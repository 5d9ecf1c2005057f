"""Tests für die Click-CLI (kompletter Wochenzyklus im temporären Verzeichnis)."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from rich.console import Console

from main import cli
from models.planner_state import PlannerState
from models.schedule import ScheduleStatus
from models.timetable import MasterSchedule, TimeSlot, Weekday, WeekTemplate

DATA_FILE = Path("output/planner_data.json")


@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def _state() -> PlannerState:
    return PlannerState.load_json(DATA_FILE)


def _write_master(path: Path) -> MasterSchedule:
    """Eigenes Rooster mit nur einem Rekenen-Slot am Montag."""
    master = MasterSchedule(
        id="eigen", school_year="2024-2025",
        week_a=WeekTemplate(days={Weekday.MONDAY: [
            TimeSlot(id="ma-rek", start_time="09:00", end_time="10:00", subject="Rekenen"),
        ]}),
    )
    path.write_text(master.model_dump_json(), encoding="utf-8")
    return master


class TestCli:
    def test_config_init(self, runner: CliRunner):
        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0, result.output
        assert Path("config/planner_config.yaml").exists()

        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0, result.output

    def test_init_demo(self, runner: CliRunner):
        result = runner.invoke(cli, ["init", "--demo"])
        assert result.exit_code == 0, result.output
        assert DATA_FILE.exists()
        state = _state()
        assert len(state.weekly_schedules) == 1
        assert state.current_week.status == ScheduleStatus.ACTIVE

    def test_init_without_demo_has_no_week(self, runner: CliRunner):
        result = runner.invoke(cli, ["init"])
        assert result.exit_code == 0, result.output
        state = _state()
        assert state.weekly_schedules == []
        assert len(state.teaching_methods) == 5

    def test_week_cycle(self, runner: CliRunner):
        """init → complete → evaluate → generate: Backlog landet in Woche 2."""
        assert runner.invoke(cli, ["init", "--demo"]).exit_code == 0

        result = runner.invoke(cli, ["complete", "pluspunt-b1-l1"])
        assert result.exit_code == 0, result.output
        week_1 = _state().current_week
        done = [sl.lesson_id for sl in week_1.scheduled_lessons if sl.completed]
        assert done == ["pluspunt-b1-l1"]

        result = runner.invoke(cli, ["evaluate"])
        assert result.exit_code == 0, result.output
        state = _state()
        assert len(state.evaluations) == 1
        assert state.current_week.status == ScheduleStatus.EVALUATED
        assert state.progress_tracker.for_method("pluspunt").current_sequence_position == 1
        assert "pluspunt-b1-l2" in state.evaluations[0].completion_check.missed_lesson_ids

        result = runner.invoke(cli, ["generate"])
        assert result.exit_code == 0, result.output
        state = _state()
        week_2 = state.current_week
        assert week_2.week_number == 2
        rekenen = week_2.lessons_for_subject("Rekenen")
        assert rekenen[0].lesson_id == "pluspunt-b1-l2"
        assert rekenen[0].is_backlog is True
        assert rekenen[-1].lesson_id == "pluspunt-b1-l2"
        assert rekenen[-1].is_backlog is False

        for args in (["week"], ["weektaak"], ["weektaak", "--by-day"], ["stats"],
                     ["suggest", "Rekenen"], ["show"]):
            result = runner.invoke(cli, args)
            assert result.exit_code == 0, (args, result.output)

    def test_evaluate_twice_is_refused(self, runner: CliRunner):
        runner.invoke(cli, ["init", "--demo"])
        assert runner.invoke(cli, ["evaluate"]).exit_code == 0
        assert runner.invoke(cli, ["evaluate"]).exit_code == 0
        assert len(_state().evaluations) == 1

    def test_exception_blocks_next_week(self, runner: CliRunner):
        runner.invoke(cli, ["init", "--demo"])
        result = runner.invoke(cli, ["evaluate", "--exception", "wo,08:30,12:00,Schoolreis"])
        assert result.exit_code == 0, result.output

        exc = _state().evaluations[0].next_week_exceptions[0]
        assert exc.day == Weekday.WEDNESDAY
        assert exc.reason == "Schoolreis"
        assert exc.affected_slot_ids == [f"wo-{i:02d}" for i in range(1, 7)]

        assert runner.invoke(cli, ["generate"]).exit_code == 0
        week_2 = _state().current_week
        assert week_2.exceptions == [exc]
        assert week_2.lessons_for_day(Weekday.WEDNESDAY) == []

    def test_invalid_exception_rejected(self, runner: CliRunner):
        runner.invoke(cli, ["init", "--demo"])
        result = runner.invoke(cli, ["evaluate", "--exception", "zondag,08:30,12:00,X"])
        assert result.exit_code == 2
        assert _state().evaluations == []

    def test_missing_data_without_fallback_aborts(self, runner: CliRunner):
        Path("config").mkdir()
        Path("config/planner_config.yaml").write_text(
            "storage:\n  fallback_to_demo: false\n", encoding="utf-8"
        )
        result = runner.invoke(cli, ["week"])
        assert result.exit_code == 1

    def test_suggest_skips_only_completed(self, runner: CliRunner, monkeypatch):
        """Geplante, aber noch offene Lektionen bleiben als Vorschlag erhalten."""
        monkeypatch.setattr("main.console", Console(width=200))
        runner.invoke(cli, ["init", "--demo"])
        assert runner.invoke(cli, ["complete", "pluspunt-b1-l1"]).exit_code == 0

        result = runner.invoke(cli, ["suggest", "Rekenen"])
        assert result.exit_code == 0, result.output
        assert "pluspunt-b1-l1" not in result.output
        assert "pluspunt-b1-l2" in result.output
        assert "pluspunt-b1-l5" in result.output


# ─── EIGENES STAMMROOSTER ─────────────────────────────────────────────────────

class TestCustomSchedule:
    def test_init_with_schedule_file(self, runner: CliRunner):
        master = _write_master(Path("rooster.json"))
        result = runner.invoke(cli, ["init", "--schedule", "rooster.json"])
        assert result.exit_code == 0, result.output
        state = _state()
        assert state.master_schedule == master
        assert state.weekly_schedules == []

    def test_init_demo_with_schedule_file(self, runner: CliRunner):
        master = _write_master(Path("rooster.json"))
        result = runner.invoke(cli, ["init", "--demo", "--schedule", "rooster.json"])
        assert result.exit_code == 0, result.output
        state = _state()
        assert state.master_schedule == master
        lessons = state.current_week.scheduled_lessons
        assert [(sl.slot_id, sl.lesson_id) for sl in lessons] == [("ma-rek", "pluspunt-b1-l1")]

    def test_schedule_path_from_config(self, runner: CliRunner):
        master = _write_master(Path("rooster.json"))
        Path("config").mkdir()
        Path("config/planner_config.yaml").write_text(
            "master_schedule_path: rooster.json\n", encoding="utf-8"
        )
        result = runner.invoke(cli, ["init"])
        assert result.exit_code == 0, result.output
        assert _state().master_schedule == master

    def test_missing_schedule_file_aborts(self, runner: CliRunner):
        result = runner.invoke(cli, ["init", "--schedule", "fehlt.json"])
        assert result.exit_code == 1
        assert not DATA_FILE.exists()
