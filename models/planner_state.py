"""PlannerState: vollständiges Planer-Dokument für die Persistenz (Pydantic v2)."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from config.schema import SchoolSettings
from models.curriculum import TeachingMethod
from models.evaluation import Evaluation
from models.progress import ProgressTracker
from models.schedule import WeeklyScheduleInstance
from models.timetable import MasterSchedule


class PlannerState(BaseModel):
    """Ein JSON-Dokument mit allem, was der Planer zwischen Sitzungen braucht."""

    settings: SchoolSettings
    master_schedule: MasterSchedule
    teaching_methods: list[TeachingMethod]
    progress_tracker: ProgressTracker
    weekly_schedules: list[WeeklyScheduleInstance] = []
    evaluations: list[Evaluation] = []
    current_week_id: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Übersicht ───

    @property
    def current_week(self) -> Optional[WeeklyScheduleInstance]:
        """Die aktuell ausgewählte Woche (None wenn keine gesetzt)."""
        return next(
            (w for w in self.weekly_schedules if w.id == self.current_week_id), None
        )

    @property
    def latest_schedule(self) -> Optional[WeeklyScheduleInstance]:
        """Woche mit der höchsten Wochennummer."""
        if not self.weekly_schedules:
            return None
        return max(self.weekly_schedules, key=lambda w: w.week_number)

    def evaluation_for(self, weekly_schedule_id: str) -> Optional[Evaluation]:
        """Evaluation einer bestimmten Woche (None wenn noch nicht evaluiert)."""
        return next(
            (e for e in self.evaluations if e.weekly_schedule_id == weekly_schedule_id),
            None,
        )

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        s = self.settings
        total_lessons = sum(m.lesson_count for m in self.teaching_methods)
        done = sum(len(mp.completed_lessons) for mp in self.progress_tracker.method_progress)
        lines = [
            f"School: {s.school_name}" if s.school_name else "",
            f"Groep: {s.group_name} | Schuljahr: {s.school_year}",
            f"Rooster: {self.master_schedule.cycle_type.value}",
            f"Methoden: {len(self.teaching_methods)} ({total_lessons} Lektionen)",
            f"Abgeschlossen: {done} Lektionen",
            f"Geplante Wochen: {len(self.weekly_schedules)}",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "PlannerState":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
