from pydantic import BaseModel, Field, field_validator
from typing import Optional

from models.timetable import CycleType


# ─── SCHULE / GROEP ───

class SchoolSettings(BaseModel):
    """Stammdaten der Schule und der Klasse (Groep)."""
    # Name der Schule
    school_name: str = Field("",
        description="Name der Schule")
    # Name der (Haupt-)Lehrkraft, Fallback wenn pro Tag keine gesetzt ist
    teacher_name: str = Field("",
        description="Name der Lehrkraft")
    # Bezeichnung der Klasse, z.B. "Groep 4"
    group_name: str = Field("Groep 4",
        description="Bezeichnung der Klasse")
    # Schuljahr im Format "JJJJ-JJJJ"
    school_year: str = Field("2024-2025",
        description="Schuljahr (JJJJ-JJJJ)")

    @field_validator("school_year")
    @classmethod
    def _check_school_year(cls, v: str) -> str:
        parts = v.split("-")
        if len(parts) != 2 or not all(p.isdigit() and len(p) == 4 for p in parts):
            raise ValueError(f"Schuljahr '{v}' hat nicht das Format JJJJ-JJJJ")
        if int(parts[1]) != int(parts[0]) + 1:
            raise ValueError(f"Schuljahr '{v}': Endjahr muss Startjahr + 1 sein")
        return v


# ─── SPEICHER ───

class StorageConfig(BaseModel):
    """Ablage des Planer-Dokuments."""
    # Pfad der JSON-Datei mit dem kompletten Planer-Zustand
    data_path: str = Field("output/planner_data.json",
        description="Pfad der JSON-Datei")
    # Bei fehlender oder defekter Datei Demo-Daten laden statt abzubrechen
    fallback_to_demo: bool = Field(True,
        description="Bei defekter Datei auf Demo-Daten zurückfallen")


# ─── PLANUNG ───

class PlanningConfig(BaseModel):
    """Vorgaben für neue Stammroosters und die Evaluation."""
    # Zyklus neuer Stammroosters (weekly oder biweekly)
    cycle_type: CycleType = Field(CycleType.WEEKLY,
        description="Zyklus: weekly oder biweekly (A/B)")
    # Maximale Anzahl vorgeschlagener Zusatz-Lektionen pro Fach
    extra_suggestion_limit: int = Field(10, ge=1, le=50,
        description="Max. Vorschläge für Zusatz-Fortschritt pro Fach")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Log-Ausgabe der CLI."""
    # Log-Level (DEBUG, INFO, WARNING, ERROR)
    level: str = Field("INFO",
        description="Log-Level")

    @field_validator("level")
    @classmethod
    def _check_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unbekanntes Log-Level '{v}'")
        return v


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Weekplanners."""
    # Schule und Groep
    school: SchoolSettings = Field(default_factory=SchoolSettings)
    # Ablage des Planer-Dokuments
    storage: StorageConfig = Field(default_factory=StorageConfig)
    # Planungsvorgaben
    planning: PlanningConfig = Field(default_factory=PlanningConfig)
    # Log-Ausgabe
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    # Optionaler Pfad zu einer JSON-Datei mit eigenen Lehrmethoden
    methods_path: Optional[str] = None
    # Optionaler Pfad zu einer JSON-Datei mit eigenem Stammrooster
    master_schedule_path: Optional[str] = None
