"""Ablage des Planer-Dokuments (JSON) mit Rückfall auf Demo-Daten."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from config.defaults import unknown_subjects
from config.schema import PlannerConfig
from models.curriculum import TeachingMethod
from models.planner_state import PlannerState
from models.timetable import MasterSchedule

logger = logging.getLogger(__name__)

_METHODS_ADAPTER = TypeAdapter(list[TeachingMethod])


class StateLoadError(Exception):
    """Planer-Dokument fehlt oder ist ungültig (ohne Demo-Rückfall)."""


def load_teaching_methods(path: Path) -> list[TeachingMethod]:
    """Lädt eine Liste von Lehrmethoden aus einer JSON-Datei."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Methoden-Datei nicht gefunden: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return _METHODS_ADAPTER.validate_json(f.read())


def load_master_schedule(path: Path) -> MasterSchedule:
    """Lädt ein eigenes Stammrooster aus einer JSON-Datei.

    Unbekannte Fach-Labels (Tippfehler) werden nur als Warnung gemeldet.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stammrooster-Datei nicht gefunden: {path}")
    with open(path, "r", encoding="utf-8") as f:
        master = MasterSchedule.model_validate_json(f.read())

    unknown = unknown_subjects(master)
    if unknown:
        logger.warning(f"Unbekannte Fächer im Stammrooster {path}: {', '.join(unknown)}")
    return master


class StateStore:
    """Lädt und speichert den PlannerState unter ``config.storage.data_path``."""

    def __init__(self, config: PlannerConfig, path: Optional[Path] = None) -> None:
        self.config = config
        self.path = Path(path or config.storage.data_path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> PlannerState:
        """Lädt das Dokument.

        Fehlt die Datei oder ist sie defekt, wird (je nach Konfiguration)
        auf Demo-Daten zurückgefallen oder StateLoadError ausgelöst.
        """
        try:
            return PlannerState.load_json(self.path)
        except FileNotFoundError as e:
            problem = str(e)
        except (ValidationError, json.JSONDecodeError, UnicodeDecodeError) as e:
            problem = f"Datendatei ungültig: {self.path}\n{e}"

        if not self.config.storage.fallback_to_demo:
            raise StateLoadError(problem)

        logger.warning(f"{problem} – lade Demo-Daten")
        from data.demo_data import DemoDataGenerator
        return DemoDataGenerator(self.config).generate()

    def save(self, state: PlannerState) -> Path:
        """Speichert das Dokument und gibt den Pfad zurück."""
        state.save_json(self.path)
        logger.debug(f"Planer-Dokument gespeichert: {self.path}")
        return self.path
