"""Demo-Datensatz für den Weekplanner.

Erzeugt ein sofort nutzbares Szenario: Lehrmethoden für die Kernfächer,
Standard-Continurooster, frischen Fortschritt und eine erste, vom
Generator geplante Woche.

Methoden (je eine Groep, mehrere Blöcke, durchnummerierte Lektionen):
  - Rekenen:          "Pluspunt"        3 Blöcke × 8 Lektionen
  - Taal:             "Taal actief"     2 Blöcke × 8 Lektionen
  - Spelling:         "Spelling op maat" 2 Blöcke × 8 Lektionen
  - Technisch lezen:  "Estafette"       2 Blöcke × 6 Lektionen
  - Begrijpend lezen: "Nieuwsbegrip"    2 Blöcke × 6 Lektionen
"""

import logging
from datetime import date
from typing import Optional

from config.defaults import default_master_schedule
from config.schema import PlannerConfig
from models.curriculum import Lesson, LessonBlock, LessonGroup, TeachingMethod
from models.planner_state import PlannerState
from models.schedule import ScheduleStatus
from models.timetable import WEEKDAYS, MasterSchedule
from planner.evaluation import initialize_progress_tracker
from planner.generator import generate_week_schedule, week_start_for

logger = logging.getLogger(__name__)

# ─── Methoden-Katalog ─────────────────────────────────────────────────────────

# method_id → (Name, Fach, [(Blockname, [Themen...]), ...])
_DEMO_METHODS: dict[str, tuple[str, str, list[tuple[str, list[str]]]]] = {
    "pluspunt": ("Pluspunt", "Rekenen", [
        ("Blok 1 – Getallen tot 100", [
            "Tellen tot 100", "Getallenlijn", "Tientallen en eenheden", "Splitsen",
            "Optellen tot 100", "Aftrekken tot 100", "Herhaling", "Toets blok 1",
        ]),
        ("Blok 2 – Tafels", [
            "Tafel van 2", "Tafel van 5", "Tafel van 10", "Vermenigvuldigen als herhaald optellen",
            "Delen", "Tafel van 3", "Herhaling", "Toets blok 2",
        ]),
        ("Blok 3 – Meten en geld", [
            "Meter en centimeter", "Klokkijken: hele en halve uren", "Euro's en centen",
            "Betalen en teruggeven", "Gewicht", "Kalender", "Herhaling", "Toets blok 3",
        ]),
    ]),
    "taal-actief": ("Taal actief", "Taal", [
        ("Thema 1 – Op school", [
            "Woorden rond school", "Zinnen maken", "Vertellen", "Luisteren",
            "Zelfstandige naamwoorden", "Meervoud", "Herhaling", "Toets thema 1",
        ]),
        ("Thema 2 – Dieren", [
            "Woorden rond dieren", "Beschrijven", "Werkwoorden", "Vragen stellen",
            "Verkleinwoorden", "Tegenstellingen", "Herhaling", "Toets thema 2",
        ]),
    ]),
    "spelling-op-maat": ("Spelling op maat", "Spelling", [
        ("Blok 1", [
            "Klankzuivere woorden", "ng en nk", "Woorden met -ig", "ei en ij",
            "au en ou", "Hoofdletters", "Herhaling", "Dictee blok 1",
        ]),
        ("Blok 2", [
            "Open lettergreep", "Gesloten lettergreep", "Woorden met -lijk", "d of t aan het eind",
            "ch en g", "Samenstellingen", "Herhaling", "Dictee blok 2",
        ]),
    ]),
    "estafette": ("Estafette", "Technisch lezen", [
        ("Blok 1", [
            "AVI M4 tekst 1", "AVI M4 tekst 2", "Woordrijen", "Flitslezen",
            "Duolezen", "Toets blok 1",
        ]),
        ("Blok 2", [
            "AVI E4 tekst 1", "AVI E4 tekst 2", "Woordrijen", "Voorlezen",
            "Duolezen", "Toets blok 2",
        ]),
    ]),
    "nieuwsbegrip": ("Nieuwsbegrip", "Begrijpend lezen", [
        ("Periode 1", [
            "Voorspellen", "Vragen stellen", "Verbanden leggen", "Samenvatten",
            "Woordenschat in de tekst", "Evaluatie",
        ]),
        ("Periode 2", [
            "Hoofdgedachte", "Signaalwoorden", "Tekstsoorten", "Bedoeling van de schrijver",
            "Feit of mening", "Evaluatie",
        ]),
    ]),
}


def demo_teaching_methods(group_name: str = "Groep 4") -> list[TeachingMethod]:
    """Lehrmethoden des Demo-Szenarios (sequence_order fortlaufend je Methode)."""
    methods: list[TeachingMethod] = []
    for method_id, (name, subject, blocks) in _DEMO_METHODS.items():
        seq = 0
        lesson_blocks: list[LessonBlock] = []
        for block_idx, (block_name, topics) in enumerate(blocks, start=1):
            lessons = []
            for lesson_idx, topic in enumerate(topics, start=1):
                seq += 1
                lessons.append(Lesson(
                    id=f"{method_id}-b{block_idx}-l{lesson_idx}",
                    sequence_order=seq,
                    title=f"Les {lesson_idx}: {topic}",
                    lesson_number=lesson_idx,
                ))
            lesson_blocks.append(LessonBlock(name=block_name, lessons=lessons))
        methods.append(TeachingMethod(
            id=method_id,
            name=name,
            subject=subject,
            groups=[LessonGroup(name=group_name, blocks=lesson_blocks)],
        ))
    return methods


class DemoDataGenerator:
    """Erzeugt einen vollständigen PlannerState für die Demo."""

    def __init__(
        self,
        config: PlannerConfig,
        today: Optional[date] = None,
        master_schedule: Optional[MasterSchedule] = None,
    ) -> None:
        self.config = config
        self.today = today or date.today()
        self.master_schedule = master_schedule

    def generate(self) -> PlannerState:
        """Demo-Szenario mit geplanter (aktiver) Woche 1."""
        settings = self.config.school
        methods = demo_teaching_methods(settings.group_name)

        if self.master_schedule is not None:
            master = self.master_schedule
        else:
            master = default_master_schedule(settings.school_year, self.config.planning.cycle_type)
            master = master.model_copy(update={
                "teachers": {day: settings.teacher_name for day in WEEKDAYS},
            })

        tracker = initialize_progress_tracker(
            settings.school_year, settings.group_name, methods
        )
        first_week = generate_week_schedule(
            master, methods, tracker, None,
            week_number=1,
            week_start_date=week_start_for(self.today),
        )
        first_week = first_week.model_copy(update={"status": ScheduleStatus.ACTIVE})

        logger.info(
            f"Demo-Daten erzeugt: {len(methods)} Methoden, "
            f"{len(first_week.scheduled_lessons)} Lektionen in Woche 1"
        )

        return PlannerState(
            settings=settings,
            master_schedule=master,
            teaching_methods=methods,
            progress_tracker=tracker,
            weekly_schedules=[first_week],
            current_week_id=first_week.id,
        )
