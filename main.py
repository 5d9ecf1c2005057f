"""Weekplanner — Haupt-CLI.

Verwendung:
  python main.py config init              Konfiguration anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py init [--demo]            Neuen Planer anlegen
  python main.py show                     Stammrooster anzeigen
  python main.py generate                 Nächste Woche planen
  python main.py week [--week N]          Geplante Woche anzeigen
  python main.py complete <lesson_id>...  Lektionen als erledigt markieren
  python main.py evaluate                 Aktuelle Woche evaluieren
  python main.py suggest <Fach>           Zusatz-Lektionen vorschlagen
  python main.py weektaak [--by-day]      Weektaak anzeigen
  python main.py stats                    Kennzahlen der Woche
"""

import logging
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config():
    """Lädt die Konfiguration (oder Defaults) und richtet das Logging ein."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _setup_logging(config.logging.level)
    return config


def _load_state_or_abort(config):
    """Lädt das Planer-Dokument oder bricht mit Fehlermeldung ab."""
    from data.store import StateStore, StateLoadError
    store = StateStore(config)
    try:
        return store, store.load()
    except StateLoadError as e:
        console.print(
            f"[red]{e}[/red]\n"
            "Führen Sie zunächst [bold]python main.py init[/bold] aus."
        )
        sys.exit(1)


def _parse_day(value: str):
    """Wochentag aus "monday", "maandag" oder "ma"."""
    from config.defaults import DAY_NAMES
    from models.timetable import Weekday
    v = value.strip().lower()
    for day, (long_name, short_name) in DAY_NAMES.items():
        if v in (day.value, long_name.lower(), short_name.lower()):
            return day
    raise click.BadParameter(
        f"Unbekannter Wochentag '{value}' (erlaubt: {', '.join(d.value for d in Weekday)})"
    )


def _week_table(title: str, rows: list[list[str]]) -> Table:
    from config.defaults import day_name
    from models.timetable import WEEKDAYS
    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Zeit", style="bold")
    for day in WEEKDAYS:
        table.add_column(day_name(day))
    for row in rows:
        table.add_row(*row)
    return table


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Datei überschreiben.")
def config_init(force: bool):
    """Legt die Konfigurationsdatei mit Default-Werten an."""
    from config.manager import ConfigManager
    from config.defaults import default_planner_config

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        return
    path = mgr.save(default_planner_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config()
    s = config.school
    console.print(Panel(
        f"[bold]{s.school_name or '—'}[/bold]  |  {s.group_name}  |  {s.school_year}\n"
        f"Lehrkraft: {s.teacher_name or '—'}",
        title="Weekplanner-Konfiguration",
        border_style="cyan",
    ))
    table = Table(box=box.SIMPLE)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Datendatei", config.storage.data_path)
    table.add_row("Demo-Rückfall", "ja" if config.storage.fallback_to_demo else "nein")
    table.add_row("Zyklus", config.planning.cycle_type.value)
    table.add_row("Vorschläge pro Fach", str(config.planning.extra_suggestion_limit))
    table.add_row("Log-Level", config.logging.level)
    table.add_row("Methoden-Datei", config.methods_path or "—")
    table.add_row("Stammrooster-Datei", config.master_schedule_path or "—")
    console.print(table)


# ─── INIT ─────────────────────────────────────────────────────────────────────

@click.command("init")
@click.option("--demo", is_flag=True, default=False,
              help="Demo-Szenario mit geplanter Woche 1 anlegen.")
@click.option("--force", is_flag=True, default=False,
              help="Bestehendes Planer-Dokument überschreiben.")
@click.option("--schedule", "schedule_path", default=None,
              help="Eigenes Stammrooster (JSON) statt des Standard-Continuroosters.")
def cmd_init(demo: bool, force: bool, schedule_path: Optional[str]):
    """Legt einen neuen Planer (Rooster, Methoden, Fortschritt) an."""
    from config.defaults import default_master_schedule
    from data.demo_data import DemoDataGenerator, demo_teaching_methods
    from data.store import StateStore, load_master_schedule, load_teaching_methods
    from models.planner_state import PlannerState
    from planner.evaluation import initialize_progress_tracker

    config = _load_config()
    store = StateStore(config)
    if store.exists() and not force:
        console.print(
            f"[yellow]Planer-Dokument existiert bereits: {store.path}[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        return

    master = None
    schedule_path = schedule_path or config.master_schedule_path
    if schedule_path:
        try:
            master = load_master_schedule(Path(schedule_path))
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red bold]Stammrooster konnte nicht geladen werden:[/red bold]\n{e}")
            sys.exit(1)

    if demo:
        state = DemoDataGenerator(config, master_schedule=master).generate()
    else:
        s = config.school
        if master is None:
            master = default_master_schedule(s.school_year, config.planning.cycle_type)
        if config.methods_path:
            try:
                methods = load_teaching_methods(Path(config.methods_path))
            except (FileNotFoundError, ValueError) as e:
                console.print(f"[red bold]Methoden konnten nicht geladen werden:[/red bold]\n{e}")
                sys.exit(1)
        else:
            methods = demo_teaching_methods(s.group_name)
        state = PlannerState(
            settings=s,
            master_schedule=master,
            teaching_methods=methods,
            progress_tracker=initialize_progress_tracker(s.school_year, s.group_name, methods),
        )

    store.save(state)
    console.print(f"[green]✓[/green] Planer angelegt: {store.path}")
    console.print(f"\n[dim]{state.summary()}[/dim]")


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
def cmd_show():
    """Zeigt das Stammrooster (Woche A und ggf. B) an."""
    from export.tui_renderer import render_template_rows

    config = _load_config()
    _, state = _load_state_or_abort(config)
    master = state.master_schedule

    console.print(f"\n[dim]{state.summary()}[/dim]\n")
    console.print(_week_table("Stammrooster – Woche A", render_template_rows(master.week_a)))
    if master.week_b is not None:
        console.print(_week_table("Stammrooster – Woche B", render_template_rows(master.week_b)))


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--start", "start_date", default=None,
              help="Startdatum der Woche (JJJJ-MM-TT), Standard: Folgewoche.")
def cmd_generate(start_date: Optional[str]):
    """Plant die nächste Woche (Backlog zuerst, dann Lehrplan-Reihenfolge)."""
    from planner.generator import generate_week_schedule, week_start_for

    config = _load_config()
    store, state = _load_state_or_abort(config)

    latest = state.latest_schedule
    evaluation = state.evaluation_for(latest.id) if latest else None
    if latest is not None and evaluation is None:
        console.print(
            f"[yellow]Woche {latest.week_number} ist noch nicht evaluiert – "
            f"es wird ohne Backlog geplant.[/yellow]"
        )

    week_number = latest.week_number + 1 if latest else 1
    if start_date:
        try:
            week_start = week_start_for(date.fromisoformat(start_date))
        except ValueError:
            raise click.BadParameter(f"Ungültiges Datum '{start_date}'", param_hint="--start")
    elif latest is not None:
        week_start = latest.week_start_date + timedelta(days=7)
    else:
        week_start = week_start_for(date.today())

    week = generate_week_schedule(
        state.master_schedule,
        state.teaching_methods,
        state.progress_tracker,
        evaluation,
        week_number,
        week_start,
    )
    state = state.model_copy(update={
        "weekly_schedules": state.weekly_schedules + [week],
        "current_week_id": week.id,
    })
    store.save(state)

    console.print(
        f"[green]✓[/green] Woche {week.week_number} ({week.cycle_week.value}) geplant, "
        f"ab {week.week_start_date.isoformat()}: {len(week.scheduled_lessons)} Lektionen"
    )


# ─── WEEK ─────────────────────────────────────────────────────────────────────

def _select_week(state, week_number: Optional[int]):
    if week_number is None:
        week = state.current_week or state.latest_schedule
    else:
        week = next((w for w in state.weekly_schedules if w.week_number == week_number), None)
    if week is None:
        console.print(
            "[red]Keine geplante Woche gefunden.[/red]\n"
            "Verwenden Sie [bold]python main.py generate[/bold]."
        )
        sys.exit(1)
    return week


@click.command("week")
@click.option("--week", "week_number", type=int, default=None, help="Wochennummer.")
def cmd_week(week_number: Optional[int]):
    """Zeigt eine geplante Woche als Tabelle an."""
    from export.tui_renderer import render_week_rows

    config = _load_config()
    _, state = _load_state_or_abort(config)
    week = _select_week(state, week_number)

    title = (
        f"Woche {week.week_number} ({week.cycle_week.value}) – "
        f"ab {week.week_start_date.strftime('%d.%m.%Y')} – {week.status.value}"
    )
    console.print(_week_table(title, render_week_rows(week, state.master_schedule)))
    for exc in week.exceptions:
        console.print(
            f"  [yellow]✗ {exc.day.value} {exc.start_time}–{exc.end_time}: {exc.reason}[/yellow]"
        )
    console.print("[dim]↺ = Backlog   ✓ = erledigt   — = leerer Slot[/dim]")


# ─── COMPLETE ─────────────────────────────────────────────────────────────────

@click.command("complete")
@click.argument("lesson_ids", nargs=-1, required=True)
@click.option("--undo", is_flag=True, default=False, help="Markierung zurücknehmen.")
def cmd_complete(lesson_ids: tuple[str, ...], undo: bool):
    """Markiert Lektionen der aktuellen Woche als erledigt."""
    from models.schedule import ScheduleStatus

    config = _load_config()
    store, state = _load_state_or_abort(config)
    week = _select_week(state, None)

    known = {sl.lesson_id for sl in week.scheduled_lessons}
    unknown = [i for i in lesson_ids if i not in known]
    if unknown:
        console.print(f"[yellow]Nicht in Woche {week.week_number} geplant: {', '.join(unknown)}[/yellow]")

    targets = set(lesson_ids)
    lessons = [
        sl.model_copy(update={"completed": not undo}) if sl.lesson_id in targets else sl
        for sl in week.scheduled_lessons
    ]
    status = ScheduleStatus.ACTIVE if week.status == ScheduleStatus.DRAFT else week.status
    updated = week.model_copy(update={"scheduled_lessons": lessons, "status": status})
    state = state.model_copy(update={
        "weekly_schedules": [updated if w.id == week.id else w for w in state.weekly_schedules],
    })
    store.save(state)
    console.print(f"[green]✓[/green] {len(targets - set(unknown))} Lektion(en) aktualisiert.")


# ─── EVALUATE ─────────────────────────────────────────────────────────────────

@click.command("evaluate")
@click.option("--done", "done_ids", multiple=True,
              help="Erledigte Lektion (mehrfach). Standard: im Wochenplan markierte.")
@click.option("--extra", "extra_ids", multiple=True,
              help="Zusätzlich erledigte Lektion außerhalb des Plans (mehrfach).")
@click.option("--exception", "exception_specs", multiple=True,
              help='Ausnahme für die Folgewoche: "Tag,HH:MM,HH:MM,Grund" (mehrfach).')
def cmd_evaluate(done_ids: tuple[str, ...], extra_ids: tuple[str, ...],
                 exception_specs: tuple[str, ...]):
    """Evaluiert die aktuelle Woche und aktualisiert den Lernfortschritt."""
    from models.schedule import ScheduleStatus
    from planner.evaluation import apply_evaluation, evaluation_from_schedule
    from planner.exceptions import build_exception
    from planner.generator import determine_cycle_week

    config = _load_config()
    store, state = _load_state_or_abort(config)
    week = _select_week(state, None)

    if state.evaluation_for(week.id) is not None:
        console.print(f"[yellow]Woche {week.week_number} wurde bereits evaluiert.[/yellow]")
        return

    next_cycle = determine_cycle_week(state.master_schedule, week.week_number + 1)
    exceptions = []
    for raw in exception_specs:
        parts = [p.strip() for p in raw.split(",", 3)]
        if len(parts) != 4:
            raise click.BadParameter(
                f"'{raw}' – erwartet \"Tag,HH:MM,HH:MM,Grund\"", param_hint="--exception"
            )
        day, start, end, reason = parts
        try:
            exceptions.append(build_exception(
                state.master_schedule, next_cycle, _parse_day(day), start, end, reason
            ))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--exception")

    evaluation = evaluation_from_schedule(
        week,
        date.today(),
        completed_ids=list(done_ids) if done_ids else None,
        extra_ids=extra_ids,
        exceptions=exceptions,
    )
    tracker = apply_evaluation(state.progress_tracker, evaluation, state.teaching_methods)

    evaluated = week.model_copy(update={"status": ScheduleStatus.EVALUATED})
    state = state.model_copy(update={
        "progress_tracker": tracker,
        "evaluations": state.evaluations + [evaluation],
        "weekly_schedules": [evaluated if w.id == week.id else w for w in state.weekly_schedules],
    })
    store.save(state)

    cc = evaluation.completion_check
    console.print(Panel(
        f"Erledigt: [green]{len(cc.completed_lesson_ids)}[/green]  |  "
        f"Verpasst (Backlog): [yellow]{len(cc.missed_lesson_ids)}[/yellow]  |  "
        f"Zusätzlich: {len(evaluation.extra_progress.additional_completed_lesson_ids)}  |  "
        f"Ausnahmen: {len(exceptions)}",
        title=f"Evaluation Woche {week.week_number}",
        border_style="cyan",
    ))
    console.print("Planen Sie jetzt mit [bold]python main.py generate[/bold] die Folgewoche.")


# ─── SUGGEST ──────────────────────────────────────────────────────────────────

@click.command("suggest")
@click.argument("subject")
def cmd_suggest(subject: str):
    """Schlägt die nächsten offenen Lektionen eines Fachs vor."""
    from planner.evaluation import next_available_lessons

    config = _load_config()
    _, state = _load_state_or_abort(config)
    week = state.current_week
    done = [sl.lesson_id for sl in week.scheduled_lessons if sl.completed] if week else []

    lessons = next_available_lessons(
        state.progress_tracker, state.teaching_methods, subject,
        exclude_ids=done, limit=config.planning.extra_suggestion_limit,
    )
    if not lessons:
        console.print(f"[dim]Keine offenen Lektionen für '{subject}'.[/dim]")
        return

    table = Table(title=f"Nächste Lektionen – {subject}", box=box.ROUNDED)
    table.add_column("Nr.", justify="right")
    table.add_column("ID")
    table.add_column("Lektion")
    table.add_column("Block")
    for l in lessons:
        table.add_row(str(l.sequence_order), l.id, l.title, l.block_name)
    console.print(table)


# ─── WEEKTAAK ─────────────────────────────────────────────────────────────────

@click.command("weektaak")
@click.option("--week", "week_number", type=int, default=None, help="Wochennummer.")
@click.option("--by-day", is_flag=True, default=False, help="Nach Tagen statt Fächern gruppieren.")
def cmd_weektaak(week_number: Optional[int], by_day: bool):
    """Zeigt die Weektaak (Aufgabenliste) der Woche an."""
    from analysis.weektaak import derive_weektaak, derive_weektaak_by_day
    from config.defaults import day_name
    from export.tui_renderer import render_weektaak_rows

    config = _load_config()
    _, state = _load_state_or_abort(config)
    week = _select_week(state, week_number)
    s = state.settings

    console.print(Panel(
        f"[bold]Weektaak {s.group_name}[/bold] – Woche {week.week_number}",
        border_style="cyan",
    ))

    if by_day:
        for day, lessons in derive_weektaak_by_day(week, state.master_schedule).items():
            teacher = state.master_schedule.teachers.get(day) or s.teacher_name
            table = Table(title=f"{day_name(day)} ({teacher or '—'})", box=box.SIMPLE)
            table.add_column("Fach", style="bold")
            table.add_column("Lektion")
            for sl in lessons:
                table.add_row(sl.subject, ("↺ " if sl.is_backlog else "") + sl.lesson_title)
            console.print(table)
        return

    table = Table(box=box.ROUNDED)
    table.add_column("Fach", style="bold")
    table.add_column("Lektion")
    table.add_column("Block")
    table.add_column("Tage")
    for row in render_weektaak_rows(derive_weektaak(week)):
        table.add_row(*row)
    console.print(table)


# ─── STATS ────────────────────────────────────────────────────────────────────

@click.command("stats")
@click.option("--week", "week_number", type=int, default=None, help="Wochennummer.")
def cmd_stats(week_number: Optional[int]):
    """Zeigt Kennzahlen einer geplanten Woche."""
    from analysis.statistics import schedule_stats

    config = _load_config()
    _, state = _load_state_or_abort(config)
    week = _select_week(state, week_number)
    stats = schedule_stats(week)

    console.print(
        f"[bold]Woche {week.week_number}:[/bold] {stats.total_lessons} Lektionen | "
        f"Backlog: {stats.backlog_lessons} | Neu: {stats.new_lessons} | "
        f"Erledigt: {stats.completed_lessons} ({stats.completion_rate:.0%})"
    )
    table = Table(box=box.ROUNDED)
    table.add_column("Fach", style="bold")
    table.add_column("Gesamt", justify="right")
    table.add_column("Backlog", justify="right")
    table.add_column("Neu", justify="right")
    table.add_column("Erledigt", justify="right")
    for subject, s in stats.by_subject.items():
        table.add_row(subject, str(s.total), str(s.backlog), str(s.new), str(s.completed))
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Weekplanner für die Basisschool.

    Starten Sie mit: python main.py init --demo
    """


def main():
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_init)
cli.add_command(cmd_show)
cli.add_command(cmd_generate)
cli.add_command(cmd_week)
cli.add_command(cmd_complete)
cli.add_command(cmd_evaluate)
cli.add_command(cmd_suggest)
cli.add_command(cmd_weektaak)
cli.add_command(cmd_stats)


if __name__ == "__main__":
    main()
