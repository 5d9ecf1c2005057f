"""Export-Modul: Terminal-Darstellung (Rich) für Rooster, Woche und Weektaak."""

from export.tui_renderer import render_template_rows, render_week_rows, render_weektaak_rows

__all__ = ["render_template_rows", "render_week_rows", "render_weektaak_rows"]
