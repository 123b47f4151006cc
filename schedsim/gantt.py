from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice


def _mark(value) -> str:
    return f"{value:g}" if isinstance(value, float) else str(value)


def _columns(sl: ScheduledSlice) -> tuple[int, str]:
    """
    Character width of a slice and its end mark. A slice is at least as wide
    as its mark so later marks stay aligned with their slice boundaries.
    """
    mark = _mark(sl.end_time)
    width = max(1, round(sl.end_time - sl.start_time), len(mark))
    return width, mark


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart, one character per time unit. Idle time is drawn with dots.
    """
    if not slices:
        return "(no execution)"

    line = "|"
    labels = " "
    time_marks = _mark(slices[0].start_time)

    for sl in slices:
        width, mark = _columns(sl)
        line += ("." if sl.is_idle else "=") * width
        labels += sl.pid[:width].ljust(width)
        time_marks += mark.rjust(width)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = _mark(slices[0].start_time)

    for sl in slices:
        width, mark = _columns(sl)
        if sl.is_idle:
            timeline.append("·" * width, style="dim")
            labels.append(sl.pid[:width].ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
            labels.append(sl.pid[:width].ljust(width), style="bold")
        time_marks += mark.rjust(width)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
