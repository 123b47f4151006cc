from __future__ import annotations

from typing import Iterable, List, Tuple

from .models import IDLE, Number, ScheduledSlice

Event = Tuple[str, Number, Number]


def merge_segments(events: Iterable[Event]) -> List[ScheduledSlice]:
    """
    Fold (occupant, start, end) events, given in clock order, into Gantt slices.

    An event that continues the previous slice for the same occupant with no
    gap extends that slice instead of starting a new one. Idle gaps follow the
    same rule. Zero-length events are dropped.
    """
    slices: List[ScheduledSlice] = []
    for pid, start, end in events:
        if end <= start:
            continue
        if slices and slices[-1].pid == pid and slices[-1].end_time == start:
            last = slices[-1]
            slices[-1] = ScheduledSlice(pid=pid, start_time=last.start_time, end_time=end)
        else:
            slices.append(ScheduledSlice(pid=pid, start_time=start, end_time=end))
    return slices


class TimelineBuilder:
    """
    Collects execution and idle events for one simulation run.
    """

    def __init__(self) -> None:
        self._events: List[Event] = []

    def record(self, pid: str, start: Number, end: Number) -> None:
        if self._events and start < self._events[-1][2]:
            raise ValueError(
                f"Timeline events must be in clock order: {pid} starts at {start} "
                f"before previous event ends at {self._events[-1][2]}"
            )
        self._events.append((pid, start, end))

    def record_idle(self, start: Number, end: Number) -> None:
        self.record(IDLE, start, end)

    def build(self) -> List[ScheduledSlice]:
        return merge_segments(self._events)
