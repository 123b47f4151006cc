"""
Ready-set selection shared by the comparator-driven policies.

Every ordering key ends with (arrival_time, original_index), so the choice
among ready processes is a total order and a run is fully deterministic.
Round Robin does not use these keys; it keeps its own FIFO queue.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Tuple

from .models import Number, Process

OrderKey = Callable[[Process], Tuple]


def arrival_key(p: Process) -> Tuple:
    return (p.arrival_time, p.original_index)


def burst_key(p: Process) -> Tuple:
    return (p.burst_time, p.arrival_time, p.original_index)


def remaining_key(p: Process) -> Tuple:
    return (p.remaining_time, p.arrival_time, p.original_index)


def priority_key(p: Process) -> Tuple:
    # Lower number means higher priority.
    return (p.priority, p.arrival_time, p.original_index)


def select_next(processes: Iterable[Process], clock: Number, key: OrderKey) -> Optional[Process]:
    """
    Return the best incomplete process that has arrived by `clock`,
    or None if nothing is ready.
    """
    ready = [p for p in processes if not p.is_completed and p.arrival_time <= clock]
    if not ready:
        return None
    return min(ready, key=key)


def next_arrival_after(
    processes: Iterable[Process],
    clock: Number,
    exclude: Optional[Process] = None,
) -> Optional[Number]:
    """
    Earliest arrival strictly after `clock` among incomplete processes.
    """
    future = [
        p.arrival_time
        for p in processes
        if p is not exclude and not p.is_completed and p.arrival_time > clock
    ]
    return min(future) if future else None
