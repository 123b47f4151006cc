from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional

from .errors import InputError, SimulationError
from .metrics import compute_system_metrics, finalize_processes
from .models import Process, ScheduleResult, ScheduledSlice
from .selection import (
    OrderKey,
    arrival_key,
    burst_key,
    next_arrival_after,
    priority_key,
    remaining_key,
    select_next,
)
from .timeline import TimelineBuilder

logger = logging.getLogger(__name__)


def _run_selection_loop(
    processes: List[Process],
    key: OrderKey,
    preemptive: bool,
    label: str,
) -> List[ScheduledSlice]:
    """
    Drive the clock for the comparator-based policies.

    Non-preemptive policies run the chosen process to completion. Preemptive
    ones only run it until the next arrival of another process, then choose
    again from scratch.
    """
    timeline = TimelineBuilder()
    clock = 0
    pending = len(processes)
    previous: Optional[Process] = None

    while pending:
        current = select_next(processes, clock, key)

        if current is None:
            next_arrival = next_arrival_after(processes, clock)
            if next_arrival is None:
                raise SimulationError(
                    f"{label}: {pending} process(es) incomplete at t={clock} "
                    "but none is ready and none arrives later"
                )
            logger.debug("%s: CPU idle from %s to %s", label, clock, next_arrival)
            timeline.record_idle(clock, next_arrival)
            clock = next_arrival
            continue

        if previous is not None and previous is not current and not previous.is_completed:
            logger.debug("%s: %s preempts %s at t=%s", label, current.pid, previous.pid, clock)

        end = current.finish_time(clock)
        if preemptive:
            horizon = next_arrival_after(processes, clock, exclude=current)
            if horizon is not None and horizon < end:
                end = horizon

        current.run(clock, end)
        timeline.record(current.pid, clock, end)
        clock = end
        previous = current

        if current.is_completed:
            pending -= 1
            logger.debug("%s: %s completed at t=%s", label, current.pid, clock)

    return timeline.build()


def _build_result(
    name: str,
    processes: List[Process],
    timeline: List[ScheduledSlice],
    quantum: Optional[int] = None,
    include_priority: bool = False,
) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=name,
        quantum=quantum,
        processes=finalize_processes(processes),
        timeline=timeline,
        include_priority=include_priority,
    )
    compute_system_metrics(result)
    return result


def _require_priorities(processes: List[Process], name: str) -> None:
    missing = [p.pid for p in processes if p.priority is None]
    if missing:
        raise InputError(f"{name} requires a priority for every process (missing: {', '.join(missing)})")


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    timeline = _run_selection_loop(processes, arrival_key, preemptive=False, label="FCFS")
    return _build_result("FCFS", processes, timeline)


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time.
    """
    timeline = _run_selection_loop(processes, burst_key, preemptive=False, label="SJF")
    return _build_result("SJF (non-preemptive)", processes, timeline)


def schedule_srtf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    Re-evaluated at every arrival; ties go to the earlier arrival, then the
    earlier input position.
    """
    timeline = _run_selection_loop(processes, remaining_key, preemptive=True, label="SRTF")
    return _build_result("SRTF", processes, timeline)


def schedule_priority_np(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then input position.
    """
    _require_priorities(processes, "Priority (non-preemptive)")
    timeline = _run_selection_loop(processes, priority_key, preemptive=False, label="PRIORITY-NP")
    return _build_result("Priority (non-preemptive)", processes, timeline, include_priority=True)


def schedule_priority_p(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (preemptive).

    Same ordering as the non-preemptive variant, but a newly arrived process
    with a better priority takes the CPU immediately.
    """
    _require_priorities(processes, "Priority (preemptive)")
    timeline = _run_selection_loop(processes, priority_key, preemptive=True, label="PRIORITY-P")
    return _build_result("Priority (preemptive)", processes, timeline, include_priority=True)


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive during a slice join the queue before the process
    that was just preempted.
    """
    if quantum is None or isinstance(quantum, bool) or not quantum > 0 or quantum % 1:
        raise InputError("Round Robin requires a positive integer quantum (use --quantum)")

    by_arrival = sorted(processes, key=arrival_key)
    n = len(by_arrival)
    next_index = 0

    time = 0
    timeline = TimelineBuilder()
    ready: Deque[Process] = deque()
    # When each process last (re)entered the ready queue.
    ready_since = {p.pid: p.arrival_time for p in processes}
    for p in processes:
        p.accumulated_wait = 0

    def enqueue_new_arrivals(current_time) -> None:
        nonlocal next_index
        while next_index < n and by_arrival[next_index].arrival_time <= current_time:
            ready.append(by_arrival[next_index])
            next_index += 1

    # Initialize with processes that arrive at time 0
    enqueue_new_arrivals(time)
    completed = 0

    while completed < n:
        if not ready:
            # Jump to next arrival if CPU is idle
            if next_index >= n:
                raise SimulationError(
                    f"RR: {n - completed} process(es) incomplete at t={time} "
                    "but the ready queue is empty and none arrives later"
                )
            next_arrival = by_arrival[next_index].arrival_time
            if not next_arrival > time:
                raise SimulationError(f"RR: arrival {next_arrival!r} is not after t={time}")
            logger.debug("RR: CPU idle from %s to %s", time, next_arrival)
            timeline.record_idle(time, next_arrival)
            time = next_arrival
            enqueue_new_arrivals(time)
            continue

        p = ready.popleft()
        p.accumulated_wait += time - ready_since[p.pid]

        slice_end = min(time + quantum, p.finish_time(time))
        p.run(time, slice_end)
        timeline.record(p.pid, time, slice_end)
        time = slice_end

        # Enqueue any new arrivals that appeared during this slice
        enqueue_new_arrivals(time)

        if p.is_completed:
            completed += 1
            logger.debug("RR: %s completed at t=%s", p.pid, time)
        else:
            # Put the process back at the end of the queue
            ready_since[p.pid] = time
            ready.append(p)

    return _build_result("Round Robin", processes, timeline.build(), quantum=quantum)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "rr": schedule_rr,
    "priority-np": schedule_priority_np,
    "priority-p": schedule_priority_p,
}

QUANTUM_ALGORITHMS = frozenset({"rr"})
PRIORITY_ALGORITHMS = frozenset({"priority-np", "priority-p"})


def normalize_algorithm(name: str) -> str:
    """
    Map a user-supplied algorithm name onto an ALGORITHMS key
    (trimmed, case-insensitive).
    """
    if not isinstance(name, str) or not name.strip():
        raise InputError("Algorithm name is required and must be a non-empty string")
    key = name.strip().lower()
    if key not in ALGORITHMS:
        raise InputError(
            f"Algorithm '{name}' not supported (choose from {', '.join(k.upper() for k in ALGORITHMS)})"
        )
    return key


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    key = normalize_algorithm(name)
    func = ALGORITHMS[key]
    logger.debug("Running %s on %d process(es)", key.upper(), len(processes))
    return func(processes, quantum=quantum if key in QUANTUM_ALGORITHMS else None)
