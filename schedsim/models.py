from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from .errors import SimulationError

Number = Union[int, float]

IDLE = "Idle"


@dataclass
class Process:
    """
    Simulation state for one process. Created fresh for every simulation
    call and mutated only by the policy that owns it.
    """

    pid: str
    arrival_time: Number
    burst_time: Number
    original_index: int
    priority: Optional[Number] = None
    remaining_time: Number = field(init=False)
    start_time: Optional[Number] = None
    completion_time: Optional[Number] = None
    is_completed: bool = False
    # Only Round Robin tracks this; the other policies derive waiting at the end.
    accumulated_wait: Optional[Number] = None

    def __post_init__(self) -> None:
        self.remaining_time = self.burst_time

    def finish_time(self, clock: Number) -> Number:
        """Instant this process would complete if it ran uninterrupted from `clock`."""
        return clock + self.remaining_time

    def run(self, start: Number, end: Number) -> None:
        """
        Give the CPU to this process over [start, end). Reaching
        finish_time(start) completes it.
        """
        if self.is_completed:
            raise SimulationError(f"{self.pid} already completed at {self.completion_time}")
        if self.start_time is None:
            self.start_time = start
        if end >= self.finish_time(start):
            self.remaining_time = 0
            self.completion_time = end
            self.is_completed = True
        else:
            self.remaining_time -= end - start


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    `pid` is IDLE for gaps where no process is ready.
    """

    pid: str
    start_time: Number
    end_time: Number

    @property
    def duration(self) -> Number:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: Number
    burst_time: Number
    start_time: Number
    completion_time: Number
    waiting_time: Number
    turnaround_time: Number
    response_time: Number
    priority: Optional[Number] = None


@dataclass
class SystemMetrics:
    cpu_busy_time: Number
    idle_time: Number
    makespan: Number
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
    include_priority: bool = False

    def to_dict(self, include_response: bool = False) -> dict:
        """
        Results table and Gantt chart in the camelCase shape served to callers.
        """
        table = []
        for p in self.processes:
            row = {
                "id": p.pid,
                "arrivalTime": p.arrival_time,
                "burstTime": p.burst_time,
            }
            if self.include_priority:
                row["priority"] = p.priority
            row.update(
                {
                    "startTime": p.start_time,
                    "completionTime": p.completion_time,
                    "turnaroundTime": p.turnaround_time,
                    "waitingTime": p.waiting_time,
                }
            )
            if include_response:
                row["responseTime"] = p.response_time
            table.append(row)

        gantt = [{"id": s.pid, "start": s.start_time, "end": s.end_time} for s in self.timeline]
        return {"resultsTable": table, "ganttChart": gantt}


def build_processes(
    arrival_times: Sequence[Number],
    burst_times: Sequence[Number],
    priorities: Optional[Sequence[Number]] = None,
) -> List[Process]:
    """
    Build one Process per input position, labelled P1, P2, ... in input order.
    """
    processes: List[Process] = []
    for i, (arrival, burst) in enumerate(zip(arrival_times, burst_times)):
        processes.append(
            Process(
                pid=f"P{i + 1}",
                arrival_time=arrival,
                burst_time=burst,
                original_index=i,
                priority=None if priorities is None else priorities[i],
            )
        )
    return processes
