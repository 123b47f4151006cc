from __future__ import annotations

import math
from typing import List

from .errors import SimulationError
from .models import Process, ProcessMetrics, ScheduleResult, SystemMetrics


def finalize_processes(processes: List[Process]) -> List[ProcessMetrics]:
    """
    Turn completed simulation records into per-process metrics, in the
    caller's original input order regardless of completion order.
    """
    metrics: List[ProcessMetrics] = []
    for p in sorted(processes, key=lambda x: x.original_index):
        if not p.is_completed or p.start_time is None or p.completion_time is None:
            raise SimulationError(f"{p.pid} did not complete")

        turnaround_time = p.completion_time - p.arrival_time
        waiting_time = turnaround_time - p.burst_time
        if waiting_time < -1e-9:
            raise SimulationError(f"{p.pid} has negative waiting time {waiting_time}")
        # Float round-off on fractional times can land a hair below zero.
        waiting_time = max(waiting_time, 0)
        if p.accumulated_wait is not None and not math.isclose(
            p.accumulated_wait, waiting_time, abs_tol=1e-9
        ):
            raise SimulationError(
                f"{p.pid} waited {p.accumulated_wait} in the ready queue but "
                f"turnaround minus burst is {waiting_time}"
            )

        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=p.start_time,
                completion_time=p.completion_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                response_time=p.start_time - p.arrival_time,
                priority=p.priority,
            )
        )
    return metrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process metrics
    and timeline slices.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(s.duration for s in result.timeline if not s.is_idle)
    idle_time = sum(s.duration for s in result.timeline if s.is_idle)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
