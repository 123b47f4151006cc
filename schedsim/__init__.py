"""
CPU scheduling simulator.

Computes the execution timeline and per-process metrics for FCFS, SJF,
SRTF, Round Robin and non-preemptive / preemptive Priority scheduling.
"""

from .api import simulate
from .errors import InputError, SchedulerError, SimulationError
from .models import IDLE, ScheduleResult

__all__ = [
    "IDLE",
    "InputError",
    "ScheduleResult",
    "SchedulerError",
    "SimulationError",
    "simulate",
]
