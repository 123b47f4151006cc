from __future__ import annotations

import logging
from typing import Optional, Sequence

from .algorithms import run_algorithm
from .models import Number, ScheduleResult, build_processes
from .validation import validate_request

logger = logging.getLogger(__name__)


def simulate(
    algorithm: str,
    arrival_times: Sequence[Number],
    burst_times: Sequence[Number],
    time_quantum: Optional[int] = None,
    priorities: Optional[Sequence[Number]] = None,
) -> ScheduleResult:
    """
    Validate the inputs and run one complete simulation.

    Raises InputError for malformed inputs (before any simulation work) and
    SimulationError if the engine hits an internal inconsistency. Each call
    builds its own Process records, so concurrent calls share no state.
    """
    request = validate_request(algorithm, arrival_times, burst_times, time_quantum, priorities)
    processes = build_processes(request.arrival_times, request.burst_times, request.priorities)
    result = run_algorithm(request.algorithm, processes, quantum=request.time_quantum)
    logger.debug(
        "%s finished %d process(es), makespan %s",
        result.algorithm,
        len(result.processes),
        result.system.makespan if result.system else 0,
    )
    return result
