"""
Checks applied to raw simulation inputs before any Process is built.

Every rule raises InputError with a message that names the offending
field (and index, for array elements).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional

from .algorithms import PRIORITY_ALGORITHMS, QUANTUM_ALGORITHMS, normalize_algorithm
from .errors import InputError
from .models import Number


@dataclass
class SimulationRequest:
    algorithm: str
    arrival_times: List[Number]
    burst_times: List[Number]
    time_quantum: Optional[int] = None
    priorities: Optional[List[Number]] = None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _numeric_list(name: str, values: Any) -> List[Number]:
    if values is None:
        raise InputError(f"{name} is required")
    if isinstance(values, (str, bytes)) or not hasattr(values, "__len__"):
        raise InputError(f"{name} must be an array of numbers")
    values = list(values)
    if not values:
        raise InputError(f"{name} must be a non-empty array")
    for i, value in enumerate(values):
        if not _is_number(value):
            raise InputError(f"{name}[{i}] must be a finite number, got {value!r}")
    return values


def validate_quantum(time_quantum: Any) -> int:
    if time_quantum is None:
        raise InputError("timeQuantum is required for Round Robin")
    if not _is_number(time_quantum) or time_quantum != int(time_quantum):
        raise InputError(f"timeQuantum must be a positive integer, got {time_quantum!r}")
    if time_quantum <= 0:
        raise InputError(f"timeQuantum must be a positive integer, got {time_quantum!r}")
    return int(time_quantum)


def validate_request(
    algorithm: Any,
    arrival_times: Any,
    burst_times: Any,
    time_quantum: Any = None,
    priorities: Any = None,
) -> SimulationRequest:
    key = normalize_algorithm(algorithm)

    arrivals = _numeric_list("arrivalTimes", arrival_times)
    bursts = _numeric_list("burstTimes", burst_times)
    if len(arrivals) != len(bursts):
        raise InputError(
            f"arrivalTimes and burstTimes must have the same length ({len(arrivals)} != {len(bursts)})"
        )

    for i, arrival in enumerate(arrivals):
        if arrival < 0:
            raise InputError(f"arrivalTimes[{i}] cannot be negative, got {arrival!r}")
    for i, burst in enumerate(bursts):
        if burst <= 0:
            raise InputError(f"burstTimes[{i}] must be positive, got {burst!r}")

    quantum = validate_quantum(time_quantum) if key in QUANTUM_ALGORITHMS else None

    prios: Optional[List[Number]] = None
    if key in PRIORITY_ALGORITHMS:
        if priorities is None:
            raise InputError(f"priorities are required for {key.upper()}")
        prios = _numeric_list("priorities", priorities)
        if len(prios) != len(arrivals):
            raise InputError(
                f"priorities must have the same length as arrivalTimes ({len(prios)} != {len(arrivals)})"
            )

    return SimulationRequest(
        algorithm=key,
        arrival_times=arrivals,
        burst_times=bursts,
        time_quantum=quantum,
        priorities=prios,
    )
