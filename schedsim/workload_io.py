from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from .models import Number


@dataclass
class Workload:
    arrival_times: List[Number]
    burst_times: List[Number]
    priorities: Optional[List[Number]] = None


def load_workload(path: str | Path) -> Workload:
    """
    Load a workload from a JSON or CSV file into parallel arrival/burst/priority arrays.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> Workload:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    # Request-body shape: {"arrivalTimes": [...], "burstTimes": [...], "priorities": [...]}
    if isinstance(raw, Mapping):
        return _workload_from_arrays(raw)

    if not isinstance(raw, Iterable) or isinstance(raw, str):
        raise ValueError("JSON workload must be a list of process objects or an object of arrays")

    return _workload_from_rows(raw)


def _load_csv(path: Path) -> Workload:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return _workload_from_rows(list(reader))


def _parse_number(value) -> Number:
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, (int, float)):
        return value
    number = float(str(value).strip())
    return int(number) if number.is_integer() else number


def _workload_from_rows(rows) -> Workload:
    arrivals: List[Number] = []
    bursts: List[Number] = []
    priorities: List[Optional[Number]] = []

    for entry in rows:
        try:
            arrivals.append(_parse_number(entry["arrival_time"]))
            bursts.append(_parse_number(entry["burst_time"]))
            priority_val = entry.get("priority")
            priorities.append(_parse_number(priority_val) if priority_val not in (None, "") else None)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"Invalid process entry: {entry!r}") from exc

    has_priorities = bool(priorities) and all(p is not None for p in priorities)
    return Workload(
        arrival_times=arrivals,
        burst_times=bursts,
        priorities=priorities if has_priorities else None,
    )


def _workload_from_arrays(mapping: Mapping) -> Workload:
    try:
        arrivals = [_parse_number(v) for v in mapping["arrivalTimes"]]
        bursts = [_parse_number(v) for v in mapping["burstTimes"]]
        raw_priorities = mapping.get("priorities")
        priorities = None if raw_priorities is None else [_parse_number(v) for v in raw_priorities]
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid workload object: {dict(mapping)!r}") from exc

    return Workload(arrival_times=arrivals, burst_times=bursts, priorities=priorities)
