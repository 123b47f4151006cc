from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the simulation engine."""


class InputError(SchedulerError, ValueError):
    """
    The simulation inputs are malformed: bad arrays, an unknown algorithm,
    or a missing quantum / priority list. Raised before any simulation work.
    """


class SimulationError(SchedulerError, RuntimeError):
    """
    An internal invariant broke mid-simulation, e.g. processes remain
    incomplete but none is ready and none will ever arrive.
    """
