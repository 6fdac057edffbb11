"""Simulation driver and canned scenarios."""

from .config import SimulationConfig
from .simulation import (
    ArrivalTracker,
    MetricsSnapshot,
    Simulation,
    SimulationAbortedError,
    SimulationResult,
    SimulationSummary,
    build_simulation,
    create_random,
    create_simple,
    create_single_elevator_single_human,
)

__all__ = [
    "ArrivalTracker",
    "MetricsSnapshot",
    "Simulation",
    "SimulationAbortedError",
    "SimulationConfig",
    "SimulationResult",
    "SimulationSummary",
    "build_simulation",
    "create_random",
    "create_simple",
    "create_single_elevator_single_human",
]
