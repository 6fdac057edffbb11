from __future__ import annotations

from typing import Dict, Type

from .fewest_pickups import FewestPickupsScheduler
from .interface import ElevatorSnapshot, Scheduler
from .nearest import NearestCarScheduler

__all__ = [
    "ElevatorSnapshot",
    "FewestPickupsScheduler",
    "NearestCarScheduler",
    "Scheduler",
    "SCHEDULER_REGISTRY",
    "get_scheduler",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "fewest_pickups": FewestPickupsScheduler,
    "nearest": NearestCarScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
