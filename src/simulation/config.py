from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from scheduler import SCHEDULER_REGISTRY, get_scheduler

SCENARIOS = ("random", "simple", "single")


@dataclass
class SimulationConfig:
    """Scenario settings shared by the CLI and the HTTP service."""

    name: str = "scenario"
    description: Optional[str] = None
    scenario: str = "random"
    seed: Optional[int] = None
    elevator_count: int = 2
    human_count: int = 50
    floors: int = 10
    scheduler: str = "fewest_pickups"
    scheduler_options: Dict = field(default_factory=dict)
    smart_initial_direction: bool = True
    max_steps: int = 100_000

    def validate(self) -> None:
        for attr in ("name", "scenario", "scheduler"):
            if not isinstance(getattr(self, attr), str):
                raise ValueError(f"'{attr}' must be a string")
        for attr in ("floors", "elevator_count", "human_count", "max_steps"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"'{attr}' must be an integer, got {value!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ValueError(f"'seed' must be an integer, got {self.seed!r}")
        if not isinstance(self.scheduler_options, dict):
            raise ValueError("Scheduler options must be a mapping")
        if not isinstance(self.smart_initial_direction, bool):
            raise ValueError("'smart_initial_direction' must be true or false")
        if self.scenario not in SCENARIOS:
            raise ValueError(f"Unknown scenario '{self.scenario}'. Available: {', '.join(SCENARIOS)}")
        if self.scheduler.lower() not in SCHEDULER_REGISTRY:
            raise ValueError(
                f"Unknown scheduler '{self.scheduler}'. Available: {', '.join(SCHEDULER_REGISTRY)}"
            )
        try:
            get_scheduler(self.scheduler, **self.scheduler_options)
        except TypeError as exc:
            raise ValueError(f"Invalid options for scheduler '{self.scheduler}': {exc}") from exc
        if self.floors < 2:
            raise ValueError("Building must have at least two floors")
        if self.elevator_count < 1:
            raise ValueError("Simulation requires at least one elevator")
        if self.human_count < 0:
            raise ValueError("Human count cannot be negative")
        if self.max_steps < 1:
            raise ValueError("Step budget must be positive")

    @classmethod
    def from_dict(cls, data: Dict) -> "SimulationConfig":
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a JSON object")
        building_cfg = _section(data, "building")
        scheduler_cfg = _section(data, "scheduler")
        cfg = cls(
            name=data.get("name", "scenario"),
            description=data.get("description"),
            scenario=data.get("scenario", "random"),
            seed=data.get("seed"),
            elevator_count=building_cfg.get("elevator_count", 2),
            human_count=data.get("human_count", 50),
            floors=building_cfg.get("floors", 10),
            scheduler=scheduler_cfg.get("name", "fewest_pickups"),
            scheduler_options=scheduler_cfg.get("options", {}),
            smart_initial_direction=data.get("smart_initial_direction", True),
            max_steps=data.get("max_steps", 100_000),
        )
        cfg.validate()
        return cfg


def _section(data: Dict, key: str) -> Dict:
    section = data.get(key, {})
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' section must be an object")
    return section
