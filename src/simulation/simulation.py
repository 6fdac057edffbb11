from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from building import Elevator, ElevatorSystem, Human, HumanState

from .config import SimulationConfig

logger = logging.getLogger(__name__)


class SimulationAbortedError(RuntimeError):
    """Raised when the step budget runs out before every human arrived."""


@dataclass
class MetricsSnapshot:
    step: int
    total_humans: int
    arrived: int
    arrived_percentage: float
    average_arrival_step: float
    arrival_p50: float
    arrival_p95: float


@dataclass
class SimulationSummary:
    elevator_count: int
    human_count: int
    min_floor: int
    top_floor: int
    scheduler: str
    seed: Optional[int] = None


@dataclass
class SimulationResult:
    steps: int
    done: bool
    metrics: MetricsSnapshot


class ArrivalTracker:
    def __init__(self, total_humans: int) -> None:
        self.total_humans = total_humans
        self.arrival_steps: List[int] = []

    def record_arrival(self, step: int) -> None:
        self.arrival_steps.append(step)

    def _average(self, values: List[int]) -> float:
        if not values:
            return 0.0
        return sum(values) / len(values)

    def _percentile(self, values: List[int], percentile: float) -> float:
        if not values:
            return 0.0
        sorted_vals = sorted(values)
        k = (len(sorted_vals) - 1) * percentile
        f = math.floor(k)
        c = math.ceil(k)
        if f == c:
            return float(sorted_vals[int(k)])
        d0 = sorted_vals[int(f)] * (c - k)
        d1 = sorted_vals[int(c)] * (k - f)
        return float(d0 + d1)

    def snapshot(self, step: int) -> MetricsSnapshot:
        arrived = len(self.arrival_steps)
        return MetricsSnapshot(
            step=step,
            total_humans=self.total_humans,
            arrived=arrived,
            arrived_percentage=100.0 * arrived / self.total_humans if self.total_humans else 100.0,
            average_arrival_step=self._average(self.arrival_steps),
            arrival_p50=self._percentile(self.arrival_steps, 0.5),
            arrival_p95=self._percentile(self.arrival_steps, 0.95),
        )


class Simulation:
    """Step-driven run of an elevator system until every human has arrived."""

    def __init__(
        self,
        elevators: Iterable[Elevator],
        humans: Iterable[Human],
        scheduler_name: str = "fewest_pickups",
        scheduler_options: Optional[dict] = None,
        smart_initial_direction: bool = True,
        max_steps: int = 100_000,
        seed: Optional[int] = None,
    ) -> None:
        self.elevators = list(elevators)
        self.humans = list(humans)
        self.elevator_system = ElevatorSystem(
            scheduler_name=scheduler_name,
            scheduler_options=scheduler_options,
            smart_initial_direction=smart_initial_direction,
        )
        self.max_steps = max_steps
        self.seed = seed
        self.metrics = ArrivalTracker(len(self.humans))
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self._started = False
        self._current_step = 0

    @property
    def step_count(self) -> int:
        return self.elevator_system.step_count

    @property
    def started(self) -> bool:
        return self._started

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def start(self) -> None:
        if self._started:
            raise RuntimeError("Simulation has already been started")
        for elevator in self.elevators:
            self.elevator_system.register_elevator(elevator)
        for human in self.humans:
            human.add_arrival_listener(self)
            self.elevator_system.register_human_listener(human)
        self._started = True
        logger.info(
            "Starting simulation with %d elevators and %d humans",
            len(self.elevators),
            len(self.humans),
        )
        self.elevator_system.ready()
        self._emit("start", self.summary())
        if self.is_done():
            self._emit("done", self.result())

    def step(self) -> None:
        self._current_step = self.step_count + 1
        self.elevator_system.advance_one_floor()
        self._emit("step", {"step": self.step_count})
        if self.is_done():
            logger.info("All %d humans arrived after %d steps", len(self.humans), self.step_count)
            self._emit("done", self.result())
            return
        if self.step_count >= self.max_steps:
            remaining = len(self.humans) - len(self.metrics.arrival_steps)
            logger.error("Step budget of %d exhausted with %d humans remaining", self.max_steps, remaining)
            raise SimulationAbortedError(
                f"Simulation aborted after {self.step_count} steps: "
                f"{remaining} humans have still not arrived"
            )

    def run(self) -> SimulationResult:
        if not self._started:
            self.start()
        while not self.is_done():
            self.step()
        return self.result()

    def is_done(self) -> bool:
        return self._started and self.elevator_system.all_arrived()

    def on_human_arrived(self, human: Human) -> None:
        self.metrics.record_arrival(self._current_step)
        self._emit("arrival", {"step": self._current_step, "human": human})

    def summary(self) -> SimulationSummary:
        return SimulationSummary(
            elevator_count=len(self.elevators),
            human_count=len(self.humans),
            min_floor=min((e.min_floor for e in self.elevators), default=1),
            top_floor=max((e.top_floor for e in self.elevators), default=1),
            scheduler=self.elevator_system.scheduler_name,
            seed=self.seed,
        )

    def result(self) -> SimulationResult:
        return SimulationResult(
            steps=self.step_count,
            done=self.is_done(),
            metrics=self.metrics.snapshot(self.step_count),
        )

    def snapshot(self) -> dict:
        states: Dict[str, int] = {state.value: 0 for state in HumanState}
        for human in self.humans:
            states[human.current_state.value] += 1
        return {
            "step": self.step_count,
            "done": self.is_done(),
            "elevators": [
                {
                    "id": elevator.elevator_id,
                    "floor": elevator.current_floor,
                    "min_floor": elevator.min_floor,
                    "top_floor": elevator.top_floor,
                    "direction": elevator.travel_direction.value,
                    "role": elevator.role.value,
                    "parked": elevator.parked,
                    "starting_floors": list(elevator.starting_floors),
                    "destination_floors": list(elevator.destination_floors),
                }
                for elevator in self.elevators
            ],
            "humans": states,
        }

    def render(self) -> str:
        """Text picture of the building, top floor first."""
        summary = self.summary()
        lines = []
        for floor in range(summary.top_floor, summary.min_floor - 1, -1):
            cells = []
            for elevator in self.elevators:
                if elevator.current_floor == floor:
                    riders = sum(
                        1
                        for h in self.humans
                        if h.current_state is HumanState.TRAVELING_WITH_ELEVATOR
                        and h.current_elevator_id == elevator.elevator_id
                    )
                    cells.append(f"[{riders:>2}]")
                elif elevator.serves(floor):
                    cells.append("  | ")
                else:
                    cells.append("    ")
            waiting = sum(
                1
                for h in self.humans
                if h.current_state is HumanState.WAITING_FOR_ELEVATOR and h.starting_floor == floor
            )
            arrived = sum(
                1 for h in self.humans if h.has_arrived() and h.destination_floor == floor
            )
            lines.append(f"{floor:>4} {''.join(cells)}  waiting={waiting} arrived={arrived}")
        return "\n".join(lines)

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)


def create_single_elevator_single_human(**options) -> Simulation:
    return Simulation([Elevator(1, 10, 1)], [Human(1, 5)], **options)


def create_simple(**options) -> Simulation:
    elevators = [Elevator(1, 10, 1), Elevator(1, 10, 6)]
    humans = [
        Human(1, 2),
        Human(1, 5),
        Human(8, 3),
        Human(10, 1),
        Human(3, 3),
        Human(6, 10),
        Human(9, 4),
    ]
    return Simulation(elevators, humans, **options)


def create_random(
    seed: Optional[int] = None,
    elevator_count: int = 2,
    human_count: int = 50,
    floors: int = 10,
    **options,
) -> Simulation:
    """Seeded random building where every elevator serves every floor.

    The seed is logged so a run can be repeated exactly.
    """
    if seed is None:
        seed = random.randrange(2**32)
    logger.info("Creating random simulation with seed %d", seed)
    rng = random.Random(seed)
    elevators = [Elevator(1, floors, rng.randint(1, floors)) for _ in range(elevator_count)]
    humans = [Human(rng.randint(1, floors), rng.randint(1, floors)) for _ in range(human_count)]
    return Simulation(elevators, humans, seed=seed, **options)


def build_simulation(config: SimulationConfig) -> Simulation:
    config.validate()
    options = {
        "scheduler_name": config.scheduler,
        "scheduler_options": config.scheduler_options,
        "smart_initial_direction": config.smart_initial_direction,
        "max_steps": config.max_steps,
    }
    if config.scenario == "random":
        return create_random(
            config.seed,
            config.elevator_count,
            config.human_count,
            config.floors,
            **options,
        )
    if config.scenario == "simple":
        return create_simple(**options)
    return create_single_elevator_single_human(**options)
