from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from scheduler import ElevatorSnapshot, Scheduler, get_scheduler

from .direction import ElevatorRole, TravelDirection
from .elevator import Elevator
from .panels import ElevatorListener

logger = logging.getLogger(__name__)


class ElevatorSystemStateError(RuntimeError):
    """Raised when the elevator system is used out of its lifecycle order."""


class ElevatorSystem:
    """Dispatcher controlling every elevator of a building.

    Elevators and human listeners are registered first, then :meth:`ready`
    fixes the elevator roles and wakes the humans up. From then on each call
    to :meth:`advance_one_floor` lets every human observe every elevator at
    its current floor before any elevator moves.
    """

    def __init__(
        self,
        scheduler_name: str = "fewest_pickups",
        scheduler_options: Optional[dict] = None,
        smart_initial_direction: bool = True,
    ) -> None:
        self.scheduler_name = scheduler_name
        self.scheduler_options = scheduler_options or {}
        self.scheduler: Scheduler = get_scheduler(scheduler_name, **self.scheduler_options)
        self.smart_initial_direction = smart_initial_direction
        self.step_count: int = 0
        self._elevators: List[Elevator] = []
        self._listeners: List[ElevatorListener] = []
        self._ready = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def elevators(self) -> List[Elevator]:
        return list(self._elevators)

    @property
    def listeners(self) -> List[ElevatorListener]:
        return list(self._listeners)

    def register_elevator(self, elevator: Elevator) -> int:
        self._ensure_not_ready("register an elevator")
        if elevator.elevator_id is not None:
            raise ValueError(f"Elevator {elevator.elevator_id} is already registered")
        elevator.elevator_id = len(self._elevators)
        self._elevators.append(elevator)
        return elevator.elevator_id

    def register_human_listener(self, listener: ElevatorListener) -> None:
        self._ensure_not_ready("register a listener")
        self._listeners.append(listener)

    def ready(self) -> None:
        """Assign roles, then notify every listener that the system is ready."""
        self._ensure_not_ready("call ready()")
        self._assign_roles()
        self._ready = True
        logger.info(
            "Elevator system ready with %d elevators and %d listeners",
            len(self._elevators),
            len(self._listeners),
        )
        for listener in self._listeners:
            listener.on_system_ready(self)

    def best_elevator(
        self, floor: int, direction: TravelDirection = TravelDirection.STATIONARY
    ) -> Optional[Elevator]:
        if not self._elevators:
            return None
        if len(self._elevators) == 1:
            return self._elevators[0]
        elevator_id = self.scheduler.select_elevator(
            self._snapshot_elevators(), floor, direction.value
        )
        if elevator_id is None:
            return None
        return self._elevators[elevator_id]

    def request_elevator(self, at_floor: int, direction: TravelDirection) -> None:
        elevator = self.best_elevator(at_floor, direction)
        if elevator is None:
            logger.debug("No elevator available for pickup at floor %d", at_floor)
            return
        elevator.request_pickup(at_floor)

    def request_destination(self, elevator_id: int, floor: int) -> None:
        if not 0 <= elevator_id < len(self._elevators):
            raise KeyError(f"Unknown elevator id {elevator_id}")
        self._elevators[elevator_id].request_destination(floor)

    def advance_one_floor(self) -> None:
        if not self._ready:
            raise ElevatorSystemStateError("Cannot advance elevators before ready() was called")
        # Humans board and alight at the pre-move floor, then every car moves.
        for elevator in self._elevators:
            panel = elevator.panel()
            for listener in self._listeners:
                listener.on_elevator_at_floor(panel)
        for elevator in self._elevators:
            elevator.advance_one_floor()
        self.step_count += 1

    def all_arrived(self) -> bool:
        return all(listener.has_arrived() for listener in self._listeners)

    def find_optimal_direction(self, elevator: Elevator) -> TravelDirection:
        """Direction that serves more of the registered humans first.

        Humans at or above the car going up are weighed against humans at or
        below it going down. On a tie, the side holding more humans wins, and
        a full tie keeps the car going up.
        """
        going_up = going_down = above = below = 0
        for listener in self._listeners:
            start = listener.starting_floor
            direction = listener.travel_direction
            if start >= elevator.current_floor and direction is TravelDirection.UP:
                going_up += 1
            if start <= elevator.current_floor and direction is TravelDirection.DOWN:
                going_down += 1
            if start > elevator.current_floor:
                above += 1
            elif start < elevator.current_floor:
                below += 1
        if going_up == going_down:
            return TravelDirection.DOWN if below > above else TravelDirection.UP
        return TravelDirection.DOWN if going_down > going_up else TravelDirection.UP

    def _assign_roles(self) -> None:
        if len(self._elevators) >= 2:
            down_traveller, up_traveller = self._pick_shuttles(self._elevators)
            down_traveller.assign_role(ElevatorRole.DOWN_TRAVELLER)
            up_traveller.assign_role(ElevatorRole.UP_TRAVELLER)
            logger.info(
                "Elevator %s is the down traveller, elevator %s the up traveller",
                down_traveller.elevator_id,
                up_traveller.elevator_id,
            )
        for elevator in self._elevators:
            if elevator.role is not ElevatorRole.SOLE_ELEVATOR:
                continue
            if self.smart_initial_direction:
                elevator.assign_role(ElevatorRole.SOLE_ELEVATOR, self.find_optimal_direction(elevator))
            else:
                elevator.assign_role(ElevatorRole.SOLE_ELEVATOR)
            logger.debug(
                "Elevator %s sweeps, starting %s from floor %d",
                elevator.elevator_id,
                elevator.travel_direction.value,
                elevator.current_floor,
            )

    @staticmethod
    def _pick_shuttles(elevators: Sequence[Elevator]) -> Tuple[Elevator, Elevator]:
        """Return ``(down_traveller, up_traveller)``.

        The car closest to its top floor carries downward traffic and the car
        closest to its bottom floor carries upward traffic. When one car wins
        both, the second closest to the top takes the downward role; the
        bottom pick is never reconsidered.
        """
        assert len(elevators) >= 2, "Shuttle roles need at least two elevators"
        by_top = sorted(elevators, key=lambda e: e.top_floor - e.current_floor)
        up_traveller = min(elevators, key=lambda e: e.current_floor - e.min_floor)
        down_traveller = by_top[0]
        if down_traveller is up_traveller:
            down_traveller = by_top[1]
        return down_traveller, up_traveller

    def _snapshot_elevators(self) -> List[ElevatorSnapshot]:
        return [
            ElevatorSnapshot(
                elevator_id=index,
                current_floor=elevator.current_floor,
                min_floor=elevator.min_floor,
                top_floor=elevator.top_floor,
                travel_direction=elevator.travel_direction.value,
                role=elevator.role.value,
                pending_pickups=len(elevator.starting_floors),
            )
            for index, elevator in enumerate(self._elevators)
        ]

    def _ensure_not_ready(self, action: str) -> None:
        if self._ready:
            raise ElevatorSystemStateError(f"Cannot {action} after the system is ready")
