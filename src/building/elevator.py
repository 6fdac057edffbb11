from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .direction import ElevatorRole, TravelDirection
from .panels import ElevatorPanel


@dataclass
class Elevator:
    """A single car serving a contiguous range of floors.

    The car moves exactly one floor per call to :meth:`advance_one_floor`.
    How it moves depends on the role the elevator system assigns at ready
    time: a sole elevator sweeps between its boundary floors, while up and
    down travellers run one leg towards their extreme and then return for
    good, parking at the opposite boundary.
    """

    min_floor: int
    floors_served: int
    current_floor: int
    elevator_id: Optional[int] = None
    travel_direction: TravelDirection = field(init=False)
    role: ElevatorRole = field(init=False, default=ElevatorRole.SOLE_ELEVATOR)
    starting_floors: List[int] = field(init=False, default_factory=list)
    destination_floors: List[int] = field(init=False, default_factory=list)
    parked: bool = field(init=False, default=False)
    _reached_limit: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        if self.min_floor < 1 or self.floors_served < 2:
            raise ValueError("Min floor must be at least 1, floors served at least 2")
        if not self.serves(self.current_floor):
            raise ValueError(
                f"Current floor {self.current_floor} must be between "
                f"{self.min_floor} and {self.top_floor}"
            )
        if self.current_floor == self.top_floor:
            self.travel_direction = TravelDirection.DOWN
        else:
            self.travel_direction = TravelDirection.UP

    @property
    def top_floor(self) -> int:
        return self.min_floor + self.floors_served - 1

    def serves(self, floor: int) -> bool:
        return self.min_floor <= floor <= self.top_floor

    def panel(self) -> ElevatorPanel:
        return ElevatorPanel(
            elevator_id=self.elevator_id,
            current_floor=self.current_floor,
            min_floor=self.min_floor,
            top_floor=self.top_floor,
            travel_direction=self.travel_direction,
            parked=self.parked,
        )

    def assign_role(self, role: ElevatorRole, direction: Optional[TravelDirection] = None) -> None:
        self.role = role
        if role is ElevatorRole.UP_TRAVELLER:
            self.travel_direction = TravelDirection.UP
        elif role is ElevatorRole.DOWN_TRAVELLER:
            self.travel_direction = TravelDirection.DOWN
        elif self.current_floor == self.min_floor:
            self.travel_direction = TravelDirection.UP
        elif self.current_floor == self.top_floor:
            self.travel_direction = TravelDirection.DOWN
        elif direction is not None:
            self.travel_direction = direction

    def request_destination(self, floor: int) -> None:
        if self.serves(floor) and floor not in self.destination_floors:
            self.destination_floors.append(floor)

    def request_pickup(self, floor: int) -> None:
        if self.serves(floor) and floor not in self.starting_floors:
            self.starting_floors.append(floor)

    def advance_one_floor(self) -> None:
        if self.role is ElevatorRole.SOLE_ELEVATOR:
            self._sweep()
        elif self.role is ElevatorRole.UP_TRAVELLER:
            self._shuttle(TravelDirection.UP, self.top_floor, self.min_floor)
        elif self.role is ElevatorRole.DOWN_TRAVELLER:
            self._shuttle(TravelDirection.DOWN, self.min_floor, self.top_floor)
        else:  # pragma: no cover - closed enumeration
            raise ValueError(f"Unknown elevator role: {self.role}")

    def _sweep(self) -> None:
        if self.current_floor == self.min_floor:
            self.travel_direction = TravelDirection.UP
        elif self.current_floor == self.top_floor:
            self.travel_direction = TravelDirection.DOWN
        self._step(self.travel_direction)

    def _shuttle(self, outbound: TravelDirection, limit_floor: int, park_floor: int) -> None:
        if self.parked:
            return
        if not self._reached_limit and self.current_floor == limit_floor:
            self._reached_limit = True
        if self._reached_limit:
            self.travel_direction = (
                TravelDirection.DOWN if outbound is TravelDirection.UP else TravelDirection.UP
            )
        else:
            self.travel_direction = outbound
        self._step(self.travel_direction)
        if self._reached_limit and self.current_floor == park_floor:
            self.parked = True

    def _step(self, direction: TravelDirection) -> None:
        if direction is TravelDirection.UP and self.current_floor < self.top_floor:
            self.current_floor += 1
        elif direction is TravelDirection.DOWN and self.current_floor > self.min_floor:
            self.current_floor -= 1
