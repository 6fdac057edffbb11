from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from .direction import TravelDirection

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .human import Human


@dataclass(frozen=True)
class ElevatorPanel:
    """Read-only view of an elevator as seen by the humans around it."""

    elevator_id: Optional[int]
    current_floor: int
    min_floor: int
    top_floor: int
    travel_direction: TravelDirection
    parked: bool = False

    def at_terminal_floor(self) -> bool:
        return self.current_floor in (self.min_floor, self.top_floor)


class FloorPanelSystem(Protocol):
    """Buttons a human can press, in the corridor or inside a car."""

    def request_elevator(self, at_floor: int, direction: TravelDirection) -> None:
        ...

    def request_destination(self, elevator_id: int, floor: int) -> None:
        ...


class ElevatorListener(Protocol):
    """Subscriber to the events an elevator system fires every step."""

    starting_floor: int

    @property
    def travel_direction(self) -> TravelDirection:
        ...

    def has_arrived(self) -> bool:
        ...

    def on_system_ready(self, floor_panel: Optional[FloorPanelSystem] = None) -> None:
        ...

    def on_elevator_at_floor(self, panel: ElevatorPanel) -> None:
        ...


class HumanArrivedListener(Protocol):
    def on_human_arrived(self, human: "Human") -> None:
        ...
