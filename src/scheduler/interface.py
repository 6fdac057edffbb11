from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for selection decisions."""

    elevator_id: int
    current_floor: int
    min_floor: int
    top_floor: int
    travel_direction: str  # "up" or "down"
    role: str
    pending_pickups: int

    def serves(self, floor: int) -> bool:
        return self.min_floor <= floor <= self.top_floor


class Scheduler(Protocol):
    """Strategy interface for picking the elevator that serves a request."""

    def select_elevator(
        self,
        elevator_state: Sequence[ElevatorSnapshot],
        floor: int,
        direction: str,
    ) -> Optional[int]:
        """
        Return the id of the elevator that should serve ``floor``.

        ``elevator_state`` is in registration order. Implementations return
        ``None`` only when no elevators are given.
        """
        ...
