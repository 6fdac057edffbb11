from __future__ import annotations

from typing import Optional, Sequence

from .interface import ElevatorSnapshot


class FewestPickupsScheduler:
    """Balances pickups by choosing the car with the fewest starting floors to service."""

    def select_elevator(
        self,
        elevator_state: Sequence[ElevatorSnapshot],
        floor: int,
        direction: str,
    ) -> Optional[int]:
        best: Optional[ElevatorSnapshot] = None
        for elevator in elevator_state:
            # Strict comparison keeps the first registered car on ties.
            if best is None or elevator.pending_pickups < best.pending_pickups:
                best = elevator
        return best.elevator_id if best is not None else None
