from __future__ import annotations

from typing import Optional, Sequence

from .interface import ElevatorSnapshot
from .utils import heading_towards, steps_to_reach


class NearestCarScheduler:
    """Chooses the closest car that serves the requested floor."""

    def __init__(self, prefer_heading: bool = True) -> None:
        self.prefer_heading = prefer_heading

    def select_elevator(
        self,
        elevator_state: Sequence[ElevatorSnapshot],
        floor: int,
        direction: str,
    ) -> Optional[int]:
        elevators = list(elevator_state)
        if not elevators:
            return None
        candidates = [e for e in elevators if e.serves(floor)] or elevators
        order = {e.elevator_id: index for index, e in enumerate(elevators)}
        candidates.sort(
            key=lambda e: (
                steps_to_reach(e, floor),
                not (self.prefer_heading and heading_towards(e, floor)),
                e.pending_pickups,
                order[e.elevator_id],
            )
        )
        return candidates[0].elevator_id
