from __future__ import annotations

from .interface import ElevatorSnapshot


def steps_to_reach(elevator: ElevatorSnapshot, floor: int) -> int:
    """Number of one-floor moves between the car and a floor.

    Floors outside the served range are measured to the nearest boundary.
    """

    target = min(max(floor, elevator.min_floor), elevator.top_floor)
    return abs(elevator.current_floor - target)


def heading_towards(elevator: ElevatorSnapshot, floor: int) -> bool:
    if elevator.current_floor == floor:
        return True
    if elevator.travel_direction == "up":
        return floor > elevator.current_floor
    if elevator.travel_direction == "down":
        return floor < elevator.current_floor
    return False
