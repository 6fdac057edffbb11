from __future__ import annotations

from enum import Enum


class TravelDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STATIONARY = "stationary"


class ElevatorRole(str, Enum):
    """Movement policy an elevator follows for the whole run."""

    SOLE_ELEVATOR = "sole_elevator"
    UP_TRAVELLER = "up_traveller"
    DOWN_TRAVELLER = "down_traveller"


class HumanState(str, Enum):
    IDLE = "idle"
    WAITING_FOR_ELEVATOR = "waiting_for_elevator"
    TRAVELING_WITH_ELEVATOR = "traveling_with_elevator"
    ARRIVED = "arrived"
