"""Elevators, humans and the dispatcher that moves them."""

from .direction import ElevatorRole, HumanState, TravelDirection
from .elevator import Elevator
from .elevator_system import ElevatorSystem, ElevatorSystemStateError
from .human import Human
from .panels import ElevatorListener, ElevatorPanel, FloorPanelSystem, HumanArrivedListener

__all__ = [
    "Elevator",
    "ElevatorListener",
    "ElevatorPanel",
    "ElevatorRole",
    "ElevatorSystem",
    "ElevatorSystemStateError",
    "FloorPanelSystem",
    "Human",
    "HumanArrivedListener",
    "HumanState",
    "TravelDirection",
]
