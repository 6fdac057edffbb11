from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .direction import HumanState, TravelDirection
from .panels import ElevatorPanel, FloorPanelSystem, HumanArrivedListener


@dataclass
class Human:
    """A person who wants to get from one floor to another.

    Humans only react to events: the system becoming ready and an elevator
    standing at some floor. They never hold a reference to an elevator, only
    the id of the one they are riding.
    """

    starting_floor: int
    destination_floor: int
    current_state: HumanState = field(init=False, default=HumanState.IDLE)
    current_elevator_id: Optional[int] = field(init=False, default=None)
    _floor_panel: Optional[FloorPanelSystem] = field(init=False, default=None, repr=False)
    _arrival_listeners: List[HumanArrivedListener] = field(
        init=False, default_factory=list, repr=False
    )

    def __post_init__(self) -> None:
        if self.starting_floor < 1 or self.destination_floor < 1:
            raise ValueError("Floors must be at least 1")

    @property
    def travel_direction(self) -> TravelDirection:
        if self.destination_floor > self.starting_floor:
            return TravelDirection.UP
        if self.destination_floor < self.starting_floor:
            return TravelDirection.DOWN
        return TravelDirection.STATIONARY

    def has_arrived(self) -> bool:
        return self.current_state is HumanState.ARRIVED

    def add_arrival_listener(self, listener: HumanArrivedListener) -> None:
        self._arrival_listeners.append(listener)

    def on_system_ready(self, floor_panel: Optional[FloorPanelSystem] = None) -> None:
        if self.current_state is not HumanState.IDLE:
            return
        self._floor_panel = floor_panel
        self.current_state = HumanState.WAITING_FOR_ELEVATOR
        if self.travel_direction is TravelDirection.STATIONARY:
            self._arrive()
            return
        if floor_panel is not None:
            floor_panel.request_elevator(self.starting_floor, self.travel_direction)

    def on_elevator_at_floor(self, panel: ElevatorPanel) -> None:
        if self.current_state is HumanState.ARRIVED:
            return
        if panel.current_floor not in (self.starting_floor, self.destination_floor):
            return

        if self._can_board(panel):
            self.current_elevator_id = panel.elevator_id
            self.current_state = HumanState.TRAVELING_WITH_ELEVATOR
            if self._floor_panel is not None and panel.elevator_id is not None:
                self._floor_panel.request_destination(panel.elevator_id, self.destination_floor)
            return

        if (
            self.current_state is HumanState.TRAVELING_WITH_ELEVATOR
            and self.current_elevator_id is not None
            and self.current_elevator_id == panel.elevator_id
            and panel.current_floor == self.destination_floor
        ):
            self.current_elevator_id = None
            self._arrive()

    def _can_board(self, panel: ElevatorPanel) -> bool:
        if self.current_state is not HumanState.WAITING_FOR_ELEVATOR:
            return False
        if panel.current_floor != self.starting_floor or self.current_elevator_id is not None:
            return False
        # A parked shuttle stands at a boundary but never leaves it again.
        if panel.parked:
            return False
        return panel.travel_direction is self.travel_direction or panel.at_terminal_floor()

    def _arrive(self) -> None:
        if self.current_state is HumanState.ARRIVED:
            return
        self.current_state = HumanState.ARRIVED
        for listener in self._arrival_listeners:
            listener.on_human_arrived(self)
