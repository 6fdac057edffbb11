import pytest

from building import (
    Elevator,
    ElevatorRole,
    ElevatorSystem,
    ElevatorSystemStateError,
    Human,
    HumanState,
    TravelDirection,
)


class RecordingListener:
    def __init__(self, name, log, starting_floor=1, travel_direction=TravelDirection.UP):
        self.name = name
        self.log = log
        self.starting_floor = starting_floor
        self.travel_direction = travel_direction

    def has_arrived(self):
        return False

    def on_system_ready(self, floor_panel=None):
        self.log.append(("ready", self.name))

    def on_elevator_at_floor(self, panel):
        self.log.append((self.name, panel.elevator_id, panel.current_floor))


def ready_system(elevators, humans=(), **kwargs):
    system = ElevatorSystem(**kwargs)
    for elevator in elevators:
        system.register_elevator(elevator)
    for human in humans:
        system.register_human_listener(human)
    system.ready()
    return system


def test_registration_allocates_sequential_ids():
    system = ElevatorSystem()
    first, second = Elevator(1, 5, 1), Elevator(1, 5, 3)
    assert system.register_elevator(first) == 0
    assert system.register_elevator(second) == 1
    assert [e.elevator_id for e in system.elevators] == [0, 1]


def test_elevator_cannot_be_registered_twice():
    elevator = Elevator(1, 5, 1)
    ElevatorSystem().register_elevator(elevator)
    with pytest.raises(ValueError):
        ElevatorSystem().register_elevator(elevator)


def test_lifecycle_errors():
    system = ElevatorSystem()
    with pytest.raises(ElevatorSystemStateError):
        system.advance_one_floor()
    system.register_elevator(Elevator(1, 5, 1))
    system.ready()
    with pytest.raises(ElevatorSystemStateError):
        system.ready()
    with pytest.raises(ElevatorSystemStateError):
        system.register_elevator(Elevator(1, 5, 1))
    with pytest.raises(ElevatorSystemStateError):
        system.register_human_listener(Human(1, 2))


def test_single_elevator_sweeps():
    system = ready_system([Elevator(1, 5, 3)])
    assert system.elevators[0].role is ElevatorRole.SOLE_ELEVATOR


def test_shuttle_roles_for_two_elevators():
    low, high = Elevator(1, 10, 2), Elevator(1, 10, 9)
    ready_system([low, high])
    assert high.role is ElevatorRole.DOWN_TRAVELLER
    assert low.role is ElevatorRole.UP_TRAVELLER
    assert high.travel_direction is TravelDirection.DOWN
    assert low.travel_direction is TravelDirection.UP


def test_coincident_pick_falls_back_to_second_closest_to_top():
    short = Elevator(1, 2, 1)
    middle = Elevator(1, 10, 5)
    upper = Elevator(1, 10, 8)
    ready_system([short, middle, upper])
    assert short.role is ElevatorRole.UP_TRAVELLER
    assert upper.role is ElevatorRole.DOWN_TRAVELLER
    assert middle.role is ElevatorRole.SOLE_ELEVATOR


def test_ready_notifies_listeners_once_in_registration_order():
    log = []
    ready_system([Elevator(1, 5, 1)], [RecordingListener("a", log), RecordingListener("b", log)])
    assert log == [("ready", "a"), ("ready", "b")]


def test_best_elevator_balances_pickups():
    first, second = Elevator(1, 10, 1), Elevator(1, 10, 10)
    system = ElevatorSystem()
    system.register_elevator(first)
    system.register_elevator(second)

    assert system.best_elevator(5) is first
    first.request_pickup(3)
    assert system.best_elevator(5) is second
    second.request_pickup(4)
    assert system.best_elevator(5) is first
    second.request_pickup(6)
    assert system.best_elevator(5) is first


def test_single_elevator_is_always_best():
    only = Elevator(1, 10, 1)
    system = ElevatorSystem()
    system.register_elevator(only)
    for floor in (2, 3, 4):
        only.request_pickup(floor)
    assert system.best_elevator(7) is only
    assert ElevatorSystem().best_elevator(7) is None


def test_request_elevator_records_pickup_on_best_elevator():
    first, second = Elevator(1, 10, 1), Elevator(1, 10, 10)
    system = ElevatorSystem()
    system.register_elevator(first)
    system.register_elevator(second)
    system.request_elevator(3, TravelDirection.UP)
    system.request_elevator(4, TravelDirection.UP)
    system.request_elevator(6, TravelDirection.DOWN)
    assert first.starting_floors == [3, 6]
    assert second.starting_floors == [4]


def test_request_destination_looks_up_elevator_by_id():
    system = ElevatorSystem()
    elevator = Elevator(1, 10, 1)
    system.register_elevator(elevator)
    system.request_destination(0, 7)
    assert elevator.destination_floors == [7]
    with pytest.raises(KeyError):
        system.request_destination(1, 7)


def test_humans_see_every_elevator_before_any_moves():
    log = []
    system = ready_system(
        [Elevator(1, 5, 1), Elevator(1, 5, 5)],
        [RecordingListener("a", log), RecordingListener("b", log)],
    )
    del log[:]
    system.advance_one_floor()
    assert log == [("a", 0, 1), ("b", 0, 1), ("a", 1, 5), ("b", 1, 5)]
    assert [e.current_floor for e in system.elevators] == [2, 4]
    assert system.step_count == 1


def test_boarding_happens_before_moving():
    elevator = Elevator(1, 5, 2)
    human = Human(2, 3)
    system = ready_system([elevator], [human])

    system.advance_one_floor()
    assert human.current_state is HumanState.TRAVELING_WITH_ELEVATOR
    assert elevator.current_floor == 3

    system.advance_one_floor()
    assert human.current_state is HumanState.ARRIVED


def test_single_elevator_single_human_scenario():
    elevator = Elevator(1, 5, 1)
    human = Human(1, 3)
    system = ready_system([elevator], [human])
    assert human.current_state is HumanState.WAITING_FOR_ELEVATOR
    assert elevator.starting_floors == [1]

    system.advance_one_floor()
    assert human.current_state is HumanState.TRAVELING_WITH_ELEVATOR
    assert human.current_elevator_id == elevator.elevator_id
    assert elevator.destination_floors == [3]
    assert elevator.current_floor == 2

    system.advance_one_floor()
    assert human.current_state is HumanState.TRAVELING_WITH_ELEVATOR
    assert elevator.current_floor == 3

    system.advance_one_floor()
    assert human.current_state is HumanState.ARRIVED
    assert system.all_arrived()
    assert system.step_count == 3


def test_stationary_human_arrives_before_any_movement():
    human = Human(3, 3)
    system = ready_system([Elevator(1, 5, 1)], [human])
    assert human.has_arrived()
    assert system.all_arrived()
    assert system.step_count == 0


def test_two_shuttles_deliver_everyone():
    bottom, top = Elevator(1, 6, 1), Elevator(1, 6, 6)
    humans = [Human(1, 6), Human(6, 1), Human(3, 5), Human(5, 2), Human(2, 2)]
    system = ready_system([bottom, top], humans)
    assert bottom.role is ElevatorRole.UP_TRAVELLER
    assert top.role is ElevatorRole.DOWN_TRAVELLER

    while not system.all_arrived():
        system.advance_one_floor()
        assert system.step_count <= 20
    assert system.step_count == 6


def test_smart_initial_direction_follows_demand():
    humans = [Human(3, 1), Human(4, 2), Human(8, 9)]
    smart = ready_system([Elevator(1, 10, 5)], humans)
    assert smart.elevators[0].travel_direction is TravelDirection.DOWN

    plain = ready_system(
        [Elevator(1, 10, 5)],
        [Human(3, 1), Human(4, 2), Human(8, 9)],
        smart_initial_direction=False,
    )
    assert plain.elevators[0].travel_direction is TravelDirection.UP


def test_optimal_direction_ties():
    system = ElevatorSystem()
    elevator = Elevator(1, 10, 5)
    assert system.find_optimal_direction(elevator) is TravelDirection.UP

    system.register_human_listener(Human(2, 2))
    system.register_human_listener(Human(3, 3))
    system.register_human_listener(Human(9, 9))
    assert system.find_optimal_direction(elevator) is TravelDirection.DOWN


def test_humans_on_the_car_floor_steer_the_initial_direction():
    elevator = Elevator(1, 5, 2)
    human = Human(2, 3)
    system = ready_system([elevator], [human])
    assert elevator.travel_direction is TravelDirection.UP

    system.advance_one_floor()
    assert human.current_state is HumanState.TRAVELING_WITH_ELEVATOR
    assert elevator.current_floor == 3

    downward = ElevatorSystem()
    downward.register_human_listener(Human(4, 1))
    assert downward.find_optimal_direction(Elevator(1, 10, 4)) is TravelDirection.DOWN


def test_nearest_scheduler_is_pluggable():
    far, near = Elevator(1, 10, 1), Elevator(1, 10, 7)
    system = ElevatorSystem(scheduler_name="nearest")
    system.register_elevator(far)
    system.register_elevator(near)
    assert system.best_elevator(6, TravelDirection.UP) is near


def test_unknown_scheduler_is_rejected():
    with pytest.raises(ValueError):
        ElevatorSystem(scheduler_name="bogus")
