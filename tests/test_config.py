import json
from pathlib import Path

import pytest

from simulation import SimulationConfig

SCENARIO_DIR = Path(__file__).resolve().parents[1] / "scenarios"


def test_from_dict_applies_defaults():
    config = SimulationConfig.from_dict({})
    assert config.scenario == "random"
    assert config.elevator_count == 2
    assert config.floors == 10
    assert config.scheduler == "fewest_pickups"
    assert config.scheduler_options == {}
    assert config.max_steps == 100_000


def test_from_dict_reads_nested_sections():
    config = SimulationConfig.from_dict(
        {
            "name": "tower",
            "seed": 9,
            "human_count": 5,
            "building": {"floors": 40, "elevator_count": 4},
            "scheduler": {"name": "nearest", "options": {"prefer_heading": False}},
            "smart_initial_direction": False,
        }
    )
    assert config.name == "tower"
    assert (config.floors, config.elevator_count, config.human_count) == (40, 4, 5)
    assert config.scheduler_options == {"prefer_heading": False}
    assert config.smart_initial_direction is False


@pytest.mark.parametrize(
    "data",
    [
        {"scenario": "stairs"},
        {"building": {"floors": 1}},
        {"building": {"elevator_count": 0}},
        {"human_count": -1},
        {"max_steps": 0},
        {"scheduler": {"name": "round_robin"}},
        {"scheduler": None},
        {"scheduler": {"name": "nearest", "options": {"speed": 2}}},
        {"building": ["floors", 10]},
        {"building": {"floors": "ten"}},
        {"building": {"elevator_count": True}},
        {"human_count": 2.5},
        {"max_steps": None},
        {"seed": "abc"},
    ],
)
def test_invalid_configs_are_rejected(data):
    with pytest.raises(ValueError):
        SimulationConfig.from_dict(data)


@pytest.mark.parametrize("path", sorted(SCENARIO_DIR.glob("*.json")), ids=lambda p: p.stem)
def test_shipped_scenarios_load(path):
    config = SimulationConfig.from_dict(json.loads(path.read_text()))
    assert config.name == path.stem
