"""CLI for running elevator scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from simulation import Simulation, SimulationAbortedError, SimulationConfig, build_simulation

logger = logging.getLogger("run_scenario")


def run_simulation(simulation: Simulation, snapshot_interval: int) -> List[Dict]:
    snapshots: List[Dict] = []
    simulation.start()
    while not simulation.is_done():
        simulation.step()
        if simulation.step_count % snapshot_interval == 0:
            snapshots.append(asdict(simulation.metrics.snapshot(simulation.step_count)))
    return snapshots


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write metrics snapshots as JSON",
    )
    parser.add_argument("--snapshot-interval", type=int, default=10)
    parser.add_argument("--render", action="store_true", help="Print the building after the run")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = SimulationConfig.from_dict(json.loads(args.config.read_text()))
        simulation = build_simulation(config)
    except (OSError, ValueError) as exc:
        logger.error("Could not load %s: %s", args.config, exc)
        return 2
    summary = simulation.summary()

    print(f"Scenario: {config.name}")
    if config.description:
        print(config.description)
    print(
        f"{summary.elevator_count} elevators, {summary.human_count} humans, "
        f"floors {summary.min_floor}-{summary.top_floor}, scheduler {summary.scheduler}"
    )
    if summary.seed is not None:
        print(f"Seed: {summary.seed}")

    try:
        snapshots = run_simulation(simulation, max(1, args.snapshot_interval))
    except SimulationAbortedError as exc:
        logger.error("%s", exc)
        return 1

    final_metrics = asdict(simulation.metrics.snapshot(simulation.step_count))
    results = {
        "scenario": config.name,
        "description": config.description,
        "seed": summary.seed,
        "scheduler": summary.scheduler,
        "steps": simulation.step_count,
        "final_metrics": final_metrics,
        "metrics_over_time": snapshots,
    }
    save_results(args.output, results)

    if args.render:
        print(simulation.render())
    print(f"Simulation is done after {simulation.step_count} steps.")
    print("Final metrics:")
    for key, value in final_metrics.items():
        print(f"  {key}: {value}")
    if args.output:
        print(f"Saved metrics to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
