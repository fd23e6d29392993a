"""
Force Sweep
===========

Sweeps the board heading relative to the true wind at a fixed boat and
wind speed, trims the sail for best lift/drag at every heading, and
reports the resulting sail forces. Output is one JSON record per
heading (JSONL) or a printed table.

Usage:
    windsail-sweep --wind-knots 15 --boat-speed 10 --step 10
    windsail-sweep --config sim.json --output sweep.jsonl
"""

import argparse
import json
from dataclasses import replace
from typing import Any, Dict, List, Optional
import logging

import numpy as np

from ..physics.constants import KNOTS_TO_MS, MS_TO_KNOTS
from ..physics.vectors import degrees_from_direction
from .config import SimulationConfig
from .sailing_simulator import BoatInput, SailingSimulator

logger = logging.getLogger(__name__)


def sweep_headings(simulator: SailingSimulator,
                   boat_speed: float,
                   step: float = 10.0,
                   min_angle: float = 0.0,
                   max_angle: float = 180.0) -> List[Dict[str, Any]]:
    """
    Evaluate sail forces across true wind angles on starboard tack.

    Args:
        simulator: Simulator providing wind and sail model
        boat_speed: Boat speed in m/s
        step: True wind angle increment (degrees)
        min_angle: First true wind angle
        max_angle: Last true wind angle (inclusive)

    Returns:
        One record per heading: the SailingState fields plus the
        heading and true wind angle that produced it
    """
    if step <= 0:
        raise ValueError(f"Sweep step must be positive, got {step}")

    wind_from = degrees_from_direction(-simulator.wind.wind_direction)
    records = []

    for twa in np.arange(min_angle, max_angle + step * 0.5, step):
        twa = float(min(twa, max_angle))
        heading = wind_from - twa

        boat = BoatInput.from_heading(heading, boat_speed)
        apparent = simulator.apparent_wind(boat)
        trim = simulator.sail.optimal_trim_angle(apparent.angle_deg)
        state = simulator.evaluate(replace(boat, sail_trim_angle=trim))

        record = {'heading': heading % 360.0, 'twa_setting': twa}
        record.update(state.to_dict())
        records.append(record)

    logger.info(f"Swept {len(records)} headings at {boat_speed * MS_TO_KNOTS:.1f} kn")
    return records


def format_table(records: List[Dict[str, Any]]) -> str:
    """Human-readable table of sweep records."""
    lines = [
        f"{'TWA':>6} {'AWA':>7} {'AWS kn':>7} {'AoA':>6} {'Cl':>5} "
        f"{'Drive N':>9} {'Side N':>9} {'Heel Nm':>9} {'VMG kn':>7}",
        "-" * 73,
    ]
    for r in records:
        lines.append(
            f"{r['twa_setting']:6.0f} {r['apparent_wind_angle']:7.1f} "
            f"{r['apparent_wind_speed'] * MS_TO_KNOTS:7.1f} {r['angle_of_attack']:6.1f} "
            f"{r['lift_coefficient']:5.2f} {r['drive_force']:9.1f} "
            f"{r['side_force']:9.1f} {r['heeling_moment']:9.1f} {r['vmg'] * MS_TO_KNOTS:7.2f}"
        )
    return "\n".join(lines)


def write_jsonl(records: List[Dict[str, Any]], output_path: str):
    with open(output_path, 'w') as f:
        for record in records:
            f.write(json.dumps(record) + "\n")
    logger.info(f"Wrote {len(records)} records to {output_path}")


def run_sweep(config: SimulationConfig,
              wind_knots: Optional[float] = None,
              boat_speed_knots: float = 10.0,
              step: float = 10.0,
              gusts: bool = False,
              output_path: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Build a simulator from a config and run the sweep.

    Gusts are disabled unless requested so the sweep is repeatable
    heading to heading.
    """
    simulator = SailingSimulator(config)
    if wind_knots is not None:
        simulator.wind.set_wind_knots(wind_knots)
    simulator.wind.set_variation(gusts)

    records = sweep_headings(simulator, boat_speed_knots * KNOTS_TO_MS, step=step)
    if output_path:
        write_jsonl(records, output_path)
    return records


def main(argv: Optional[List[str]] = None):
    """CLI entry point for the force sweep."""
    parser = argparse.ArgumentParser(
        description="Sweep sail forces across headings relative to the wind"
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Simulation config JSON file"
    )
    parser.add_argument(
        "--wind-knots", "-w",
        type=float,
        default=None,
        help="True wind speed in knots (overrides config)"
    )
    parser.add_argument(
        "--boat-speed", "-b",
        type=float,
        default=10.0,
        help="Boat speed in knots"
    )
    parser.add_argument(
        "--step", "-s",
        type=float,
        default=10.0,
        help="True wind angle increment in degrees"
    )
    parser.add_argument(
        "--gusts",
        action="store_true",
        help="Keep wind variation enabled"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Noise seed (overrides config)"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write JSONL records here instead of printing a table"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format='%(levelname)s: %(message)s')

    config = SimulationConfig.from_json(args.config) if args.config else SimulationConfig()
    if args.seed is not None:
        config.seed = args.seed

    records = run_sweep(
        config,
        wind_knots=args.wind_knots,
        boat_speed_knots=args.boat_speed,
        step=args.step,
        gusts=args.gusts,
        output_path=args.output,
    )

    if not args.output:
        print(format_table(records))


if __name__ == "__main__":
    main()
