"""
Plateau mission session.

Builds the shared grid, places rovers in the order they are given, then
navigates each rover to the end of its instruction string in that same
order. Rovers are fed either interactively, one line at a time with
re-prompting on bad input, or from a YAML/JSON scenario file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TextIO

import yaml

from telemetry.logger import TelemetryLogger

from .config import load_yaml
from .directions import Direction
from .errors import InputError, RoverError, ScenarioError
from .grid import OccupancyGrid
from .parsing import (
    is_end_of_rovers,
    parse_instructions,
    parse_plateau,
    parse_start_state,
)
from .rover import Rover, RoverState


@dataclass
class RoverPlan:
    """A placed rover and the instructions it will execute."""

    rover: Rover
    instructions: str


class MissionSession:
    """Rovers sharing one plateau, navigated sequentially."""

    def __init__(self, grid: OccupancyGrid, telemetry: Optional[TelemetryLogger] = None) -> None:
        self.grid = grid
        self.telemetry = telemetry
        self.plans: List[RoverPlan] = []

    @classmethod
    def from_corner(
        cls, max_x: int, max_y: int, telemetry: Optional[TelemetryLogger] = None
    ) -> "MissionSession":
        return cls(OccupancyGrid.from_corner(max_x, max_y), telemetry=telemetry)

    @property
    def rovers(self) -> List[Rover]:
        return [p.rover for p in self.plans]

    def add_rover(self, x: int, y: int, heading: Direction, instructions: str = "") -> Rover:
        """Place a rover on the plateau. Raises RoverError if it cannot be placed."""
        rover = Rover(x, y, heading, self.grid)
        self.plans.append(RoverPlan(rover=rover, instructions=instructions))
        return rover

    def run(self) -> List[RoverState]:
        """Navigate every rover in placement order and return final states."""
        results: List[RoverState] = []
        for i, plan in enumerate(self.plans):
            on_step = None
            if self.telemetry is not None:
                on_step = self._step_logger(i)
            state = plan.rover.navigate(plan.instructions, on_step=on_step)
            if self.telemetry is not None:
                self.telemetry.log_final(i, state.to_dict())
            results.append(state)
        return results

    def _step_logger(self, rover_index: int):
        telemetry = self.telemetry

        def on_step(index: int, char: str, state: RoverState) -> None:
            telemetry.log_step(rover_index, index, char, state.to_dict())

        return on_step


def format_results(states: List[RoverState]) -> str:
    return "\n".join(str(s) for s in states)


# ---------------------------------------------------------------------------
# Interactive input
# ---------------------------------------------------------------------------


class _LineReader:
    """Reads lines from a text stream, optionally printing a prompt first."""

    def __init__(self, stdin: TextIO, stdout: TextIO, prompts: bool, echo_errors: bool) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self.prompts = prompts
        self.echo_errors = echo_errors

    def read(self, prompt: str) -> Optional[str]:
        """Next line without its line ending, or None at end of input."""
        if self.prompts:
            self.stdout.write(prompt)
            self.stdout.flush()
        line = self.stdin.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")

    def report(self, message: str) -> None:
        if self.echo_errors:
            print(message, file=self.stdout)


def read_session(
    stdin: TextIO,
    stdout: TextIO,
    telemetry: Optional[TelemetryLogger] = None,
    prompts: bool = False,
    echo_errors: bool = True,
) -> MissionSession:
    """Build a session from line-oriented input.

    The first valid line gives the plateau corner. Each rover is then given
    as a start line followed by an instruction line, until a blank line or
    end of input. Invalid lines are reported and asked for again; a start
    line the rover constructor rejects is reported and asked for again too.
    """
    reader = _LineReader(stdin, stdout, prompts, echo_errors)

    while True:
        line = reader.read("Plateau> ")
        if line is None:
            raise InputError("Input ended before the plateau dimensions were given")
        try:
            max_x, max_y = parse_plateau(line)
        except InputError as exc:
            reader.report(str(exc))
            continue
        break

    session = MissionSession.from_corner(max_x, max_y, telemetry=telemetry)

    while True:
        line = reader.read("Rover> ")
        if is_end_of_rovers(line):
            break
        try:
            x, y, heading = parse_start_state(line)
            session.add_rover(x, y, heading)
        except (InputError, RoverError) as exc:
            reader.report(str(exc))
            continue
        session.plans[-1].instructions = _read_instructions(reader)

    return session


def _read_instructions(reader: _LineReader) -> str:
    while True:
        line = reader.read("Instructions> ")
        if line is None:
            return ""
        try:
            return parse_instructions(line)
        except InputError as exc:
            reader.report(str(exc))


# ---------------------------------------------------------------------------
# Scenario files
# ---------------------------------------------------------------------------


def load_scenario(path: str) -> Dict[str, Any]:
    """Load a scenario from YAML (JSON files parse as YAML too)."""
    try:
        data = load_yaml(path)
    except OSError as exc:
        raise ScenarioError(f"Cannot read scenario {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ScenarioError(f"Cannot parse scenario {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ScenarioError(f"Scenario {path} must be a mapping")
    return data


def session_from_scenario(
    data: Dict[str, Any], telemetry: Optional[TelemetryLogger] = None
) -> MissionSession:
    """Create a session from a scenario dict.

    Expected layout::

        plateau: [max_x, max_y]
        rovers:
          - {x: 1, y: 2, heading: N, instructions: LMLMLMLMM}
    """
    plateau = data.get("plateau")
    if not isinstance(plateau, (list, tuple)) or len(plateau) != 2:
        raise ScenarioError("Scenario 'plateau' must be a list of two integers")
    try:
        max_x, max_y = parse_plateau(" ".join(str(v) for v in plateau))
    except InputError as exc:
        raise ScenarioError(f"Plateau: {exc}") from exc

    rovers = data.get("rovers")
    if rovers is None:
        rovers = []
    if not isinstance(rovers, list):
        raise ScenarioError("Scenario 'rovers' must be a list")

    session = MissionSession.from_corner(max_x, max_y, telemetry=telemetry)
    for i, entry in enumerate(rovers):
        if not isinstance(entry, dict):
            raise ScenarioError(f"Rover {i}: entry must be a mapping")
        try:
            start = " ".join(str(entry.get(k, "")) for k in ("x", "y", "heading"))
            x, y, heading = parse_start_state(start)
            instructions = parse_instructions(str(entry.get("instructions") or ""))
            session.add_rover(x, y, heading, instructions)
        except (InputError, RoverError) as exc:
            raise ScenarioError(f"Rover {i}: {exc}") from exc
    return session
