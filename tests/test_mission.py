from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from mars_rover.directions import Direction
from mars_rover.errors import InputError, ScenarioError
from mars_rover.mission import (
    MissionSession,
    format_results,
    load_scenario,
    read_session,
    session_from_scenario,
)
from mars_rover.rover import RoverState
from telemetry.logger import TelemetryLogger, load_telemetry


SCENARIO_DIR = Path(__file__).resolve().parent.parent / "scenarios"


def run_lines(text: str) -> tuple:
    out = io.StringIO()
    session = read_session(io.StringIO(text), out)
    return session, session.run(), out.getvalue()


# ---------------------------------------------------------------------------
# Interactive input
# ---------------------------------------------------------------------------


def test_interactive_classic_example() -> None:
    _, results, out = run_lines("5 5\n1 2 N\nLMLMLMLMM\n3 3 E\nMMRMMRMRRM\n\n")
    assert format_results(results) == "1 3 N\n5 1 E"
    assert out == ""


def test_interactive_reprompts_malformed_lines() -> None:
    _, results, out = run_lines("5\n5 5\n1 2\n1 2 N\nLQ\nLM\n\n")
    assert results == [RoverState(0, 2, Direction.W)]
    lines = out.splitlines()
    assert lines == [
        "Please enter 2 and only 2 dimensions",
        "Please enter 3 and only 3 inputs for the starting state of a rover",
        "Q is not a valid instruction, please only use R, L, or M",
    ]


def test_interactive_reprompts_rejected_rovers() -> None:
    _, results, out = run_lines("2 2\n0 0 N\nM\n0 0 E\n3 0 E\n1 1 S\n\n")
    assert results == [RoverState(0, 1, Direction.N), RoverState(1, 1, Direction.S)]
    assert out.splitlines() == [
        "There is already a rover on the plateau at that location",
        "The X location provided is not valid on the plateau",
    ]


def test_interactive_whitespace_line_is_not_end_of_rovers() -> None:
    _, results, out = run_lines("2 2\n   \n1 1 N\nM\n\n")
    assert results == [RoverState(1, 2, Direction.N)]
    assert out.splitlines() == [
        "Please enter 3 and only 3 inputs for the starting state of a rover",
    ]


def test_interactive_end_of_input_ends_rover_list() -> None:
    session, results, _ = run_lines("3 3\n0 0 E\n")
    assert len(session.plans) == 1
    assert session.plans[0].instructions == ""
    assert results == [RoverState(0, 0, Direction.E)]


def test_interactive_without_rovers() -> None:
    _, results, _ = run_lines("4 4\n\n")
    assert results == []


def test_interactive_without_plateau() -> None:
    with pytest.raises(InputError):
        read_session(io.StringIO("bad\n"), io.StringIO())


def test_interactive_prompts_and_silenced_errors() -> None:
    out = io.StringIO()
    read_session(io.StringIO("x\n1 1\n\n"), out, prompts=True, echo_errors=False)
    assert out.getvalue() == "Plateau> Plateau> Rover> "


def test_all_rovers_are_placed_before_any_moves() -> None:
    _, results, _ = run_lines("1 0\n0 0 E\nM\n1 0 W\n\n\n")
    assert results == [RoverState(0, 0, Direction.E), RoverState(1, 0, Direction.W)]


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def test_classic_scenario_file() -> None:
    session = session_from_scenario(load_scenario(str(SCENARIO_DIR / "classic.yaml")))
    assert format_results(session.run()) == "1 3 N\n5 1 E"


def test_json_scenario_file(tmp_path: Path) -> None:
    path = tmp_path / "scenario.json"
    path.write_text(
        json.dumps(
            {
                "plateau": [2, 2],
                "rovers": [
                    {"x": 0, "y": 0, "heading": "N", "instructions": "MMRMM"},
                    {"x": 2, "y": 0, "heading": "W"},
                ],
            }
        ),
        encoding="utf-8",
    )
    session = session_from_scenario(load_scenario(str(path)))
    assert session.run() == [RoverState(2, 2, Direction.E), RoverState(2, 0, Direction.W)]


@pytest.mark.parametrize(
    "data,message",
    [
        ({}, "plateau"),
        ({"plateau": [3]}, "plateau"),
        ({"plateau": [-1, 3]}, "Plateau: Please enter a positive integer for the X"),
        ({"plateau": [2, 2], "rovers": 5}, "'rovers' must be a list"),
        ({"plateau": [2, 2], "rovers": {"x": 1}}, "'rovers' must be a list"),
        ({"plateau": [2, 2], "rovers": "1 2 N"}, "'rovers' must be a list"),
        ({"plateau": [3, 3], "rovers": ["1 2 N"]}, "Rover 0: entry must be a mapping"),
        ({"plateau": [3, 3], "rovers": [{"x": 1, "y": 1, "heading": "Z"}]}, "Rover 0: .*valid direction"),
        (
            {"plateau": [1, 1], "rovers": [{"x": 0, "y": 0, "heading": "N"}, {"x": 0, "y": 0, "heading": "S"}]},
            "Rover 1: There is already a rover",
        ),
        (
            {"plateau": [1, 1], "rovers": [{"x": 0, "y": 0, "heading": "N", "instructions": "MX"}]},
            "Rover 0: X is not a valid instruction",
        ),
    ],
)
def test_invalid_scenarios(data: dict, message: str) -> None:
    with pytest.raises(ScenarioError, match=message):
        session_from_scenario(data)


def test_missing_scenario_file(tmp_path: Path) -> None:
    with pytest.raises(ScenarioError):
        load_scenario(str(tmp_path / "missing.yaml"))


# ---------------------------------------------------------------------------
# Telemetry
# ---------------------------------------------------------------------------


def test_session_writes_telemetry(tmp_path: Path) -> None:
    log_path = str(tmp_path / "logs" / "mission.jsonl")
    with TelemetryLogger(log_path) as telemetry:
        session = MissionSession.from_corner(5, 5, telemetry=telemetry)
        session.add_rover(1, 2, Direction.N, "LMLMLMLMM")
        session.add_rover(3, 3, Direction.E, "MMRMMRMRRM")
        session.run()

    steps = load_telemetry(log_path, event="step")
    finals = load_telemetry(log_path, event="final")
    assert len(steps) == len("LMLMLMLMM") + len("MMRMMRMRRM")
    assert steps[0]["rover"] == 0
    assert steps[0]["instruction"] == "L"
    assert steps[0]["heading"] == "W"
    assert [(r["rover"], r["x"], r["y"], r["heading"]) for r in finals] == [
        (0, 1, 3, "N"),
        (1, 5, 1, "E"),
    ]


def test_unparsable_scenario_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("plateau: [1, 2\n", encoding="utf-8")
    with pytest.raises(ScenarioError, match="Cannot parse"):
        load_scenario(str(path))
