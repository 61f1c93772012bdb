from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from mars_rover.config import load_config
from mars_rover.errors import InputError, ScenarioError
from mars_rover.mission import format_results, load_scenario, read_session, session_from_scenario
from mars_rover.render import render_plateau
from telemetry.logger import TelemetryLogger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Navigate rovers across a plateau.")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to mission YAML config (default: configs/mission.yaml if present).",
    )
    parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="YAML/JSON scenario file. Reads from stdin when omitted.",
    )
    parser.add_argument(
        "--telemetry",
        type=str,
        default=None,
        help="Append JSONL telemetry to this path.",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Print a text map of the plateau after the run.",
    )
    parser.add_argument(
        "--prompts",
        action="store_true",
        help="Print input prompts in interactive mode.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 1

    telemetry_path = args.telemetry or cfg.telemetry_path
    try:
        telemetry = TelemetryLogger(telemetry_path) if telemetry_path else None
    except OSError as exc:
        print(f"Telemetry error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.scenario:
            session = session_from_scenario(load_scenario(args.scenario), telemetry=telemetry)
        else:
            session = read_session(
                sys.stdin,
                sys.stdout,
                telemetry=telemetry,
                prompts=args.prompts or cfg.prompts,
                echo_errors=cfg.echo_errors,
            )
        results = session.run()
    except (ScenarioError, InputError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        if telemetry is not None:
            telemetry.close()

    if results:
        print(format_results(results))
    if args.render or cfg.render:
        print()
        print(render_plateau(session.grid, session.rovers))
    return 0


if __name__ == "__main__":
    sys.exit(main())
