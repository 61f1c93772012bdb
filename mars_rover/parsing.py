"""
Line parsers for the interactive plateau session.

Each parser takes one line of user input and either returns validated values
for the core or raises :class:`~mars_rover.errors.InputError` with a message
suitable for showing to the user before re-prompting.
"""

from __future__ import annotations

from typing import Optional, Tuple
import re

from .directions import Direction, Instruction
from .errors import InputError


_INT_RE = re.compile(r"^[+-]?\d+$")


def _parse_int(token: str) -> Optional[int]:
    """Parse a plain decimal integer, or return None."""
    if not _INT_RE.match(token):
        return None
    return int(token)


def parse_plateau(line: str) -> Tuple[int, int]:
    """Parse the plateau line ``<max_x> <max_y>`` (north-east corner)."""
    tokens = line.split()
    if len(tokens) != 2:
        raise InputError("Please enter 2 and only 2 dimensions")
    max_x = _parse_int(tokens[0])
    if max_x is None or max_x < 0:
        raise InputError("Please enter a positive integer for the X dimension of the plateau")
    max_y = _parse_int(tokens[1])
    if max_y is None or max_y < 0:
        raise InputError("Please enter a positive integer for the Y dimension of the plateau")
    return max_x, max_y


def parse_start_state(line: str) -> Tuple[int, int, Direction]:
    """Parse a rover start line ``<x> <y> <heading>``.

    Coordinates are only checked to be integers; range checks belong to the
    rover constructor.
    """
    tokens = line.split()
    if len(tokens) != 3:
        raise InputError("Please enter 3 and only 3 inputs for the starting state of a rover")
    x = _parse_int(tokens[0])
    if x is None:
        raise InputError("Please enter an integer for the X position of a rover")
    y = _parse_int(tokens[1])
    if y is None:
        raise InputError("Please enter an integer for the Y position of a rover")
    if tokens[2] not in Direction.__members__:
        raise InputError("Please enter a valid direction for the starting heading of a rover (N E S W)")
    return x, y, Direction[tokens[2]]


def parse_instructions(line: str) -> str:
    """Validate an instruction line; an empty line is a valid no-op."""
    instructions = line.strip()
    for char in instructions:
        if Instruction.from_char(char) is None:
            raise InputError(f"{char} is not a valid instruction, please only use R, L, or M")
    return instructions


def is_end_of_rovers(line: Optional[str]) -> bool:
    """True for the empty line (or end of input) that ends the rover list.

    A line of only whitespace is not empty and is parsed as a start line.
    """
    return line is None or line == ""
