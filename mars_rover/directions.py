from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple, Union


class Direction(IntEnum):
    """Cardinal heading. Index order N, E, S, W is the clockwise cycle."""

    N = 0
    E = 1
    S = 2
    W = 3

    def left(self) -> "Direction":
        """Heading after a 90 degree counter-clockwise turn."""
        return Direction((int(self) - 1) % 4)

    def right(self) -> "Direction":
        """Heading after a 90 degree clockwise turn."""
        return Direction((int(self) + 1) % 4)

    @property
    def offset(self) -> Tuple[int, int]:
        """Grid delta (dx, dy) of one step forward."""
        return DIRECTION_OFFSETS[self]

    @staticmethod
    def coerce(value: Union["Direction", str, int]) -> "Direction":
        """Accept a Direction, its letter or its index."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return Direction[value]
            except KeyError:
                raise ValueError(f"Unknown heading: {value!r}") from None
        return Direction(int(value))


DIRECTION_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.N: (0, 1),
    Direction.E: (1, 0),
    Direction.S: (0, -1),
    Direction.W: (-1, 0),
}


class Instruction(Enum):
    """Single-character rover command."""

    TURN_LEFT = "L"
    TURN_RIGHT = "R"
    MOVE = "M"

    @classmethod
    def from_char(cls, char: str) -> Optional["Instruction"]:
        """Return the instruction for `char`, or None when it is not one."""
        try:
            return cls(char)
        except ValueError:
            return None
