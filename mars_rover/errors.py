"""
Error taxonomy for the plateau simulation.

Core errors are rejected preconditions on a mutating rover operation. They
never leave a rover or its grid half-mutated. Boundary errors are raised by
the line parsers and the scenario loader.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Core
# ---------------------------------------------------------------------------


class RoverError(ValueError):
    """Base class for rejected rover operations."""


class InvalidPlateau(RoverError):
    """The plateau has zero width or zero height."""


class InvalidStartPosition(RoverError):
    """A rover start coordinate lies outside the plateau."""


class PositionOccupied(RoverError):
    """A rover already stands on the requested start cell."""


class InvalidCoordinate(RoverError):
    """A new coordinate lies outside the plateau."""


class CoordinateOccupied(RoverError):
    """A rover already stands on the cell a coordinate change would reach."""


class GridTooSmall(RoverError):
    """A replacement grid cannot hold the rover at its current position."""


class NewGridPositionOccupied(RoverError):
    """The rover's current cell is already taken on a replacement grid."""


class RoverRemoved(RoverError):
    """The rover was removed from its plateau and can no longer act."""


# ---------------------------------------------------------------------------
# Boundary
# ---------------------------------------------------------------------------


class InputError(ValueError):
    """A line of user input could not be parsed."""


class ScenarioError(ValueError):
    """A batch scenario description is malformed or cannot be placed."""
