"""
Grid rover navigation on a rectangular plateau.

Components:
- directions: cardinal headings and instruction characters
- grid: shared occupancy grid of a plateau
- rover: rover entity with guarded setters and instruction execution
- errors: rejected-operation and input error types
- parsing: line parsers for interactive input
- mission: interactive and scenario-driven mission sessions
- render: text map of a plateau
- config: YAML mission configuration
"""

from .directions import Direction, Instruction
from .grid import OccupancyGrid
from .rover import Rover, RoverState
from .errors import (
    RoverError,
    InvalidPlateau,
    InvalidStartPosition,
    PositionOccupied,
    InvalidCoordinate,
    CoordinateOccupied,
    GridTooSmall,
    NewGridPositionOccupied,
    RoverRemoved,
    InputError,
    ScenarioError,
)

__all__ = [
    "Direction",
    "Instruction",
    "OccupancyGrid",
    "Rover",
    "RoverState",
    "RoverError",
    "InvalidPlateau",
    "InvalidStartPosition",
    "PositionOccupied",
    "InvalidCoordinate",
    "CoordinateOccupied",
    "GridTooSmall",
    "NewGridPositionOccupied",
    "RoverRemoved",
    "InputError",
    "ScenarioError",
]
