from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from .directions import Direction, Instruction
from .errors import (
    CoordinateOccupied,
    GridTooSmall,
    InvalidCoordinate,
    InvalidPlateau,
    InvalidStartPosition,
    NewGridPositionOccupied,
    PositionOccupied,
    RoverRemoved,
)
from .grid import OccupancyGrid


@dataclass(frozen=True)
class RoverState:
    """Snapshot of a rover's position and heading.

    Attributes
    ----------
    x : int
        Column, counted east from the plateau origin.
    y : int
        Row, counted north from the plateau origin.
    heading : Direction
        Cardinal direction the rover faces.
    """

    x: int
    y: int
    heading: Direction

    def __str__(self) -> str:
        return f"{self.x} {self.y} {self.heading.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "heading": self.heading.name}


StepCallback = Callable[[int, str, RoverState], None]


class Rover:
    """Grid rover that turns in place and moves one cell at a time.

    The rover keeps a reference to the plateau's shared occupancy grid and
    holds exactly one cell of it while placed. Coordinate and grid setters
    reject invalid targets with an error; :meth:`navigate` treats a blocked
    or out-of-bounds move as a no-op instead.
    """

    def __init__(
        self,
        x: int,
        y: int,
        heading: Union[Direction, str, int],
        grid: OccupancyGrid,
    ) -> None:
        if grid.is_empty_plateau():
            raise InvalidPlateau("The plateau is not large enough to hold a rover")
        if not 0 <= x < grid.width:
            raise InvalidStartPosition("The X location provided is not valid on the plateau")
        if not 0 <= y < grid.height:
            raise InvalidStartPosition("The Y location provided is not valid on the plateau")
        if grid.is_occupied(x, y):
            raise PositionOccupied("There is already a rover on the plateau at that location")

        self._x = int(x)
        self._y = int(y)
        self._heading = Direction.coerce(heading)
        self._grid: Optional[OccupancyGrid] = grid
        grid._claim(self._x, self._y)

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------
    @property
    def x(self) -> int:
        return self._x

    @x.setter
    def x(self, value: int) -> None:
        grid = self._require_grid()
        if value == self._x:
            return
        if not 0 <= value < grid.width:
            raise InvalidCoordinate("The new X coordinate is not a valid coordinate on the plateau")
        if grid.is_occupied(value, self._y):
            raise CoordinateOccupied(
                "There is already a rover on the plateau at the new X coordinate "
                "and the current Y coordinate"
            )
        self._relocate(grid, value, self._y)

    @property
    def y(self) -> int:
        return self._y

    @y.setter
    def y(self, value: int) -> None:
        grid = self._require_grid()
        if value == self._y:
            return
        if not 0 <= value < grid.height:
            raise InvalidCoordinate("The new Y coordinate is not a valid coordinate on the plateau")
        if grid.is_occupied(self._x, value):
            raise CoordinateOccupied(
                "There is already a rover on the plateau at the current X coordinate "
                "and the new Y coordinate"
            )
        self._relocate(grid, self._x, value)

    # ------------------------------------------------------------------
    # Heading
    # ------------------------------------------------------------------
    @property
    def heading(self) -> Direction:
        return self._heading

    @heading.setter
    def heading(self, value: Union[Direction, str, int]) -> None:
        self._require_grid()
        self._heading = Direction.coerce(value)

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------
    @property
    def grid(self) -> Optional[OccupancyGrid]:
        """The plateau grid, or None once the rover has been removed."""
        return self._grid

    @grid.setter
    def grid(self, new_grid: OccupancyGrid) -> None:
        """Move the rover to the same cell of another grid.

        The cell held on the previous grid is released.
        """
        old_grid = self._require_grid()
        if new_grid is old_grid:
            return
        if not new_grid.can_hold(self._x, self._y):
            raise GridTooSmall(
                "The new grid is too small to relocate the rover to the same position "
                "on the new grid as it is on the current one"
            )
        if new_grid.is_occupied(self._x, self._y):
            raise NewGridPositionOccupied(
                "There is already a rover on the new grid at the rover's current location"
            )
        old_grid._release(self._x, self._y)
        self._grid = new_grid
        new_grid._claim(self._x, self._y)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def placed(self) -> bool:
        return self._grid is not None

    def remove(self) -> None:
        """Release the rover's cell and detach it from its grid."""
        if self._grid is None:
            return
        self._grid._release(self._x, self._y)
        self._grid = None

    def __enter__(self) -> "Rover":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.remove()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def navigate(self, instructions: str, on_step: Optional[StepCallback] = None) -> RoverState:
        """Execute an instruction string one character at a time.

        ``L`` and ``R`` turn the rover 90 degrees, ``M`` moves it one cell
        forward. A move that would leave the plateau or enter an occupied
        cell is skipped. Unrecognized characters are ignored. Each effect is
        applied before the next character is read.

        Parameters
        ----------
        instructions : str
            Instruction characters, possibly empty.
        on_step : callable, optional
            Called as ``on_step(index, char, state)`` after every recognized
            instruction, whether or not a move was blocked.

        Returns
        -------
        RoverState
            State after the last instruction.
        """
        grid = self._require_grid()
        for index, char in enumerate(instructions):
            instruction = Instruction.from_char(char)
            if instruction is Instruction.TURN_LEFT:
                self._heading = self._heading.left()
            elif instruction is Instruction.TURN_RIGHT:
                self._heading = self._heading.right()
            elif instruction is Instruction.MOVE:
                self._step_forward(grid)
            else:
                continue
            if on_step is not None:
                on_step(index, char, self.get_state())
        return self.get_state()

    def _step_forward(self, grid: OccupancyGrid) -> bool:
        dx, dy = self._heading.offset
        nx, ny = self._x + dx, self._y + dy
        if not grid.is_free(nx, ny):
            return False
        self._relocate(grid, nx, ny)
        return True

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def _relocate(self, grid: OccupancyGrid, x: int, y: int) -> None:
        grid._release(self._x, self._y)
        self._x = int(x)
        self._y = int(y)
        grid._claim(self._x, self._y)

    def _require_grid(self) -> OccupancyGrid:
        if self._grid is None:
            raise RoverRemoved("The rover has been removed from the plateau")
        return self._grid

    def get_state(self) -> RoverState:
        return RoverState(x=self._x, y=self._y, heading=self._heading)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize current rover state to a dict for logging/telemetry."""
        return self.get_state().to_dict()

    def __repr__(self) -> str:
        return f"Rover(x={self._x}, y={self._y}, heading={self._heading.name})"
