from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np


class OccupancyGrid:
    """Boolean occupancy matrix of a plateau, indexed ``[x, y]``.

    Coordinates have their origin at the south-west corner of the plateau:
    - x increases to the east
    - y increases to the north

    One grid is shared by reference between every rover placed on the same
    plateau. Cells are written only through ``_claim`` and ``_release``,
    which the :class:`~mars_rover.rover.Rover` calls while enforcing the
    one-rover-per-cell invariant. :attr:`cells` is a read-only view.

    Parameters
    ----------
    width : int
        Number of columns (x extent).
    height : int
        Number of rows (y extent).
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")
        self._cells = np.zeros((int(width), int(height)), dtype=bool)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_corner(cls, max_x: int, max_y: int) -> "OccupancyGrid":
        """Create the grid of a plateau given its north-east corner."""
        return cls(width=max_x + 1, height=max_y + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize dimensions and occupied cells to a Python dict."""
        return {
            "width": self.width,
            "height": self.height,
            "occupied": [[x, y] for x, y in self.occupied_cells()],
        }

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return int(self._cells.shape[0])

    @property
    def height(self) -> int:
        return int(self._cells.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the occupancy matrix."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def is_empty_plateau(self) -> bool:
        """True if the plateau cannot hold any rover."""
        return self.width == 0 or self.height == 0

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def can_hold(self, x: int, y: int) -> bool:
        """True if the grid is large enough to contain cell (x, y)."""
        return x + 1 <= self.width and y + 1 <= self.height

    def is_occupied(self, x: int, y: int) -> bool:
        # Negative indices would wrap in numpy, so bounds are checked first.
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside a {self.width}x{self.height} grid")
        return bool(self._cells[x, y])

    def is_free(self, x: int, y: int) -> bool:
        """True if (x, y) is on the grid and no rover stands there."""
        return self.in_bounds(x, y) and not self._cells[x, y]

    def occupied_cells(self) -> List[Tuple[int, int]]:
        xs, ys = np.nonzero(self._cells)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def count_occupied(self) -> int:
        return int(np.count_nonzero(self._cells))

    # ------------------------------------------------------------------
    # Cell writes (used by Rover)
    # ------------------------------------------------------------------
    def _claim(self, x: int, y: int) -> None:
        """Mark (x, y) occupied."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside a {self.width}x{self.height} grid")
        self._cells[x, y] = True

    def _release(self, x: int, y: int) -> None:
        """Mark (x, y) free."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside a {self.width}x{self.height} grid")
        self._cells[x, y] = False

    def __repr__(self) -> str:
        return f"OccupancyGrid(width={self.width}, height={self.height}, occupied={self.count_occupied()})"
