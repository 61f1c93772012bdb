from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .directions import Direction
from .grid import OccupancyGrid
from .rover import Rover


HEADING_GLYPHS: Dict[Direction, str] = {
    Direction.N: "^",
    Direction.E: ">",
    Direction.S: "v",
    Direction.W: "<",
}
EMPTY_GLYPH = "."
STALE_GLYPH = "#"


def render_plateau(grid: OccupancyGrid, rovers: Iterable[Rover] = ()) -> str:
    """Text map of the plateau with north at the top.

    Rovers on ``grid`` are drawn as heading arrows. Occupied cells not held
    by any of the given rovers are drawn as ``#``.
    """
    placed: Dict[Tuple[int, int], Direction] = {}
    for rover in rovers:
        if rover.grid is grid:
            placed[(rover.x, rover.y)] = rover.heading

    cells = grid.cells
    rows: List[str] = []
    for y in range(grid.height - 1, -1, -1):
        row = []
        for x in range(grid.width):
            if (x, y) in placed:
                row.append(HEADING_GLYPHS[placed[(x, y)]])
            elif cells[x, y]:
                row.append(STALE_GLYPH)
            else:
                row.append(EMPTY_GLYPH)
        rows.append(" ".join(row))
    return "\n".join(rows)
