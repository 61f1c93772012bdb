from __future__ import annotations

import pytest

from mars_rover.directions import Direction
from mars_rover.grid import OccupancyGrid
from mars_rover.rover import Rover


def test_from_corner_adds_origin_row_and_column() -> None:
    grid = OccupancyGrid.from_corner(5, 3)
    assert grid.shape == (6, 4)
    assert grid.count_occupied() == 0


def test_zero_corner_is_a_single_cell() -> None:
    grid = OccupancyGrid.from_corner(0, 0)
    assert grid.shape == (1, 1)
    assert not grid.is_empty_plateau()


def test_negative_dimensions_are_rejected() -> None:
    with pytest.raises(ValueError):
        OccupancyGrid(-1, 2)


def test_cells_view_is_read_only() -> None:
    grid = OccupancyGrid(2, 2)
    with pytest.raises(ValueError):
        grid.cells[0, 0] = True
    assert grid.count_occupied() == 0


def test_occupancy_follows_rover() -> None:
    grid = OccupancyGrid(3, 2)
    rover = Rover(2, 1, Direction.N, grid)
    assert grid.is_occupied(2, 1)
    assert not grid.is_free(2, 1)
    assert grid.to_dict() == {"width": 3, "height": 2, "occupied": [[2, 1]]}
    rover.remove()
    assert grid.is_free(2, 1)


def test_out_of_bounds_cells() -> None:
    grid = OccupancyGrid(2, 2)
    assert not grid.in_bounds(-1, 0)
    assert not grid.is_free(0, 2)
    with pytest.raises(IndexError):
        grid.is_occupied(-1, 0)
    with pytest.raises(IndexError):
        grid._claim(2, 0)


def test_can_hold() -> None:
    grid = OccupancyGrid(2, 3)
    assert grid.can_hold(1, 2)
    assert not grid.can_hold(2, 0)
    assert not grid.can_hold(0, 3)


def test_cell_writes_are_not_public() -> None:
    grid = OccupancyGrid(2, 2)
    assert not hasattr(grid, "claim")
    assert not hasattr(grid, "release")
