import numpy as np
import pytest

from imaged_huffman.bit_packer import PADDING_CELL, Cell
from imaged_huffman.errors import FramingError
from imaged_huffman.grid_layout import Grid, array_to_grid, from_grid, grid_shape, grid_to_array, to_grid


def _cells(n):
    return [Cell(ii % 256, (ii * 7) % 256, (ii * 13) % 255) for ii in range(n)]


@pytest.mark.parametrize("count, shape", [
    (0, (0, 0)),
    (1, (1, 1)),
    (2, (2, 1)),
    (3, (2, 2)),
    (4, (2, 2)),
    (5, (3, 2)),
    (7, (3, 3)),
    (10, (4, 3)),
    (17, (5, 4)),
])
def test_grid_shape(count, shape):
    assert grid_shape(count) == shape


@pytest.mark.parametrize("count", [0, 1, 2, 5, 16, 17, 99])
def test_grid_capacity_and_recovery(count):
    cells = _cells(count)
    grid = to_grid(cells)
    assert len(grid.cells) == grid.width * grid.height >= count
    assert from_grid(grid, count) == cells
    assert from_grid(grid)[:count] == cells


def test_padding_only_trails():
    grid = to_grid(_cells(5))
    assert grid.cells[5:] == [PADDING_CELL]
    assert all(cell != PADDING_CELL for cell in grid.cells[:5])


def test_row_major_order():
    grid = to_grid(_cells(5))
    array = grid_to_array(grid)
    assert array.shape == (2, 3, 3)
    assert tuple(array[1, 0]) == tuple(_cells(5)[3])


def test_array_round_trip():
    grid = to_grid(_cells(10))
    array = grid_to_array(grid)
    assert array.dtype == np.uint8
    assert array_to_grid(array) == grid


def test_from_grid_errors():
    grid = to_grid(_cells(3))
    with pytest.raises(FramingError):
        from_grid(grid, 5)
    with pytest.raises(FramingError):
        from_grid(Grid(2, 2, _cells(3)))


def test_array_to_grid_rejects_wrong_shape():
    with pytest.raises(FramingError):
        array_to_grid(np.zeros((2, 2), dtype=np.uint8))


@pytest.mark.parametrize("cell", [(256, 0, 0), (0, -1, 0), (0, 0, 1.5)])
def test_to_grid_rejects_out_of_range_channels(cell):
    with pytest.raises(FramingError):
        to_grid([Cell(1, 2, 3), cell])
