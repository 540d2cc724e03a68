"""
GridLayout

Lays a linear sequence of cells out on a near-square grid, row-major, and reads it
back. Positions past the last cell hold the padding marker, so padding only ever
trails the data.
"""

import collections
import math

import numpy as np

from imaged_huffman.bit_packer import CHANNELS, PADDING_CELL, Cell
from imaged_huffman.errors import FramingError

Grid = collections.namedtuple('Grid', 'width height cells')

# =============================================================================================== #
# Grid Dimensioning
# =============================================================================================== #

def grid_shape(count):
    """Return (width, height) for `count` cells.

    width = ceil(sqrt(count)), height = ceil(count / width).
    """
    if count < 0:
        raise ValueError(f"Cell count cannot be negative, got {count}")
    if count == 0:
        return 0, 0
    width = math.isqrt(count)
    if width * width < count:
        width += 1
    height = -(-count // width)
    return width, height

# =============================================================================================== #
# Cells <-> Grid
# =============================================================================================== #

def to_grid(cells):
    cells = [Cell(*cell) for cell in cells]
    for cell in cells:
        if not all(isinstance(value, int) and 0 <= value <= 255 for value in cell):
            raise FramingError(f"Cell channel out of range 0..255: {cell!r}")
    width, height = grid_shape(len(cells))
    padding = [PADDING_CELL] * (width * height - len(cells))
    return Grid(width, height, cells + padding)


def from_grid(grid, count = None):
    """Read cells back in row-major order.

    With `count` only the first `count` cells are returned, otherwise every cell,
    trailing padding included.
    """
    if len(grid.cells) != grid.width * grid.height:
        raise FramingError(
            f"Grid of {grid.width}x{grid.height} holds {len(grid.cells)} cells")
    if count is None:
        return list(grid.cells)
    if count < 0 or count > len(grid.cells):
        raise FramingError(f"Cannot read {count} cells from a grid of {len(grid.cells)}")
    return list(grid.cells[:count])

# =============================================================================================== #
# Grid <-> Array
# =============================================================================================== #

def grid_to_array(grid):
    """Return the grid as a uint8 array of shape (height, width, 3)."""
    array = np.array(grid.cells, dtype=np.uint8).reshape((grid.height, grid.width, CHANNELS))
    return array


def array_to_grid(array):
    array = np.asarray(array)
    if array.ndim != 3 or array.shape[2] != CHANNELS:
        raise FramingError(f"Expected an array of shape (height, width, 3), got {array.shape}")
    height, width, _ = array.shape
    cells = [Cell(*map(int, pixel)) for pixel in array.reshape((-1, CHANNELS)).tolist()]
    return Grid(width, height, cells)
