"""
BitPacker

Stores an arbitrary-length bitstream inside 24-bit cells, one cell per RGB pixel.
Bits fill the red, green and blue channels in that order, most significant bit
first. The final cell is padded with trailing zeros; the exact number of meaningful
bits travels next to the cells, so padding is never mistaken for data.
"""

import collections
import logging

from imaged_huffman.errors import FramingError
from imaged_huffman.functions import as_bit_list, from_binary_list, pad_bits, to_binary_list

logger = logging.getLogger(__name__)

CHANNEL_BITS = 8
CHANNELS = 3
CELL_BITS = CHANNEL_BITS * CHANNELS

Cell = collections.namedtuple('Cell', 'r g b')

PADDING_CELL = Cell(255, 255, 255)

# =============================================================================================== #
# Packing
# =============================================================================================== #

def cells_needed(total_bits):
    """Number of cells needed to carry `total_bits` bits."""
    if total_bits < 0:
        raise FramingError(f"Bit length cannot be negative, got {total_bits}")
    return -(-total_bits // CELL_BITS)


def bits_to_cell(bits):
    """Turn at most 24 bits into a cell, right-padding with zeros."""
    if len(bits) > CELL_BITS:
        raise FramingError(f"A cell holds at most {CELL_BITS} bits, got {len(bits)}")
    bits = list(bits) + [0] * (CELL_BITS - len(bits))
    return Cell(*[
        from_binary_list(bits[ii:ii + CHANNEL_BITS])
        for ii in range(0, CELL_BITS, CHANNEL_BITS)
    ])


def cell_to_bits(cell):
    bits = []
    for value in cell:
        if not isinstance(value, int) or not 0 <= value <= 255:
            raise FramingError(f"Cell channel out of range 0..255: {cell!r}")
        bits += pad_bits(to_binary_list(value), CHANNEL_BITS)
    return bits


def pack(bits):
    """Split a bitstream into consecutive 24-bit cells.

    The caller keeps `len(bits)`: it is the frame `unpack` needs to drop the
    zero padding of the last cell.
    """
    bits = as_bit_list(bits, FramingError)
    cells = [
        bits_to_cell(bits[ii:ii + CELL_BITS])
        for ii in range(0, len(bits), CELL_BITS)
    ]
    logger.debug('Packed %d bits into %d cells', len(bits), len(cells))
    return cells


def unpack(cells, total_bits):
    """Concatenate the bits of `cells` and keep the first `total_bits` of them.

    Cells after the last one needed (e.g. grid padding) are ignored.
    """
    cells = list(cells)
    if not isinstance(total_bits, int) or total_bits < 0:
        raise FramingError(f"Bit length must be a non-negative integer, got {total_bits!r}")
    if total_bits > CELL_BITS * len(cells):
        raise FramingError(
            f"{total_bits} bits announced but {len(cells)} cells hold at most "
            f"{CELL_BITS * len(cells)}")

    bits = []
    for cell in cells[:cells_needed(total_bits)]:
        bits += cell_to_bits(cell)
    return bits[:total_bits]
