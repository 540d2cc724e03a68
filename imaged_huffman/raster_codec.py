# =============================================================================================== #
# Imports
# =============================================================================================== #
import json
import logging

import numpy as np

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from imaged_huffman.bit_packer import PADDING_CELL
from imaged_huffman.errors import RasterFormatError
from imaged_huffman.grid_layout import Grid, array_to_grid, grid_to_array

logger = logging.getLogger(__name__)

FORMAT_VERSION = '1'

KEY_VERSION = 'imaged_huffman.version'
KEY_TOTAL_BITS = 'imaged_huffman.total_bits'
KEY_TREE = 'imaged_huffman.tree'

# =============================================================================================== #
# Saving
# =============================================================================================== #

def save_grid(grid, out_file_name, total_bits, tree_dict):
    """Write `grid` as an RGB PNG, one pixel per cell.

    The bit length and the serialized code tree go into PNG text chunks.
    """
    if grid.width == 0 or grid.height == 0:
        # PNG cannot hold an empty raster.
        grid = Grid(1, 1, [PADDING_CELL])
        pass
    image = Image.fromarray(grid_to_array(grid))

    png_info = PngInfo()
    png_info.add_text(KEY_VERSION, FORMAT_VERSION)
    png_info.add_text(KEY_TOTAL_BITS, str(int(total_bits)))
    png_info.add_text(KEY_TREE, json.dumps(tree_dict), zip=True)

    image.save(out_file_name, format='PNG', pnginfo=png_info)
    logger.info('Wrote %dx%d raster to "%s"', grid.width, grid.height, out_file_name)
    pass

# =============================================================================================== #
# Loading
# =============================================================================================== #

def load_grid(in_file_name):
    """Read a PNG written by `save_grid`.

    Returns `(grid, total_bits, tree_dict)`.
    """
    with Image.open(in_file_name) as image:
        image.load()
        text = dict(getattr(image, 'text', {}) or {})
        array = np.asarray(image.convert('RGB'), dtype=np.uint8)
        pass

    for key in (KEY_VERSION, KEY_TOTAL_BITS, KEY_TREE):
        if key not in text:
            raise RasterFormatError(f'"{in_file_name}" has no "{key}" metadata')
    if text[KEY_VERSION] != FORMAT_VERSION:
        raise RasterFormatError(
            f'"{in_file_name}" uses format version {text[KEY_VERSION]}, expected {FORMAT_VERSION}')

    try:
        total_bits = int(text[KEY_TOTAL_BITS])
        tree_dict = json.loads(text[KEY_TREE])
    except ValueError as err:
        raise RasterFormatError(f'"{in_file_name}" has unreadable metadata: {err}') from err

    grid = array_to_grid(array)
    logger.info('Read %dx%d raster from "%s" (%d bits)', grid.width, grid.height, in_file_name, total_bits)
    return grid, total_bits, tree_dict
