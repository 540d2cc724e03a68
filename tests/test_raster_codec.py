import json

import pytest

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from imaged_huffman.bit_packer import PADDING_CELL, Cell, pack
from imaged_huffman.errors import RasterFormatError
from imaged_huffman.grid_layout import Grid, to_grid
from imaged_huffman.raster_codec import KEY_TOTAL_BITS, KEY_TREE, KEY_VERSION, load_grid, save_grid

TREE = {'shape': '011', 'leaves': [['b', 1], ['a', 2]]}


def test_save_and_load_round_trip(tmp_path):
    bits = [1, 0] * 40
    grid = to_grid(pack(bits))
    out_file = tmp_path / "grid.png"

    save_grid(grid, out_file, len(bits), TREE)
    loaded, total_bits, tree_dict = load_grid(out_file)

    assert loaded == grid
    assert total_bits == len(bits)
    assert tree_dict == TREE


def test_one_pixel_per_cell(tmp_path):
    grid = to_grid([Cell(1, 2, 3)] * 5)
    out_file = tmp_path / "grid.png"
    save_grid(grid, out_file, 5 * 24, TREE)

    with Image.open(out_file) as image:
        assert image.mode == 'RGB'
        assert image.size == (3, 2)
        assert image.getpixel((0, 0)) == (1, 2, 3)
        assert image.getpixel((2, 1)) == PADDING_CELL


def test_empty_grid_becomes_single_padding_pixel(tmp_path):
    out_file = tmp_path / "empty.png"
    save_grid(Grid(0, 0, []), out_file, 0, None)
    grid, total_bits, tree_dict = load_grid(out_file)
    assert grid == Grid(1, 1, [PADDING_CELL])
    assert total_bits == 0
    assert tree_dict is None


def test_missing_metadata(tmp_path):
    out_file = tmp_path / "plain.png"
    Image.new('RGB', (2, 2), (255, 255, 255)).save(out_file)
    with pytest.raises(RasterFormatError):
        load_grid(out_file)


@pytest.mark.parametrize("version, total_bits, tree", [
    ('2', '8', json.dumps(TREE)),
    ('1', 'eight', json.dumps(TREE)),
    ('1', '8', '{not json'),
])
def test_bad_metadata(tmp_path, version, total_bits, tree):
    out_file = tmp_path / "bad.png"
    png_info = PngInfo()
    png_info.add_text(KEY_VERSION, version)
    png_info.add_text(KEY_TOTAL_BITS, total_bits)
    png_info.add_text(KEY_TREE, tree)
    Image.new('RGB', (1, 1)).save(out_file, pnginfo=png_info)
    with pytest.raises(RasterFormatError):
        load_grid(out_file)
