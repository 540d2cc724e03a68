import logging
import os

import pytest

from imaged_huffman.bit_packer import pack
from imaged_huffman.compression import compress_symbols, compress_to_png, decompress_from_png, decompress_grid
from imaged_huffman.custom_argparser import get_cmd_line_opts
from imaged_huffman.errors import EmptyAlphabetError
from imaged_huffman.functions import get_custom_logger, images_equal
from imaged_huffman.grid_layout import to_grid
from imaged_huffman.raster_codec import save_grid
from imaged_huffman.sequence_source import read_symbols

import main as cli


TEXT = "Sing, O goddess, the anger of Achilles son of Peleus\r\nthat brought countless ills upon the Achaeans.\nèàù ✓\n"


@pytest.fixture
def text_file(tmp_path):
    in_file = tmp_path / "words.txt"
    with open(in_file, "w", encoding="utf-8", newline='') as f:
        f.write(TEXT)
    return in_file


def test_compress_symbols_round_trip():
    result = compress_symbols(list(TEXT))
    tree_dict = result.tree.to_dict()
    assert decompress_grid(result.grid, len(result.bits), tree_dict) == list(TEXT)


def test_single_symbol_file_round_trip():
    result = compress_symbols(list("aaaaaaa"))
    assert len(result.bits) == 7
    assert decompress_grid(result.grid, 7, result.tree.to_dict()) == list("aaaaaaa")


def test_file_round_trip(tmp_path, text_file):
    png_out = tmp_path / "words.png"
    text_out = tmp_path / "words.decoded.txt"

    stats = compress_to_png(str(text_file), str(png_out))
    assert stats.symbols == len(TEXT)
    assert stats.distinct_symbols == len(set(TEXT))
    assert stats.cells == -(-stats.total_bits // 24)
    assert stats.width * stats.height >= stats.cells
    assert stats.payload_size == stats.cells * 3

    decoded = decompress_from_png(str(png_out), str(text_out))
    assert decoded == TEXT
    with open(text_out, "r", encoding="utf-8", newline='') as f:
        assert f.read() == TEXT


def test_compression_is_reproducible(tmp_path, text_file):
    compress_to_png(str(text_file), str(tmp_path / "a.png"))
    compress_to_png(str(text_file), str(tmp_path / "b.png"))
    assert images_equal(str(tmp_path / "a.png"), str(tmp_path / "b.png"))


def test_line_oriented_reading(tmp_path, text_file):
    symbols = read_symbols(str(text_file), line_oriented=True)
    assert ''.join(symbols) == TEXT.replace("\r\n", "\n")


def test_empty_file_is_rejected(tmp_path):
    in_file = tmp_path / "empty.txt"
    in_file.write_text("")
    with pytest.raises(EmptyAlphabetError):
        compress_to_png(str(in_file), str(tmp_path / "empty.png"))


def test_cli_roundtrip(tmp_path, text_file):
    output_path = tmp_path / "output"
    logging_path = tmp_path / "log"
    opt, parser = get_cmd_line_opts([
        '--mode', 'roundtrip',
        '--input_files', str(text_file),
        '--output_path', str(output_path),
        '--logging_path', str(logging_path),
    ])
    assert cli.main(opt, parser) == 0
    assert os.path.isfile(output_path / "words.png")
    assert os.path.isfile(output_path / "words.decoded.txt")
    assert os.path.isfile(logging_path / "results.log")


def test_cli_reports_failures(tmp_path):
    bad_png = tmp_path / "missing.png"
    opt, parser = get_cmd_line_opts([
        '--mode', 'decompress',
        '--input_files', str(bad_png),
        '--output_path', str(tmp_path / "output"),
        '--logging_path', str(tmp_path / "log"),
    ])
    assert cli.main(opt, parser) == 1


def test_cli_survives_corrupt_tree_metadata(tmp_path, text_file):
    corrupt_png = tmp_path / "corrupt.png"
    grid = to_grid(pack([0, 1, 1]))
    save_grid(grid, str(corrupt_png), 3, {'shape': '011', 'leaves': [[['a'], 1], ['b', 'x']]})

    opt, parser = get_cmd_line_opts([
        '--mode', 'decompress',
        '--input_files', str(corrupt_png), str(tmp_path / "missing.png"),
        '--output_path', str(tmp_path / "output"),
        '--logging_path', str(tmp_path / "log"),
    ])
    assert cli.main(opt, parser) == 1


def test_results_logger_keeps_a_single_file_handler(tmp_path):
    first = get_custom_logger(str(tmp_path / "first.log"), name = 'imaged_huffman.results.test')
    second = get_custom_logger(str(tmp_path / "second.log"), name = 'imaged_huffman.results.test')
    assert first is second

    handlers = [h for h in second.handlers if isinstance(h, logging.FileHandler)]
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str(tmp_path / "second.log")

    second.info('only in the second file')
    handlers[0].flush()
    assert 'only in the second file' in (tmp_path / "second.log").read_text()
    assert 'only in the second file' not in (tmp_path / "first.log").read_text()
