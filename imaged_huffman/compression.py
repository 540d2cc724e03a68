# =============================================================================================== #
# Imports
# =============================================================================================== #
import collections
import logging
import os

from imaged_huffman import bit_packer
from imaged_huffman import grid_layout
from imaged_huffman.frequency import count_symbols, sorted_by_frequency
from imaged_huffman.functions import bits_to_str, raw_size
from imaged_huffman.huffman_tree import HuffmanTree
from imaged_huffman.raster_codec import load_grid, save_grid
from imaged_huffman.sequence_source import read_symbols, write_symbols

logger = logging.getLogger(__name__)

CompressionResult = collections.namedtuple('CompressionResult', 'tree bits cells grid')

typename = 'CompressionStats'
fields_name = 'name;symbols;distinct_symbols;total_bits;cells;width;height;raw_size;payload_size;file_size;CR'.split(";")
CompressionStats = collections.namedtuple(typename, fields_name)

# =============================================================================================== #
# Compression
# =============================================================================================== #

def compress_symbols(symbols, verbose = 0):
    """Run the in-memory encode chain: counts, tree, bits, cells, grid."""
    counts = count_symbols(symbols)
    if verbose == 2:
        logger.debug('Counts: %s', sorted_by_frequency(counts))

    tree = HuffmanTree.build(counts)
    if verbose == 2:
        tree.show_encoding()

    bits = tree.encode(symbols)
    cells = bit_packer.pack(bits)
    grid = grid_layout.to_grid(cells)
    logger.info('Encoded %d symbols (%d distinct) into %d bits, %d cells, %dx%d grid',
        len(symbols), len(counts), len(bits), len(cells), grid.width, grid.height)
    return CompressionResult(tree, bits, cells, grid)


def compressed_size(counts, tree):
    """Estimated payload size in bytes: one 3-byte pixel per cell."""
    total_bits = tree.compressed_bits(counts)
    return bit_packer.cells_needed(total_bits) * bit_packer.CHANNELS


def compress_to_png(in_file_name, out_file_name, encoding = 'utf-8', line_oriented = False, verbose = 0):
    logger.info('Compressing "%s" -> "%s"', in_file_name, out_file_name)

    symbols = read_symbols(in_file_name, encoding=encoding, line_oriented=line_oriented)
    size_raw = raw_size(len(symbols))
    logger.info('RAW size: %d bytes', size_raw)

    result = compress_symbols(symbols, verbose=verbose)
    size_estimate = compressed_size(count_symbols(symbols), result.tree)
    logger.info('Estimated payload size: %d bytes', size_estimate)

    save_grid(result.grid, out_file_name, len(result.bits), result.tree.to_dict())
    size_file = os.path.getsize(out_file_name)
    ratio = float(size_raw) / size_estimate if size_estimate else 0.0
    logger.info('Wrote %d bytes. Compression ratio (payload): %0.2f', size_file, ratio)

    return CompressionStats._make([
        os.path.basename(in_file_name), len(symbols), len(result.tree), len(result.bits),
        len(result.cells), result.grid.width, result.grid.height,
        size_raw, size_estimate, size_file, ratio])

# =============================================================================================== #
# Decompression
# =============================================================================================== #

def decompress_grid(grid, total_bits, tree_dict, verbose = 0):
    """Run the in-memory decode chain: grid, cells, bits, symbols."""
    tree = HuffmanTree.from_dict(tree_dict)
    cells = grid_layout.from_grid(grid, bit_packer.cells_needed(total_bits))
    bits = bit_packer.unpack(cells, total_bits)
    if verbose == 2:
        logger.debug('Decoded bits: %s', bits_to_str(bits))
    symbols = tree.decode(bits)
    logger.info('Decoded %d bits into %d symbols', total_bits, len(symbols))
    return symbols


def decompress_from_png(in_file_name, out_file_name = None, encoding = 'utf-8', verbose = 0):
    logger.info('Decompressing "%s" -> "%s"', in_file_name, out_file_name)

    grid, total_bits, tree_dict = load_grid(in_file_name)
    symbols = decompress_grid(grid, total_bits, tree_dict, verbose=verbose)

    if out_file_name is not None:
        write_symbols(out_file_name, symbols, encoding=encoding)
        pass
    return ''.join(symbols)
