from imaged_huffman.bit_packer import PADDING_CELL, Cell, pack, unpack
from imaged_huffman.errors import ImagedHuffmanError
from imaged_huffman.frequency import count_symbols
from imaged_huffman.grid_layout import Grid, from_grid, to_grid
from imaged_huffman.huffman_tree import HuffmanTree, WeightedSymbol
