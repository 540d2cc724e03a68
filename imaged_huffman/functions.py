import logging
import os
import shutil
import sys

from PIL import Image
from PIL import ImageChops

# =============================================================================================== #
# Bits Utils
# =============================================================================================== #

def to_binary_list(n):
    """Convert integer into a list of bits"""
    return [n] if (n <= 1) else to_binary_list(n >> 1) + [n & 1]


def from_binary_list(bits):
    """Convert list of bits into an integer"""
    result = 0
    for bit in bits:
        result = (result << 1) | bit
    return result


def pad_bits(bits, n):
    """Prefix list of bits with enough zeros to reach n digits"""
    assert(n >= len(bits))
    return ([0] * (n - len(bits)) + bits)


def as_bit_list(bits, error_cls = ValueError):
    """Normalize a bit sequence into a list of ints.

    Accepts any iterable of 0/1 ints (bools included) or a string of '0'/'1' chars.
    Anything else raises `error_cls`.
    """
    if isinstance(bits, str):
        if bits.strip('01') != '':
            raise error_cls(f"Bit string contains characters other than '0' and '1': {bits!r}")
        return [1 if ch == '1' else 0 for ch in bits]

    result = []
    for pos, bit in enumerate(bits):
        if bit != 0 and bit != 1:
            raise error_cls(f"Invalid bit {bit!r} at position {pos}")
        result.append(int(bit))
    return result


def bits_to_str(bits):
    return ''.join('1' if bit else '0' for bit in bits)


def raw_size(n_symbols, bits_per_symbol = 8):
    """Size in bytes of the sequence stored with a fixed number of bits per symbol."""
    return n_symbols * bits_per_symbol / 8

# =============================================================================================== #
# Logging & File System Utils
# =============================================================================================== #

def create_dir_from_path_by_opt(dir_path, erase_check):
    if os.path.exists(dir_path) and os.path.isdir(dir_path):
        if erase_check:
            shutil.rmtree(dir_path)
            pass
        else: return
        pass
    os.makedirs(dir_path)
    pass


def get_custom_logger(logger_filename, name = 'imaged_huffman.results'):
    # Create a log with the same name as the script that created it
    logger = logging.getLogger(name)
    logger.setLevel('DEBUG')

    # Drop file handlers left by a previous run in this process
    for a_handler in list(logger.handlers):
        if isinstance(a_handler, logging.FileHandler):
            logger.removeHandler(a_handler)
            a_handler.close()
            pass
        pass

    # Create handlers and set their logging level
    filehandler_dbg = logging.FileHandler(f'{logger_filename}', mode='w')
    filehandler_dbg.setLevel('DEBUG')

    # Add handlers to logger
    logger.addHandler(filehandler_dbg)
    return logger


def get_root_level_logger(root_path, debug_mode = False, verbose = 0):
    level = logging.DEBUG if verbose == 2 else logging.INFO
    if debug_mode is True:
        logging.basicConfig(stream=sys.stdout, level=level)
    else:
        log_filename = os.path.join(root_path, 'imaged_huffman.log')
        logging.basicConfig(filename=f'{log_filename}', level=level)
        pass
    pass

# =============================================================================================== #
# Image Utils
# =============================================================================================== #

def images_equal(file_name_a, file_name_b):
    with Image.open(file_name_a) as image_a, Image.open(file_name_b) as image_b:
        if image_a.size != image_b.size:
            return False
        diff = ImageChops.difference(image_a.convert('RGB'), image_b.convert('RGB'))
        return diff.getbbox() is None
