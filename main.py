#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# =============================================================================================== #
# Imports
# =============================================================================================== #
import logging
import os
import sys
import time

from tqdm import tqdm

from imaged_huffman.compression import compress_to_png, decompress_from_png
from imaged_huffman.custom_argparser import get_cmd_line_opts
from imaged_huffman.errors import ImagedHuffmanError
from imaged_huffman.functions import create_dir_from_path_by_opt, get_custom_logger, get_root_level_logger
from imaged_huffman.functions import images_equal
from imaged_huffman.sequence_source import read_symbols

# =============================================================================================== #
# Util Functions
# =============================================================================================== #

def get_output_names(in_file_name, output_path):
    base_file_name, file_extension = os.path.splitext(os.path.basename(in_file_name))
    png_out = os.path.join(output_path, f'{base_file_name}.png')
    text_out = os.path.join(output_path, f'{base_file_name}.decoded{file_extension or ".txt"}')
    return png_out, text_out


def roundtrip_file(in_file_name, opt, results_logger):
    png_out, text_out = get_output_names(in_file_name, opt.output_path)

    stats = compress_to_png(in_file_name, png_out,
        encoding = opt.encoding, line_oriented = opt.line_oriented, verbose = opt.verbose)
    results_logger.info('\n'.join([f"{k}: {v}" for k, v in stats._asdict().items()]))

    decoded = decompress_from_png(png_out, text_out, encoding = opt.encoding, verbose = opt.verbose)

    # Compressing the decoded text again must give back the very same image.
    png_check = os.path.join(opt.output_path, f'.check_{os.path.basename(png_out)}')
    compress_to_png(text_out, png_check, encoding = opt.encoding, verbose = opt.verbose)
    same_image = images_equal(png_out, png_check)
    os.remove(png_check)

    original = read_symbols(in_file_name, encoding = opt.encoding, line_oriented = opt.line_oriented)
    same_text = decoded == ''.join(original)
    results_logger.info(f'Texts equal = {same_text} | Images equal = {same_image}')
    return same_text and same_image


def process_file(in_file_name, opt, results_logger):
    if opt.mode == 'compress':
        png_out, _ = get_output_names(in_file_name, opt.output_path)
        stats = compress_to_png(in_file_name, png_out,
            encoding = opt.encoding, line_oriented = opt.line_oriented, verbose = opt.verbose)
        results_logger.info('\n'.join([f"{k}: {v}" for k, v in stats._asdict().items()]))
        return True
    if opt.mode == 'decompress':
        _, text_out = get_output_names(in_file_name, opt.output_path)
        decompress_from_png(in_file_name, text_out, encoding = opt.encoding, verbose = opt.verbose)
        return True
    return roundtrip_file(in_file_name, opt, results_logger)

# =============================================================================================== #
# Main
# =============================================================================================== #

def main(opt, parser):

    # --- Create logging and output dirs.
    create_dir_from_path_by_opt(opt.logging_path, opt.erase_content_prev_logging)
    create_dir_from_path_by_opt(opt.output_path, opt.erase_content_prev_output)

    # --- Create root logger, plus a dedicated one for per-file results.
    get_root_level_logger(opt.logging_path, debug_mode = opt.debug_mode, verbose = opt.verbose)
    results_logger = get_custom_logger(os.path.join(opt.logging_path, 'results.log'))
    logging.info(parser.format_values())

    start = time.time()
    failures = []
    with tqdm(total=len(opt.input_files), disable = opt.verbose == 0) as pbar:
        for in_file_name in opt.input_files:
            try:
                if not process_file(in_file_name, opt, results_logger):
                    failures.append(in_file_name)
            except (ImagedHuffmanError, OSError, UnicodeError) as err:
                logging.error(f'{in_file_name}: {type(err).__name__}: {err}')
                failures.append(in_file_name)
                pass
            pbar.update(1)
            pass
        pass
    stop = time.time()

    # Display Enc/Dec elapsed time
    logging.info('Run time takes %d miliseconds' % ((stop - start) * 1000))
    tot = len(opt.input_files)
    print(f"PROCESSED {tot - len(failures)} | FAILED {len(failures)} | TOT {tot}")
    for a_file in failures:
        print(f"Error: {a_file} failed, see log for details", file=sys.stderr)
        pass

    return 1 if failures else 0

# =============================================================================================== #
# Entry Point
# =============================================================================================== #

if __name__ == "__main__":
    # Parse input args options from cmd line.
    opt, parser = get_cmd_line_opts()
    # Run main.
    exit_code = main(opt, parser)
    sys.exit(exit_code)
    pass
