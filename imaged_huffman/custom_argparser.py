import configargparse


def get_cmd_line_opts(args = None):
    p = configargparse.ArgumentParser(description='Huffman compression of text files into PNG images.')
    p.add('-c', '--config_filepath', required=False, is_config_file=True, help='Path to config file.')

    # Specify what to do and on which files.
    p.add_argument('--mode', type=str, default='roundtrip', choices=['compress', 'decompress', 'roundtrip'],
        help='compress: text -> png, decompress: png -> text, roundtrip: both plus equality check (default: roundtrip).')
    p.add_argument('--input_files', nargs='+', type=str, required=True,
        help='List of input files: text files to compress, or png files to decompress.')
    p.add_argument('--encoding', type=str, default='utf-8', help='Text encoding of input/output files (default: utf-8).')
    p.add_argument('--line_oriented', default=False, action='store_true',
        help='Read input text line by line, terminating every line with a newline (default: False).')

    # Specify paths where to store/record data/results
    p.add_argument('--logging_path', type=str, default='log', help='Path where log will be stored')
    p.add_argument('--output_path', type=str, default='output', help='Path where output will be stored')

    # Specify wheter to erase previous contents, if any, stored within dirs
    # where new results will be storeed.
    p.add_argument('--erase_content_prev_logging', default=False, action='store_true',
        help='Erase output from previous runs, within logging path')
    p.add_argument('--erase_content_prev_output', default=False, action='store_true',
        help='Erase output from previous runs, within output path')

    p.add_argument('--verbose', required=False, type=int, default=0, choices=[0, 1, 2],
        help='Verbose style logging (default: 0, a.k.a silent mode), allowed: [0 for silent, 1 for minimal, 2 for complete].')
    p.add_argument('--debug_mode', default=False, action='store_true',
        help='Log to stdout instead of a file within logging path (default: False).')

    opt = p.parse_args(args)
    return opt, p
