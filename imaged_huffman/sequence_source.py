import logging

logger = logging.getLogger(__name__)


def read_symbols(in_file_name, encoding = 'utf-8', line_oriented = False):
    """Read a text file as a list of one-character symbols.

    By default the content is kept exactly as stored. With `line_oriented` every
    line is read on its own and terminated by '\\n', so a missing final newline is
    added and '\\r\\n' endings become '\\n'.
    """
    if line_oriented:
        symbols = []
        with open(in_file_name, "r", encoding=encoding) as f:
            for a_line in f:
                symbols.extend(a_line.rstrip('\n'))
                symbols.append('\n')
                pass
            pass
    else:
        with open(in_file_name, "r", encoding=encoding, newline='') as f:
            symbols = list(f.read())
            pass
    logger.debug('Read %d symbols from "%s"', len(symbols), in_file_name)
    return symbols


def write_symbols(out_file_name, symbols, encoding = 'utf-8'):
    with open(out_file_name, "w", encoding=encoding, newline='') as f:
        f.write(''.join(symbols))
        pass
    logger.debug('Wrote %d symbols to "%s"', len(symbols), out_file_name)
    pass
