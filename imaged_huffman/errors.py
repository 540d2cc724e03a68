# =============================================================================================== #
# Errors
# =============================================================================================== #


class ImagedHuffmanError(Exception):
    """Base class for every failure raised by imaged_huffman."""
    pass


class EmptyAlphabetError(ImagedHuffmanError):
    """Tree construction requested with no weighted symbols."""
    pass


class UnknownSymbolError(ImagedHuffmanError, KeyError):
    """Symbol never seen while the tree was built."""

    def __init__(self, symbol):
        super().__init__(symbol)
        self.symbol = symbol
        pass

    def __str__(self):
        return f"Symbol {self.symbol!r} is not part of the trained alphabet"
    pass


class UninitializedTreeError(ImagedHuffmanError):
    """Encode or decode called on a tree that was never built."""
    pass


class MalformedStreamError(ImagedHuffmanError, ValueError):
    """Bitstream (or serialized tree) does not end on a code boundary."""
    pass


class FramingError(ImagedHuffmanError, ValueError):
    """Bit length not consistent with the cells that should carry it."""
    pass


class RasterFormatError(ImagedHuffmanError):
    """Image container missing the metadata needed to decode it."""
    pass
