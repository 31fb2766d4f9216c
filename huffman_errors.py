# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every error raised by the compressor."""


class InvalidInputFileError(HuffmanError, ValueError):
    def __init__(self, path):
        super().__init__(f"Invalid file: {path}")
        self.path = path


class EmptyFrequencyTableError(HuffmanError, ValueError):
    pass


class UnknownSymbolError(HuffmanError, KeyError):
    def __init__(self, symbol):
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self):
        return f"no code for symbol {self.symbol!r} (codepoint {ord(self.symbol)})"


class CompressedFormatError(HuffmanError, ValueError):
    """The compressed file is truncated or corrupt."""


class HeaderFormatError(CompressedFormatError):
    pass


class TreeFormatError(CompressedFormatError):
    pass


class PayloadFormatError(CompressedFormatError):
    pass


class InvalidSourcePathError(HuffmanError, ValueError):
    """The source path cannot be stored on the first header line."""
