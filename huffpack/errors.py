class HuffpackError(Exception):
    """Base class for every failure raised by the compressor core."""


class EmptyInputError(HuffpackError, ValueError):
    """The input text contains no symbols."""


class EmptyTableError(HuffpackError, ValueError):
    """A Huffman tree was requested for an empty frequency table."""


class MissingCodeError(HuffpackError, KeyError):
    """A symbol of the text has no code in the code table."""

    def __init__(self, symbol):
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self):
        return f"No code for symbol {self.symbol!r}"


class AmbiguousCodeError(HuffpackError):
    """Two symbols share the same code, so the table cannot be inverted."""

    def __init__(self, code, symbols):
        super().__init__(f"Code {code!r} is assigned to {len(symbols)} symbols: {symbols!r}")
        self.code = code
        self.symbols = symbols


class IncompleteCodeError(HuffpackError):
    """The bitstream ended (or stopped matching) in the middle of a code."""


class CorruptContainerError(HuffpackError, ValueError):
    """The container bytes cannot be parsed."""
