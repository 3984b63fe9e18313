from .compression import CompressionStats, Compressor, compress, compress_text, decompress, decompress_bytes
from .errors import (AmbiguousCodeError, CorruptContainerError, EmptyInputError, EmptyTableError,
                     HuffpackError, IncompleteCodeError, MissingCodeError)

__version__ = "0.1.0"
