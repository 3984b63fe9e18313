import logging
import os
from dataclasses import dataclass
from typing import Tuple

from . import bit_packer, codec, container
from .config_loader import load_config
from .huffman import build_tree, count_symbols

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompressionStats:
    input_size: int
    output_size: int
    symbol_count: int
    distinct_symbols: int
    bit_count: int

    @property
    def bits_per_symbol(self) -> float:
        return self.bit_count / self.symbol_count

    @property
    def ratio(self) -> float:
        return self.output_size / self.input_size if self.input_size else 0.0

    @property
    def space_saving(self) -> float:
        return 1.0 - self.ratio


class Compressor:
    # Compresses text files into huffpack containers and back. Text is read
    # and written with the encoding named in the "text" config section.

    def __init__(self, config=None):
        """
        Initializes the Compressor.

        Parameters:
        config (dict, optional): Configuration as returned by load_config().
            Loaded from the default locations when omitted.
        """
        self.config = config if config is not None else load_config()
        self.encoding = self.config["text"]["encoding"]
        self.errors = self.config["text"]["errors"]

    def compress_text(self, text: str) -> Tuple[bytes, CompressionStats]:
        """
        Compresses text into container bytes.

        Parameters:
        text (str): The text to compress.

        Returns:
        tuple: (container bytes, CompressionStats).
        """
        tree, payload, frequency_table = self._encode(text)
        blob = container.dumps(tree, payload)
        input_size = len(text.encode(self.encoding, self.errors))
        return blob, self._stats(text, frequency_table, payload, input_size, len(blob))

    def _encode(self, text):
        if not isinstance(text, str):
            raise TypeError("Input text must be a string.")

        frequency_table = count_symbols(text)
        tree = build_tree(frequency_table)
        payload = codec.encode(text, tree)
        return tree, payload, frequency_table

    def _stats(self, text, frequency_table, payload, input_size, output_size):
        return CompressionStats(
            input_size=input_size,
            output_size=output_size,
            symbol_count=len(text),
            distinct_symbols=len(frequency_table),
            bit_count=int.from_bytes(payload[:bit_packer.HEADER_SIZE], "big"),
        )

    def decompress_bytes(self, blob: bytes) -> str:
        """
        Restores the text held in container bytes.

        Parameters:
        blob (bytes): Container bytes produced by compress_text().

        Returns:
        str: The original text.
        """
        tree, payload = container.loads(blob)
        return codec.decode(tree, payload)

    def compress(self, input_path, output_path) -> CompressionStats:
        with open(input_path, "r", encoding=self.encoding, errors=self.errors, newline="") as f:
            text = f.read()

        # Nothing is written unless encoding succeeded.
        tree, payload, frequency_table = self._encode(text)
        container.write(output_path, tree, payload)
        stats = self._stats(text, frequency_table, payload,
                            os.path.getsize(input_path), os.path.getsize(output_path))

        logger.info("Compressed %s (%d bytes) to %s (%d bytes)",
                    input_path, stats.input_size, output_path, stats.output_size)
        return stats

    def decompress(self, input_path, output_path) -> None:
        tree, payload = container.read(input_path)
        text = codec.decode(tree, payload)

        with open(output_path, "w", encoding=self.encoding, errors=self.errors, newline="") as f:
            f.write(text)

        logger.info("Decompressed %s to %s (%d symbols)", input_path, output_path, len(text))


def compress(input_path, output_path, config=None) -> CompressionStats:
    return Compressor(config).compress(input_path, output_path)


def decompress(input_path, output_path, config=None) -> None:
    Compressor(config).decompress(input_path, output_path)


def compress_text(text: str, config=None) -> Tuple[bytes, CompressionStats]:
    return Compressor(config).compress_text(text)


def decompress_bytes(blob: bytes, config=None) -> str:
    return Compressor(config).decompress_bytes(blob)
