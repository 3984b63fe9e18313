"""
Single-file container holding a serialized Huffman tree and its packed payload.

Layout (all integers big-endian, unsigned):

    b"HUF"        magic
    version       1 byte
    tree_length   4 bytes
    tree          tree_length bytes, pre-order encoding below
    payload       bit_packer format: 4-byte bit count, then the packed bits

Tree encoding:

    Leaf      0x00, weight (8 bytes), symbol code point (4 bytes)
    Internal  0x01, weight (8 bytes), left subtree, right subtree
"""

import logging
from typing import Tuple

from .errors import CorruptContainerError
from .huffman import HuffmanTree, Internal, Leaf

logger = logging.getLogger(__name__)

MAGIC = b"HUF"
VERSION = 1
LENGTH_SIZE = 4
WEIGHT_SIZE = 8
SYMBOL_SIZE = 4
LEAF_TAG = 0x00
INTERNAL_TAG = 0x01
MAX_DEPTH = 256
MAX_CODE_POINT = 0x10FFFF
PREAMBLE_SIZE = len(MAGIC) + 1 + LENGTH_SIZE


def serialize_tree(tree: HuffmanTree) -> bytes:
    out = bytearray()

    def write_node(node):
        if isinstance(node, Leaf):
            out.append(LEAF_TAG)
            out.extend(node.weight.to_bytes(WEIGHT_SIZE, "big"))
            out.extend(ord(node.symbol).to_bytes(SYMBOL_SIZE, "big"))
        else:
            out.append(INTERNAL_TAG)
            out.extend(node.weight.to_bytes(WEIGHT_SIZE, "big"))
            write_node(node.left)
            write_node(node.right)

    write_node(tree)
    return bytes(out)


class _TreeReader:
    # Cursor over the tree segment; every malformed field raises CorruptContainerError.

    __slots__ = ("data", "pos", "symbols")

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.symbols = set()

    def take(self, size: int, what: str) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise CorruptContainerError(f"Tree segment truncated while reading {what} at offset {self.pos}")
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

    def read_node(self, depth: int = 0) -> HuffmanTree:
        if depth > MAX_DEPTH:
            raise CorruptContainerError(f"Tree is nested deeper than {MAX_DEPTH} levels")

        tag = self.take(1, "node tag")[0]
        weight = int.from_bytes(self.take(WEIGHT_SIZE, "weight"), "big")

        if tag == LEAF_TAG:
            code_point = int.from_bytes(self.take(SYMBOL_SIZE, "symbol"), "big")
            if code_point > MAX_CODE_POINT:
                raise CorruptContainerError(f"Symbol code point {code_point:#x} is out of range")
            symbol = chr(code_point)
            if symbol in self.symbols:
                raise CorruptContainerError(f"Symbol {symbol!r} appears in more than one leaf")
            self.symbols.add(symbol)
            return Leaf(weight, symbol)

        if tag == INTERNAL_TAG:
            left = self.read_node(depth + 1)
            right = self.read_node(depth + 1)
            if weight != left.weight + right.weight:
                raise CorruptContainerError(
                    f"Internal node weight {weight} != {left.weight} + {right.weight}"
                )
            return Internal(weight, left, right)

        raise CorruptContainerError(f"Unknown node tag {tag:#04x} at offset {self.pos - WEIGHT_SIZE - 1}")


def deserialize_tree(data: bytes) -> HuffmanTree:
    reader = _TreeReader(data)
    tree = reader.read_node()
    if reader.pos != len(data):
        raise CorruptContainerError(f"{len(data) - reader.pos} unexpected bytes after the tree")
    return tree


def dumps(tree: HuffmanTree, payload: bytes) -> bytes:
    """Builds the container bytes for a tree and a packed payload."""
    tree_bytes = serialize_tree(tree)
    return (MAGIC + bytes([VERSION]) + len(tree_bytes).to_bytes(LENGTH_SIZE, "big")
            + tree_bytes + payload)


def loads(blob: bytes) -> Tuple[HuffmanTree, bytes]:
    """
    Splits container bytes into the tree and the packed payload.

    Parameters:
    blob (bytes): Container bytes as produced by dumps().

    Returns:
    tuple: (tree, payload). The payload is returned as-is for codec.decode().
    """
    if len(blob) < PREAMBLE_SIZE:
        raise CorruptContainerError(f"Container is {len(blob)} bytes, too short for its header")
    if blob[:len(MAGIC)] != MAGIC:
        raise CorruptContainerError("Not a huffpack container (bad magic)")
    version = blob[len(MAGIC)]
    if version != VERSION:
        raise CorruptContainerError(f"Unsupported container version {version}")

    tree_length = int.from_bytes(blob[len(MAGIC) + 1:PREAMBLE_SIZE], "big")
    tree_end = PREAMBLE_SIZE + tree_length
    if tree_end > len(blob):
        raise CorruptContainerError(
            f"Tree segment of {tree_length} bytes runs past the end of the container"
        )

    tree = deserialize_tree(blob[PREAMBLE_SIZE:tree_end])
    return tree, blob[tree_end:]


def write(path, tree: HuffmanTree, payload: bytes) -> None:
    blob = dumps(tree, payload)
    with open(path, "wb") as f:
        f.write(blob)
    logger.debug("Wrote %d container bytes to %s", len(blob), path)


def read(path) -> Tuple[HuffmanTree, bytes]:
    with open(path, "rb") as f:
        blob = f.read()
    logger.debug("Read %d container bytes from %s", len(blob), path)
    return loads(blob)
