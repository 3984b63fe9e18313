import logging
from collections import Counter
from dataclasses import dataclass
from heapq import heapify, heappop, heappush
from itertools import count
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Union

from .errors import EmptyInputError, EmptyTableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Leaf:
    weight: int
    symbol: str


@dataclass(frozen=True)
class Internal:
    weight: int
    left: "HuffmanTree"
    right: "HuffmanTree"


HuffmanTree = Union[Leaf, Internal]


def count_symbols(text: Iterable[str]) -> Mapping[str, int]:
    """
    Counts how often each symbol occurs in the text.

    Parameters:
    text (str): The input text, one symbol per character.

    Returns:
    Mapping[str, int]: Read-only frequency table.
    """
    freq = Counter(text)
    if not freq:
        raise EmptyInputError("Cannot build a frequency table from empty input")
    logger.debug("Counted %d symbols, %d distinct", sum(freq.values()), len(freq))
    return MappingProxyType(dict(freq))


def build_tree(frequency_table: Mapping[str, int]) -> HuffmanTree:
    """
    Builds a Huffman tree from a frequency table.

    Queue entries are ordered by weight, then by a sequence number. Leaves
    are numbered in ascending symbol order and every merged node takes the
    next number, so equal weights always resolve the same way. The first
    node popped becomes the right child, the second the left child.

    A table with one symbol yields a lone Leaf.
    """
    if not frequency_table:
        raise EmptyTableError("Cannot build a Huffman tree from an empty frequency table")

    sequence = count()
    heap = [(weight, next(sequence), Leaf(weight, symbol))
            for symbol, weight in sorted(frequency_table.items())]
    heapify(heap)

    while len(heap) > 1:
        right_weight, _, right = heappop(heap)
        left_weight, _, left = heappop(heap)
        merged = Internal(left_weight + right_weight, left, right)
        heappush(heap, (merged.weight, next(sequence), merged))

    root = heap[0][2]
    logger.debug("Built Huffman tree with root weight %d", root.weight)
    return root


def generate_codes(root: HuffmanTree) -> Dict[str, str]:
    """
    Walks the tree and returns the code of every symbol: '0' for each left
    branch, '1' for each right branch. A lone Leaf root gets the empty code.
    """
    codes = {}

    def generate_codes_helper(node, current_code):
        if isinstance(node, Leaf):
            codes[node.symbol] = current_code
            return
        generate_codes_helper(node.left, current_code + "0")
        generate_codes_helper(node.right, current_code + "1")

    generate_codes_helper(root, "")
    return codes
