import logging
from typing import Dict

from bitarray import bitarray

from . import bit_packer
from .errors import AmbiguousCodeError, CorruptContainerError, IncompleteCodeError, MissingCodeError
from .huffman import HuffmanTree, generate_codes

logger = logging.getLogger(__name__)

SINGLE_SYMBOL_CODE = "0"


def code_table(tree: HuffmanTree) -> Dict[str, str]:
    """
    Returns the codes used on the wire for `tree`.

    Same as generate_codes(), except that the sole symbol of a one-leaf
    tree gets the 1-bit code '0' instead of an empty code.
    """
    codes = generate_codes(tree)
    if len(codes) == 1:
        symbol = next(iter(codes))
        if codes[symbol] == "":
            codes[symbol] = SINGLE_SYMBOL_CODE
    return codes


def encode(text: str, tree: HuffmanTree) -> bytes:
    """
    Encodes the text with the codes of `tree` and packs the resulting bits.

    Parameters:
    text (str): The text to encode.
    tree (HuffmanTree): Tree whose leaves cover every symbol of the text.

    Returns:
    bytes: The packed payload (bit count header plus packed bits).
    """
    codes = code_table(tree)
    encoded = bitarray(endian="big")
    for symbol in text:
        code = codes.get(symbol)
        if code is None:
            raise MissingCodeError(symbol)
        encoded.extend(code)

    logger.debug("Encoded %d symbols into %d bits", len(text), len(encoded))
    return bit_packer.pack(encoded.to01(), len(encoded))


def invert_codes(codes: Dict[str, str]) -> Dict[str, str]:
    """Maps each code back to its symbol, refusing codes shared by several symbols."""
    reverse_codes = {}
    for symbol, code in codes.items():
        if code in reverse_codes:
            raise AmbiguousCodeError(code, [reverse_codes[code], symbol])
        reverse_codes[code] = symbol
    return reverse_codes


def decode(tree: HuffmanTree, payload: bytes) -> str:
    """
    Decodes a packed payload back to text using the codes of `tree`.

    Bits are consumed greedily: the running prefix grows one bit at a time
    and is emitted as soon as it equals a code.

    Parameters:
    tree (HuffmanTree): The tree the payload was encoded with.
    payload (bytes): The packed payload.

    Returns:
    str: The decoded text.
    """
    bits, bit_count = bit_packer.unpack(payload)
    reverse_codes = invert_codes(code_table(tree))
    longest = max(len(code) for code in reverse_codes)

    decoded = []
    buffer = ""
    for position, bit in enumerate(bits):
        buffer += bit
        if buffer in reverse_codes:
            decoded.append(reverse_codes[buffer])
            buffer = ""
        elif len(buffer) >= longest:
            raise IncompleteCodeError(
                f"Bits {buffer!r} ending at position {position} match no code"
            )

    if buffer:
        raise IncompleteCodeError(
            f"Bitstream of {bit_count} bits ends inside a code, {len(buffer)} bits left over"
        )
    if len(decoded) != tree.weight:
        raise CorruptContainerError(
            f"Decoded {len(decoded)} symbols but the tree accounts for {tree.weight}"
        )

    logger.debug("Decoded %d bits into %d symbols", bit_count, len(decoded))
    return "".join(decoded)
