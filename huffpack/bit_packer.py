from typing import Tuple

from bitarray import bitarray

from .errors import CorruptContainerError

HEADER_SIZE = 4
MAX_BIT_COUNT = 2 ** 32 - 1


def pack(bits: str, bit_count: int) -> bytes:
    """
    Packs a string of '0'/'1' characters into bytes, most significant bit first.

    The output starts with a 4-byte big-endian header holding the number of
    meaningful bits, the last byte is zero-padded.

    Parameters:
    bits (str): The bit string to pack.
    bit_count (int): Number of bits in `bits`.

    Returns:
    bytes: Header followed by ceil(bit_count / 8) payload bytes.
    """
    if bit_count != len(bits):
        raise ValueError(f"bit_count {bit_count} does not match {len(bits)} bits")
    if bit_count > MAX_BIT_COUNT:
        raise ValueError(f"Cannot pack {bit_count} bits, the header holds at most {MAX_BIT_COUNT}")

    ba = bitarray(bits, endian="big")
    # tobytes() fills the unused low bits of the final byte with zeros
    return bit_count.to_bytes(HEADER_SIZE, "big") + ba.tobytes()


def unpack(buffer: bytes) -> Tuple[str, int]:
    """
    Reverses pack(): reads the bit count header and returns exactly that many bits.

    Parameters:
    buffer (bytes): A packed payload as produced by pack().

    Returns:
    tuple: (bits, bit_count) with the padding bits dropped.
    """
    if len(buffer) < HEADER_SIZE:
        raise CorruptContainerError(
            f"Packed payload is {len(buffer)} bytes, shorter than its {HEADER_SIZE}-byte header"
        )
    bit_count = int.from_bytes(buffer[:HEADER_SIZE], "big")
    body = buffer[HEADER_SIZE:]

    expected = (bit_count + 7) // 8
    if len(body) != expected:
        raise CorruptContainerError(
            f"Header announces {bit_count} bits ({expected} bytes) but {len(body)} bytes follow"
        )

    ba = bitarray(endian="big")
    ba.frombytes(bytes(body))
    return ba[:bit_count].to01(), bit_count
