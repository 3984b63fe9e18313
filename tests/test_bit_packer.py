import pytest

from huffpack.bit_packer import pack, unpack
from huffpack.errors import CorruptContainerError


def test_pack_writes_big_endian_bit_count_header():
    packed = pack("101", 3)
    assert packed[:4] == b"\x00\x00\x00\x03"
    assert packed[4:] == bytes([0b10100000])


def test_pack_is_msb_first_and_zero_padded():
    assert pack("1000000011", 10) == b"\x00\x00\x00\x0a" + bytes([0x80, 0xC0])


@pytest.mark.parametrize("bits", ["", "1", "0110", "10110011", "101100111", "1" * 17])
def test_unpack_reverses_pack(bits):
    packed = pack(bits, len(bits))
    assert len(packed) == 4 + (len(bits) + 7) // 8
    assert unpack(packed) == (bits, len(bits))


def test_empty_bit_string_packs_to_header_only():
    assert pack("", 0) == b"\x00\x00\x00\x00"
    assert unpack(b"\x00\x00\x00\x00") == ("", 0)


def test_pack_rejects_mismatched_bit_count():
    with pytest.raises(ValueError):
        pack("0101", 5)


def test_unpack_rejects_short_header():
    with pytest.raises(CorruptContainerError):
        unpack(b"\x00\x01")


def test_unpack_rejects_bit_count_beyond_data():
    with pytest.raises(CorruptContainerError):
        unpack(b"\x00\x00\x00\x10" + b"\xff")


def test_unpack_rejects_trailing_bytes():
    with pytest.raises(CorruptContainerError):
        unpack(b"\x00\x00\x00\x01" + b"\x80\x00")
