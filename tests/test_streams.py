import sys

import pytest

from bitblob.enum import Endianess
from bitblob.exceptions import TruncatedInputError
from bitblob.streams import BitWriter, BitReader, resolve_order, uint_to_bits, bits_to_uint


def test_resolve_order():
    assert resolve_order(Endianess.LITTLE_ENDIAN) == 'le'
    assert resolve_order(Endianess.BIG_ENDIAN) == 'be'
    assert resolve_order(Endianess.NATIVE) == ('le' if sys.byteorder == 'little' else 'be')


def test_uint_to_bits_byte_is_not_swapped():
    assert uint_to_bits(0xab, 8, Endianess.LITTLE_ENDIAN).tobytes() == b'\xab'
    assert uint_to_bits(0x5, 3, Endianess.LITTLE_ENDIAN).bin == '101'


def test_bits_to_uint():
    bits = uint_to_bits(0x1234, 16, Endianess.BIG_ENDIAN)

    assert bits_to_uint(bits, Endianess.BIG_ENDIAN) == 0x1234
    assert bits_to_uint(bits, Endianess.LITTLE_ENDIAN) == 0x3412


def test_writer_cursor_and_padding():
    writer = BitWriter()
    writer.write_uint(0b1010, 4)

    assert writer.pos == 4
    assert writer.align() == 4
    assert writer.pos == 8
    assert writer.align() == 0

    writer.write_uint(0b1, 1)
    writer.write_bytes(b'')

    assert writer.pos == 9
    assert writer.getvalue() == b'\xa0\x80'


def test_writer_empty():
    assert BitWriter().getvalue() == b''


def test_reader():
    reader = BitReader(bytes([0b11001010, 0xff, 0x00]))

    assert reader.length == 3
    assert reader.read(3).uint == 0b110
    assert reader.remaining == 21
    assert reader.align() == 5
    assert reader.read_bytes(1) == b'\xff'
    assert reader.read_uint(8) == 0
    assert reader.remaining == 0


def test_reader_length():
    reader = BitReader(b'\x01\x02\x03', length=1)

    assert reader.read_uint(8) == 1

    with pytest.raises(TruncatedInputError):
        reader.read(1)


def test_reader_truncated_leaves_cursor():
    reader = BitReader(b'\xf0')

    with pytest.raises(TruncatedInputError):
        reader.read(9)

    assert reader.pos == 0


@pytest.mark.parametrize('length', [-1, 2])
def test_reader_invalid_length(length):
    with pytest.raises(ValueError):
        BitReader(b'\x00', length=length)


def test_reader_wrong_kind():
    with pytest.raises(TypeError):
        BitReader([1, 2, 3])
