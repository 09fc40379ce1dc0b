import random
import sys

import pytest

from bitblob import pack, pack_into, calcsize, BitFormat, PackedBlob
from bitblob.exceptions import (
    ArgumentCountError,
    ArgumentTypeError,
    InvalidDirectiveError,
)


def test_empty():
    assert pack('') == PackedBlob(b'', 0)


def test_trailing_bits_are_zero():
    blob = pack('%3i', [0b101])

    assert blob.data == b'\xa0'
    assert blob.length == 1


def test_bits_are_contiguous():
    assert pack('%3i%5i', [0b101, 0b10001]).data == b'\xb1'
    assert pack('%1i%y', [1, 0xff]).data == b'\xff\x80'


def test_alignment():
    """The aligned byte starts at bit 8, not at bit 1."""
    blob = pack('%1i%ay', [1, 0xff])

    assert blob == PackedBlob(b'\x80\xff', 2)


def test_alignment_on_boundary_adds_nothing():
    assert pack('%y%ay', [1, 2]).data == b'\x01\x02'


@pytest.mark.parametrize('fmt,value,expected', [
    ('%lw', 0x1234, b'\x34\x12'),
    ('%bw', 0x1234, b'\x12\x34'),
    ('%ld', 0x12345678, b'\x78\x56\x34\x12'),
    ('%bd', 0x12345678, b'\x12\x34\x56\x78'),
    ('%lq', 0x0102030405060708, b'\x08\x07\x06\x05\x04\x03\x02\x01'),
    ('%bq', 0x0102030405060708, b'\x01\x02\x03\x04\x05\x06\x07\x08'),
    ('%ly', 0xab, b'\xab'),
    ('%by', 0xab, b'\xab'),
])
def test_endianess(fmt, value, expected):
    assert pack(fmt, [value]).data == expected


def test_native_endianess():
    assert pack('%w', [0x1234]).data == (0x1234).to_bytes(2, sys.byteorder)
    assert pack('%d', [0x12345678]).data == (0x12345678).to_bytes(4, sys.byteorder)


def test_endianess_not_byte_aligned():
    # 4 bits, then the bytes 34 12 shifted by 4 bits
    assert pack('%4i%lw', [0xf, 0x1234]).data == b'\xf3\x41\x20'


def test_bit_ordering():
    """The field 'ab' (with a=1 and b=0) always ends at the top of the byte."""
    assert pack('%2i', [0b10]).data == b'\x80'
    assert pack('%2bi', [0b01]).data == b'\x80'
    assert pack('%2li', [0b10000000]).data == b'\x80'


def test_bit_ordering_from_the_same_value():
    assert pack('%2i', [0b10]).data == b'\x80'
    assert pack('%2bi', [0b10]).data == b'\x40'

    with pytest.raises(ArgumentTypeError):
        pack('%2li', [0b10])


def test_little_endian_bits_use_whole_bytes():
    assert pack('%2li', [0xc0]).data == b'\xc0'
    assert pack('%12li', [0xabc0]).data == b'\xab\xc0'


@pytest.mark.parametrize('fmt,value', [
    ('%2li', 0b11),
    ('%2li', 0xff),
    ('%5li', 0b111),
    ('%12li', 0xabcd),
    ('%3li', -1),
])
def test_little_endian_bits_below_the_field(fmt, value):
    with pytest.raises(ArgumentTypeError):
        pack(fmt, [value])


def test_fill_zeros():
    assert pack('%4y0') == PackedBlob(b'\x00' * 4, 4)


def test_fill_ones():
    assert pack('%4y1') == PackedBlob(b'\xff' * 4, 4)
    assert pack('%3i1').data == b'\xe0'
    assert pack('%l1w').data == b'\xff\xff'


def test_fill_between_values():
    assert pack('%y%4i1%4i%y', [0x01, 0x0, 0x02]).data == b'\x01\xf0\x02'


def test_fill_random_is_deterministic_with_seed():
    first = pack('%4yr%3ir', random_source=random.Random(42))
    second = pack('%4yr%3ir', random_source=random.Random(42))

    assert first == second

    rng = random.Random(42)
    expected = bytes(rng.getrandbits(8) for _ in range(4))
    assert first.data[:4] == expected
    assert first.data[4] == rng.getrandbits(3) << 5


def test_fill_random_default_source():
    blob = pack('%qr%ay', [0x5a])

    assert blob.length == 9
    assert blob.data[-1] == 0x5a


def test_string():
    assert pack('%5s', [b'abc']).data == b'abc\x00\x00'
    assert pack('%2s', [b'abcd']).data == b'ab'
    assert pack('%s', [bytearray(b'z')]).data == b'z'


def test_string_not_byte_aligned():
    assert pack('%4i%2s%4i', [0xf, b'AB', 0x0]).data == b'\xf4\x14\x20'


def test_literals():
    assert pack('AB%y', [1]).data == b'AB\x01'
    assert pack('%%%y', [2]).data == b'%\x02'


def test_literal_is_byte_aligned():
    assert pack('%3iZ', [0b111]) == PackedBlob(b'\xe0Z', 2)


def test_pointer_array():
    assert pack('%p3y', [[1, 2, 3]]).data == b'\x01\x02\x03'
    assert pack('%p2bw', [(0x1234, 0xabcd)]).data == b'\x12\x34\xab\xcd'
    assert pack('%p2y', [b'\x01\x02']).data == b'\x01\x02'


def test_pointer_bits():
    assert pack('%p4i', [[1, 0, 1, 1]]).data == b'\xb0'


def test_mixed_scalars_and_arrays():
    blob = pack('%y%p4bd%2i', [0xaa, [1, 2, 3, 4], 0b11])

    assert blob.length == 18
    assert blob.data == b'\xaa' + b''.join(_.to_bytes(4, 'big') for _ in range(1, 5)) + b'\xc0'


def test_negative_values():
    assert pack('%y', [-1]).data == b'\xff'
    assert pack('%bw', [-2]).data == b'\xff\xfe'
    assert pack('%3i', [-1]).data == b'\xe0'


def test_argument_count():
    with pytest.raises(ArgumentCountError):
        pack('%y%y', [1])

    with pytest.raises(ArgumentCountError):
        pack('%y', [1, 2])

    with pytest.raises(ArgumentCountError):
        pack('%y')


def test_array_length():
    with pytest.raises(ArgumentCountError):
        pack('%p3y', [[1, 2]])


@pytest.mark.parametrize('fmt,value', [
    ('%y', 'a'),
    ('%y', 256),
    ('%y', -129),
    ('%2i', 4),
    ('%2li', 256),
    ('%s', 'text'),
    ('%p2y', 12),
    ('%p2y', 'ab'),
    ('%p2i', [1, 2]),
    ('%w', 1.5),
    ('%y', True),
])
def test_argument_type(fmt, value):
    with pytest.raises(ArgumentTypeError):
        pack(fmt, [value])


def test_argument_error_position():
    with pytest.raises(ArgumentTypeError) as exc_info:
        pack('%y%y', [1, 300])

    assert exc_info.value.position == 2


def test_invalid_directive_before_packing():
    with pytest.raises(InvalidDirectiveError):
        pack('%3d', [[1, 2, 3]])


def test_values_must_be_a_sequence():
    with pytest.raises(TypeError):
        pack('%s', b'abc')


def test_pack_into():
    buffer = bytearray(4)

    assert pack_into('%bw', buffer, [0x1234], offset=1) == 2
    assert buffer == bytearray(b'\x00\x12\x34\x00')


def test_pack_into_partial_byte():
    buffer = bytearray(b'\xff\xff')

    assert pack_into('%3i', buffer, [0b111]) == 1
    assert buffer == bytearray(b'\xe0\xff')


def test_pack_into_does_not_fit():
    with pytest.raises(ValueError):
        pack_into('%d', bytearray(2), [1])

    with pytest.raises(ValueError):
        pack_into('%y', bytearray(2), [1], offset=2)


def test_pack_into_readonly():
    with pytest.raises(TypeError):
        pack_into('%y', b'\x00', [1])


@pytest.mark.parametrize('fmt,size,bits', [
    ('', 0, 0),
    ('%3i', 1, 3),
    ('%1i%ay', 2, 16),
    ('%3iZ', 2, 16),
    ('%p4bd%s', 17, 136),
    ('%4y0%q', 12, 96),
    ('%9i', 2, 9),
])
def test_calcsize(fmt, size, bits):
    assert calcsize(fmt) == size
    assert calcsize(fmt, bits=True) == bits


def test_bitformat():
    fmt = BitFormat('%3i%5i%lw')

    assert fmt.size == 3
    assert fmt.bit_size == 24
    assert fmt.arity == 3
    assert len(fmt.directives) == 3
    assert fmt.pack([0b101, 0b10001, 0x1234]) == PackedBlob(b'\xb14\x12', 3)
    assert fmt.unpack(b'\xb14\x12') == [0b101, 0b10001, 0x1234]


def test_size_matches_packed_length(seeded_random):
    fmt = BitFormat('%5i%ayXY%p3bw%7ir%s%2s')
    blob = fmt.pack([1, 2, [1, 2, 3], b'a', b'bc'], random_source=seeded_random)

    assert blob.length == fmt.size
    assert len(blob.data) == blob.length
