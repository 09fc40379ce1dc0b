import logging

from bitstring import Bits, BitArray, ConstBitStream

from .constants import NATIVE_ORDER
from .enum import Endianess
from .exceptions import TruncatedInputError


logger = logging.getLogger(__name__)


def resolve_order(endianess: Endianess) -> str:
    '''Return the bitstring suffix for the byte order actually used.'''
    if endianess == Endianess.NATIVE:
        endianess = NATIVE_ORDER

    return 'le' if endianess == Endianess.LITTLE_ENDIAN else 'be'


def uint_to_bits(value: int, width: int, endianess: Endianess = Endianess.NATIVE) -> Bits:
    if width % 8 or width == 8:
        return Bits(uint=value, length=width)

    return Bits(**{'uint%s' % resolve_order(endianess): value, 'length': width})


def bits_to_uint(bits: Bits, endianess: Endianess = Endianess.NATIVE) -> int:
    if bits.len % 8 or bits.len == 8:
        return bits.uint

    return getattr(bits, 'uint%s' % resolve_order(endianess))


class BitWriter(object):
    '''Accumulate bits at an always increasing cursor; the partial byte
    at the end is completed with zeros when the data is retrieved.'''

    def __init__(self):
        self._bits = BitArray()

    @property
    def pos(self) -> int:
        return self._bits.len

    def align(self) -> int:
        '''Move the cursor to the next byte boundary, returns the padding bits'''
        padding = -self._bits.len % 8
        if padding:
            self._bits.append(Bits(length=padding))

        return padding

    def write(self, bits: Bits):
        self._bits.append(bits)

    def write_uint(self, value: int, width: int, endianess: Endianess = Endianess.NATIVE):
        self.write(uint_to_bits(value, width, endianess))

    def write_bytes(self, data: bytes):
        if data:
            self.write(Bits(bytes=data))

    def getvalue(self) -> bytes:
        return self._bits.tobytes()


class BitReader(object):
    '''This is a simple wrapper around the bytes-like object to read from, it
    normalizes the input and never reads past the declared length.'''

    def __init__(self, obj, length=None):
        self.obj = obj
        init_method = getattr(self, 'init_%s' % self.obj.__class__.__name__, None)

        if init_method is None:
            raise TypeError('\'%s\' is the wrong kind of buffer to read from' % obj.__class__.__name__)

        data = init_method()

        if length is None:
            length = len(data)
        elif length < 0 or length > len(data):
            raise ValueError(f'length {length} is outside of the buffer (that is {len(data)} bytes)')

        self.length = length
        self._bits = ConstBitStream(bytes=data[:length])

    def init_bytes(self):
        return self.obj

    def init_bytearray(self):
        return bytes(self.obj)

    def init_memoryview(self):
        return self.obj.tobytes()

    @property
    def pos(self) -> int:
        return self._bits.pos

    @property
    def remaining(self) -> int:
        return self._bits.len - self._bits.pos

    def align(self) -> int:
        padding = -self._bits.pos % 8
        if padding:
            self.read(padding)

        return padding

    def read(self, nbits: int) -> Bits:
        if nbits > self.remaining:
            raise TruncatedInputError(
                f'{nbits} bits requested at bit {self.pos} but only {self.remaining} remain')

        return self._bits.read(nbits)

    def read_uint(self, width: int, endianess: Endianess = Endianess.NATIVE) -> int:
        return bits_to_uint(self.read(width), endianess)

    def read_bytes(self, nbytes: int) -> bytes:
        return self.read(nbytes * 8).tobytes()
