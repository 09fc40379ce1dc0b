"""
A Field knows how to move the bits of a single directive between the values
and the blob, in both directions.

The alignment of the cursor is a business of the caller (see core.py), a field
starts writing/reading exactly where the cursor is.
"""
import logging

from bitstring import Bits, BitArray

from .directives import LiteralDirective
from .enum import FieldType, Endianess, Fill, SourceKind
from .exceptions import LiteralMismatchError
from .streams import BitWriter, BitReader
from .values import Argument, scalar_width


class Field(object):
    """Base class to subclass from"""

    def __init__(self, directive):
        self.directive = directive
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.directive!r})>'

    def fill_bits(self, width: int, random_source) -> Bits:
        '''Synthesize "width" bits following the fill mode of the directive.'''
        fill = self.directive.fill
        if fill == Fill.ZEROS:
            return Bits(length=width)
        if fill == Fill.ONES:
            return ~Bits(length=width)

        return Bits(uint=random_source.getrandbits(width), length=width)

    def pack(self, writer: BitWriter, argument: Argument = None, random_source=None):
        raise NotImplementedError(f"method {self.__class__.__name__}.pack() not implemented")

    def unpack(self, reader: BitReader):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class BitField(Field):
    '''Run of single bits.

    The value passed is interpreted as in the following (for "%2i" and "ab" the bits of the field)

        %2i  -> 0b000000ab
        %2bi -> 0b000000ba
        %2li -> 0bab000000

    with the pointer flag the value is an array with one bit per element instead.
    '''

    def _shift(self) -> int:
        return scalar_width(self.directive) - self.directive.quantity

    def _to_bits(self, argument: Argument) -> Bits:
        directive = self.directive

        if argument.source == SourceKind.ARRAY:
            return Bits([bool(_) for _ in argument.value])

        if directive.endianess == Endianess.LITTLE_ENDIAN:
            return Bits(uint=argument.value >> self._shift(), length=directive.quantity)

        bits = BitArray(uint=argument.value, length=directive.quantity)
        if directive.endianess == Endianess.BIG_ENDIAN:
            bits.reverse()

        return bits

    def _from_bits(self, bits: Bits):
        directive = self.directive

        if directive.source == SourceKind.ARRAY:
            return [int(_) for _ in bits]

        if directive.endianess == Endianess.LITTLE_ENDIAN:
            return bits.uint << self._shift()

        if directive.endianess == Endianess.BIG_ENDIAN:
            bits = BitArray(bits)
            bits.reverse()

        return bits.uint

    def pack(self, writer, argument=None, random_source=None):
        if self.directive.fill != Fill.NONE:
            bits = self.fill_bits(self.directive.quantity, random_source)
        else:
            bits = self._to_bits(argument)

        writer.write(bits)

    def unpack(self, reader):
        bits = reader.read(self.directive.quantity)

        if self.directive.fill != Fill.NONE:
            return None

        return self._from_bits(bits)


class IntegerField(Field):
    '''Byte and words: the endianess decides the order of the bytes, bits in a byte are
    always from the most significant.'''

    def pack(self, writer, argument=None, random_source=None):
        directive = self.directive

        if directive.fill != Fill.NONE:
            for _ in range(directive.quantity):
                writer.write(self.fill_bits(directive.width, random_source))
            return

        values = argument.value if argument.source == SourceKind.ARRAY else (argument.value,)
        for value in values:
            writer.write_uint(value, directive.width, directive.endianess)

    def unpack(self, reader):
        directive = self.directive

        values = [reader.read_uint(directive.width, directive.endianess) for _ in range(directive.quantity)]

        if directive.fill != Fill.NONE:
            return None

        return values if directive.source == SourceKind.ARRAY else values[0]


class StringField(Field):
    """Represent a contiguous chunk of bytes, zero padded up to the quantity."""

    def pack(self, writer, argument=None, random_source=None):
        length = self.directive.quantity
        raw = argument.value[:length]

        if len(raw) < length:
            self.logger.debug('padding string of %d bytes up to %d', len(raw), length)

        writer.write_bytes(raw.ljust(length, b'\x00'))

    def unpack(self, reader):
        return reader.read_bytes(self.directive.quantity)


class LiteralField(Field):
    '''Raw bytes from the format string, they always start at byte boundary.

    When unpacking they work as a magic: the data must contain them.'''

    def pack(self, writer, argument=None, random_source=None):
        writer.align()
        writer.write_bytes(self.directive.data)

    def unpack(self, reader):
        reader.align()
        position = reader.pos
        raw = reader.read_bytes(len(self.directive.data))

        if raw != self.directive.data:
            raise LiteralMismatchError(
                f'expected {self.directive.data!r} at byte {position // 8}, found {raw!r}',
                self.directive.position)

        return None


FIELDS_BY_TYPE = {
    FieldType.BIT:    BitField,
    FieldType.BYTE:   IntegerField,
    FieldType.WORD16: IntegerField,
    FieldType.WORD32: IntegerField,
    FieldType.WORD64: IntegerField,
    FieldType.STRING: StringField,
}


def field_from_directive(directive) -> Field:
    if isinstance(directive, LiteralDirective):
        return LiteralField(directive)

    return FIELDS_BY_TYPE[directive.type](directive)
