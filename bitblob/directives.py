"""
Compilation of a format string into directives.

A format string is a sequence of literal characters and escapes with the syntax

    %[p][n][a][l|b][0|1|r]{i,y,w,d,q,s}[0|1|r]

where the fill flag can be put before or right after the data type (only one of them).
A literal '%' is written as '%%'.
"""
import logging
from functools import lru_cache
from typing import List, NamedTuple, Union

from .constants import (
    ESCAPE,
    POINTER_FLAG,
    ALIGN_FLAG,
    ENDIAN_FLAGS,
    FILL_FLAGS,
    TYPE_FLAGS,
    FIELD_WIDTHS,
)
from .enum import FieldType, Endianess, Alignment, Fill, SourceKind
from .exceptions import FormatError, UnknownTypeError, InvalidDirectiveError


logger = logging.getLogger(__name__)


class FieldDirective(NamedTuple):
    type: FieldType
    quantity: int = 1
    endianess: Endianess = Endianess.NATIVE
    alignment: Alignment = Alignment.NONE
    fill: Fill = Fill.NONE
    source: SourceKind = SourceKind.SCALAR
    position: int = 0

    @property
    def width(self) -> int:
        '''Number of bits of a single element'''
        return FIELD_WIDTHS[self.type]

    @property
    def bit_size(self) -> int:
        return self.width * self.quantity

    @property
    def consumes_argument(self) -> bool:
        return self.fill == Fill.NONE

    def __repr__(self):
        flags = [self.type.name]
        if self.quantity != 1:
            flags.append(f'x{self.quantity}')
        for value, default in (
                (self.endianess, Endianess.NATIVE),
                (self.alignment, Alignment.NONE),
                (self.fill, Fill.NONE),
                (self.source, SourceKind.SCALAR)):
            if value != default:
                flags.append(value.name)
        return f'<{self.__class__.__name__}({",".join(flags)})>'


class LiteralDirective(NamedTuple):
    '''Run of raw bytes copied as they are.'''
    data: bytes
    position: int = 0

    @property
    def bit_size(self) -> int:
        return len(self.data) * 8

    @property
    def consumes_argument(self) -> bool:
        return False

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.data!r})>'


Directive = Union[FieldDirective, LiteralDirective]


class _Scanner:
    '''Keep track of the position while consuming the format string.'''

    def __init__(self, fmt: str):
        self.fmt = fmt
        self.idx = 0

    def peek(self):
        return self.fmt[self.idx] if self.idx < len(self.fmt) else None

    def take(self, accepted):
        char = self.peek()
        if char is not None and char in accepted:
            self.idx += 1
            return char

        return None

    def next(self):
        char = self.peek()
        if char is not None:
            self.idx += 1

        return char

    def take_digits(self):
        start = self.idx
        while self.take('0123456789'):
            pass

        return self.fmt[start:self.idx]


def _validate(directive: FieldDirective) -> FieldDirective:
    position = directive.position

    if directive.quantity < 1:
        raise InvalidDirectiveError('quantity must be a positive number', position)

    if directive.type == FieldType.STRING:
        if directive.fill != Fill.NONE:
            raise InvalidDirectiveError('string cannot be filled, it must be supplied', position)
        if directive.source == SourceKind.ARRAY:
            raise InvalidDirectiveError('string cannot be passed as an array', position)

    if directive.source == SourceKind.ARRAY and directive.fill != Fill.NONE:
        raise InvalidDirectiveError('filled field has no array to read from', position)

    if directive.quantity > 1 \
            and directive.type not in (FieldType.BIT, FieldType.STRING) \
            and directive.source == SourceKind.SCALAR \
            and directive.fill == Fill.NONE:
        raise InvalidDirectiveError(
            f'{directive.quantity} values of type {directive.type.name} need the pointer flag', position)

    return directive


def _parse_directive(scanner: _Scanner, position: int) -> FieldDirective:
    is_pointer = scanner.take(POINTER_FLAG) is not None
    quantity = scanner.take_digits()
    is_aligned = scanner.take(ALIGN_FLAG) is not None
    endian = scanner.take(ENDIAN_FLAGS)
    fill = scanner.take(FILL_FLAGS)

    type_char = scanner.next()
    if type_char is None:
        raise FormatError('directive without data type', position)
    if type_char not in TYPE_FLAGS:
        raise UnknownTypeError(f'unknown data type \'{type_char}\'', scanner.idx - 1)

    if fill is None:
        fill = scanner.take(FILL_FLAGS)

    directive = FieldDirective(
        type=TYPE_FLAGS[type_char],
        quantity=int(quantity) if quantity else 1,
        endianess=ENDIAN_FLAGS[endian] if endian else Endianess.NATIVE,
        alignment=Alignment.BYTE if is_aligned else Alignment.NONE,
        fill=FILL_FLAGS[fill] if fill else Fill.NONE,
        source=SourceKind.ARRAY if is_pointer else SourceKind.SCALAR,
        position=position,
    )

    return _validate(directive)


def _encode_literal(text: str, position: int) -> bytes:
    try:
        return text.encode('latin1')
    except UnicodeEncodeError as e:
        raise FormatError(f'literal character {text[e.start]!r} doesn\'t fit into a byte', position + e.start)


@lru_cache(maxsize=256)
def _compile(fmt: str) -> List[Directive]:
    directives: List[Directive] = []
    scanner = _Scanner(fmt)
    literal = []
    literal_start = 0

    def _flush_literal():
        if literal:
            directives.append(LiteralDirective(_encode_literal(''.join(literal), literal_start), literal_start))
            literal.clear()

    while scanner.peek() is not None:
        position = scanner.idx
        char = scanner.next()

        if char != ESCAPE:
            if not literal:
                literal_start = position
            literal.append(char)
            continue

        if scanner.peek() is None:
            raise FormatError('dangling \'%\' at the end of the format', position)

        if scanner.take(ESCAPE):
            if not literal:
                literal_start = position
            literal.append(ESCAPE)
            continue

        _flush_literal()
        directive = _parse_directive(scanner, position)
        logger.debug('compiled %r from \'%s\'', directive, fmt[position:scanner.idx])
        directives.append(directive)

    _flush_literal()

    return directives


def compile_format(fmt: Union[str, bytes]) -> List[Directive]:
    '''Translate the format string into the ordered list of directives.

    It raises a subclass of FormatError if the format is not valid; nothing is
    packed or unpacked in that case.'''
    if isinstance(fmt, (bytes, bytearray)):
        fmt = bytes(fmt).decode('latin1')

    if not isinstance(fmt, str):
        raise TypeError(f'format must be a string, not {fmt.__class__.__name__}')

    return list(_compile(fmt))


def count_arguments(directives: List[Directive]) -> int:
    return sum(1 for _ in directives if _.consumes_argument)
