"""
Binding of the caller's values to the compiled directives.

The values are a flat ordered sequence: each directive that is not filled
consumes exactly one of them, i.e. an integer for a scalar field, a bytes-like
object for a string and a sequence of exactly "quantity" integers for a field
with the pointer flag. Everything is checked here, before a single bit is packed.
"""
import logging
from collections.abc import Sequence
from typing import Iterable, List, NamedTuple, Tuple, Union

from .directives import Directive, FieldDirective, count_arguments
from .enum import FieldType, Endianess, SourceKind
from .exceptions import ArgumentCountError, ArgumentTypeError


logger = logging.getLogger(__name__)

BYTES_LIKE = (bytes, bytearray, memoryview)


class Argument(NamedTuple):
    '''A value tagged with the field it's going to be packed into.'''
    type: FieldType
    source: SourceKind
    value: Union[int, bytes, Tuple[int, ...]]

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.type.name}, {self.value!r})>'


def scalar_width(directive: FieldDirective) -> int:
    '''Number of bits the integer passed for a scalar field can take.'''
    if directive.type != FieldType.BIT:
        return directive.width

    if directive.endianess == Endianess.LITTLE_ENDIAN:
        # the bits are taken from the top of the enclosing bytes
        return -(-directive.quantity // 8) * 8

    return directive.quantity


def to_unsigned(value, width: int, position: int) -> int:
    '''Check the value fits into "width" bits, negative ones become two's complement.'''
    if not isinstance(value, int) or isinstance(value, bool):
        raise ArgumentTypeError(f'expected an integer, got {value.__class__.__name__}', position)

    if not -(1 << (width - 1)) <= value < (1 << width):
        raise ArgumentTypeError(f'value {value} doesn\'t fit into {width} bits', position)

    return value & ((1 << width) - 1)


def _bind_string(directive: FieldDirective, value) -> bytes:
    if not isinstance(value, BYTES_LIKE):
        raise ArgumentTypeError(
            f'string field needs a bytes-like value, got {value.__class__.__name__}', directive.position)

    return bytes(value)


def _bind_array(directive: FieldDirective, value) -> Tuple[int, ...]:
    if not isinstance(value, (Sequence, bytearray, memoryview)) or isinstance(value, str):
        raise ArgumentTypeError(
            f'field with pointer flag needs a sequence, got {value.__class__.__name__}', directive.position)

    if len(value) != directive.quantity:
        raise ArgumentCountError(
            f'array has {len(value)} elements but the field declares {directive.quantity}', directive.position)

    return tuple(to_unsigned(_, directive.width, directive.position) for _ in value)


def _check_left_justified(directive: FieldDirective, value: int):
    '''The bits below the field of a little endian bit run would be lost.'''
    if directive.type != FieldType.BIT or directive.endianess != Endianess.LITTLE_ENDIAN:
        return

    shift = scalar_width(directive) - directive.quantity
    if value & ((1 << shift) - 1):
        raise ArgumentTypeError(
            f'value 0x{value:x} has bits set below the top {directive.quantity} bits of the field', directive.position)


def bind_argument(directive: FieldDirective, value) -> Argument:
    if directive.type == FieldType.STRING:
        bound = _bind_string(directive, value)
    elif directive.source == SourceKind.ARRAY:
        bound = _bind_array(directive, value)
    else:
        bound = to_unsigned(value, scalar_width(directive), directive.position)
        _check_left_justified(directive, bound)

    return Argument(directive.type, directive.source, bound)


def bind_arguments(directives: List[Directive], values: Iterable) -> List[Argument]:
    '''Return one Argument for each directive that needs a value.'''
    if isinstance(values, (str,) + BYTES_LIKE):
        raise TypeError('values must be a sequence of values, not a single %s' % values.__class__.__name__)

    values = list(values)
    expected = count_arguments(directives)

    if len(values) != expected:
        raise ArgumentCountError(f'format requires {expected} values but {len(values)} were given')

    arguments = []
    it = iter(values)
    for directive in directives:
        if not directive.consumes_argument:
            continue

        argument = bind_argument(directive, next(it))
        logger.debug('bound %r to %r', argument, directive)
        arguments.append(argument)

    return arguments
