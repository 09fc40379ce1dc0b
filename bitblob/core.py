"""
Core module: the engine walking the directives over the bit cursor.

"""
import logging
import random
from typing import List, NamedTuple, Union

from .directives import Directive, FieldDirective, compile_format, count_arguments
from .enum import Alignment, Fill
from .exceptions import BlobException
from .fields import field_from_directive
from .streams import BitWriter, BitReader
from .values import bind_arguments


logger = logging.getLogger(__name__)

# os.urandom() underneath, it can be shared between threads
default_random_source = random.SystemRandom()


class PackedBlob(NamedTuple):
    data: bytes
    length: int


def _relocate(exc: BlobException, directive: Directive) -> BlobException:
    '''Errors coming from the streams don't know which directive was in progress.'''
    if exc.position is not None:
        return exc

    return exc.__class__(exc.message, position=directive.position)


class BitFormat(object):
    '''A compiled format string, something like struct.Struct but for bits.

        >>> fmt = BitFormat('%3i%5i%lw')
        >>> fmt.pack([0b101, 0b10001, 0x1234])
        PackedBlob(data=b'\\xb14\\x12', length=3)
    '''

    def __init__(self, fmt: Union[str, bytes]):
        self.logger = logging.getLogger(f'{self.__module__}.{self.__class__.__name__}')
        self.format = fmt
        self.directives: List[Directive] = compile_format(fmt)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.format!r})>'

    @property
    def bit_size(self) -> int:
        '''the size is static: it depends only on the directives'''
        size = 0
        for directive in self.directives:
            if isinstance(directive, FieldDirective) and directive.alignment == Alignment.NONE:
                size += directive.bit_size
            else:
                size += -size % 8 + directive.bit_size

        return size

    @property
    def size(self) -> int:
        return -(-self.bit_size // 8)

    @property
    def arity(self) -> int:
        return count_arguments(self.directives)

    def _needs_random(self) -> bool:
        return any(getattr(_, 'fill', None) == Fill.RANDOM for _ in self.directives)

    def pack(self, values=(), random_source=None) -> PackedBlob:
        '''Pack the values into a new blob.

        The values are checked against the directives before anything is written.
        Negative integers are stored in two's complement, unpack() gives them back unsigned.'''
        arguments = iter(bind_arguments(self.directives, values))

        if random_source is None and self._needs_random():
            random_source = default_random_source

        writer = BitWriter()

        for directive in self.directives:
            field = field_from_directive(directive)

            if getattr(directive, 'alignment', None) == Alignment.BYTE:
                writer.align()

            self.logger.debug('packing %r at bit %d', field, writer.pos)

            argument = next(arguments) if directive.consumes_argument else None
            try:
                field.pack(writer, argument, random_source)
            except BlobException as e:
                raise _relocate(e, directive) from e

        bits = writer.pos
        data = writer.getvalue()
        self.logger.debug('packed %d bits into %d bytes', bits, len(data))

        return PackedBlob(data, len(data))

    def pack_into(self, buffer, values=(), offset=0, random_source=None) -> int:
        '''Pack the values inside a writable buffer starting from the byte at "offset".

        Returns the number of bytes written.'''
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError(f'buffer of type {buffer.__class__.__name__} is not writable')

        if offset < 0 or offset + self.size > view.nbytes:
            raise ValueError(
                f'{self.size} bytes don\'t fit into buffer of {view.nbytes} bytes at offset {offset}')

        blob = self.pack(values, random_source=random_source)
        view.cast('B')[offset:offset + blob.length] = blob.data

        return blob.length

    def unpack(self, buffer, length=None) -> list:
        '''Extract one value for each directive that is not filled.

        If the data is not enough, TruncatedInputError is raised and nothing is returned.'''
        reader = BitReader(buffer, length=length)
        values = []

        for directive in self.directives:
            field = field_from_directive(directive)

            try:
                if getattr(directive, 'alignment', None) == Alignment.BYTE:
                    reader.align()

                self.logger.debug('unpacking %r at bit %d', field, reader.pos)

                value = field.unpack(reader)
            except BlobException as e:
                self.logger.debug('failed unpacking %r: %s', field, e)
                raise _relocate(e, directive) from e

            if directive.consumes_argument:
                values.append(value)

        return values


def pack(fmt, values=(), random_source=None) -> PackedBlob:
    return BitFormat(fmt).pack(values, random_source=random_source)


def pack_into(fmt, buffer, values=(), offset=0, random_source=None) -> int:
    return BitFormat(fmt).pack_into(buffer, values, offset=offset, random_source=random_source)


def unpack(fmt, buffer, length=None) -> list:
    return BitFormat(fmt).unpack(buffer, length=length)


def calcsize(fmt, bits=False) -> int:
    fmt = BitFormat(fmt)

    return fmt.bit_size if bits else fmt.size
