import sys

from .enum import FieldType, Endianess, Fill


# resolved once, all the byte swapping is relative to this
NATIVE_ORDER = Endianess.LITTLE_ENDIAN if sys.byteorder == 'little' else Endianess.BIG_ENDIAN

ESCAPE = '%'
POINTER_FLAG = 'p'
ALIGN_FLAG = 'a'

ENDIAN_FLAGS = {
    'l': Endianess.LITTLE_ENDIAN,
    'b': Endianess.BIG_ENDIAN,
}

FILL_FLAGS = {
    '0': Fill.ZEROS,
    '1': Fill.ONES,
    'r': Fill.RANDOM,
}

TYPE_FLAGS = {_.value: _ for _ in FieldType}

# width in bits of a single element, STRING is per byte
FIELD_WIDTHS = {
    FieldType.BIT:    1,
    FieldType.BYTE:   8,
    FieldType.WORD16: 16,
    FieldType.WORD32: 32,
    FieldType.WORD64: 64,
    FieldType.STRING: 8,
}
