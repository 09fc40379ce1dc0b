from enum import Enum, auto


class FieldType(Enum):
    BIT    = 'i'
    BYTE   = 'y'
    WORD16 = 'w'
    WORD32 = 'd'
    WORD64 = 'q'
    STRING = 's'


class Endianess(Enum):
    NATIVE        = auto()
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class Alignment(Enum):
    NONE = auto()
    BYTE = auto()


class Fill(Enum):
    '''Indicates where the bits of a field come from'''
    NONE   = auto()
    ZEROS  = auto()
    ONES   = auto()
    RANDOM = auto()


class SourceKind(Enum):
    SCALAR = auto()
    ARRAY  = auto()
