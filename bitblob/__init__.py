"""
# Bitblob: struct.pack() for bits.

A blob is described by a format string, a sequence of directives with the syntax

    %[p][n][a][l|b][0|1|r]{i,y,w,d,q,s}[0|1|r]

Data type

 * i - bit
 * y - byte
 * w - 2 byte word
 * d - 4 byte word
 * q - 8 byte word
 * s - string without termination (the quantity is its length, padded with zeros)

Data value (no value is consumed for the field)

 * 0 - fill the specified space with zeros
 * 1 - fill the specified space with ones
 * r - fill the specified space with random data

 Strings cannot be filled. The flag can be put also right after the data type,
 like in "%4y0".

Endianess, no conversion by default

 * l - little endian
 * b - big endian

Alignment, no alignment by default

 * a - align the field to the next byte boundary

Quantity, one by default

 * n - number of elements of the same datatype placed together, for strings
       is the length in bytes

Pointer

 * p - the elements are passed as a single array of "n" values; it is
       mandatory when more than one byte or word is passed

Everything else is copied as it is (at byte boundary), '%%' is a literal '%'.

Some examples:

 * %p4lw - 4 little endian 2 byte words
 * %2i   - 2 bits 'ab' from value 0b000000ab
 * %2bi  - 2 bits 'ab' from value 0b000000ba
 * %2li  - 2 bits 'ab' from value 0bab000000

Two basic operations are defined

 1. pack(): encode the values into a new blob, all the fields are contiguous
    at bit level and the last byte is completed with zeros.

 2. unpack(): decode the blob returning a value for each field not filled.
"""
from .core import BitFormat, PackedBlob, pack, pack_into, unpack, calcsize
from .directives import FieldDirective, LiteralDirective, compile_format
from .exceptions import (
    BlobException,
    FormatError,
    UnknownTypeError,
    InvalidDirectiveError,
    TruncatedInputError,
    ArgumentCountError,
    ArgumentTypeError,
    LiteralMismatchError,
)
