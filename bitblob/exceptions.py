class BlobException(Exception):
    '''Base class to extend in order to throw exception in bitblob.

    Besides the message it takes the position in the format string of the
    directive that caused the exception (None when it's not related to a
    single directive).
    '''

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message if position is None else f'{message} (at offset {position})')


class FormatError(BlobException):
    pass


class UnknownTypeError(FormatError):
    pass


class InvalidDirectiveError(FormatError):
    '''The directive is well formed but it doesn't make sense.'''
    pass


class TruncatedInputError(BlobException):
    pass


class ArgumentCountError(BlobException):
    pass


class ArgumentTypeError(BlobException):
    '''The value is of the wrong kind or doesn't fit into its field.'''
    pass


class LiteralMismatchError(BlobException):
    '''The raw bytes of a literal run are not found where expected.'''
    pass
