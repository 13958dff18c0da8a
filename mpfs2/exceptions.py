class MPFSException(Exception):
    '''Base class to extend in order to throw exception in mpfs2.

    Other than the message it takes the chain of the layers that
    caused the exception, innermost first.
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        if not self.chain:
            return self.message

        return '%s (at %s)' % (self.message, '.'.join(reversed(self.chain)))


class FormatError(MPFSException):
    '''The image is not a valid MPFS2 image.'''
    pass


class MagicException(FormatError):
    pass


class VersionException(FormatError):
    pass


class UnpackException(FormatError):
    pass


class OffsetException(FormatError):
    '''Corrupt offset or truncated image.'''
    pass


class CapacityError(MPFSException):

    def __init__(self, size, limit, what='image'):
        self.size = size
        self.limit = limit
        super().__init__(f'{what} size {size} exceeds the limit of {limit}')


class HashMismatch(MPFSException):
    '''Raised only when the hash is checked with Compliant.HASH, otherwise
    the mismatch is reported per record.'''

    def __init__(self, name, stored, computed):
        self.name = name
        self.stored = stored
        self.computed = computed
        super().__init__(f'hash mismatch for \'{name}\': stored 0x{stored:04x}, computed 0x{computed:04x}')
