import io
import logging

from .exceptions import OffsetException


logger = logging.getLogger(__name__)

CSTRING_BLOCK_SIZE = 256


class Stream(object):
    '''This is a simple wrapper around an in-memory buffer to
    uniform its properties: mainly we need to know the total size and
    to jump back and forth.

    Only bytes-like objects are accepted, reading from the filesystem is
    up to the caller.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' cannot be used as a stream' % self._type.__name__)

        init_method()

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._type.__name__)

    def __getattr__(self, name):
        if name == 'obj':
            raise AttributeError(name)

        return getattr(self.obj, name)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    @property
    def size(self):
        current = self.obj.tell()
        size = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(current)

        return size

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

        return self

    def read_exactly(self, n):
        '''Read n bytes or fail if the stream ends before.'''
        offset = self.obj.tell()
        data = self.obj.read(n)

        if len(data) != n:
            raise OffsetException(f'wanted {n} bytes at offset 0x{offset:x} but only {len(data)} available')

        return data

    def read_cstring(self):
        '''Read up to (and consuming) the null terminator, the terminator is not returned.'''
        offset = self.obj.tell()
        data = []
        while True:
            block = self.obj.read(CSTRING_BLOCK_SIZE)
            if len(block) == 0:
                raise OffsetException(f'unterminated string starting at offset 0x{offset:x}')

            end = block.find(b'\x00')
            if end != -1:
                data.append(block[:end])
                break

            data.append(block)

        result = b''.join(data)
        # leave the stream just after the terminator
        self.obj.seek(offset + len(result) + 1)

        return result

    def write(self, data):
        return self.obj.write(data)
