"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import MPFSException
from .properties import get_root_from_chunk


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks, the fields are declared as class attributes
    and are un/packed in the order of declaration.
    """

    def __init__(self, data=None, **kwargs):
        self.stream = Stream(data) if data is not None else None
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if self.stream is not None:
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, self.stream))
            self.unpack(self.stream)
        else:
            self.relayout()

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self):
        return self

    def _set_value(self, value):
        raise AttributeError(f'cannot assign a value to the chunk \'{self.__class__.__name__}\'')

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def _get_raw(self):
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            self.logger.debug("field '{}' raw={}".format(field_name, field_raw))
            value += field_raw

        return value

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets
        in order to pack correctly.

        In practice it's like packing() but it's only interested in the sizes
        of the chunks.'''
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            self.logger.debug('relayouting %s.%s' % (self.__class__.__name__, field_name))
            size += field_instance.relayout(offset=offset + size)

        return size

    def pack(self, stream=None):
        '''
        Create the raw encoding of the chunk.

        Called without a stream this is the root: it relayouts everything
        and returns the bytes of the whole chunk.
        '''
        is_root = stream is None

        if is_root:
            self.relayout()
            stream = Stream(b'')

        for field_name, field_instance in self.get_fields():
            self.logger.debug('packing %s.%s at offset %s' % (self.__class__.__name__, field_name, field_instance.offset))
            field_instance.pack(stream)

        return stream.getvalue() if is_root else None

    def unpack_field(self, field_name, stream):
        field = getattr(self, field_name)
        self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, stream.tell()))

        field.offset = stream.tell()
        try:
            field.unpack(stream)
        except MPFSException as e:
            e.chain.append(field_name)
            raise

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read one after the other from the actual position of the
        stream, then validate() is called so that the chunk can check the
        consistency of the values read.
        '''
        self.offset = stream.tell()

        for field_name in self.get_ordered_fields_name():
            self.unpack_field(field_name, stream)

        self.validate()

    def validate(self):
        '''Override to check the values just unpacked, raising the right exception.'''
        pass
