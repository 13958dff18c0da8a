"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct
from enum import Enum

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency
from .exceptions import (
    MPFSException,
    UnpackException,
    MagicException,
    OffsetException,
)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def is_compliant(self, level):
        '''Returns True if this field or, when inheriting, one of its fathers asks for the given level.'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def check_magic(self, value):
        if self.is_magic and value != self.default:
            raise MagicException(f'invalid {self.name or "magic"}: {value!r} instead of {self.default!r}')

    def relayout(self, offset=0):
        self.offset = offset

        return self.size

    def pack(self, stream):
        '''Write the field where the last relayout put it.'''
        if self.offset is None:
            raise AttributeError(f'offset for field named "{self.name}" {self!r} is not defined!')

        stream.seek(self.offset)
        stream.write(self.raw)

    def unpack(self, stream):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __repr__(self):
        if not self.enum:
            return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

        return f'<{self.__class__.__name__}({self.value!r})>'

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def _set_value(self, value):
        if self.enum and not isinstance(value, self.enum):
            value = self._unpack_enum(value)

        self._value = value

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        value = self.value.value if isinstance(self.value, Enum) else self.value
        try:
            return struct.pack(self.get_format(), value)
        except struct.error as e:
            raise ValueError(f'value {value!r} does not fit field \'{self.name}\' of format \'{self.get_format()}\'') from e

    def _unpack_struct(self, raw: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), raw)[0]
        except struct.error:
            raise UnpackException(f'cannot unpack {len(raw)} bytes with format \'{self.get_format()}\'')

        return unpacked_value

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def _unpack(self, raw):
        value = self._unpack_struct(raw)
        if self.enum:
            value = self._unpack_enum(value)

        self.check_magic(value)

        return value

    def unpack(self, stream):
        self.value = self._unpack(stream.read(self.size))


class StringField(Field):
    """Represent a contiguous chunk of bytes with a fixed length."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    def value_from_default(self):
        return b'\x00' * self.length if self.default is None else self.default

    def _set_value(self, value) -> None:
        if len(value) != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        self._value = bytes(value)

    def _get_size(self):
        return self.length

    def _get_raw(self):
        return self.value

    def unpack(self, stream):
        raw = stream.read(self.length)

        if len(raw) != self.length:
            raise UnpackException(f'wanted {self.length} bytes, got {len(raw)}')

        self.check_magic(raw)
        self._value = raw


class BlobField(StringField):
    """Contiguous chunk of bytes whose length follows the value assigned.

    When unpacking the length must be set beforehand."""

    def __init__(self, n=0, **kw):
        super().__init__(n=n, **kw)

    def _set_value(self, value) -> None:
        self.length = len(value)
        self._value = bytes(value)

    def unpack(self, stream):
        self._value = stream.read_exactly(self.length)


class CStringField(Field):
    """Null terminated string; the value is text, the raw data is encoded."""

    def __init__(self, encoding='utf-8', default='', **kw):
        self.encoding = encoding
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def _set_value(self, value):
        if '\x00' in value:
            raise ValueError(f'{value!r} cannot be stored as a null terminated string')

        self._value = value

    def _get_raw(self):
        return self.value.encode(self.encoding) + b'\x00'

    def _get_size(self):
        return len(self.raw)

    def unpack(self, stream):
        offset = stream.tell()
        raw = stream.read_cstring()

        try:
            self._value = raw.decode(self.encoding)
        except UnicodeDecodeError:
            raise OffsetException(f'string at offset 0x{offset:x} is not valid {self.encoding}')


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    You can indicate an explicit number of elements via the parameter named "n",
    an integer or a Dependency: in the latter case the relayouting writes back
    the actual number of elements into the field the Dependency points to.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, n=0, **kw):
        if not isinstance(n, (int, Dependency)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self.field_cls = field_cls
        self._n = n

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        n = self._n if isinstance(self._n, int) else 0

        return [self.instance_element() for _ in range(n)]

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def append(self, element):
        element.father = self
        self.value.append(element)

    def clear(self):
        self.value.clear()

    @property
    def n(self):
        if isinstance(self._n, Dependency):
            return self._n.resolve(self)

        return self._n

    def _get_size(self):
        size = 0
        for element in self.value:
            size += element.size

        return size

    def _get_raw(self):
        return b''.join([element.raw for element in self.value])

    def relayout(self, offset=0):
        self.offset = offset

        if isinstance(self._n, Dependency):
            try:
                self._n.resolve_and_set(self, len(self.value))
            except AttributeError:
                # a prototype outside its format, nothing to write back into
                self.logger.debug("%r not reachable from '%s'", self._n, self.name)

        size = 0
        for element in self.value:
            size += element.relayout(offset=offset + size)

        return size

    def pack(self, stream):
        for element in self.value:
            element.pack(stream)

    def unpack(self, stream):
        n = self.n
        self.logger.debug('unpacking %d elements for \'%s\'', n, self.name)

        self.value = []
        for idx in range(n):
            element = self.instance_element()
            element.offset = stream.tell()
            try:
                element.unpack(stream)
            except MPFSException as e:
                e.chain.append(str(idx))
                raise

            self.append(element)
