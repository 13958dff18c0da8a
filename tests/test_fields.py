import pytest

from mpfs2.enum import MPFSFlags
from mpfs2.exceptions import UnpackException, MagicException, OffsetException
from mpfs2.fields import StructField, StringField, BlobField, CStringField, ArrayField
from mpfs2.meta import Endianess
from mpfs2.streams import Stream


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\xfe\xca\x00\x00'


def test_structfield_big_endian():
    field = StructField('H', default=0x0102, endianess=Endianess.BIG_ENDIAN)

    assert field.raw == b'\x01\x02'


def test_structfield_unpack():
    field = StructField('I')

    field.unpack(Stream(b'\x01\x02\x03\x04'))

    assert field.value == 0x04030201


def test_structfield_unpack_short():
    field = StructField('I')

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x01\x02'))


def test_structfield_value_too_big():
    field = StructField('H', name='count')
    field.value = 0x10000

    with pytest.raises(ValueError):
        field.raw


def test_structfield_enum():
    field = StructField('H', enum=MPFSFlags)

    assert field.value == MPFSFlags.NONE

    field.value = 3

    assert field.value == MPFSFlags.COMPRESSED | MPFSFlags.INDEXED
    assert isinstance(field.value, MPFSFlags)
    assert field.raw == b'\x03\x00'

    field.unpack(Stream(b'\x02\x00'))

    assert field.value == MPFSFlags.INDEXED


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = bytes(range(0x10))

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_stringfield_needs_length():
    with pytest.raises(ValueError):
        StringField()


def test_stringfield_magic():
    field = StringField(4, default=b'MPFS', is_magic=True, name='signature')

    field.unpack(Stream(b'MPFS'))
    assert field.value == b'MPFS'

    with pytest.raises(MagicException) as excinfo:
        field.unpack(Stream(b'XPFS'))

    assert 'invalid signature' in str(excinfo.value)


def test_blobfield():
    field = BlobField()

    assert field.size == 0
    assert field.raw == b''

    field.value = b'kebab'

    assert field.size == 5
    assert field.raw == b'kebab'


def test_blobfield_unpack():
    field = BlobField()
    field.length = 3

    stream = Stream(b'abcdef')
    stream.seek(2)
    field.unpack(stream)

    assert field.value == b'cde'

    field.length = 10
    with pytest.raises(OffsetException):
        field.unpack(Stream(b'abc'))


def test_cstringfield():
    field = CStringField()

    assert field.value == ''
    assert field.raw == b'\x00'

    field.value = 'index.htm'

    assert field.size == 10
    assert field.raw == b'index.htm\x00'

    with pytest.raises(ValueError):
        field.value = 'a\x00b'


def test_cstringfield_unpack():
    field = CStringField()
    stream = Stream(b'abc\x00def')

    field.unpack(stream)

    assert field.value == 'abc'
    assert stream.tell() == 4

    with pytest.raises(OffsetException):
        field.unpack(Stream(b'def'))

    with pytest.raises(OffsetException):
        field.unpack(Stream(b'\xff\xfe\x00'))


def test_arrayfield():
    length = 10
    array = ArrayField(StructField('I'), n=length)

    # check some basic property
    assert isinstance(array.value, list)
    assert len(array) == length

    # check that the elements are not duplicated
    assert array[0] is not array[1]
    assert array[0].father is array

    array.relayout()

    # check the offsets make sense
    assert array[0].offset == 0
    assert array[1].offset == 4
    assert array[9].offset == 36
    assert array.size == 40

    assert all(field.value == 0 for field in array)

    # set one and check is actually changed
    array[3].value = 0xcafebabe
    assert [_.value for _ in array] == [
        0, 0, 0, 0xcafebabe, 0, 0, 0, 0, 0, 0,
    ]

    array.clear()

    assert len(array) == 0


def test_arrayfield_wrong_n():
    with pytest.raises(ValueError):
        ArrayField(StructField('I'), n='10')


def test_arrayfield_unpack():
    array = ArrayField(StructField('H'), n=3)

    array.unpack(Stream(b'\x01\x00\x02\x00\x03\x00'))

    assert [_.value for _ in array] == [1, 2, 3]
    assert [_.offset for _ in array] == [0, 2, 4]


def test_arrayfield_unpack_error_chain():
    array = ArrayField(StructField('H'), n=3)

    with pytest.raises(UnpackException) as excinfo:
        array.unpack(Stream(b'\x01\x00\x02\x00\x03'))

    assert excinfo.value.chain == ['2']
