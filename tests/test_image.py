import struct

from mpfs2.const import HEADER_SIZE, FAT_ENTRY_SIZE
from mpfs2.enum import Compliant, MPFSFlags
from mpfs2.image import MPFSHeader, FATEntry, MPFSImage
from mpfs2.records import FileRecord


def test_header():
    header = MPFSHeader()

    assert header.size == HEADER_SIZE
    assert header.signature.value == b'MPFS'
    assert header.raw == b'MPFS\x02\x00\x00\x00'


def test_fat_entry():
    entry = FATEntry()

    assert entry.size == FAT_ENTRY_SIZE
    assert entry.flags.value == MPFSFlags.NONE
    assert entry.layout['microtime'] == (20, 4)


def test_empty_image():
    image = MPFSImage()

    assert len(image) == 0
    assert image.pack() == b'MPFS\x02\x00\x00\x00'


def test_layout():
    image = MPFSImage.from_records([
        FileRecord('a', b'xyz'),
        FileRecord('bc', b'\x00'),
    ])

    assert image.header.file_count.value == 2
    assert image.layout == {
        'header': (0, 8),
        'fat': (8, 48),
        'names': (56, 5),
        'blobs': (61, 4),
    }
    assert [_.name_addr.value for _ in image.fat] == [56, 58]
    assert [_.data_addr.value for _ in image.fat] == [61, 64]
    assert [_.length.value for _ in image.fat] == [3, 1]


def test_from_records_keeps_names_and_flags():
    image = MPFSImage.from_records([
        FileRecord('a.htm.gz', b'', flags=MPFSFlags.INDEXED, timestamp=1, microtime=2),
    ])

    entry = image.fat[0]

    assert image.names[0].value == 'a.htm.gz'
    assert entry.flags.value == MPFSFlags.INDEXED
    assert entry.timestamp.value == 1
    assert entry.microtime.value == 2


def test_unpack():
    data = MPFSImage.from_records([
        FileRecord('a', b'xyz', timestamp=10),
        FileRecord('bc', b'\x00', flags=MPFSFlags.COMPRESSED),
    ]).pack()

    image = MPFSImage(data)

    assert len(image) == 2
    assert [_.value for _ in image.names] == ['a', 'bc']
    assert [_.value for _ in image.blobs] == [b'xyz', b'\x00']
    assert image.names[1].offset == 58
    assert image.blobs[1].offset == 64

    records = list(image.records())

    assert records[0] == FileRecord('a', b'xyz', timestamp=10)
    assert records[1].flags == MPFSFlags.COMPRESSED
    assert all(_.name_hash_ok for _ in records)


def test_unpack_non_canonical_layout():
    '''The addresses are followed even if data precede names and the
    tables are not contiguous.'''
    header = b'MPFS' + struct.pack('<HH', 2, 1)
    fat = struct.pack('<HHIIIII', 97, 0, 40, 32, 3, 0, 0)
    data = header + fat + b'xyz' + b'\xee' * 5 + b'a\x00'

    image = MPFSImage(data, compliant=Compliant.HASH)

    assert image.names[0].value == 'a'
    assert image.blobs[0].value == b'xyz'


def test_repack_is_identical(sample_image):
    assert MPFSImage(sample_image).pack() == sample_image
