import pytest

from mpfs2 import FileRecord, MPFSFlags, encode


@pytest.fixture
def sample_records():
    '''Records already carrying the flags the encoder would derive.'''
    return [
        FileRecord('index.htm', b'<html/>', flags=MPFSFlags.INDEXED, timestamp=0x5f5e1000, microtime=0xcafe),
        FileRecord('index.ht#', b'\x00\x01', timestamp=0x5f5e1001),
        FileRecord('css/style.css', b'\x1f\x8b\x08\x00', flags=MPFSFlags.COMPRESSED, timestamp=0x5f5e1002),
        FileRecord('empty.txt', b'', timestamp=0),
    ]


@pytest.fixture
def sample_image(sample_records):
    return encode(sample_records)
