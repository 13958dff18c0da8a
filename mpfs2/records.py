from .enum import MPFSFlags


class FileRecord(object):
    '''A file as seen by the user of the codec.

    "name_hash_ok" is filled only by the decoder and is not taken into
    account when comparing records.'''

    def __init__(self, name, data=b'', flags=MPFSFlags.NONE, timestamp=0, microtime=0, name_hash_ok=None):
        self.name = name
        self.data = bytes(data)
        self.flags = MPFSFlags(flags)
        self.timestamp = timestamp
        self.microtime = microtime
        self.name_hash_ok = name_hash_ok

    def __repr__(self):
        return '<%s(%r, %d bytes, flags=%r, timestamp=%d)>' % (
            self.__class__.__name__,
            self.name,
            len(self.data),
            self.flags,
            self.timestamp,
        )

    def __eq__(self, other):
        if not isinstance(other, FileRecord):
            return NotImplemented

        return (
            self.name == other.name and
            self.data == other.data and
            self.flags == other.flags and
            self.timestamp == other.timestamp and
            self.microtime == other.microtime
        )

    @property
    def compressed(self):
        return bool(self.flags & MPFSFlags.COMPRESSED)

    @property
    def indexed(self):
        return bool(self.flags & MPFSFlags.INDEXED)
