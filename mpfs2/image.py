'''
# MPFS2 image

Read-only filesystem image of the Microchip TCP/IP stack: every file
is reachable by the FAT that follows the header, all the integers are
little endian.

  .---------------------------------.
  | header (8 bytes)                |
  | FAT entry 1 (24 bytes)          |
    ...
  | FAT entry N                     |
  | name 1 (null terminated)        |
    ...
  | name N                          |
  | data 1                          |
    ...
  | data N                          |
  '---------------------------------'

The loader on the device trusts the addresses found in the FAT so, when
unpacking, names and data are reached through them and not by position.
'''
from .core import Chunk
from . import fields
from . import validator
from .const import MPFS_SIGNATURE, MPFS_VERSION, NAME_ENCODING
from .enum import Compliant, MPFSFlags
from .exceptions import MPFSException
from .hashing import name_hash
from .properties import Dependency
from .records import FileRecord


class MPFSHeader(Chunk):
    signature  = fields.StringField(4, default=MPFS_SIGNATURE, is_magic=True)
    version    = fields.StructField('H', default=MPFS_VERSION)
    file_count = fields.StructField('H')

    def validate(self):
        validator.check_version(self.version.value)


class FATEntry(Chunk):
    name_hash = fields.StructField('H')
    flags     = fields.StructField('H', enum=MPFSFlags)
    name_addr = fields.StructField('I')  # absolute offset of the name
    data_addr = fields.StructField('I')  # absolute offset of the data
    length    = fields.StructField('I')
    timestamp = fields.StructField('I')
    microtime = fields.StructField('I')  # opaque, never interpreted

    def is_hash_valid(self, name):
        return name_hash(name) == self.name_hash.value


class MPFSImage(Chunk):
    header = MPFSHeader()
    fat    = fields.ArrayField(FATEntry(), n=Dependency('.header.file_count'))
    names  = fields.ArrayField(fields.CStringField(encoding=NAME_ENCODING))
    blobs  = fields.ArrayField(fields.BlobField())

    def __init__(self, data=None, compliant=Compliant.NONE, **kwargs):
        super().__init__(data, compliant=compliant, **kwargs)

    def __len__(self):
        return len(self.fat)

    @classmethod
    def from_records(cls, records, compliant=Compliant.NONE):
        '''Build an image with the records as they are: names and flags are not touched.'''
        image = cls(compliant=compliant)

        for record in records:
            image.add(record.name, record.data, record.flags, record.timestamp, record.microtime)

        image.relayout()

        return image

    def add(self, name, data, flags=MPFSFlags.NONE, timestamp=0, microtime=0):
        '''Append a file, the addresses are resolved at the next relayout.'''
        validator.check_file_count(len(self.fat) + 1)
        validator.check_data_length(len(data))

        name_field = self.names.instance_element()
        name_field.value = name

        blob = self.blobs.instance_element()
        blob.value = data

        entry = self.fat.instance_element()
        entry.name_hash.value = name_hash(name)
        entry.flags.value = flags
        entry.timestamp.value = timestamp
        entry.microtime.value = microtime

        self.fat.append(entry)
        self.names.append(name_field)
        self.blobs.append(blob)

    def relayout(self, offset=0):
        '''Names and data are laid out after the FAT, then each entry
        points to its own.'''
        size = super().relayout(offset=offset)

        for entry, name, blob in zip(self.fat, self.names, self.blobs):
            entry.name_addr.value = name.offset
            entry.data_addr.value = blob.offset
            entry.length.value = blob.size

        return size

    def unpack(self, stream):
        '''Only header and FAT are read sequentially, the other tables
        are rebuilt following the addresses of the entries.'''
        self.offset = stream.tell()
        size = stream.size

        validator.check_header(size)
        self.unpack_field('header', stream)

        validator.check_fat(size, self.header.file_count.value)
        self.unpack_field('fat', stream)

        self.names.clear()
        self.blobs.clear()

        strict = self.is_compliant(Compliant.HASH)

        for idx, entry in enumerate(self.fat):
            try:
                validator.check_bounds(entry.name_addr.value, entry.data_addr.value, entry.length.value, size)

                name = self.names.instance_element()
                name.offset = entry.name_addr.value
                stream.seek(name.offset)
                name.unpack(stream)

                blob = self.blobs.instance_element()
                blob.offset = entry.data_addr.value
                blob.length = entry.length.value
                stream.seek(blob.offset)
                blob.unpack(stream)

                validator.check_hash(name.value, entry.name_hash.value, strict=strict)
            except MPFSException as e:
                e.chain.extend([str(idx), 'fat'])
                raise

            self.names.append(name)
            self.blobs.append(blob)

    def records(self):
        for entry, name, blob in zip(self.fat, self.names, self.blobs):
            yield FileRecord(
                name.value,
                blob.value,
                flags=entry.flags.value,
                timestamp=entry.timestamp.value,
                microtime=entry.microtime.value,
                name_hash_ok=entry.is_hash_valid(name.value),
            )
