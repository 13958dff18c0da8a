'''
Encoding and decoding of whole images.

Both directions work on a buffer fully in memory and keep no state between
calls: what elsewhere would be global options (the size limit, the
strictness) are explicit arguments.
'''
import logging
from typing import Iterable, List

from . import validator
from .const import DEFAULT_SIZE_LIMIT
from .enum import Compliant, MPFSFlags
from .flags import derive_flags, strip_compression_suffix
from .image import MPFSImage
from .records import FileRecord


logger = logging.getLogger(__name__)


def decode(data: bytes, size_limit: int = DEFAULT_SIZE_LIMIT, compliant: Compliant = Compliant.NONE) -> List[FileRecord]:
    '''Parse an image returning its files in FAT order.

    A hash not corresponding to the name is reported via the "name_hash_ok"
    attribute of the record, unless Compliant.HASH is requested.'''
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f'an image must be bytes-like, not \'{type(data).__name__}\'')

    validator.check_size(len(data), size_limit)

    image = MPFSImage(data, compliant=compliant)

    logger.debug('decoded %d files from %d bytes', len(image), len(data))

    return list(image.records())


def encode(records: Iterable[FileRecord], size_limit: int = DEFAULT_SIZE_LIMIT) -> bytes:
    '''Build the image of the given files preserving their order.

    A name ending with the compression suffix is stored without it and
    marked as compressed; the indexed bit is always derived from the whole
    set of names.'''
    records = list(records)

    validator.check_file_count(len(records))

    names = [strip_compression_suffix(record.name)[0] for record in records]
    names_set = frozenset(names)

    image = MPFSImage()

    for record, name in zip(records, names):
        flags = MPFSFlags(int(record.flags) & ~int(MPFSFlags.INDEXED))
        flags |= derive_flags(names_set, record.name)

        logger.debug('adding \'%s\' (%d bytes, flags=%r)', name, len(record.data), flags)

        image.add(name, record.data, flags, record.timestamp, record.microtime)

    data = image.pack()

    validator.check_size(len(data), size_limit)

    return data
