'''
Checks shared by the decoder and the encoder.

The size ceiling protects devices with small flash from images built
with the wrong configuration; everything else guards the offset
arithmetic done while walking the FAT.
'''
import logging

from .const import (
    DEFAULT_SIZE_LIMIT,
    FAT_ENTRY_SIZE,
    HEADER_SIZE,
    MAX_DATA_LENGTH,
    MAX_FILE_COUNT,
    MPFS_VERSION,
)
from .exceptions import (
    CapacityError,
    HashMismatch,
    MagicException,
    OffsetException,
    VersionException,
)
from .hashing import name_hash


logger = logging.getLogger(__name__)


def check_size(size: int, limit: int = DEFAULT_SIZE_LIMIT) -> None:
    if size > limit:
        raise CapacityError(size, limit)


def check_file_count(count: int) -> None:
    if count > MAX_FILE_COUNT:
        raise CapacityError(count, MAX_FILE_COUNT, what='file count')


def check_data_length(length: int) -> None:
    if length > MAX_DATA_LENGTH:
        raise CapacityError(length, MAX_DATA_LENGTH, what='file data')


def check_header(size: int) -> None:
    if size < HEADER_SIZE:
        raise MagicException(f'invalid signature: {size} bytes cannot contain the header')


def check_version(version: int) -> None:
    if version != MPFS_VERSION:
        raise VersionException(f'unsupported version {version}')


def check_fat(size: int, file_count: int) -> None:
    end = HEADER_SIZE + file_count * FAT_ENTRY_SIZE
    if end > size:
        raise OffsetException(f'truncated image: the FAT of {file_count} entries ends at 0x{end:x} beyond 0x{size:x}')


def check_bounds(name_addr: int, data_addr: int, length: int, size: int) -> None:
    if name_addr >= size:
        raise OffsetException(f'corrupt offset: name at 0x{name_addr:x} beyond 0x{size:x}')

    if data_addr + length > size:
        raise OffsetException(
            f'corrupt offset / truncated image: data at 0x{data_addr:x} of {length} bytes beyond 0x{size:x}')


def check_hash(name: str, stored: int, strict: bool = False) -> bool:
    '''Returns False if the hash doesn't correspond, raising only when strict.'''
    computed = name_hash(name)

    if computed == stored:
        return True

    logger.warning(f'hash for \'{name}\' is 0x{stored:04x} but should be 0x{computed:04x}')

    if strict:
        raise HashMismatch(name, stored, computed)

    return False
