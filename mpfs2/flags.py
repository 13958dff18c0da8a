from typing import Collection, Tuple

from .const import COMPRESSION_SUFFIX, INDEX_MARKER
from .enum import MPFSFlags


def strip_compression_suffix(name: str, suffix: str = COMPRESSION_SUFFIX) -> Tuple[str, bool]:
    '''Returns the name to store and whether the file is compressed.'''
    if suffix and name.endswith(suffix):
        return name[:-len(suffix)], True

    return name, False


def restore_compression_suffix(name: str, flags, suffix: str = COMPRESSION_SUFFIX) -> str:
    '''Inverse of strip_compression_suffix(): the decoder never touches the names.'''
    if flags & MPFSFlags.COMPRESSED:
        return name + suffix

    return name


def index_name(name: str) -> str:
    '''Name of the companion file holding the index of the given one.'''
    return name[:-1] + INDEX_MARKER


def is_indexed(names: Collection[str], name: str) -> bool:
    # an index file cannot be indexed itself
    if not name or name.endswith(INDEX_MARKER):
        return False

    return index_name(name) in names


def derive_flags(names: Collection[str], name: str) -> MPFSFlags:
    '''Flags for the file with the given raw name, "names" being the set of
    the names as they will be stored (i.e. without compression suffix).

    Two names differing only in the last char share the same index file: both
    are marked as indexed, avoiding it is up to the caller.'''
    stored, compressed = strip_compression_suffix(name)

    flags = MPFSFlags.NONE

    if compressed:
        flags |= MPFSFlags.COMPRESSED

    if is_indexed(names, stored):
        flags |= MPFSFlags.INDEXED

    return flags
