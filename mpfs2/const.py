MPFS_SIGNATURE = b'MPFS'
MPFS_VERSION   = 2

HEADER_SIZE    = 8
FAT_ENTRY_SIZE = 24

DEFAULT_SIZE_LIMIT = 64 * 1024 * 1024

MAX_FILE_COUNT  = 0xffff
MAX_DATA_LENGTH = 0xffffffff

HASH_MASK = 0xffff

NAME_ENCODING      = 'utf-8'
COMPRESSION_SUFFIX = '.gz'
INDEX_MARKER       = '#'
