'''
The name hash stored in each FAT entry.

It's the plain sum of the characters of the name truncated to 16 bits: the
loader of the embedded stack uses exactly this algorithm to check the table,
collisions are expected and the hash is never used to look up a file.
'''
from .const import HASH_MASK


def name_hash(name) -> int:
    '''Sum of the code points of a text (or of the values of raw bytes) modulo 65536.'''
    if isinstance(name, (bytes, bytearray)):
        return sum(name) & HASH_MASK

    return sum(ord(_) for _ in name) & HASH_MASK
