from enum import Flag, IntFlag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format.

    Signature, version and offsets are always enforced; the levels here
    turn advisory checks into fatal ones.'''
    NONE    = 0
    HASH    = 1 << 0
    INHERIT = 1 << 1


class MPFSFlags(IntFlag):
    '''Bits of the "flags" field of a FAT entry.

    COMPRESSED: the payload is gzip-ed, the server must send the matching header.
    INDEXED: a companion file with the last char of the name replaced by '#' exists.'''
    NONE       = 0
    COMPRESSED = 1 << 0
    INDEXED    = 1 << 1
