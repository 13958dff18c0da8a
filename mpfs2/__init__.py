"""
# mpfs2: MPFS2 images for humans

MPFS2 is the flat read-only filesystem of the Microchip TCP/IP stack: a
header, a table with a fixed-size entry for each file (the FAT), the names
and then the data of the files.

The format is described via chunks and fields: a Chunk is an ordered
composition of Fields and the following operations are defined on both

 1. unpack(): reading the binary data and build a high-level
    representation of that.

 2. pack(): encode the high-level representation into binary data.

 3. relayout(): trigger a recursive layout "negotiation" between a component
    and its subcomponents so to have offset and size set in the correct way.
    Packing a root chunk always implies a relayouting.

Most of the users need only decode() and encode() working with FileRecord
instances.
"""
from .codec import decode, encode
from .const import DEFAULT_SIZE_LIMIT
from .enum import Compliant, MPFSFlags
from .exceptions import (
    MPFSException,
    FormatError,
    MagicException,
    VersionException,
    UnpackException,
    OffsetException,
    CapacityError,
    HashMismatch,
)
from .flags import derive_flags
from .hashing import name_hash
from .records import FileRecord
