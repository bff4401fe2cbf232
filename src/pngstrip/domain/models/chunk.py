import zlib
from dataclasses import dataclass

IHDR = "IHDR"
PLTE = "PLTE"
IDAT = "IDAT"
IEND = "IEND"

CRITICAL_CHUNK_TYPES: frozenset[str] = frozenset({IHDR, PLTE, IDAT, IEND})

# Largest value the length field may hold
MAX_CHUNK_LENGTH = 2**31 - 1


def compute_crc(chunk_type: str, data: bytes) -> int:
    """
    Compute CRC-32/IEEE over the chunk type followed by the chunk data.

    Args:
        chunk_type: Four-character chunk tag
        data: Chunk payload

    Returns:
        Unsigned 32-bit checksum
    """
    return zlib.crc32(data, zlib.crc32(chunk_type.encode("latin-1"))) & 0xFFFFFFFF


@dataclass(frozen=True)
class Chunk:
    """
    A length-prefixed, type-tagged, checksummed record inside a PNG stream.

    Fields:
        length: Declared payload length (uint32)
        type: Four-character chunk tag
        data: Payload bytes
        crc: Stored CRC-32 of type + data (uint32)

    The length/crc invariants are checked by ChunkCodec.verify rather than on
    construction, so that damaged chunks can still be represented and reported.
    """

    length: int
    type: str
    data: bytes
    crc: int

    @classmethod
    def build(cls, chunk_type: str, data: bytes) -> "Chunk":
        """Create a well-formed chunk, deriving length and CRC from the data."""
        return cls(length=len(data), type=chunk_type, data=data, crc=compute_crc(chunk_type, data))

    @property
    def is_critical(self) -> bool:
        """True for IHDR, PLTE, IDAT and IEND."""
        return self.type in CRITICAL_CHUNK_TYPES

    @property
    def is_ancillary(self) -> bool:
        """True when bit 5 of the first type byte is set (lowercase first letter)."""
        return bool(self.type) and self.type[0].islower()

    @property
    def encoded_size(self) -> int:
        """Size of the chunk on disk: length + type + data + crc."""
        return 12 + len(self.data)

    def __repr__(self) -> str:
        return f"<Chunk {self.type} len={self.length} crc=0x{self.crc:08X}>"
