"""Domain service for reading, writing and verifying single PNG chunks."""

from __future__ import annotations

import struct
from typing import BinaryIO

from ..errors import ChunkLengthOutOfRange, CRCMismatch, MissingBytes, Truncated
from ..models.chunk import MAX_CHUNK_LENGTH, Chunk, compute_crc

_UINT32 = struct.Struct(">I")


def read_exact(stream: BinaryIO, size: int, context: str) -> bytes:
    """
    Read exactly ``size`` bytes or raise Truncated.

    ``stream.read`` may legitimately return fewer bytes than requested on
    pipes and sockets, so reads are repeated until the count is met or the
    stream reports end of data.
    """
    buf = bytearray()
    while len(buf) < size:
        piece = stream.read(size - len(buf))
        if not piece:
            raise Truncated(context, expected=size, actual=len(buf))
        buf += piece
    return bytes(buf)


class ChunkCodec:
    """
    Encode, decode and verify chunk records.

    This service is pure apart from the stream it is handed.
    """

    @staticmethod
    def decode(stream: BinaryIO, verify_crc: bool = True) -> Chunk:
        """
        Decode one chunk from the current stream position.

        Layout: uint32 length (big-endian), 4-byte type, ``length`` data
        bytes, uint32 CRC (big-endian).

        Args:
            stream: Binary stream positioned at a chunk boundary
            verify_crc: Compare the stored CRC with the recomputed one.
                Only diagnostic listings turn this off.

        Returns:
            Chunk whose CRC has been checked against its type and data

        Raises:
            Truncated: The stream ended inside any field
            ChunkLengthOutOfRange: Length field above 2**31 - 1
            CRCMismatch: Stored CRC differs from CRC-32(type + data)
        """
        (length,) = _UINT32.unpack(read_exact(stream, 4, "chunk length"))
        chunk_type = read_exact(stream, 4, "chunk type").decode("latin-1")

        if length > MAX_CHUNK_LENGTH:
            raise ChunkLengthOutOfRange(chunk_type, length)

        data = read_exact(stream, length, f"{chunk_type} data")
        (crc,) = _UINT32.unpack(read_exact(stream, 4, f"{chunk_type} crc"))

        if verify_crc:
            computed = compute_crc(chunk_type, data)
            if computed != crc:
                raise CRCMismatch(chunk_type, declared=crc, computed=computed)

        return Chunk(length=length, type=chunk_type, data=data, crc=crc)

    @staticmethod
    def verify(chunk: Chunk) -> None:
        """
        Check a chunk's length and CRC invariants.

        Raises:
            MissingBytes: ``length`` differs from ``len(data)``
            CRCMismatch: Stored CRC differs from the recomputed one
        """
        if chunk.length != len(chunk.data):
            raise MissingBytes(chunk.type, declared=chunk.length, actual=len(chunk.data))

        computed = compute_crc(chunk.type, chunk.data)
        if computed != chunk.crc:
            raise CRCMismatch(chunk.type, declared=chunk.crc, computed=computed)

    @staticmethod
    def encode(chunk: Chunk, sink: BinaryIO) -> None:
        """
        Write a chunk as length, type, data, CRC.

        The stored CRC is written verbatim; callers that may have altered the
        data must verify the chunk first.
        """
        sink.write(_UINT32.pack(chunk.length))
        sink.write(chunk.type.encode("latin-1"))
        sink.write(chunk.data)
        sink.write(_UINT32.pack(chunk.crc))
