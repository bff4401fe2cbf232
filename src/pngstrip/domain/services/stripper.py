"""Project a decoded document down to its critical chunks and serialize it."""

from __future__ import annotations

import io

from ..errors import ChecksumVerificationFailed, ChunkIntegrityError, MalformedDocument
from ..models.chunk import IDAT, IEND, IHDR, PLTE, Chunk
from ..models.image_document import ImageDocument
from ..models.signature import PNG_SIGNATURE
from .chunk_codec import ChunkCodec

# Types kept between IHDR and IEND, in file order
_BODY_TYPES = frozenset({PLTE, IDAT})


def project(document: ImageDocument) -> list[Chunk]:
    """
    Select the chunks of the minimal image: the first IHDR, every PLTE and
    IDAT in file order, then the first IEND. Ancillary chunks are dropped.

    Walking ``document.chunks`` rather than the type index keeps PLTE ahead
    of IDAT whenever it was ahead in the source file.

    Raises:
        MalformedDocument: The document has no IHDR or no IEND
    """
    header = document.first(IHDR)
    if header is None:
        raise MalformedDocument(IHDR)
    trailer = document.first(IEND)
    if trailer is None:
        raise MalformedDocument(IEND)

    body = [chunk for chunk in document.chunks if chunk.type in _BODY_TYPES]
    return [header, *body, trailer]


def strip(document: ImageDocument, verify_checksums: bool = False, target: str = "<memory>") -> bytes:
    """
    Serialize the minimal form of ``document``.

    Args:
        document: Decoded image
        verify_checksums: Re-verify every retained chunk before producing output
        target: Output destination, used in error messages

    Returns:
        PNG signature followed by IHDR, PLTE/IDAT chunks and IEND

    Raises:
        MalformedDocument: IHDR or IEND missing
        ChecksumVerificationFailed: A retained chunk failed verification
    """
    chunks = project(document)

    if verify_checksums:
        # All chunks are checked before any byte is produced
        for chunk in chunks:
            try:
                ChunkCodec.verify(chunk)
            except ChunkIntegrityError as e:
                raise ChecksumVerificationFailed(target) from e

    buf = io.BytesIO()
    buf.write(PNG_SIGNATURE)
    for chunk in chunks:
        ChunkCodec.encode(chunk, buf)
    return buf.getvalue()
