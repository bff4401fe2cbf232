"""Decode a PNG byte stream into an ImageDocument."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from ..errors import Truncated
from ..models.chunk import IEND
from ..models.image_document import ImageDocument
from ..models.signature import SIGNATURE_LENGTH
from .chunk_codec import ChunkCodec, read_exact


def read_document(stream: BinaryIO) -> ImageDocument:
    """
    Decode a complete PNG stream, stopping after the IEND chunk.

    The signature bytes are stored but not validated; callers that need a
    valid signature check it separately (see ``verify_signature``).

    Args:
        stream: Binary stream positioned at the start of the file

    Returns:
        ImageDocument holding the signature and every chunk up to and including IEND

    Raises:
        Truncated: Signature shorter than 8 bytes, a chunk cut short,
            or end of stream before IEND
        CRCMismatch: A chunk failed its checksum
        ChunkLengthOutOfRange: A chunk declared an impossible length
    """
    signature = read_exact(stream, SIGNATURE_LENGTH, "signature")
    document = ImageDocument(signature=signature)

    while True:
        # Any error propagates; a partially read document is never returned
        try:
            chunk = ChunkCodec.decode(stream)
        except Truncated as e:
            if e.actual == 0 and e.context == "chunk length":
                raise Truncated(f"chunks (no IEND after {len(document)} chunks)") from e
            raise
        document.append(chunk)
        if chunk.type == IEND:
            return document


def read_document_from_path(path: Path | str) -> ImageDocument:
    """Open ``path`` and decode it, always releasing the file handle."""
    with Path(path).open("rb") as f:
        return read_document(f)
