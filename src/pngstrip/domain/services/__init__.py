"""Pure domain services for the PNG chunk format."""

from .chunk_codec import ChunkCodec
from .stream_reader import read_document, read_document_from_path
from .stripper import project, strip

__all__ = [
    "ChunkCodec",
    "read_document",
    "read_document_from_path",
    "project",
    "strip",
]
