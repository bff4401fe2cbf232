"""Domain models for PNG chunk processing."""

from .chunk import CRITICAL_CHUNK_TYPES, Chunk, compute_crc
from .image_document import ImageDocument
from .signature import (
    PNG_SIGNATURE,
    LineEndingDirection,
    SignatureCheck,
    SignatureStatus,
    check_signature,
    verify_signature,
)
from .task import Task, TaskState

__all__ = [
    "CRITICAL_CHUNK_TYPES",
    "Chunk",
    "compute_crc",
    "ImageDocument",
    "PNG_SIGNATURE",
    "LineEndingDirection",
    "SignatureCheck",
    "SignatureStatus",
    "check_signature",
    "verify_signature",
    "Task",
    "TaskState",
]
