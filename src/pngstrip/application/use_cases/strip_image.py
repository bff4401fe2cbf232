from __future__ import annotations

import logging
from pathlib import Path

from ...domain.models.signature import verify_signature
from ...domain.models.task import Task
from ...domain.policy.strip_policy import StripPolicy
from ...domain.services.chunk_codec import ChunkCodec
from ...domain.services.stream_reader import read_document_from_path
from ...domain.services.stripper import project, strip
from ..ports.image_sink import ImageSinkPort

logger = logging.getLogger(__name__)


def strip_image(task: Task, policy: StripPolicy, sink: ImageSinkPort) -> Path:
    """
    Decode one PNG file, drop its ancillary chunks and hand the result to a sink.

    decode → (signature check) → project + serialize → sink

    Args:
        task: Task naming the input file and output destination
        policy: Checksum and signature options
        sink: Direct file writer or external-encoder handoff

    Returns:
        Path of the file the sink wrote

    Raises:
        PngStripError: Any integrity, structure or encoder failure for this file
        OSError: If the input cannot be read or the output cannot be written
    """
    document = read_document_from_path(task.input_path)

    if policy.validate_signature:
        verify_signature(document.signature, strict=policy.strict_signature)

    data = strip(
        document,
        verify_checksums=policy.verify_checksums,
        target=str(task.output_path),
    )
    written = sink.write(data, task.output_path)

    dropped = sum(1 for chunk in document if chunk.is_ancillary)
    logger.debug(
        f"Stripped {task.input_path} -> {written} ({len(document)} chunks in, {dropped} ancillary dropped)",
        extra={"input_path": str(task.input_path), "output_path": str(written)},
    )
    return written


def check_image(task: Task, policy: StripPolicy) -> None:
    """
    Verify one PNG file without writing anything.

    Runs the same decode and signature checks as strip_image, then re-verifies
    every chunk and confirms the document can be projected.

    Raises:
        PngStripError: The file is damaged or structurally incomplete
        OSError: If the input cannot be read
    """
    document = read_document_from_path(task.input_path)

    if policy.validate_signature:
        verify_signature(document.signature, strict=policy.strict_signature)

    for chunk in document:
        ChunkCodec.verify(chunk)
    project(document)

    logger.debug(
        f"{task.input_path} OK ({len(document)} chunks)",
        extra={"input_path": str(task.input_path)},
    )
