"""List the chunks of a single PNG file without failing on the first defect."""

from __future__ import annotations

import logging
from pathlib import Path

from ...domain.errors import PngStripError
from ...domain.models.chunk import IEND, compute_crc
from ...domain.models.signature import SIGNATURE_LENGTH, check_signature
from ...domain.services.chunk_codec import ChunkCodec
from ..dto.batch import ChunkSummary, InspectReport

logger = logging.getLogger(__name__)


def inspect_image(path: Path | str, strict_signature: bool = False) -> InspectReport:
    """
    Walk a PNG file chunk by chunk for diagnostics.

    Unlike read_document, CRC mismatches are recorded per chunk instead of
    aborting, so a damaged file can still be listed up to the point where
    its structure breaks.

    Args:
        path: File to inspect
        strict_signature: Signature classification mode

    Returns:
        InspectReport with signature status, per-chunk rows and the number of
        bytes found after IEND

    Raises:
        OSError: If the file cannot be opened
    """
    path = Path(path)
    with path.open("rb") as f:
        signature = f.read(SIGNATURE_LENGTH)
        check = check_signature(signature, strict=strict_signature)
        report = InspectReport(
            path=str(path),
            signature_status=check.status.value,
            line_ending_direction=check.direction.value if check.direction else None,
        )

        offset = len(signature)
        while len(signature) == SIGNATURE_LENGTH:
            try:
                chunk = ChunkCodec.decode(f, verify_crc=False)
            except PngStripError as e:
                report.error = str(e)
                logger.debug(f"Inspection of {path} stopped: {e}")
                break

            report.chunks.append(
                ChunkSummary(
                    index=len(report.chunks),
                    offset=offset,
                    type=chunk.type,
                    length=chunk.length,
                    crc=chunk.crc,
                    crc_ok=compute_crc(chunk.type, chunk.data) == chunk.crc,
                    critical=chunk.is_critical,
                )
            )
            offset += chunk.encoded_size

            if chunk.type == IEND:
                report.complete = True
                report.trailing_bytes = len(f.read())
                break

    return report
