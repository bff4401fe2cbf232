"""Output adapters: direct atomic file writes and external-encoder handoff."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ...application.ports.encoder import LosslessEncoderPort

logger = logging.getLogger(__name__)


class FileImageSink:
    """Write serialized images to disk atomically (temp file, then rename)."""

    def write(self, data: bytes, output_path: Path) -> Path:
        """
        Write ``data`` to ``output_path``.

        The bytes go to a temporary file in the destination directory which
        is renamed over the target once fully flushed, so a failed write
        never leaves a partial image behind.

        Raises:
            OSError: If the directory cannot be created or the file written
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=output_path.parent,
                prefix=f".{output_path.name}.tmp.",
                delete=False,
            ) as temp_file:
                temp_path = Path(temp_file.name)
                temp_file.write(data)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            os.replace(temp_path, output_path)
            temp_path = None
        finally:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)

        logger.debug(f"Wrote {len(data)} bytes to {output_path}")
        return output_path


class EncodedImageSink:
    """
    Hand serialized images to an external lossless encoder.

    The minimal PNG is written to a scoped temporary file, the encoder runs
    to completion, and the temporary file is removed whether or not the
    encoder succeeded. The artifact lands at the output path with the
    encoder's extension.
    """

    def __init__(self, encoder: LosslessEncoderPort, temp_dir: Path | str | None = None) -> None:
        """
        Initialize encoder handoff.

        Args:
            encoder: Lossless encoder adapter (e.g. CwebpEncoderAdapter)
            temp_dir: Directory for intermediate files (default: system temp)
        """
        self.encoder = encoder
        self.temp_dir = Path(temp_dir) if temp_dir is not None else None

    def destination_for(self, output_path: Path) -> Path:
        return Path(output_path).with_suffix(self.encoder.extension)

    def write(self, data: bytes, output_path: Path) -> Path:
        """
        Encode ``data`` and write the result next to ``output_path``.

        Raises:
            OSError: If the temporary file or output directory cannot be created
            EncoderLaunchFailed: Encoder could not be started
            EncoderExecutionFailed: Encoder exited nonzero
        """
        destination = self.destination_for(output_path)
        destination.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_name = tempfile.mkstemp(prefix="strip-", suffix=".png", dir=self.temp_dir)
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as temp_file:
                temp_file.write(data)
            self.encoder.encode(temp_path, destination)
        finally:
            temp_path.unlink(missing_ok=True)

        logger.debug(f"Encoded {len(data)} bytes into {destination}")
        return destination
