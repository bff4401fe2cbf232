"""Adapter that runs an external lossless encoder (cwebp) and waits for it."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ...application.ports.encoder import EncoderResult
from ...domain.errors import EncoderExecutionFailed, EncoderLaunchFailed

logger = logging.getLogger(__name__)


class CwebpEncoderAdapter:
    """
    Invoke ``<executable> <lossless_flag> <source> <output_flag> <destination>``.

    The call blocks until the process exits. A process that cannot be
    started raises EncoderLaunchFailed; a nonzero exit raises
    EncoderExecutionFailed with the exit status and captured stderr.
    """

    def __init__(
        self,
        executable: str = "cwebp",
        lossless_flag: str = "-lossless",
        output_flag: str = "-o",
        extension: str = ".webp",
    ) -> None:
        self.executable = executable
        self.lossless_flag = lossless_flag
        self.output_flag = output_flag
        self.extension = extension

    def build_args(self, source: Path, destination: Path) -> list[str]:
        return [self.executable, self.lossless_flag, str(source), self.output_flag, str(destination)]

    def encode(self, source: Path, destination: Path) -> EncoderResult:
        """
        Encode ``source`` into ``destination``.

        Args:
            source: Minimal PNG written by the sink
            destination: Path of the re-encoded artifact

        Returns:
            EncoderResult for the completed run (exit code 0)

        Raises:
            EncoderLaunchFailed: Executable missing or not runnable
            EncoderExecutionFailed: Encoder exited nonzero
        """
        args = self.build_args(source, destination)
        logger.debug(f"Running encoder: {' '.join(args)}")

        try:
            completed = subprocess.run(args, capture_output=True, text=True)
        except OSError as e:
            raise EncoderLaunchFailed(self.executable, e.strerror or str(e)) from e

        if completed.returncode != 0:
            raise EncoderExecutionFailed(completed.returncode, completed.stderr or "")

        return EncoderResult(
            args=tuple(args),
            exit_code=completed.returncode,
            destination=destination,
            stderr=completed.stderr or "",
        )
