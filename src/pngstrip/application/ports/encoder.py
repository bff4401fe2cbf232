from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class EncoderResult:
    """Outcome of a completed encoder run."""

    args: tuple[str, ...]
    exit_code: int
    destination: Path
    stderr: str = ""


@runtime_checkable
class LosslessEncoderPort(Protocol):
    extension: str

    def encode(self, source: Path, destination: Path) -> EncoderResult:
        """
        Re-encode ``source`` losslessly into ``destination`` and wait for completion.

        Raises:
            EncoderLaunchFailed: If the encoder process cannot be started
            EncoderExecutionFailed: If the encoder exits with a nonzero status
        """
        ...
