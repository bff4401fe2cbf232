from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ImageSinkPort(Protocol):
    def write(self, data: bytes, output_path: Path) -> Path:
        """
        Persist a serialized image for ``output_path``.

        Args:
            data: Complete minimal PNG stream
            output_path: Logical destination (sinks may change the extension)

        Returns:
            Path of the file actually written

        Raises:
            OSError: If the destination cannot be written
            EncoderError: If an external encoder fails to launch or exits nonzero
        """
        ...
