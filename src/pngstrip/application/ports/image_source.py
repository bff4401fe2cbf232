from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable


@runtime_checkable
class ImageSourcePort(Protocol):
    @property
    def root(self) -> Path:
        """Directory the source enumerates; task outputs mirror paths relative to it."""
        ...

    def iter_images(self) -> Iterator[Path]:
        """
        Yield every input file to process, one at a time.

        Errors affecting a single entry are logged and the entry is skipped.

        Raises:
            FileNotFoundError: If the root itself does not exist
            NotADirectoryError: If the root is not a directory
        """
        ...
