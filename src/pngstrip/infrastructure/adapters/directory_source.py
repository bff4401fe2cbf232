"""Filesystem adapter that enumerates PNG files under a directory tree."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class DirectoryImageSource:
    """
    Walk a directory tree and yield files whose name ends with ``suffix``.

    Traversal is sorted for reproducible task numbering. Unreadable
    subdirectories and entries that cannot be stat'ed are logged and skipped;
    only a missing or non-directory root is fatal.

    Directories listed in ``exclude`` are never descended into. The batch
    pipeline writes while the walk is still running, so an output directory
    nested in the input tree must be excluded or its files would be queued
    as new inputs.
    """

    def __init__(
        self,
        root: Path | str,
        suffix: str = ".png",
        follow_symlinks: bool = False,
        exclude: Iterable[Path | str] = (),
    ) -> None:
        """
        Initialize directory source.

        Args:
            root: Directory to enumerate
            suffix: File suffix to match (case-insensitive)
            follow_symlinks: Descend into symlinked directories
            exclude: Directories to prune from the walk (typically the output directory)
        """
        self._root = Path(root)
        self.suffix = suffix.lower()
        self.follow_symlinks = follow_symlinks
        self.exclude = frozenset(Path(p).resolve() for p in exclude)
        self.skipped = 0

    @property
    def root(self) -> Path:
        return self._root

    def _on_walk_error(self, error: OSError) -> None:
        self.skipped += 1
        logger.warning(
            f"Skipping unreadable entry {error.filename}: {error.strerror or error}",
            extra={"path": str(error.filename)},
        )

    def _prune(self, dirpath: str, dirnames: list[str]) -> None:
        # os.walk only honours in-place changes to dirnames
        kept = []
        for name in sorted(dirnames):
            if self.exclude and (Path(dirpath) / name).resolve() in self.exclude:
                logger.debug(f"Not descending into excluded directory {Path(dirpath) / name}")
                continue
            kept.append(name)
        dirnames[:] = kept

    def iter_images(self) -> Iterator[Path]:
        """
        Yield matching files in sorted, depth-first order.

        Raises:
            FileNotFoundError: If the root does not exist
            NotADirectoryError: If the root is not a directory
        """
        if not self._root.exists():
            raise FileNotFoundError(f"Input directory not found: {self._root}")
        if not self._root.is_dir():
            raise NotADirectoryError(f"Input path is not a directory: {self._root}")

        for dirpath, dirnames, filenames in os.walk(
            self._root, onerror=self._on_walk_error, followlinks=self.follow_symlinks
        ):
            self._prune(dirpath, dirnames)
            for name in sorted(filenames):
                if not name.lower().endswith(self.suffix):
                    continue

                path = Path(dirpath) / name
                try:
                    is_file = path.is_file()
                except OSError as e:
                    self._on_walk_error(e)
                    continue

                if not is_file:
                    logger.debug(f"Skipping non-regular entry {path}")
                    continue
                yield path
