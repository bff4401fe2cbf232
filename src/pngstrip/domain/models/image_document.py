from dataclasses import dataclass, field
from typing import Iterator

from .chunk import Chunk


@dataclass
class ImageDocument:
    """
    In-memory representation of a decoded PNG stream.

    Fields:
        signature: The 8 leading bytes as read from the stream
        chunks: Chunks in file order (authoritative order)

    The type index maps a chunk type to the positions of that type in
    ``chunks``. It is derived data for lookups only; emission order across
    different types always comes from ``chunks``.
    """

    signature: bytes
    chunks: list[Chunk] = field(default_factory=list)
    _index: dict[str, list[int]] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.rebuild_index()

    def append(self, chunk: Chunk) -> None:
        """Append a chunk in file order and record its position in the index."""
        self._index.setdefault(chunk.type, []).append(len(self.chunks))
        self.chunks.append(chunk)

    def rebuild_index(self) -> None:
        """Recompute the type index from the chunk sequence."""
        index: dict[str, list[int]] = {}
        for position, chunk in enumerate(self.chunks):
            index.setdefault(chunk.type, []).append(position)
        self._index = index

    def positions(self, chunk_type: str) -> tuple[int, ...]:
        """File positions of every chunk of the given type."""
        return tuple(self._index.get(chunk_type, ()))

    def of_type(self, chunk_type: str) -> list[Chunk]:
        return [self.chunks[p] for p in self.positions(chunk_type)]

    def first(self, chunk_type: str) -> Chunk | None:
        """First chunk of the given type, or None if the type is absent."""
        positions = self._index.get(chunk_type)
        if not positions:
            return None
        return self.chunks[positions[0]]

    def chunk_types(self) -> list[str]:
        return [chunk.type for chunk in self.chunks]

    def __len__(self) -> int:
        return len(self.chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)
