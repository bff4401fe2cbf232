"""Shared fixtures: hand-built PNG streams for codec, stripper and pipeline tests."""

from __future__ import annotations

import io
import logging
import struct
import zlib
from pathlib import Path
from typing import Callable, Sequence

import pytest

from pngstrip.domain.models.chunk import Chunk
from pngstrip.domain.models.signature import PNG_SIGNATURE
from pngstrip.domain.services.chunk_codec import ChunkCodec
from pngstrip.infrastructure.logging import CorrelationIDFilter

# 2x2 palette image: IHDR(width, height, bit depth, color type 3, ...)
_PAYLOADS = {
    "IHDR": struct.pack(">IIBBBBB", 2, 2, 8, 3, 0, 0, 0),
    "PLTE": bytes([255, 0, 0, 0, 255, 0]),
    "IEND": b"",
    "tEXt": b"Comment\x00made by hand",
    "gAMA": struct.pack(">I", 45455),
    "tIME": struct.pack(">HBBBBB", 2024, 5, 17, 12, 30, 0),
}

FULL_LAYOUT = ("IHDR", "PLTE", "IDAT", "IDAT", "tEXt", "gAMA", "IEND")
MINIMAL_LAYOUT = ("IHDR", "PLTE", "IDAT", "IDAT", "IEND")


def _payload(chunk_type: str, position: int) -> bytes:
    if chunk_type == "IDAT":
        # Distinct payload per IDAT so ordering is observable
        return zlib.compress(f"pixels-{position}".encode())
    return _PAYLOADS.get(chunk_type, f"{chunk_type}-payload".encode())


def _build_chunks(types: Sequence[str] = FULL_LAYOUT) -> list[Chunk]:
    return [Chunk.build(t, _payload(t, i)) for i, t in enumerate(types)]


def _encode(chunks: Sequence[Chunk], signature: bytes = PNG_SIGNATURE) -> bytes:
    buf = io.BytesIO()
    buf.write(signature)
    for chunk in chunks:
        ChunkCodec.encode(chunk, buf)
    return buf.getvalue()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop handlers installed by configure_logging once a test finishes."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if any(isinstance(f, CorrelationIDFilter) for f in handler.filters):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def build_chunks() -> Callable[..., list[Chunk]]:
    """Factory: list of well-formed chunks for the given type sequence."""
    return _build_chunks


@pytest.fixture
def encode_png() -> Callable[..., bytes]:
    """Factory: serialize chunks behind a signature (canonical by default)."""
    return _encode


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    """Factory: complete PNG stream for the given type sequence."""

    def _make(types: Sequence[str] = FULL_LAYOUT) -> bytes:
        return _encode(_build_chunks(types))

    return _make


@pytest.fixture
def png_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory: write a PNG (or raw bytes) under tmp_path/images and return its path."""

    def _write(name: str = "image.png", types: Sequence[str] = FULL_LAYOUT, data: bytes | None = None) -> Path:
        path = tmp_path / "images" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data if data is not None else _encode(_build_chunks(types)))
        return path

    return _write


@pytest.fixture
def full_layout() -> tuple[str, ...]:
    return FULL_LAYOUT


@pytest.fixture
def minimal_layout() -> tuple[str, ...]:
    return MINIMAL_LAYOUT
