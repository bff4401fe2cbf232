"""Integration tests for FileImageSink and EncodedImageSink on a real filesystem."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from pngstrip.application.ports.encoder import EncoderResult
from pngstrip.domain.errors import EncoderExecutionFailed
from pngstrip.infrastructure.adapters.image_sinks import EncodedImageSink, FileImageSink


class MockEncoder:
    """Encoder double that copies the source file, or fails on demand."""

    extension = ".webp"

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sources: list[Path] = []

    def encode(self, source: Path, destination: Path) -> EncoderResult:
        self.sources.append(source)
        assert source.exists()
        if self.fail:
            raise EncoderExecutionFailed(2, "cannot encode")
        destination.write_bytes(b"RIFF" + source.read_bytes())
        return EncoderResult(args=("mock",), exit_code=0, destination=destination)


class TestFileImageSink:
    def test_creates_parent_directories(self, tmp_path: Path):
        target = tmp_path / "processed" / "nested" / "a.png"

        written = FileImageSink().write(b"\x89PNG data", target)

        assert written == target
        assert target.read_bytes() == b"\x89PNG data"

    def test_overwrites_existing_file(self, tmp_path: Path):
        target = tmp_path / "a.png"
        target.write_bytes(b"old contents that are longer")

        FileImageSink().write(b"new", target)

        assert target.read_bytes() == b"new"

    def test_no_temp_files_left_behind(self, tmp_path: Path):
        FileImageSink().write(b"data", tmp_path / "a.png")
        assert [p.name for p in tmp_path.iterdir()] == ["a.png"]

    def test_failed_rename_keeps_old_file_and_cleans_temp(self, tmp_path: Path):
        """Test that an interrupted write never leaves a partial image."""
        target = tmp_path / "a.png"
        target.write_bytes(b"original")

        with patch("pngstrip.infrastructure.adapters.image_sinks.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                FileImageSink().write(b"replacement", target)

        assert target.read_bytes() == b"original"
        assert [p.name for p in tmp_path.iterdir()] == ["a.png"]


class TestEncodedImageSink:
    def test_artifact_takes_encoder_extension(self, tmp_path: Path):
        encoder = MockEncoder()
        sink = EncodedImageSink(encoder, temp_dir=tmp_path)

        written = sink.write(b"minimal", tmp_path / "out" / "photo.png")

        assert written == tmp_path / "out" / "photo.webp"
        assert written.read_bytes() == b"RIFFminimal"

    def test_temp_file_removed_after_success(self, tmp_path: Path):
        encoder = MockEncoder()
        scratch = tmp_path / "scratch"
        scratch.mkdir()

        EncodedImageSink(encoder, temp_dir=scratch).write(b"minimal", tmp_path / "out" / "a.png")

        assert not encoder.sources[0].exists()
        assert list(scratch.iterdir()) == []

    def test_temp_file_removed_after_encoder_failure(self, tmp_path: Path):
        encoder = MockEncoder(fail=True)
        scratch = tmp_path / "scratch"
        scratch.mkdir()

        with pytest.raises(EncoderExecutionFailed):
            EncodedImageSink(encoder, temp_dir=scratch).write(b"minimal", tmp_path / "out" / "a.png")

        assert list(scratch.iterdir()) == []
        assert not (tmp_path / "out" / "a.webp").exists()
