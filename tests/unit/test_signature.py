"""Unit tests for PNG signature classification and line-ending damage detection."""

import pytest

from pngstrip.domain.errors import LineEndingCorrupted, NotAPNG, Truncated
from pngstrip.domain.models.signature import (
    PNG_SIGNATURE,
    LineEndingDirection,
    SignatureStatus,
    check_signature,
    verify_signature,
)


def test_canonical_signature_is_valid():
    result = check_signature(PNG_SIGNATURE)
    assert result.is_valid
    assert result.direction is None


def test_only_first_eight_bytes_are_considered():
    assert check_signature(PNG_SIGNATURE + b"\x00\x00\x00\x0dIHDR").is_valid


def test_unix_to_dos_conversion_detected():
    """Test that LF -> CRLF rewriting (extra CR before the final LF) is reported."""
    damaged = b"\x89PNG\r\r\n\x1a\n"

    result = check_signature(damaged)

    assert result.status is SignatureStatus.LINE_ENDING_CORRUPTED
    assert result.direction is LineEndingDirection.UNIX_TO_DOS


def test_dos_to_unix_conversion_detected():
    """Test that CRLF -> LF rewriting (the CR dropped) is reported on a short header."""
    damaged = b"\x89PNG\n\x1a\n"

    result = check_signature(damaged)

    assert result.status is SignatureStatus.LINE_ENDING_CORRUPTED
    assert result.direction is LineEndingDirection.DOS_TO_UNIX


@pytest.mark.parametrize("header", [b"", b"\x89", b"\x89PN"])
def test_fewer_than_four_bytes_is_truncated(header):
    assert check_signature(header).status is SignatureStatus.TRUNCATED


@pytest.mark.parametrize("header", [b"\x89PNG", b"\x89PNG\r", b"\x89PNG\r\n\x1a"])
def test_short_header_with_intact_cr_is_truncated(header):
    assert check_signature(header).status is SignatureStatus.TRUNCATED


def test_gif_header_is_not_a_png():
    assert check_signature(b"GIF89a\x01\x00").status is SignatureStatus.NOT_A_PNG


class TestStrictness:
    """By default a signature is rejected only when marker and name are both wrong; strict mode rejects either."""

    def test_wrong_marker_only_rejected_when_strict(self):
        header = b"\x88PNG\r\n\x1a\n"
        assert check_signature(header).is_valid
        assert check_signature(header, strict=True).status is SignatureStatus.NOT_A_PNG

    def test_wrong_name_only_rejected_when_strict(self):
        header = b"\x89JPG\r\n\x1a\n"
        assert check_signature(header).is_valid
        assert check_signature(header, strict=True).status is SignatureStatus.NOT_A_PNG

    def test_both_wrong_rejected_in_either_mode(self):
        header = b"\x00JPG\r\n\x1a\n"
        assert check_signature(header).status is SignatureStatus.NOT_A_PNG
        assert check_signature(header, strict=True).status is SignatureStatus.NOT_A_PNG

    def test_verify_follows_mode(self):
        header = b"\x88PNG\r\n\x1a\n"
        verify_signature(header)
        with pytest.raises(NotAPNG):
            verify_signature(header, strict=True)


class TestVerifySignature:
    def test_valid_signature_returns_none(self):
        assert verify_signature(PNG_SIGNATURE) is None

    def test_raises_not_a_png(self):
        with pytest.raises(NotAPNG) as exc_info:
            verify_signature(b"GIF89a\x01\x00")
        assert exc_info.value.header == b"GIF89a\x01\x00"

    def test_raises_truncated_with_counts(self):
        with pytest.raises(Truncated) as exc_info:
            verify_signature(b"\x89P")
        assert exc_info.value.expected == 8
        assert exc_info.value.actual == 2

    def test_raises_line_ending_corrupted_with_direction(self):
        with pytest.raises(LineEndingCorrupted) as exc_info:
            verify_signature(b"\x89PNG\r\r\n\x1a\n")
        assert exc_info.value.direction is LineEndingDirection.UNIX_TO_DOS
        assert "unix-to-dos" in str(exc_info.value)
