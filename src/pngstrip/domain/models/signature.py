"""PNG signature classification, including line-ending damage detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import LineEndingCorrupted, NotAPNG, Truncated

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
SIGNATURE_LENGTH = len(PNG_SIGNATURE)

_HIGH_BIT_MARKER = 0x89
_MAGIC_NAME = b"PNG"
_CR = 0x0D
_LF = 0x0A


class SignatureStatus(str, Enum):
    VALID = "valid"
    NOT_A_PNG = "not_a_png"
    TRUNCATED = "truncated"
    LINE_ENDING_CORRUPTED = "line_ending_corrupted"


class LineEndingDirection(str, Enum):
    DOS_TO_UNIX = "dos-to-unix"
    UNIX_TO_DOS = "unix-to-dos"


@dataclass(frozen=True)
class SignatureCheck:
    """Result of classifying the leading bytes of a stream."""

    status: SignatureStatus
    direction: LineEndingDirection | None = None

    @property
    def is_valid(self) -> bool:
        return self.status is SignatureStatus.VALID


def _magic_mismatch(header: bytes, strict: bool) -> bool:
    bad_marker = header[0] != _HIGH_BIT_MARKER
    bad_name = header[1:4] != _MAGIC_NAME
    if strict:
        return bad_marker or bad_name
    # Legacy test: only a stream failing both conditions is rejected
    return bad_marker and bad_name


def check_signature(header: bytes, strict: bool = False) -> SignatureCheck:
    """
    Classify the first bytes of a stream.

    Args:
        header: Up to 8 leading bytes of the stream
        strict: Reject the stream if either the 0x89 marker or the "PNG" name
            is wrong. By default only a stream failing both is rejected, which
            is the historical behaviour of this check.

    Returns:
        SignatureCheck with status and, for line-ending damage, its direction
    """
    header = bytes(header[:SIGNATURE_LENGTH])

    if len(header) < 1 + len(_MAGIC_NAME):
        return SignatureCheck(SignatureStatus.TRUNCATED)

    if _magic_mismatch(header, strict):
        return SignatureCheck(SignatureStatus.NOT_A_PNG)

    if len(header) < SIGNATURE_LENGTH:
        # CRLF -> LF drops a byte, so the CR slot holds what followed it
        if len(header) > 4 and header[4] != _CR:
            return SignatureCheck(
                SignatureStatus.LINE_ENDING_CORRUPTED,
                LineEndingDirection.DOS_TO_UNIX,
            )
        return SignatureCheck(SignatureStatus.TRUNCATED)

    if header[7] != _LF:
        return SignatureCheck(
            SignatureStatus.LINE_ENDING_CORRUPTED,
            LineEndingDirection.UNIX_TO_DOS,
        )

    return SignatureCheck(SignatureStatus.VALID)


def verify_signature(header: bytes, strict: bool = False) -> None:
    """
    Raise the error matching check_signature's classification.

    Raises:
        Truncated: Fewer bytes than the signature needs
        NotAPNG: Magic bytes do not identify a PNG stream
        LineEndingCorrupted: Signature damaged by a text-mode transfer
    """
    result = check_signature(header, strict=strict)
    if result.status is SignatureStatus.VALID:
        return
    if result.status is SignatureStatus.TRUNCATED:
        raise Truncated("signature", expected=SIGNATURE_LENGTH, actual=len(header))
    if result.status is SignatureStatus.NOT_A_PNG:
        raise NotAPNG(bytes(header))
    raise LineEndingCorrupted(result.direction)
