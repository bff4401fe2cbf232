from dataclasses import dataclass


@dataclass(frozen=True)
class StripPolicy:
    """
    Per-file processing options, built once at startup and passed explicitly.

    Fields:
        verify_checksums: Re-verify every retained chunk before output is produced
        validate_signature: Reject files whose 8-byte signature is not a clean PNG magic
        strict_signature: Reject the signature when either the 0x89 marker or the
            "PNG" name is wrong; off by default, so only a signature with both
            wrong is rejected (only consulted when validate_signature is set)
    """

    verify_checksums: bool = False
    validate_signature: bool = True
    strict_signature: bool = False
