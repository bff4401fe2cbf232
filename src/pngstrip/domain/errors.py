"""Domain errors for PNG decoding, stripping and re-encoding."""


class PngStripError(Exception):
    """Base class for every error raised while processing a PNG stream."""


class NotAPNG(PngStripError):
    """
    Raised when a stream does not start with the PNG magic bytes.

    Attributes:
        header: The leading bytes that were inspected
    """

    def __init__(self, header: bytes) -> None:
        self.header = header
        super().__init__(f"Not a PNG stream (header={header[:8]!r})")


class Truncated(PngStripError):
    """
    Raised when a stream ends before a fixed-size field or IEND was read.

    Attributes:
        context: What was being read when the stream ended
        expected: Number of bytes requested (optional)
        actual: Number of bytes actually available (optional)
    """

    def __init__(self, context: str, expected: int | None = None, actual: int | None = None) -> None:
        self.context = context
        self.expected = expected
        self.actual = actual
        msg = f"Stream truncated while reading {context}"
        if expected is not None and actual is not None:
            msg += f" (expected {expected} bytes, got {actual})"
        super().__init__(msg)


class LineEndingCorrupted(PngStripError):
    """
    Raised when the signature shows a text-mode line-ending conversion.

    Attributes:
        direction: LineEndingDirection that damaged the stream
    """

    def __init__(self, direction: object) -> None:
        self.direction = direction
        label = getattr(direction, "value", direction)
        super().__init__(f"PNG signature damaged by {label} line-ending conversion")


class ChunkIntegrityError(PngStripError):
    """
    Base class for chunk-level integrity violations.

    Attributes:
        chunk_type: Four-character chunk tag
    """

    def __init__(self, chunk_type: str, message: str) -> None:
        self.chunk_type = chunk_type
        super().__init__(message)


class MissingBytes(ChunkIntegrityError):
    """
    Raised when a chunk's declared length does not match its data.

    Attributes:
        declared: Length field value
        actual: Number of data bytes present
    """

    def __init__(self, chunk_type: str, declared: int, actual: int) -> None:
        self.declared = declared
        self.actual = actual
        super().__init__(
            chunk_type,
            f"Chunk {chunk_type} declares {declared} bytes but carries {actual}",
        )


class CRCMismatch(ChunkIntegrityError):
    """
    Raised when a chunk's stored CRC does not match CRC-32(type + data).

    Attributes:
        declared: CRC stored in the stream
        computed: CRC recomputed from type and data
    """

    def __init__(self, chunk_type: str, declared: int, computed: int) -> None:
        self.declared = declared
        self.computed = computed
        super().__init__(
            chunk_type,
            f"CRC mismatch in chunk {chunk_type}: stored 0x{declared:08X}, computed 0x{computed:08X}",
        )


class ChunkLengthOutOfRange(ChunkIntegrityError):
    """Raised when a length field exceeds the 2**31 - 1 limit of the format."""

    def __init__(self, chunk_type: str, length: int) -> None:
        self.length = length
        super().__init__(chunk_type, f"Chunk {chunk_type} length {length} exceeds 2**31 - 1")


class MalformedDocument(PngStripError):
    """
    Raised when a decoded document lacks a chunk the minimal output needs.

    Attributes:
        missing: Chunk type that was not found (IHDR or IEND)
    """

    def __init__(self, missing: str) -> None:
        self.missing = missing
        super().__init__(f"Document has no {missing} chunk")


class ChecksumVerificationFailed(PngStripError):
    """
    Raised when a retained chunk fails re-verification before output.

    Attributes:
        target: Output destination that was not written
    """

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"{target} failed checksum")


class EncoderError(PngStripError):
    """Base class for external encoder failures."""


class EncoderLaunchFailed(EncoderError):
    """
    Raised when the external encoder process cannot be started.

    Attributes:
        executable: Program that failed to launch
        reason: OS-level reason
    """

    def __init__(self, executable: str, reason: str) -> None:
        self.executable = executable
        self.reason = reason
        super().__init__(f"Could not launch encoder '{executable}': {reason}")


class EncoderExecutionFailed(EncoderError):
    """
    Raised when the external encoder exits with a nonzero status.

    Attributes:
        exit_code: Process exit status
        stderr: Captured standard error (may be empty)
    """

    def __init__(self, exit_code: int, stderr: str = "") -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        msg = f"Encoder exited with status {exit_code}"
        if stderr:
            msg += f": {stderr.strip()[:200]}"
        super().__init__(msg)


class InvalidTaskTransition(ValueError):
    """Raised when a task is moved to a state its lifecycle does not allow."""

    def __init__(self, task_id: int, current: object, requested: object) -> None:
        self.task_id = task_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Task {task_id} cannot move from {getattr(current, 'value', current)} "
            f"to {getattr(requested, 'value', requested)}"
        )
