from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from ...domain.models.task import Task, TaskState


class BatchOptions(BaseModel):
    """Worker-pool options for the batch pipeline."""

    model_config = ConfigDict(frozen=True)

    workers: int = Field(default=16, ge=1)
    queue_capacity: int = Field(default=64, ge=1)


class ChunkSummary(BaseModel):
    """One row of the chunk listing produced by inspect_image."""

    index: int
    offset: int
    type: str
    length: int
    crc: int
    crc_ok: bool
    critical: bool


@dataclass
class BatchReport:
    """
    Outcome of one pipeline run.

    Fields:
        tasks: Every enumerated task, ordered by task_id
        enumeration_seconds: Time from start until the source was exhausted
        execution_seconds: Time from the end of enumeration until all workers
            finished (workers already run during enumeration, so this is the drain)
        total_seconds: Wall time of the whole run
    """

    tasks: list[Task] = field(default_factory=list)
    enumeration_seconds: float = 0.0
    execution_seconds: float = 0.0
    total_seconds: float = 0.0

    @property
    def enumerated(self) -> int:
        return len(self.tasks)

    @property
    def completed(self) -> int:
        return sum(1 for t in self.tasks if t.state is TaskState.COMPLETED)

    @property
    def failed(self) -> int:
        return sum(1 for t in self.tasks if t.state is TaskState.FAILED)

    @property
    def failures(self) -> list[Task]:
        return [t for t in self.tasks if t.state is TaskState.FAILED]


class InspectReport(BaseModel):
    """Chunk-by-chunk listing of one file, tolerant of damage."""

    path: str
    signature_status: str
    line_ending_direction: str | None = None
    chunks: list[ChunkSummary] = []
    complete: bool = False
    error: str | None = None
    trailing_bytes: int = 0
