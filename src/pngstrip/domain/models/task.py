"""Unit of work for the batch pipeline and its lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..errors import InvalidTaskTransition


class TaskState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


_TRANSITIONS: dict[TaskState, frozenset[TaskState]] = {
    TaskState.PENDING: frozenset({TaskState.RUNNING}),
    TaskState.RUNNING: frozenset({TaskState.COMPLETED, TaskState.FAILED}),
    TaskState.COMPLETED: frozenset(),
    TaskState.FAILED: frozenset(),
}


@dataclass
class Task:
    """
    One input file bound to one output destination.

    Fields:
        task_id: Sequence number assigned at enumeration (0-based)
        input_path: PNG file to read
        output_path: Destination for the stripped image
        state: Lifecycle state (pending -> running -> completed | failed)
        error: Failure message when state is FAILED
        written_path: Path actually written (may differ in extension when re-encoded)
        duration_seconds: Wall time spent running the task
    """

    task_id: int
    input_path: Path
    output_path: Path
    state: TaskState = TaskState.PENDING
    error: str | None = None
    written_path: Path | None = None
    duration_seconds: float | None = None

    def _move_to(self, state: TaskState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise InvalidTaskTransition(self.task_id, self.state, state)
        self.state = state

    def start(self) -> None:
        self._move_to(TaskState.RUNNING)

    def complete(self, written_path: Path | None = None) -> None:
        self._move_to(TaskState.COMPLETED)
        self.written_path = written_path

    def fail(self, error: str) -> None:
        self._move_to(TaskState.FAILED)
        self.error = error

    @property
    def is_terminal(self) -> bool:
        return self.state in (TaskState.COMPLETED, TaskState.FAILED)
