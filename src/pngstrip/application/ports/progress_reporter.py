"""Port interface for reporting progress during batch processing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ...domain.models.task import Task


class ProgressContext(Protocol):
    """Context for batch progress. Called concurrently from worker threads."""

    def discovered(self, count: int) -> None:
        """Report the number of tasks enumerated so far."""
        ...

    def advance(self, task: Task) -> None:
        """Report that a task reached a terminal state."""
        ...

    def finish(self) -> None:
        """Mark batch as complete."""
        ...


class ProgressReporterPort(ABC):
    """Port for reporting progress during batch processing."""

    @abstractmethod
    def start_batch(
        self,
        description: str = "Processing images",
    ) -> ProgressContext:
        """
        Start progress reporting for a batch operation.

        The total is not known up front: enumeration and execution overlap,
        so the context is told about newly discovered tasks as they appear.

        Args:
            description: Description for progress bar

        Returns:
            ProgressContext for updating progress
        """
        pass
