"""Rich-based progress reporter adapter for batch processing."""

from __future__ import annotations

import logging
import sys
import threading
import time
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from ...application.ports.progress_reporter import ProgressContext, ProgressReporterPort
from ...domain.models.task import TaskState

if TYPE_CHECKING:
    from ...application.dto.batch import BatchReport
    from ...domain.models.task import Task

logger = logging.getLogger(__name__)


class RichProgressContext:
    """Context for batch-level progress using Rich."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        """
        Initialize batch progress context.

        Args:
            progress: Rich Progress instance (internally locked, safe across workers)
            task_id: Task ID for batch progress
        """
        self.progress = progress
        self.task_id = task_id

    def discovered(self, count: int) -> None:
        self.progress.update(self.task_id, total=count)

    def advance(self, task: Task) -> None:
        self.progress.advance(self.task_id)

    def finish(self) -> None:
        """Mark batch as complete."""
        self.progress.stop_task(self.task_id)


class LoggingProgressContext:
    """Fallback progress context for non-interactive mode using logging."""

    def __init__(self, description: str, log_every: int = 100) -> None:
        """
        Initialize logging-based progress context.

        Args:
            description: Description for progress
            log_every: Emit a progress line after this many finished tasks
        """
        self.description = description
        self.log_every = log_every
        self.discovered_count = 0
        self.completed = 0
        self.failed = 0
        self.start_time = time.time()
        self._lock = threading.Lock()
        logger.info(f"Starting: {description}")

    def discovered(self, count: int) -> None:
        with self._lock:
            self.discovered_count = count

    def advance(self, task: Task) -> None:
        with self._lock:
            if task.state is TaskState.FAILED:
                self.failed += 1
            else:
                self.completed += 1
            done = self.completed + self.failed
            total = self.discovered_count
        if done % self.log_every == 0:
            elapsed = time.time() - self.start_time
            logger.info(f"Progress: {done}/{total} images - Elapsed: {elapsed:.1f}s")

    def finish(self) -> None:
        """Mark batch as complete."""
        elapsed = time.time() - self.start_time
        logger.info(
            f"Completed: {self.description} - "
            f"{self.completed} ok, {self.failed} failed in {elapsed:.1f}s"
        )


class RichProgressReporterAdapter(ProgressReporterPort):
    """Rich-based progress reporter adapter."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize Rich progress reporter."""
        # Detect non-interactive mode (non-TTY)
        self.is_interactive = sys.stdout.isatty()
        self.console = console or Console(file=sys.stdout if self.is_interactive else sys.stderr)
        self.progress: Progress | None = None

        if not self.is_interactive:
            logger.info("Non-interactive mode detected - using structured logging for progress")

    def start_batch(self, description: str = "Processing images") -> ProgressContext:
        """
        Start progress reporting for a batch operation.

        Args:
            description: Description for progress bar

        Returns:
            ProgressContext for updating progress
        """
        if not self.is_interactive:
            return LoggingProgressContext(description=description)

        if self.progress is None:
            self.progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=self.console,
                expand=True,
            )
            self.progress.start()

        task_id = self.progress.add_task(description, total=None)
        return RichProgressContext(progress=self.progress, task_id=task_id)

    def display_summary(self, report: BatchReport, skipped: int = 0) -> None:
        """
        Display final summary after batch completion.

        Args:
            report: Finished batch report
            skipped: Directory entries the source could not read
        """
        self.cleanup()

        summary_table = Table(title="Batch Summary", show_header=True, header_style="bold")
        summary_table.add_column("Metric", style="cyan")
        summary_table.add_column("Value", style="green")

        summary_table.add_row("Images Found", str(report.enumerated))
        summary_table.add_row("Completed", str(report.completed))
        summary_table.add_row("Failed", str(report.failed))
        if skipped:
            summary_table.add_row("Unreadable Entries", str(skipped))
        summary_table.add_row("Enumeration", f"{report.enumeration_seconds:.2f}s")
        summary_table.add_row("Drain After Enumeration", f"{report.execution_seconds:.2f}s")
        summary_table.add_row("Total Duration", f"{report.total_seconds:.2f}s")

        self.console.print(summary_table)

        failures = report.failures
        if failures:
            error_text = "\n".join(f"{t.input_path}: {t.error}" for t in failures[:10])  # Limit to 10
            if len(failures) > 10:
                error_text += f"\n... and {len(failures) - 10} more failures"
            self.console.print(Panel(error_text, title="Failures", border_style="red"))

    def cleanup(self) -> None:
        """Stop the live progress display (safe to call more than once)."""
        if self.progress is not None:
            self.progress.stop()
            self.progress = None
