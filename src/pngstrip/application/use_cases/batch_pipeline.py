"""Enumerate input files and drain them through a fixed pool of workers."""

from __future__ import annotations

import logging
import queue
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from ...domain.models.task import Task
from ...infrastructure.logging import get_correlation_id, set_correlation_id
from ..dto.batch import BatchOptions, BatchReport
from ..ports.image_source import ImageSourcePort
from ..ports.progress_reporter import ProgressContext, ProgressReporterPort

logger = logging.getLogger(__name__)

# Processors return the written path, or None when nothing is written
TaskProcessor = Callable[[Task], Path | None]

# Queue terminator; one is enqueued per worker once enumeration is done
_CLOSED = object()


class BatchPipeline:
    """
    Two-phase batch runner: enumeration feeds a bounded queue that a fixed
    number of workers drain.

    Enumeration runs on the calling thread and blocks whenever the queue is
    full, so memory stays bounded by ``queue_capacity`` regardless of how many
    files the source yields. Workers start before enumeration so both phases
    overlap; the queue is closed with one sentinel per worker once the source
    is exhausted.

    Each task runs in isolation: any exception raised by the processor marks
    that task FAILED and the worker moves on.
    """

    def __init__(
        self,
        source: ImageSourcePort,
        processor: TaskProcessor,
        output_dir: Path | str,
        options: BatchOptions | None = None,
        progress_reporter: ProgressReporterPort | None = None,
        description: str = "Stripping images",
    ) -> None:
        self.source = source
        self.processor = processor
        self.output_dir = Path(output_dir)
        self.options = options or BatchOptions()
        self.progress_reporter = progress_reporter
        self.description = description

    def output_path_for(self, input_path: Path) -> Path:
        """Mirror ``input_path`` relative to the source root under ``output_dir``."""
        try:
            relative = input_path.relative_to(self.source.root)
        except ValueError:
            relative = Path(input_path.name)
        return self.output_dir / relative

    def run(self) -> BatchReport:
        """
        Execute the whole batch and wait for every worker to finish.

        Returns:
            BatchReport with every task in a terminal state and phase timings

        Raises:
            FileNotFoundError / NotADirectoryError / OSError: If the source root
                cannot be enumerated. Tasks already queued are still drained
                before the error propagates.
        """
        run_id = get_correlation_id()
        workers = self.options.workers
        work: queue.Queue = queue.Queue(maxsize=self.options.queue_capacity)
        progress = self.progress_reporter.start_batch(self.description) if self.progress_reporter else None

        logger.info(
            f"Starting {workers} workers (queue capacity {self.options.queue_capacity})",
            extra={"correlation_id": run_id},
        )

        tasks: list[Task] = []
        start = time.perf_counter()
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pngstrip-worker") as pool:
            futures = [
                pool.submit(self._worker, worker_id, work, run_id, progress)
                for worker_id in range(workers)
            ]

            try:
                self._enumerate(work, tasks, progress)
            finally:
                enumerated_at = time.perf_counter()
                enumeration_seconds = enumerated_at - start
                logger.info(
                    f"Collected {len(tasks)} tasks, took {enumeration_seconds:.3f} seconds",
                    extra={"correlation_id": run_id},
                )
                for _ in range(workers):
                    work.put(_CLOSED)

            finished: list[Task] = []
            for future in futures:
                finished.extend(future.result())
        finished_at = time.perf_counter()
        execution_seconds = finished_at - enumerated_at
        total_seconds = finished_at - start

        if progress:
            progress.finish()

        report = BatchReport(
            tasks=sorted(finished, key=lambda t: t.task_id),
            enumeration_seconds=enumeration_seconds,
            execution_seconds=execution_seconds,
            total_seconds=total_seconds,
        )
        logger.info(
            f"Completed in {execution_seconds:.3f} seconds after enumeration ({total_seconds:.3f} total): "
            f"{report.completed} completed, {report.failed} failed",
            extra={"correlation_id": run_id},
        )
        return report

    def _enumerate(
        self,
        work: queue.Queue,
        tasks: list[Task],
        progress: ProgressContext | None,
    ) -> None:
        for input_path in self.source.iter_images():
            task = Task(
                task_id=len(tasks),
                input_path=input_path,
                output_path=self.output_path_for(input_path),
            )
            tasks.append(task)
            # Blocks while the queue is full
            work.put(task)
            if progress:
                progress.discovered(len(tasks))

    def _worker(
        self,
        worker_id: int,
        work: queue.Queue,
        run_id: str,
        progress: ProgressContext | None,
    ) -> list[Task]:
        logger.debug(f"Starting worker {worker_id}")
        done: list[Task] = []

        while True:
            task = work.get()
            if task is _CLOSED:
                break

            set_correlation_id(f"{run_id}/{task.task_id}")
            self._execute(task)
            done.append(task)
            if progress:
                self._report(progress, task)

        set_correlation_id(run_id)
        logger.debug(f"Worker {worker_id} completed ({len(done)} tasks)")
        return done

    def _execute(self, task: Task) -> None:
        task.start()
        started = time.perf_counter()
        try:
            written = self.processor(task)
        except Exception as e:
            task.duration_seconds = time.perf_counter() - started
            task.fail(str(e))
            logger.warning(
                f"{task.input_path}: {e}",
                extra={"input_path": str(task.input_path)},
            )
            logger.debug(f"Traceback for {task.input_path}", exc_info=True)
            return

        task.duration_seconds = time.perf_counter() - started
        task.complete(written)

    @staticmethod
    def _report(progress: ProgressContext, task: Task) -> None:
        # A failing progress display must not take a worker down with it
        try:
            progress.advance(task)
        except Exception as e:
            logger.debug(f"Progress update failed: {e}", exc_info=True)
