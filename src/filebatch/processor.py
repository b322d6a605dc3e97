"""Bounded-concurrency batch processing of a directory of files.

Files are discovered up front, fed into one shared WorkQueue and consumed by
a fixed pool of worker threads. Each worker streams one file at a time and
pushes exactly one WorkResult into a result sink that is drained by the
calling thread, so all output happens on a single thread.
"""

import logging
import os
import queue
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from time import time

from filebatch import prometheus as prom
from filebatch.config import BatchConfig
from filebatch.errors import SystemicError
from filebatch.models import BatchReport, FailureKind, FileTask, WorkResult
from filebatch.scanner import discover_files
from filebatch.streaming import process_file
from filebatch.work_queue import WorkQueue


logger = logging.getLogger(__name__)

# Signature of the per-file step: (task, chunk_size, cancel_event, abandon_on_cancel, worker_id)
FileProcessor = Callable[[FileTask, int, threading.Event, bool, int], WorkResult]

_WORKER_DONE = None


class BatchProcessor:
    """Processes every matching file under a root with a fixed worker pool.

    A processor can run several batches, but cancel() is permanent: once
    cancelled, later batches stop before processing anything.
    """

    def __init__(self, config: BatchConfig | None = None, file_processor: FileProcessor = process_file):
        """Initialize the processor.

        Args:
            config: Batch settings, defaults to BatchConfig.from_env()
            file_processor: Per-file step, must return one WorkResult per task
        """
        self.config = config or BatchConfig.from_env()
        self.file_processor = file_processor
        self._cancel_event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        """Ask workers to stop pulling new work.

        Reads already in progress finish, unless abandon_on_cancel is set.
        """
        if not self._cancel_event.is_set():
            logger.info('[BATCH] Cancellation requested')
        self._cancel_event.set()

    def discover(self, root: str) -> list[FileTask]:
        """Enumerate the files of a batch.

        Raises:
            SystemicError: If root is missing, not a directory or not listable
        """
        try:
            tasks = discover_files(root, self.config.pattern, self.config.recursive)
        except SystemicError as e:
            logger.error(f'[BATCH] Aborting before start: {e}')
            raise
        prom.files_discovered_total.inc(len(tasks))
        return tasks

    def iter_results(self, root: str) -> Iterator[WorkResult]:
        """Process root and yield WorkResults as they complete.

        Discovery happens immediately, so systemic errors are raised by this
        call rather than on first iteration. Result order is not guaranteed.

        Raises:
            SystemicError: If root cannot be processed at all
        """
        tasks = self.discover(root)
        return self._execute(tasks)

    def run(self, root: str, on_result: Callable[[WorkResult], None] | None = None) -> BatchReport:
        """Process root and return the aggregated report.

        Args:
            root: Directory to process
            on_result: Called on the calling thread for each result as it arrives

        Returns:
            BatchReport with one result per processed file

        Raises:
            SystemicError: If root cannot be processed at all
        """
        start_time = time()
        tasks = self.discover(root)
        # Same resolution as validate_root, so root and result paths agree
        root = os.path.abspath(root)

        results: list[WorkResult] = []
        pending = self._execute(tasks)
        while True:
            try:
                for result in pending:
                    results.append(result)
                    if on_result is not None:
                        on_result(result)
                break
            except KeyboardInterrupt:
                # Keep draining: in-flight files still report, nothing new starts
                logger.warning('[BATCH] Interrupted, collecting in-flight results')
                self.cancel()

        report = BatchReport(
            root=root,
            pattern=self.config.pattern,
            workers=self.config.workers,
            discovered=len(tasks),
            results=results,
            cancelled=self.cancelled,
            total_time=time() - start_time,
        )
        prom.batch_duration_seconds.observe(report.total_time)
        logger.info(
            f'[BATCH] Completed: {report.succeeded} succeeded, {report.failed} failed, '
            f'{report.not_processed} not processed in {report.total_time:.2f}s'
        )
        return report

    def _execute(self, tasks: list[FileTask]) -> Iterator[WorkResult]:
        n_workers = self.config.workers
        work_queue = WorkQueue(maxsize=self.config.queue_size)
        sink = self._new_sink()

        logger.debug(
            f'[BATCH] Processing {len(tasks)} files with {n_workers} workers '
            f'(chunk_size={self.config.chunk_size}, queue_size={self.config.queue_size})'
        )

        feeder = threading.Thread(
            target=self._feed,
            args=(tasks, work_queue, n_workers),
            name='filebatch-feeder',
            daemon=True,
        )
        feeder.start()

        try:
            with ThreadPoolExecutor(max_workers=n_workers, thread_name_prefix='filebatch-worker') as executor:
                futures = [
                    executor.submit(self._worker_loop, worker_id, work_queue, sink) for worker_id in range(n_workers)
                ]

                running = n_workers
                try:
                    while running:
                        try:
                            item = sink.get()
                        except KeyboardInterrupt:
                            logger.warning('[BATCH] Interrupted, waiting for in-flight files')
                            self.cancel()
                            continue
                        if item is _WORKER_DONE:
                            running -= 1
                            continue
                        prom.record_result(item)
                        yield item
                except BaseException:
                    # Consumer stopped early or raised: wind the pool down before joining it
                    self.cancel()
                    raise

                for future in futures:
                    future.result()
        finally:
            feeder.join()

    def _new_sink(self) -> queue.Queue:
        """Thread-safe collector the workers push results into."""
        return queue.Queue()

    def _feed(self, tasks: list[FileTask], work_queue: WorkQueue, n_workers: int) -> None:
        enqueued = 0
        try:
            for task in tasks:
                if not work_queue.put(task, self._cancel_event):
                    break
                enqueued += 1
        finally:
            work_queue.close(n_workers, self._cancel_event)
            logger.debug(f'[BATCH] Feeder enqueued {enqueued}/{len(tasks)} files')

    def _worker_loop(self, worker_id: int, work_queue: WorkQueue, sink: queue.Queue) -> None:
        prom.active_workers.inc()
        processed = 0
        try:
            while not self._cancel_event.is_set():
                task = work_queue.get()
                if task is None:
                    break
                sink.put(self._process_one(task, worker_id))
                processed += 1
        finally:
            prom.active_workers.dec()
            logger.debug(f'[WORKER {worker_id}] Exiting after {processed} files')
            sink.put(_WORKER_DONE)

    def _process_one(self, task: FileTask, worker_id: int) -> WorkResult:
        try:
            return self.file_processor(
                task,
                self.config.chunk_size,
                self._cancel_event,
                self.config.abandon_on_cancel,
                worker_id,
            )
        except Exception as e:
            logger.exception(f'[WORKER {worker_id}] Unexpected failure processing {task.path}')
            return WorkResult.failed(
                task.path,
                FailureKind.UNEXPECTED,
                f'{type(e).__name__}: {e}',
                worker_id=worker_id,
            )
