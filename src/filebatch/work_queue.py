"""Shared work queue feeding the worker pool"""

import queue
import threading

from filebatch.models import FileTask


# How often a producer blocked on a full queue re-checks for cancellation
PUT_POLL_INTERVAL = 0.1

_END_OF_WORK = None


class WorkQueue:
    """Multi-producer/multi-consumer queue of FileTask.

    Consumers stop when they dequeue an end-of-work marker. close() enqueues
    one marker per consumer, so each consumer sees exactly one and every task
    put before close() is dequeued before any marker.
    """

    def __init__(self, maxsize: int = 0):
        self._queue: queue.Queue[FileTask | None] = queue.Queue(maxsize=maxsize)

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def qsize(self) -> int:
        return self._queue.qsize()

    def put(self, task: FileTask, cancel_event: threading.Event | None = None) -> bool:
        """Enqueue a task, blocking while the queue is full.

        Returns:
            True if enqueued, False if cancel_event was set first
        """
        while True:
            if cancel_event is not None and cancel_event.is_set():
                return False
            try:
                self._queue.put(task, timeout=PUT_POLL_INTERVAL)
                return True
            except queue.Full:
                continue

    def close(self, n_consumers: int, cancel_event: threading.Event | None = None) -> None:
        """Signal end of work to n_consumers consumers.

        After cancellation a full queue is left as is: no consumer can be
        blocked waiting on it, and consumers check the event before every get.
        """
        for _ in range(n_consumers):
            while True:
                try:
                    self._queue.put(_END_OF_WORK, timeout=PUT_POLL_INTERVAL)
                    break
                except queue.Full:
                    if cancel_event is not None and cancel_event.is_set():
                        return

    def get(self) -> FileTask | None:
        """Dequeue the next task, or None once the queue has been closed."""
        return self._queue.get()
