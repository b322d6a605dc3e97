"""Incremental per-file processing.

Files are read in fixed-size chunks so that the memory needed for one file
is bounded by the chunk size, no matter how large the file is.
"""

import logging
import os
import stat
import threading
from collections.abc import Iterable, Iterator
from time import time
from typing import BinaryIO

from filebatch.models import FailureKind, FileTask, WorkResult
from filebatch.utils import DEFAULT_CHUNK_SIZE


logger = logging.getLogger(__name__)


class ReadCancelled(Exception):
    """Raised inside process_file when an in-flight read is abandoned."""


def iter_chunks(fileobj: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield successive reads of at most chunk_size bytes until EOF."""
    while True:
        chunk = fileobj.read(chunk_size)
        if not chunk:
            return
        yield chunk


def count_lines(chunks: Iterable[bytes]) -> tuple[int, int]:
    """Count lines and bytes over a stream of chunks.

    A trailing line without a newline still counts as a line.

    Returns:
        (line_count, byte_count)
    """
    lines = 0
    total = 0
    last = b''
    for chunk in chunks:
        lines += chunk.count(b'\n')
        total += len(chunk)
        last = chunk
    if last and not last.endswith(b'\n'):
        lines += 1
    return lines, total


def classify_os_error(e: OSError) -> FailureKind:
    """Map an OSError raised while opening or reading a file to a FailureKind."""
    if isinstance(e, FileNotFoundError):
        return FailureKind.NOT_FOUND
    if isinstance(e, PermissionError):
        return FailureKind.PERMISSION_DENIED
    if isinstance(e, IsADirectoryError):
        return FailureKind.IS_A_DIRECTORY
    return FailureKind.READ_ERROR


def _watch_cancel(chunks: Iterator[bytes], cancel_event: threading.Event) -> Iterator[bytes]:
    for chunk in chunks:
        if cancel_event.is_set():
            raise ReadCancelled()
        yield chunk


def process_file(
    task: FileTask,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel_event: threading.Event | None = None,
    abandon_on_cancel: bool = False,
    worker_id: int = 0,
) -> WorkResult:
    """Stream one file and return its WorkResult.

    Only regular files are opened; anything else fails without being read.
    Open and read errors never propagate: they are returned as failure
    results. With abandon_on_cancel, a set cancel_event stops the read
    between two chunks and yields a CANCELLED failure.

    Args:
        task: File to process
        chunk_size: Maximum bytes per read
        cancel_event: Batch cancellation signal
        abandon_on_cancel: Stop in-flight reads when cancel_event is set
        worker_id: Recorded in the result

    Returns:
        Exactly one WorkResult for the task
    """
    start = time()
    read_so_far = 0

    def counted(chunks: Iterator[bytes]) -> Iterator[bytes]:
        nonlocal read_so_far
        for chunk in chunks:
            read_so_far += len(chunk)
            yield chunk

    try:
        # FIFOs and device files can block on open, so only regular files are read
        mode = os.stat(task.path).st_mode
        if stat.S_ISDIR(mode):
            kind, reason = FailureKind.IS_A_DIRECTORY, 'is a directory'
        elif not stat.S_ISREG(mode):
            kind, reason = FailureKind.NOT_REGULAR_FILE, 'not a regular file'
        else:
            kind = None
        if kind is not None:
            logger.debug(f'[WORKER {worker_id}] {kind.value}: {task.path}')
            return WorkResult.failed(task.path, kind, reason, elapsed_seconds=time() - start, worker_id=worker_id)

        with open(task.path, 'rb') as f:
            chunks = counted(iter_chunks(f, chunk_size))
            if abandon_on_cancel and cancel_event is not None:
                chunks = _watch_cancel(chunks, cancel_event)
            line_count, bytes_read = count_lines(chunks)
    except ReadCancelled:
        logger.debug(f'[WORKER {worker_id}] Abandoned {task.path} after {read_so_far} bytes')
        return WorkResult.failed(
            task.path,
            FailureKind.CANCELLED,
            'read abandoned after cancellation',
            bytes_read=read_so_far,
            elapsed_seconds=time() - start,
            worker_id=worker_id,
        )
    except OSError as e:
        kind = classify_os_error(e)
        logger.debug(f'[WORKER {worker_id}] {kind.value}: {task.path}: {e}')
        return WorkResult.failed(
            task.path,
            kind,
            e.strerror or str(e),
            bytes_read=read_so_far,
            elapsed_seconds=time() - start,
            worker_id=worker_id,
        )

    return WorkResult.ok(
        task.path,
        line_count=line_count,
        bytes_read=bytes_read,
        elapsed_seconds=time() - start,
        worker_id=worker_id,
    )
