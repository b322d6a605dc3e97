"""Data models for file tasks, per-file outcomes and batch reports"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class FileTask:
    """A discovered file waiting to be processed"""

    path: str
    size_bytes: int  # Size at discovery time, the file may change before it is read


class FailureKind(str, Enum):
    """Why processing a single file failed"""

    NOT_FOUND = 'not_found'
    PERMISSION_DENIED = 'permission_denied'
    IS_A_DIRECTORY = 'is_a_directory'
    NOT_REGULAR_FILE = 'not_regular_file'  # FIFO, socket or device
    READ_ERROR = 'read_error'
    CANCELLED = 'cancelled'
    UNEXPECTED = 'unexpected'


class WorkResult(BaseModel):
    """Outcome of processing one FileTask

    Use WorkResult.ok() and WorkResult.failed() rather than the constructor:
    a success never carries an error and a failure always carries a kind.

    Attributes:
        path: Absolute path of the processed file
        success: True if the file was streamed to the end
        error_kind: Failure classification (failures only)
        error: Human-readable failure reason (failures only)
        line_count: Number of lines in the file (successes only)
        bytes_read: Bytes read before completion or failure
        elapsed_seconds: Wall time spent on this file
        worker_id: Worker that processed the file
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., example='/var/log/app.log', description='Absolute file path')
    success: bool = Field(..., example=True)
    error_kind: FailureKind | None = Field(None, example=None, description='Failure classification')
    error: str | None = Field(None, example=None, description='Failure reason')
    line_count: int | None = Field(None, example=10, description='Lines in file (successes only)')
    bytes_read: int = Field(0, example=1024, description='Bytes read from the file')
    elapsed_seconds: float = Field(0.0, example=0.002)
    worker_id: int = Field(0, example=0, description='Worker that processed the file')

    @classmethod
    def ok(
        cls,
        path: str,
        line_count: int,
        bytes_read: int,
        elapsed_seconds: float = 0.0,
        worker_id: int = 0,
    ) -> 'WorkResult':
        return cls(
            path=path,
            success=True,
            line_count=line_count,
            bytes_read=bytes_read,
            elapsed_seconds=elapsed_seconds,
            worker_id=worker_id,
        )

    @classmethod
    def failed(
        cls,
        path: str,
        kind: FailureKind,
        error: str,
        bytes_read: int = 0,
        elapsed_seconds: float = 0.0,
        worker_id: int = 0,
    ) -> 'WorkResult':
        return cls(
            path=path,
            success=False,
            error_kind=kind,
            error=error,
            bytes_read=bytes_read,
            elapsed_seconds=elapsed_seconds,
            worker_id=worker_id,
        )


class BatchReport(BaseModel):
    """Aggregated outcome of a batch run

    Attributes:
        root: Root directory that was processed
        pattern: File-name filter used during discovery
        workers: Size of the worker pool
        discovered: Number of files found during discovery
        results: One WorkResult per processed file, in completion order
        cancelled: True if the batch was cancelled before draining the queue
        total_time: Wall time for the whole batch in seconds
    """

    root: str = Field(..., example='/var/log')
    pattern: str = Field('*', example='*.log')
    workers: int = Field(..., example=8)
    discovered: int = Field(0, example=3)
    results: list[WorkResult] = Field(default_factory=list)
    cancelled: bool = Field(False)
    total_time: float = Field(0.0, example=0.123)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.processed - self.succeeded

    @property
    def not_processed(self) -> int:
        """Discovered files that never produced a result (cancelled batches only)."""
        return self.discovered - self.processed

    @property
    def failures(self) -> list[WorkResult]:
        return [r for r in self.sorted_results() if not r.success]

    @property
    def total_lines(self) -> int:
        return sum(r.line_count or 0 for r in self.results)

    @property
    def total_bytes(self) -> int:
        return sum(r.bytes_read for r in self.results)

    def sorted_results(self) -> list[WorkResult]:
        """Results ordered by path, for callers that need determinism."""
        return sorted(self.results, key=lambda r: r.path)

    def failure_counts(self) -> dict[str, int]:
        """Number of failures per FailureKind value."""
        return dict(Counter(r.error_kind.value for r in self.results if not r.success))

    def to_dict(self) -> dict:
        """JSON-ready representation including the derived counters."""
        data = self.model_dump(mode='json')
        data['results'] = [r.model_dump(mode='json') for r in self.sorted_results()]
        data['summary'] = {
            'processed': self.processed,
            'succeeded': self.succeeded,
            'failed': self.failed,
            'not_processed': self.not_processed,
            'total_lines': self.total_lines,
            'total_bytes': self.total_bytes,
            'failure_counts': self.failure_counts(),
        }
        return data
