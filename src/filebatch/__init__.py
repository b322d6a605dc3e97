"""filebatch - bounded-concurrency batch processing of large file sets"""

from filebatch.__version__ import __version__
from filebatch.config import BatchConfig
from filebatch.errors import (
    BatchError,
    ConfigError,
    RootAccessError,
    RootNotDirectoryError,
    RootNotFoundError,
    SystemicError,
)
from filebatch.models import BatchReport, FailureKind, FileTask, WorkResult
from filebatch.processor import BatchProcessor


__all__ = [
    '__version__',
    'BatchConfig',
    'BatchError',
    'BatchProcessor',
    'BatchReport',
    'ConfigError',
    'FailureKind',
    'FileTask',
    'RootAccessError',
    'RootNotDirectoryError',
    'RootNotFoundError',
    'SystemicError',
    'WorkResult',
]
