"""Exception hierarchy for filebatch.

Only batch-level problems are raised as exceptions. Failures isolated to a
single file are never raised; they are recorded in that file's WorkResult.
"""


class BatchError(Exception):
    """Base class for all filebatch errors."""


class SystemicError(BatchError):
    """A failure that prevents the batch from starting at all.

    Attributes:
        path: The root path the batch was asked to process
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class RootNotFoundError(SystemicError):
    """Root directory does not exist."""

    def __init__(self, path: str):
        super().__init__(f'Root path does not exist: {path}', path)


class RootNotDirectoryError(SystemicError):
    """Root path exists but is not a directory."""

    def __init__(self, path: str):
        super().__init__(f'Root path is not a directory: {path}', path)


class RootAccessError(SystemicError):
    """Root directory exists but cannot be listed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f'Cannot access root directory {path}: {reason}', path)
        self.reason = reason


class ConfigError(BatchError, ValueError):
    """Invalid batch configuration value.

    Attributes:
        field: Name of the offending configuration field
        value: The rejected value
    """

    def __init__(self, field: str, value, message: str):
        super().__init__(f'Invalid value for {field!r}: {value!r} ({message})')
        self.field = field
        self.value = value
