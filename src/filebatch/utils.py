"""Utility functions for filebatch"""

import logging
import os

import psutil


DEFAULT_CHUNK_SIZE = 8 * 1024
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_int_env(key: str) -> int:
    """Get integer value from environment variable, return 0 if not set or invalid."""
    val = os.getenv(key)
    if val is None:
        return 0
    try:
        return int(val)
    except ValueError:
        return 0


def get_str_env(key: str, default: str) -> str:
    """
    Get string from environment variable, return default if not set.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        String value or default
    """
    return os.getenv(key, default)


def get_bool_env(key: str, default: bool) -> bool:
    """
    Get boolean from environment variable, return default if not set.

    Recognizes: true/false, yes/no, 1/0 (case-insensitive)

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Boolean value or default
    """
    val = os.getenv(key)
    if val is None:
        return default
    val_lower = val.lower()
    if val_lower in ('true', 'yes', '1'):
        return True
    elif val_lower in ('false', 'no', '0'):
        return False
    return default


def get_default_workers() -> int:
    """Number of logical CPU cores, never less than 1."""
    cores = psutil.cpu_count(logical=True) or os.cpu_count() or 1
    return max(1, cores)


def human_readable_size(size_bytes: int) -> str:
    """Convert bytes to human-readable format."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024:
            return f'{size_bytes:.2f} {unit}'
        size_bytes /= 1024
    return f'{size_bytes:.2f} PB'


def setup_logging(default_level: str = 'WARNING', verbose: bool = False) -> None:
    """Configure root logging from FILEBATCH_LOG_LEVEL.

    Args:
        default_level: Level used when FILEBATCH_LOG_LEVEL is not set
        verbose: Force DEBUG level regardless of the environment
    """
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level_name = get_str_env('FILEBATCH_LOG_LEVEL', default_level).upper()
        log_level = getattr(logging, log_level_name, logging.WARNING)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
