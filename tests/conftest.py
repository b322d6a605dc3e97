"""Pytest configuration and shared fixtures for filebatch tests.

This module provides an auto-use fixture that keeps FILEBATCH_* environment
variables from leaking into tests, plus a few ready-made directory trees.
"""

import os

import pytest


ENV_VARS = [
    'FILEBATCH_WORKERS',
    'FILEBATCH_PATTERN',
    'FILEBATCH_CHUNK_SIZE',
    'FILEBATCH_QUEUE_SIZE',
    'FILEBATCH_RECURSIVE',
    'FILEBATCH_ABANDON_ON_CANCEL',
    'FILEBATCH_LOG_LEVEL',
]


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Auto-use fixture that removes filebatch configuration from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def write_lines(path, count: int, text: str = 'line') -> str:
    """Write count newline-terminated lines to path."""
    with open(path, 'w') as f:
        for i in range(count):
            f.write(f'{text} {i}\n')
    return str(path)


@pytest.fixture
def example_tree(tmp_path):
    """Directory with a.log (10 lines), b.log (unreadable) and c.log (empty).

    b.log is a dangling symlink so opening it fails even when tests run as root.

    Returns:
        dict mapping base names to absolute paths, plus 'root'
    """
    a = write_lines(tmp_path / 'a.log', 10)
    b = tmp_path / 'b.log'
    os.symlink(tmp_path / 'missing-target', b)
    c = tmp_path / 'c.log'
    c.write_bytes(b'')
    return {'root': str(tmp_path), 'a.log': a, 'b.log': str(b), 'c.log': str(c)}


@pytest.fixture
def many_files(tmp_path):
    """Nested tree of 40 .log files with 1..40 lines and a few non-matching files.

    Returns:
        (root, {path: line_count})
    """
    expected = {}
    for i in range(40):
        subdir = tmp_path / f'd{i % 4}'
        subdir.mkdir(exist_ok=True)
        path = write_lines(subdir / f'f{i:02d}.log', i + 1)
        expected[path] = i + 1
    (tmp_path / 'notes.txt').write_text('not a log\n')
    (tmp_path / 'd0' / 'data.bin').write_bytes(b'\x00\x01')
    return str(tmp_path), expected
