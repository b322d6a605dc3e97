"""Tests for BatchConfig defaults, environment variables and validation."""

import pytest

from filebatch.config import BatchConfig
from filebatch.errors import ConfigError
from filebatch.utils import DEFAULT_CHUNK_SIZE, get_bool_env, get_default_workers, get_int_env


class TestEnvHelpers:
    """Tests for environment variable helpers."""

    def test_get_int_env_unset_or_invalid(self, monkeypatch):
        monkeypatch.delenv('FILEBATCH_TEST_INT', raising=False)
        assert get_int_env('FILEBATCH_TEST_INT') == 0
        monkeypatch.setenv('FILEBATCH_TEST_INT', 'abc')
        assert get_int_env('FILEBATCH_TEST_INT') == 0
        monkeypatch.setenv('FILEBATCH_TEST_INT', '12')
        assert get_int_env('FILEBATCH_TEST_INT') == 12

    @pytest.mark.parametrize('raw,expected', [('yes', True), ('0', False), ('FALSE', False), ('maybe', True)])
    def test_get_bool_env(self, monkeypatch, raw, expected):
        monkeypatch.setenv('FILEBATCH_TEST_BOOL', raw)
        assert get_bool_env('FILEBATCH_TEST_BOOL', True) is expected

    def test_default_workers_positive(self):
        assert get_default_workers() >= 1


class TestBatchConfig:
    """Tests for BatchConfig."""

    def test_defaults(self):
        config = BatchConfig()
        assert config.workers == get_default_workers()
        assert config.pattern == '*'
        assert config.chunk_size == DEFAULT_CHUNK_SIZE == 8192
        assert config.queue_size == 0
        assert config.recursive is True
        assert config.abandon_on_cancel is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('FILEBATCH_WORKERS', '3')
        monkeypatch.setenv('FILEBATCH_PATTERN', '*.log')
        monkeypatch.setenv('FILEBATCH_CHUNK_SIZE', '1024')
        monkeypatch.setenv('FILEBATCH_QUEUE_SIZE', '16')
        monkeypatch.setenv('FILEBATCH_RECURSIVE', 'no')
        monkeypatch.setenv('FILEBATCH_ABANDON_ON_CANCEL', 'yes')

        config = BatchConfig.from_env()
        assert config.workers == 3
        assert config.pattern == '*.log'
        assert config.chunk_size == 1024
        assert config.queue_size == 16
        assert config.recursive is False
        assert config.abandon_on_cancel is True

    def test_overrides_win_over_env(self, monkeypatch):
        monkeypatch.setenv('FILEBATCH_WORKERS', '3')
        config = BatchConfig.from_env(workers=5, pattern=None)
        assert config.workers == 5
        assert config.pattern == '*'

    def test_invalid_workers(self):
        with pytest.raises(ConfigError) as exc_info:
            BatchConfig.from_env(workers=0)
        assert exc_info.value.field == 'workers'
        assert exc_info.value.value == 0
        assert isinstance(exc_info.value, ValueError)

    def test_invalid_chunk_size_chains_validation_error(self):
        with pytest.raises(ConfigError) as exc_info:
            BatchConfig.create(chunk_size=-1)
        assert exc_info.value.field == 'chunk_size'
        assert exc_info.value.__cause__ is not None
