"""Batch configuration with environment variable support"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from filebatch.errors import ConfigError
from filebatch.utils import DEFAULT_CHUNK_SIZE, get_bool_env, get_default_workers, get_int_env, get_str_env


class BatchConfig(BaseModel):
    """Settings for a batch run

    Attributes:
        workers: Number of parallel workers pulling from the shared queue
        pattern: Glob matched against file base names
        chunk_size: Bytes requested per read, bounds per-file memory
        queue_size: Work queue capacity, 0 for unbounded
        recursive: Descend into sub-directories
        abandon_on_cancel: Stop in-flight reads when the batch is cancelled
    """

    model_config = ConfigDict(frozen=True)

    workers: int = Field(default_factory=get_default_workers, ge=1, example=8)
    pattern: str = Field('*', min_length=1, example='*.log')
    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, ge=1, example=8192)
    queue_size: int = Field(0, ge=0, example=0)
    recursive: bool = True
    abandon_on_cancel: bool = False

    @classmethod
    def from_env(cls, **overrides) -> 'BatchConfig':
        """Build a config from FILEBATCH_* environment variables.

        Keyword arguments that are not None take priority over the
        environment. Unset or zero integer variables fall back to defaults.

        Raises:
            ConfigError: If any resulting value is invalid
        """
        values = {}

        workers = get_int_env('FILEBATCH_WORKERS')
        if workers:
            values['workers'] = workers
        chunk_size = get_int_env('FILEBATCH_CHUNK_SIZE')
        if chunk_size:
            values['chunk_size'] = chunk_size
        queue_size = get_int_env('FILEBATCH_QUEUE_SIZE')
        if queue_size:
            values['queue_size'] = queue_size
        values['pattern'] = get_str_env('FILEBATCH_PATTERN', '*')
        values['recursive'] = get_bool_env('FILEBATCH_RECURSIVE', True)
        values['abandon_on_cancel'] = get_bool_env('FILEBATCH_ABANDON_ON_CANCEL', False)

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.create(**values)

    @classmethod
    def create(cls, **values) -> 'BatchConfig':
        """Validate values, raising ConfigError instead of pydantic's ValidationError."""
        try:
            return cls(**values)
        except ValidationError as e:
            first = e.errors()[0]
            field = str(first['loc'][0]) if first['loc'] else '<config>'
            raise ConfigError(field, values.get(field), first['msg']) from e
