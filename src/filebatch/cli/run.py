"""CLI command for running a file batch."""

import json
import sys

import click
from prometheus_client import REGISTRY, write_to_textfile

from filebatch.config import BatchConfig
from filebatch.errors import ConfigError, SystemicError
from filebatch.processor import BatchProcessor
from filebatch.report import format_report, format_result_line
from filebatch.utils import setup_logging


EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_SYSTEMIC = 2


@click.command('run')
@click.argument('root', type=click.Path())
@click.option('--pattern', '-p', default=None, help='Glob matched against file names (default: *)')
@click.option('--workers', '-w', type=int, default=None, help='Number of parallel workers (default: CPU count)')
@click.option('--chunk-size', type=int, default=None, help='Bytes per read (default: 8192)')
@click.option('--queue-size', type=int, default=None, help='Work queue capacity, 0 for unbounded (default: 0)')
@click.option('--recursive/--no-recursive', default=None, help='Descend into sub-directories (default: yes)')
@click.option(
    '--abandon-on-cancel/--finish-on-cancel',
    default=None,
    help='Stop in-flight reads on Ctrl-C instead of letting them finish',
)
@click.option('--json', 'json_output', is_flag=True, help='Output the batch report as JSON')
@click.option('--quiet', '-q', is_flag=True, help='Do not print a line per file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--metrics-file', type=click.Path(dir_okay=False), default=None, help='Write Prometheus metrics here')
def run_command(
    root: str,
    pattern: str | None,
    workers: int | None,
    chunk_size: int | None,
    queue_size: int | None,
    recursive: bool | None,
    abandon_on_cancel: bool | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    metrics_file: str | None,
):
    """Stream every file under ROOT matching a pattern with a fixed worker pool.

    Each file is read in fixed-size chunks, so memory stays bounded no matter
    how large the files are. A file that cannot be opened or read is reported
    as a failure and does not stop the batch.

    \b
    Examples:
        filebatch run /var/log -p "*.log"            # All .log files, CPU-count workers
        filebatch run /var/log -p "*.log" -w 2       # Two workers
        filebatch run /data --no-recursive --json    # Top-level files only, JSON report

    \b
    Exit codes:
        0  every file succeeded
        1  at least one file failed, or the batch was cancelled
        2  the batch could not start (bad root or configuration)

    \b
    Environment:
        FILEBATCH_WORKERS, FILEBATCH_PATTERN, FILEBATCH_CHUNK_SIZE,
        FILEBATCH_QUEUE_SIZE, FILEBATCH_RECURSIVE, FILEBATCH_ABANDON_ON_CANCEL,
        FILEBATCH_LOG_LEVEL
    """
    setup_logging(verbose=verbose)

    try:
        config = BatchConfig.from_env(
            workers=workers,
            pattern=pattern,
            chunk_size=chunk_size,
            queue_size=queue_size,
            recursive=recursive,
            abandon_on_cancel=abandon_on_cancel,
        )
    except ConfigError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(EXIT_SYSTEMIC)

    processor = BatchProcessor(config)

    def echo_result(result):
        click.echo(format_result_line(result), err=not result.success)

    on_result = None if (quiet or json_output) else echo_result

    try:
        report = processor.run(root, on_result=on_result)
    except SystemicError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(EXIT_SYSTEMIC)

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo(format_report(report))

    if metrics_file:
        write_to_textfile(metrics_file, REGISTRY)

    if report.failed or report.cancelled:
        sys.exit(EXIT_FAILURES)
