"""Main CLI entry point with command groups"""

import click

from filebatch.__version__ import __version__
from filebatch.cli.run import run_command


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name='filebatch')
@click.pass_context
def cli(ctx):
    """
    filebatch - Process large sets of files with a bounded worker pool.

    \b
    Commands:
      filebatch run <root>      Stream every matching file and report per-file outcomes

    \b
    Examples:
      filebatch run /var/log -p "*.log"
      filebatch run /var/log -p "*.log" --workers 4 --json
      filebatch run /data --no-recursive --chunk-size 65536

    \b
    For more help on each command:
      filebatch run --help
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


cli.add_command(run_command, name='run')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
