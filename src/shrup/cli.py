"""Command line interface for the shell script preprocessor.

Usage:
    shrup [--debug] [--max-depth N] [--verbose] INPUT OUTPUT
"""

import logging
import sys
from pathlib import Path

import click

from shrup import __version__
from shrup.errors import PreprocessorError
from shrup.preprocessor import PreprocessorBuilder
from shrup.processing_context import DEFAULT_MAX_INCLUDE_DEPTH

logger = logging.getLogger(__name__)


def report_error(error: PreprocessorError) -> None:
    """Print an error, its cause chain and the include stack to stderr."""
    click.echo(f"Error: {error}", err=True)

    cause = error.__cause__
    while cause is not None:
        click.echo(f"  Caused by: {cause}", err=True)
        cause = cause.__cause__

    # Innermost file first
    for path in reversed(error.include_stack or ()):
        click.echo(f"  Included from: {path}", err=True)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="shrup")
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_path", metavar="OUTPUT", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-d", "--debug", is_flag=True, help="Add include marker comments to the output")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_INCLUDE_DEPTH,
    show_default=True,
    help="Maximum include depth",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(input_path: Path, output_path: Path, debug: bool, max_depth: int, verbose: bool) -> None:
    """A shell script preprocessor: inline #include directives from INPUT into OUTPUT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    base_directory = input_path.parent
    preprocessor = (
        PreprocessorBuilder()
        .debug_mode(debug)
        .max_include_depth(max_depth)
        .base_directory(base_directory)
        .build()
    )

    try:
        preprocessor.process_file(input_path, output_path)
    except PreprocessorError as e:
        report_error(e)
        sys.exit(1)

    if debug:
        click.echo(f"Successfully processed {input_path} -> {output_path}", err=True)
