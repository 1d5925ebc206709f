"""
loxp - Lox Parser Command-Line Interface
========================================

Parses a Lox source file and prints the resulting syntax tree. Syntax
errors are reported on stderr; statements that parsed cleanly are still
printed, so a single run shows every problem in the file.

Usage Examples
--------------
Print the syntax tree:
    $ loxp script.lox

One s-expression per statement:
    $ loxp --sexpr script.lox

Read from stdin:
    $ echo "print 1 + 2" | loxp -

Debug logging (errors and recovery points):
    $ loxp -v script.lox
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from loxparse import __version__
from loxparse.ast import ASTPrinter
from loxparse.cli.errors import ExitCode, handle_cli_exception
from loxparse.config import ParserOptions
from loxparse.parser import parse_source

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
@click.option(
    "--sexpr",
    is_flag=True,
    help="Print one s-expression per statement instead of the indented tree",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=0),
    default=None,
    help="Stop after this many errors (0 = no limit, default: 100)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging of errors and recovery)",
)
@click.version_option(version=__version__, prog_name="loxp")
def main(
    input_file: str,
    sexpr: bool,
    max_errors: Optional[int],
    verbose: bool,
) -> None:
    """
    Parse a Lox program and print its syntax tree.

    INPUT_FILE is the Lox source file, or - to read standard input.

    Statements end at ';', at end of line, at end of input, or at the
    closing '}' of a block.

    \b
    Examples:
        loxp script.lox              # Indented syntax tree
        loxp --sexpr script.lox      # (print (+ 1 2)) style output
        loxp --max-errors 5 bad.lox  # Give up after five errors

    \b
    Exit status:
        0  parsed without errors
        1  syntax errors were reported
        2  invalid arguments or unreadable input
        3  internal error
    """
    setup_logging(verbose)

    options = ParserOptions.from_env()
    options.filename = "<stdin>" if input_file == "-" else input_file
    if max_errors is not None:
        options.max_errors = max_errors

    try:
        if input_file == "-":
            source = click.get_text_stream("stdin").read()
        else:
            source = Path(input_file).read_text(encoding="utf-8")
        logger.debug(f"Read {len(source)} characters from {options.filename}")

        result = parse_source(source, options)

        printer = ASTPrinter()
        if sexpr:
            for line in printer.sexpr_lines(result.statements):
                click.echo(line)
        else:
            click.echo(printer.print(result.statements))

        if result.has_errors():
            click.echo(result.errors.report(), err=True)
            sys.exit(ExitCode.SYNTAX_ERROR)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
