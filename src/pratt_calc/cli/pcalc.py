"""
pcalc - Expression Calculator Command-Line Interface
=====================================================

This module implements the command-line interface for the calculator.
It evaluates one arithmetic expression given on the command line, in a
file, or on standard input.

Usage Examples
--------------
Evaluate an expression:
    $ pcalc "2 + 3 * 4"
    14

Show the tokens and the parsed tree:
    $ pcalc --tokens --tree "4 * 5!"

Read from a file or stdin:
    $ pcalc -f expr.txt
    $ echo "0xFF & 0b1010" | pcalc -f -

Use 16-bit integers for bitwise operators:
    $ pcalc --bits 16 "1 << 15"
    -32768

Exit Codes
----------
0 - Success
1 - Lexical, syntax or evaluation error
2 - Invalid arguments
3 - Internal error
"""

import dataclasses
import logging
import math
import sys
from typing import Optional, TextIO

import click

from pratt_calc import __version__
from pratt_calc.ast import dump_tree
from pratt_calc.cli.errors import ExitCode, handle_cli_exception
from pratt_calc.config import MAX_INT_BITS, MIN_INT_BITS, CalcConfig
from pratt_calc.evaluator import evaluate
from pratt_calc.parser import parse_expression
from pratt_calc.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


def format_number(value: float) -> str:
    """Format a result, printing integral values without a trailing '.0'."""
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("expression", required=False)
@click.option(
    "-f", "--file", "input_file",
    type=click.File("r"),
    help="Read the expression from a file ('-' for stdin)",
)
@click.option(
    "--tokens", "show_tokens",
    is_flag=True,
    help="List the tokens before evaluating",
)
@click.option(
    "--tree", "show_tree",
    is_flag=True,
    help="Show the parsed expression tree before evaluating",
)
@click.option(
    "--bits",
    type=click.IntRange(MIN_INT_BITS, MAX_INT_BITS),
    default=None,
    help="Integer width for bitwise and shift operators (default: 32)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging)",
)
@click.version_option(version=__version__, prog_name="pcalc")
def main(
    expression: Optional[str],
    input_file: Optional[TextIO],
    show_tokens: bool,
    show_tree: bool,
    bits: Optional[int],
    verbose: bool,
) -> None:
    """
    Evaluate an arithmetic expression.

    EXPRESSION is the expression to evaluate. Use -f to read it from a
    file instead.

    \b
    Examples:
        pcalc "2 + 3 * 4"          # 14
        pcalc "(2 + 3) * 4"        # 20
        pcalc "0x10 | 0b11"        # 19
        pcalc --tree "-2 * 3!"     # show the tree, then -12
    """
    setup_logging(verbose)

    if (expression is None) == (input_file is None):
        click.echo("Error: give either EXPRESSION or -f/--file", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    config = CalcConfig.from_env()
    if bits is not None:
        config = dataclasses.replace(config, int_bits=bits)

    try:
        if input_file is not None:
            source = input_file.read()
            config = dataclasses.replace(config, filename=input_file.name)
        else:
            source = expression

        logger.debug(f"Evaluating {source!r} with {config.int_bits}-bit integers")

        if show_tokens:
            for token in Tokenizer(source, config.filename).tokenize():
                click.echo(f"{token.line}:{token.column}\t{token.kind.name}\t{token}")

        tree = parse_expression(source, config)
        if tree is None:
            click.echo("Error: empty expression", err=True)
            sys.exit(ExitCode.CALC_ERROR)

        if show_tree:
            click.echo(dump_tree(tree))

        click.echo(format_number(evaluate(tree, config)))

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
