"""Command line interface

Read a value and print it as go code::

    $ golit export '[1, int8(2), "three"]'
    []interface{}{int(1), int8(2), "three"}

"""
from __future__ import annotations

import logging
from typing import Any, BinaryIO, Callable, TypeVar

import click
import structlog

from golit import errors, reader
from golit.exporters import Config, Exporter
from golit.types import Value

INPUT_FORMATS = ("text", "msgpack")

F = TypeVar("F", bound=Callable[..., Any])


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(
            click.get_text_stream("stderr")
        ),
    )


def _read(expr: str | None, file: BinaryIO | None, input_format: str) -> Value:
    if (expr is None) == (file is None):
        raise click.UsageError("Expected exactly one of EXPR or --file")
    if file is not None:
        data = file.read()
    else:
        assert expr is not None
        data = expr.encode("utf8")
    try:
        if input_format == "msgpack":
            return reader.load_msgpack(data)
        return reader.load_text(data.decode("utf8"))
    except SyntaxError as e:
        raise click.ClickException(f"Invalid input: {e.msg}") from e
    except (
        ValueError,
        OverflowError,
        RecursionError,
        ModuleNotFoundError,
    ) as e:
        raise click.ClickException(f"Invalid input: {e}") from e


def _input_options(f: F) -> F:
    f = click.argument("expr", required=False)(f)
    f = click.option(
        "--file",
        "-f",
        type=click.File("rb"),
        help="Read the value from a file ('-' for stdin).",
    )(f)
    f = click.option(
        "--input",
        "input_format",
        type=click.Choice(INPUT_FORMATS),
        default="text",
        show_default=True,
        help="Format of the value.",
    )(f)
    return f


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages.")
def cli(verbose: bool) -> None:
    """Print values as go literals."""
    _configure_logging(verbose)


@cli.command()
@_input_options
@click.option(
    "--no-types",
    is_flag=True,
    help="Don't wrap numbers in a type conversion.",
)
@click.option(
    "--any-name",
    default="interface{}",
    show_default=True,
    help="Spelling of the empty interface in slice and array types.",
)
def export(
    expr: str | None,
    file: BinaryIO | None,
    input_format: str,
    no_types: bool,
    any_name: str,
) -> None:
    """Print a value as a go literal"""
    value = _read(expr, file, input_format)
    exporter = Exporter(Config(explicit_type=not no_types, any_name=any_name))
    try:
        click.echo(exporter.export(value))
    except errors.ExportError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@_input_options
def cast(expr: str | None, file: BinaryIO | None, input_format: str) -> None:
    """Print a primitive value as a plain string"""
    value = _read(expr, file, input_format)
    try:
        click.echo(Exporter().cast_to_string(value))
    except errors.ExportError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()
