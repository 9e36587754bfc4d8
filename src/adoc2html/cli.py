#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/cli.py
"""Command-line interface for adoc2html.

Examples
--------
Convert a topic and print the full page::

    $ adoc2html convert guide/intro.adoc

Convert from stdin, as a plain fragment, for a book published under a URL::

    $ cat intro.adoc | adoc2html convert - --topic-path guide/intro.adoc --plain \\
        --book-url https://docs.example.com

Set document attributes::

    $ adoc2html convert intro.adoc --attr product=Franklin --attr icons=font

Serve topics from the upstream repository configured in ``.adoc2html.toml``
or ``DOC_*`` environment variables::

    $ adoc2html serve --port 8080

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from adoc2html import __version__
from adoc2html.api import convert
from adoc2html.book import SiteBook
from adoc2html.config import load_settings
from adoc2html.constants import DEFAULT_BACKEND, DEFAULT_HTML_PARSER, DEFAULT_SERVER_HOST, DEFAULT_SERVER_PORT
from adoc2html.exceptions import (
    Adoc2HtmlError,
    ConfigError,
    FormatError,
    ParsingError,
    RenderingError,
    UpstreamError,
    ValidationError,
)
from adoc2html.logging_utils import configure_logging
from adoc2html.renderers import CONVERTERS

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_FORMAT_ERROR = 5
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7
EXIT_UPSTREAM_ERROR = 11

STDIN_INPUT = "-"


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR

    if isinstance(exception, FormatError):
        return EXIT_FORMAT_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    if isinstance(exception, (UpstreamError, ConfigError)):
        return EXIT_UPSTREAM_ERROR

    return EXIT_ERROR


def parse_attribute_argument(value: str) -> tuple[str, str]:
    """Parse a ``NAME=VALUE`` (or bare ``NAME``) attribute argument.

    Examples
    --------
        >>> parse_attribute_argument("product=Franklin")
        ('product', 'Franklin')
        >>> parse_attribute_argument("icons")
        ('icons', '')

    """
    name, _, attr_value = value.partition("=")
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"Invalid attribute {value!r}, expected NAME=VALUE")
    return name, attr_value


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with the ``convert`` and ``serve`` commands."""
    parser = argparse.ArgumentParser(
        prog="adoc2html",
        description="Convert AsciiDoc topics to Franklin-convention HTML.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose log format with timestamps and logger names")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert an AsciiDoc file to HTML")
    convert_parser.add_argument("input", help="AsciiDoc file to convert, or '-' for stdin")
    convert_parser.add_argument(
        "--topic-path",
        help="Path of the topic relative to the book root (default: the input file name)",
    )
    convert_parser.add_argument(
        "--backend",
        default=DEFAULT_BACKEND,
        help=f"Output backend, one of {', '.join(sorted(CONVERTERS))} (default: {DEFAULT_BACKEND})",
    )
    convert_parser.add_argument(
        "--attr",
        dest="attributes",
        action="append",
        type=parse_attribute_argument,
        default=[],
        metavar="NAME=VALUE",
        help="Set a document attribute (repeatable); a trailing '@' lets the document override it",
    )
    convert_parser.add_argument("--plain", action="store_true", help="Emit the bare fragment without page scaffold")
    convert_parser.add_argument("--book-url", default="", help="Base URL the book is published under")
    convert_parser.add_argument(
        "--html-parser",
        default=DEFAULT_HTML_PARSER,
        choices=["html.parser", "html5lib", "lxml"],
        help=f"BeautifulSoup tree builder for the final pass (default: {DEFAULT_HTML_PARSER})",
    )
    convert_parser.add_argument("-o", "--out", help="Output file (default: stdout)")

    serve_parser = subparsers.add_parser("serve", help="Serve converted topics from the upstream repository")
    serve_parser.add_argument(
        "--host", default=DEFAULT_SERVER_HOST, help=f"Host to serve on (default: {DEFAULT_SERVER_HOST})"
    )
    serve_parser.add_argument(
        "--port", type=int, default=DEFAULT_SERVER_PORT, help=f"Port to serve on (default: {DEFAULT_SERVER_PORT})"
    )
    serve_parser.add_argument("--config", help="Settings file (default: discovered from the working directory)")

    return parser


def _read_input(input_arg: str) -> str:
    if input_arg == STDIN_INPUT:
        return sys.stdin.read()
    return Path(input_arg).read_text(encoding="utf-8")


def handle_convert_command(parsed: argparse.Namespace, console: Console) -> int:
    """Run the ``convert`` command.

    Returns
    -------
    int
        Exit code (0 for success)

    """
    topic_path = parsed.topic_path
    if not topic_path:
        if parsed.input == STDIN_INPUT:
            console.print("[red]Error:[/red] --topic-path is required when reading from stdin")
            return EXIT_VALIDATION_ERROR
        topic_path = Path(parsed.input).name

    source = _read_input(parsed.input)
    html = convert(
        source,
        topic_path=topic_path,
        backend=parsed.backend,
        attributes=dict(parsed.attributes),
        plain=parsed.plain,
        book=SiteBook(parsed.book_url),
        html_parser=parsed.html_parser,
    )

    if parsed.out:
        Path(parsed.out).write_text(html + "\n", encoding="utf-8")
        console.print(f"[green]Wrote[/green] {escape(parsed.out)}")
    else:
        sys.stdout.write(html)
        sys.stdout.write("\n")
    return EXIT_SUCCESS


def handle_serve_command(parsed: argparse.Namespace, console: Console) -> int:
    """Run the ``serve`` command until interrupted.

    Returns
    -------
    int
        Exit code (0 for success)

    """
    from adoc2html.server.app import serve

    settings = load_settings(parsed.config)
    console.print(f"Starting server at [bold]http://{parsed.host}:{parsed.port}/[/bold]")
    console.print("Press Ctrl+C to stop")
    try:
        serve(settings, host=parsed.host, port=parsed.port)
    except OSError as e:
        if "Address already in use" in str(e):
            console.print(f"[red]Error:[/red] Port {parsed.port} is already in use")
            return EXIT_ERROR
        raise
    return EXIT_SUCCESS


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    configure_logging(parsed.log_level, log_file=parsed.log_file, trace_mode=parsed.trace)
    console = Console(stderr=True)

    handlers = {"convert": handle_convert_command, "serve": handle_serve_command}
    try:
        return handlers[parsed.command](parsed, console)
    except (Adoc2HtmlError, OSError) as e:
        logger.debug("Command %s failed", parsed.command, exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
