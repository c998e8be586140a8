#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for htmlremark.

Usage::

    htmlremark [-t TYPE] [-o OUTPUT] [--timeout SECONDS] [--base-url URL]
               [--charset NAME] [--config PATH] [--log-level LEVEL]
               [--log-file PATH] [--trace] INPUT

``INPUT`` is a file path, ``-`` for standard input, or a URL (anything
containing ``://``), which is downloaded before conversion.
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict

from htmlremark import __version__
from htmlremark.api import Remark, fetch_url, read_html_file, validate_charset
from htmlremark.config import PRESET_ENV_VAR, find_config_in_parents, load_config_file, options_from_mapping
from htmlremark.constants import DEFAULT_PRESET, DEFAULT_URL_TIMEOUT
from htmlremark.exceptions import FileError, HtmlRemarkError, NetworkError, RenderingError, ValidationError
from htmlremark.logging_utils import configure_logging
from htmlremark.options import PRESETS

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="htmlremark",
        description="Convert HTML documents to Markdown, Markdown Extra, MultiMarkdown or GitHub Markdown.",
    )
    parser.add_argument("input", help="HTML file, '-' for stdin, or a URL")
    parser.add_argument(
        "-t",
        "--type",
        help=f"Markdown dialect: {', '.join(PRESETS)} (default: ${PRESET_ENV_VAR} or {DEFAULT_PRESET})",
    )
    parser.add_argument("-o", "--output", help="Write Markdown to this file instead of stdout")
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_URL_TIMEOUT,
        help=f"Timeout in seconds when fetching a URL (default: {DEFAULT_URL_TIMEOUT})",
    )
    parser.add_argument("--base-url", help="Base URL for resolving relative links")
    parser.add_argument("--charset", help="Character set of the input file (default: UTF-8)")
    parser.add_argument("--config", help="Options file (.toml, .yaml, .json or pyproject.toml)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also append log output to this file")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log every conversion step with timestamps (implies DEBUG)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, (FileError, NetworkError)):
        return EXIT_FILE_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def _load_config(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    if parsed_args.config:
        return load_config_file(parsed_args.config)
    discovered = find_config_in_parents()
    if discovered is None:
        return {}
    logger.info("Using configuration from %s", discovered)
    return load_config_file(discovered)


def _validate_arguments(parsed_args: argparse.Namespace) -> None:
    if parsed_args.timeout < 1:
        raise ValidationError(
            f"Timeout must be at least 1 second, got {parsed_args.timeout}",
            parameter_name="timeout",
            parameter_value=parsed_args.timeout,
        )
    if parsed_args.charset:
        validate_charset(parsed_args.charset)


def _read_input(parsed_args: argparse.Namespace) -> tuple[str, str | None]:
    """Return the HTML and the base URI to resolve links against."""
    source = parsed_args.input
    if "://" in source:
        html, final_url = fetch_url(source, parsed_args.timeout)
        return html, parsed_args.base_url or final_url
    if source == "-":
        return sys.stdin.read(), parsed_args.base_url
    return read_html_file(source, parsed_args.charset), parsed_args.base_url


def main(args: list[str] | None = None) -> int:
    """Run the command-line interface and return an exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        _validate_arguments(parsed_args)
        config = _load_config(parsed_args)
        config_preset = config.pop("preset", None)
        preset = parsed_args.type or config_preset or os.environ.get(PRESET_ENV_VAR) or DEFAULT_PRESET
        options = options_from_mapping(config, default_preset=preset)
        html, base_uri = _read_input(parsed_args)

        remark = Remark(options)
        if parsed_args.output:
            try:
                with open(parsed_args.output, "w", encoding="utf-8") as out:
                    remark.convert_to(html, out, base_uri=base_uri)
            except OSError as e:
                raise FileError(f"Cannot write {parsed_args.output}: {e}", parsed_args.output, original_error=e) from e
        else:
            markdown = remark.convert(html, base_uri=base_uri)
            sys.stdout.write(markdown)
            if markdown:
                sys.stdout.write("\n")
    except HtmlRemarkError as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Conversion failed", exc_info=True)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
