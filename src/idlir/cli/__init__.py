#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for idlir.

Reads a library description (JSON, YAML or TOML), generates its JSON IR and
writes it to a file or stdout.

Examples
--------
    $ idlir library.yaml -o library.json
    $ idlir library.json --indent 4 --log-level DEBUG

"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import fields
from typing import Any, Dict

from idlir import __version__
from idlir.ast.loader import load_library
from idlir.cli.config import options_from_config, read_config, resolve_config_path
from idlir.constants import CONFIG_ENV_VAR, DEFAULT_LOG_LEVEL, LOG_LEVELS
from idlir.exceptions import FileError, IdlIrError, RenderingError, ValidationError
from idlir.logging_utils import configure_logging, resolve_log_level
from idlir.options.json_ir import JsonIrRendererOptions
from idlir.renderers.json_ir import JsonIrRenderer

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7


def _option_help(name: str) -> str:
    for f in fields(JsonIrRendererOptions):
        if f.name == name:
            return f.metadata.get("help", "")
    return ""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the idlir command."""
    parser = argparse.ArgumentParser(
        prog="idlir",
        description="Generate the JSON intermediate representation of a resolved IDL library.",
    )
    parser.add_argument("input", help="Library description file (.json, .yaml, .yml or .toml)")
    parser.add_argument("-o", "--out", dest="output", help="Output file (default: stdout)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help=f"Configuration file (default: discovered, or ${CONFIG_ENV_VAR})")
    config_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    render_group = parser.add_argument_group("rendering")
    render_group.add_argument(
        "--indent",
        type=int,
        metavar="N",
        help=f"{_option_help('indent')}; given as a number of spaces",
    )
    render_group.add_argument(
        "--no-escape-control-characters",
        dest="escape_control_characters",
        action="store_false",
        default=None,
        help="Escape only '\"' and '\\' inside strings",
    )
    render_group.add_argument(
        "--no-validate-literals",
        dest="validate_literals",
        action="store_false",
        default=None,
        help="Skip the check of literal source text before writing it verbatim",
    )

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=LOG_LEVELS,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    log_group.add_argument("--log-file", help="Also write log records to this file")
    log_group.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    log_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    return parser


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    level = resolve_log_level(parsed_args.log_level, verbose=parsed_args.verbose, trace=parsed_args.trace)
    configure_logging(level, log_file=parsed_args.log_file, trace=parsed_args.trace)


def _load_config(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    if parsed_args.no_config:
        return {}
    config_path = resolve_config_path(parsed_args.config)
    if config_path is None:
        return {}
    logger.debug("Using configuration file %s", config_path)
    return read_config(config_path)


def build_options(parsed_args: argparse.Namespace) -> JsonIrRendererOptions:
    """Resolve renderer options: defaults, then config file, then flags."""
    options = options_from_config(_load_config(parsed_args))

    overrides: Dict[str, Any] = {}
    if parsed_args.indent is not None:
        if parsed_args.indent < 0:
            raise ValidationError("--indent must not be negative", parameter_name="indent", parameter_value=parsed_args.indent)
        overrides["indent"] = " " * parsed_args.indent
    if parsed_args.escape_control_characters is not None:
        overrides["escape_control_characters"] = parsed_args.escape_control_characters
    if parsed_args.validate_literals is not None:
        overrides["validate_literals"] = parsed_args.validate_literals

    return options.create_updated(**overrides) if overrides else options


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

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def main(args: list[str] | None = None) -> int:
    """Execute the idlir command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        _setup_logging(parsed_args)
        options = build_options(parsed_args)
        library = load_library(parsed_args.input)
        renderer = JsonIrRenderer(options)
        if parsed_args.output:
            renderer.render(library, parsed_args.output)
            logger.info("Wrote JSON IR for %s to %s", library.name, parsed_args.output)
        else:
            sys.stdout.write(renderer.render_to_string(library))
    except IdlIrError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS
