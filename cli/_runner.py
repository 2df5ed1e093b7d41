"""
Shared CLI runner helper.

Every command follows the same shape: parse arguments, build Settings once,
configure logging, run, then map the outcome to an exit code. Fatal errors
(configuration, discovery, authentication, catastrophic build) exit with
their mapped code; per-screen failures surface through the report's
exit code after the summary has been printed.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from collections.abc import Callable, Sequence

from pydantic import ValidationError

from acul_samples.core.config import Settings, get_settings
from acul_samples.core.errors import AculError, ConfigurationError, get_exit_code
from acul_samples.core.logging import configure_logging

logger = logging.getLogger("acul")

Command = Callable[[argparse.Namespace, Settings], int]


def build_parser(description: str, screens_help: str | None = None) -> argparse.ArgumentParser:
    """
    Parser with the options every command accepts.

    Args:
        description: Command description for --help
        screens_help: When set, adds a positional list of screen ids / patterns
    """
    parser = argparse.ArgumentParser(description=description)
    if screens_help:
        parser.add_argument("screens", nargs="*", help=screens_help)
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    return parser


def print_lines(lines: Sequence[str]) -> None:
    for line in lines:
        print(line)


def run(command: Command, parser: argparse.ArgumentParser, argv: Sequence[str] | None = None) -> None:
    """
    Run a command and exit with its status code.

    Example:
        >>> run(_fetch, build_parser("Fetch samples", "patterns"))
    """
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration\n{e}", file=sys.stderr)
        raise SystemExit(get_exit_code(ConfigurationError("invalid configuration")))

    configure_logging(
        "DEBUG" if args.verbose else settings.log_level,
        structured=args.json_logs or settings.structured_logs,
    )

    try:
        code = command(args, settings)
    except AculError as e:
        logger.debug("Command failed: %s", e.message, extra=e.details)
        print(f"Error: {e.message}", file=sys.stderr)
        code = get_exit_code(e)

    raise SystemExit(code)


def exec_command(cmd: Sequence[str]) -> None:
    """
    Run a developer tool and propagate its exit code.

    Example:
        >>> exec_command([sys.executable, "-m", "pytest", "-q"])
    """
    result = subprocess.run(cmd)
    raise SystemExit(result.returncode)
