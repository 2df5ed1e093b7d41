"""Developer wrapper: format code with ruff."""

from __future__ import annotations

import sys

from cli._runner import exec_command
from cli.lint import SOURCES


def main() -> None:
    exec_command([sys.executable, "-m", "ruff", "format", *SOURCES, *sys.argv[1:]])
