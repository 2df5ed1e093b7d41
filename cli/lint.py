"""Developer wrapper: lint the package, commands and tests with ruff."""

from __future__ import annotations

import sys

from cli._runner import exec_command

SOURCES = ("acul_samples", "cli", "tests")


def main() -> None:
    exec_command([sys.executable, "-m", "ruff", "check", *SOURCES, *sys.argv[1:]])
