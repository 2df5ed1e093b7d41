"""Serve dist/ locally with CORS for the Auth0 tenant.

Usage:
    uv run acul-serve
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from acul_samples.core.config import Settings
from acul_samples.server import run_server
from cli._runner import build_parser, run


def _serve(args: argparse.Namespace, settings: Settings) -> int:
    run_server(settings)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    run(_serve, build_parser("Serve built ACUL samples"), argv)


if __name__ == "__main__":
    main()
