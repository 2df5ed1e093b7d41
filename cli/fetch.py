"""Fetch ACUL example screens from GitHub.

Usage:
    uv run acul-fetch                 # every example
    uv run acul-fetch login mfa       # only files containing "login" or "mfa"
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from acul_samples.core.config import Settings
from acul_samples.samples.fetcher import SampleFetcher
from cli._runner import build_parser, print_lines, run


def _fetch(args: argparse.Namespace, settings: Settings) -> int:
    with SampleFetcher(settings) as fetcher:
        report = fetcher.fetch_all(args.screens or None)
    print_lines(report.summary_lines("Fetch Summary"))
    print(f"Manifest: {settings.manifest_path} ({len(report.manifest)} screens)")
    return report.exit_code


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser(
        "Fetch Auth0 ACUL example screens",
        screens_help="Case-insensitive filename patterns (default: all examples)",
    )
    run(_fetch, parser, argv)


if __name__ == "__main__":
    main()
