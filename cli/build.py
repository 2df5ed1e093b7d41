"""Build samples into a new dist/<version> directory.

Usage:
    uv run acul-build
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from acul_samples.build.builder import SampleBuilder
from acul_samples.core.config import Settings
from cli._runner import build_parser, print_lines, run


def _build(args: argparse.Namespace, settings: Settings) -> int:
    report = SampleBuilder(settings).build_all(args.screens or None)
    print_lines(report.summary_lines(f"Build Summary ({report.version})"))
    print(f"Index: {settings.base_url}/{report.version}/index.html")
    print("Run: uv run acul-serve")
    return report.exit_code


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser(
        "Build ACUL samples into browser bundles",
        screens_help="Screens to build (default: every screen in the manifest)",
    )
    run(_build, parser, argv)


if __name__ == "__main__":
    main()
