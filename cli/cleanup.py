"""Reset Auth0 tenant screens to standard rendering.

Local build output is not touched.

Usage:
    uv run acul-cleanup --yes
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from acul_samples.core.config import Settings
from acul_samples.services.rendering import RenderingDeployer
from cli._runner import build_parser, print_lines, run


def _cleanup(args: argparse.Namespace, settings: Settings) -> int:
    if not args.yes:
        print(f"Reset ACUL screens on {settings.auth0_domain} to standard rendering? [y/N] ", end="")
        try:
            answer = input().strip().lower()
        except EOFError:
            # stdin closed (CI without --yes)
            answer = ""
        if answer not in ("y", "yes"):
            print("Aborted.")
            return 1

    report = RenderingDeployer(settings).cleanup(args.screens or None)
    print_lines(report.summary_lines("Cleanup Summary"))
    if report.total and report.exit_code == 0:
        print("All screens reset to Auth0 defaults.")
    return report.exit_code


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser(
        "Reset ACUL screens to Auth0 default rendering",
        screens_help="Screens to reset (default: every known screen)",
    )
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    run(_cleanup, parser, argv)


if __name__ == "__main__":
    main()
