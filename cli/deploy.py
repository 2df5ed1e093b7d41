"""Point Auth0 tenant screens at the current local build.

Required environment variables:
- AUTH0_DOMAIN
- AUTH0_CLIENT_ID
- AUTH0_CLIENT_SECRET

Optional:
- BASE_URL (default: http://localhost:$PORT)
- ACUL_REQUEST_DELAY_SECONDS (default: 0.5)

Usage:
    uv run acul-deploy                  # every built screen
    uv run acul-deploy login login-id   # specific screens
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from acul_samples.core.config import Settings
from acul_samples.services.rendering import RenderingDeployer
from cli._runner import build_parser, print_lines, run


def _deploy(args: argparse.Namespace, settings: Settings) -> int:
    report = RenderingDeployer(settings).deploy(args.screens or None)
    print_lines(report.summary_lines("Deployment Summary"))

    if report.exit_code == 0:
        print(f"Version: {report.version}")
        print(f"CSS: {report.css_url}")
        print(f"JS:  {settings.base_url}/{report.version}/{{screen}}/component.js")
        print("Make sure the local server is running: uv run acul-serve")
    else:
        print("Some screens failed to deploy. Check the errors above.")
    return report.exit_code


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser(
        "Deploy ACUL rendering configuration to Auth0",
        screens_help="Screens to deploy (default: every known screen)",
    )
    run(_deploy, parser, argv)


if __name__ == "__main__":
    main()
