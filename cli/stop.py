"""Stop the local sample server listening on $PORT."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from acul_samples.core.config import Settings
from acul_samples.server import stop_server
from cli._runner import build_parser, run


def _stop(args: argparse.Namespace, settings: Settings) -> int:
    stopped = stop_server(settings.port)
    if stopped:
        print(f"Stopped server on port {settings.port} (pid {', '.join(map(str, stopped))})")
    else:
        print(f"No server running on port {settings.port}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    run(_stop, build_parser("Stop the local sample server"), argv)


if __name__ == "__main__":
    main()
