"""Developer wrapper: run the unit tests.

No network, node tooling or Auth0 tenant is needed; extra arguments go to pytest.
"""

from __future__ import annotations

import sys

from cli._runner import exec_command


def main() -> None:
    exec_command([sys.executable, "-m", "pytest", "-q", *sys.argv[1:]])
