"""
Adapters for the external build tools.

esbuild bundles one screen wrapper into a standalone browser ES module;
tailwindcss compiles the shared stylesheet. Both are invoked as commands
(by default through npx) and reported as ToolResult values: a failing tool is
an expected outcome for incomplete upstream samples, not an exception.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120

# Used when the project has no stylesheet entry of its own
DEFAULT_STYLES_INPUT = "@tailwind base;\n@tailwind components;\n@tailwind utilities;\n"


@dataclass(frozen=True)
class ToolResult:
    ok: bool
    output: str = ""

    @property
    def summary(self) -> str:
        """Last non-empty output line, for one-line log messages."""
        lines = [line.strip() for line in self.output.splitlines() if line.strip()]
        return lines[-1] if lines else ""


def run_tool(cmd: list[str], timeout: float = DEFAULT_TIMEOUT_SECONDS) -> ToolResult:
    """Run an external tool, capturing its output."""
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
        )
    except FileNotFoundError:
        return ToolResult(ok=False, output=f"command not found: {cmd[0]}")
    except subprocess.TimeoutExpired:
        return ToolResult(ok=False, output=f"timed out after {timeout}s: {' '.join(cmd)}")

    output = "\n".join(part for part in (result.stdout, result.stderr) if part)
    return ToolResult(ok=result.returncode == 0, output=output)


class EsbuildBundler:
    """Bundle a TSX entry point into a self-contained browser ES module."""

    def __init__(self, command: str = "npx esbuild", timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self._command = shlex.split(command)
        self._timeout = timeout

    def build_args(self, entry: Path, outfile: Path) -> list[str]:
        return [
            *self._command,
            str(entry),
            "--bundle",
            "--format=esm",
            "--platform=browser",
            # es2022 keeps top-level await available to the SDK
            "--target=es2022",
            "--jsx=automatic",
            "--sourcemap",
            "--log-level=error",
            f"--outfile={outfile}",
        ]

    def bundle(self, entry: Path, outfile: Path) -> ToolResult:
        outfile.parent.mkdir(parents=True, exist_ok=True)
        return run_tool(self.build_args(entry, outfile), timeout=self._timeout)


class TailwindCompiler:
    """Compile the shared stylesheet, scanning sample sources for class names."""

    def __init__(self, command: str = "npx tailwindcss", timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self._command = shlex.split(command)
        self._timeout = timeout

    def build_args(self, input_path: Path, outfile: Path, content_glob: str) -> list[str]:
        return [
            *self._command,
            "-i",
            str(input_path),
            "-o",
            str(outfile),
            "--content",
            content_glob,
            "--minify",
        ]

    def compile(self, input_path: Path, outfile: Path, content_glob: str) -> ToolResult:
        outfile.parent.mkdir(parents=True, exist_ok=True)
        return run_tool(self.build_args(input_path, outfile, content_glob), timeout=self._timeout)
