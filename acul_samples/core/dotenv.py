"""
Lightweight .env file loader.

Read by the command entry points before Settings is built, so credentials
can live in a local file instead of the shell. Variables already present in
the environment always win unless `overwrite=True`.

Supported syntax:
    KEY=value
    export KEY=value
    KEY="quoted # not a comment"
    KEY=value   # trailing comment
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_CANDIDATES = (".env", ".env.local")

_QUOTES = ('"', "'")


def _clean_value(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    if value[:1] in _QUOTES:
        return value
    # Unquoted: a `#` preceded by whitespace starts a comment
    for i, ch in enumerate(value):
        if ch == "#" and i > 0 and value[i - 1] in " \t":
            return value[:i].rstrip()
    return value


def parse_env_text(text: str) -> dict[str, str]:
    """Parse env file content into a dict, skipping blanks, comments and junk lines."""
    parsed: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        if not line or line.startswith("#"):
            continue
        key, sep, raw = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        parsed[key] = _clean_value(raw)
    return parsed


def load_env_file(path: str | Path | None = None, overwrite: bool = False) -> dict[str, str]:
    """
    Copy variables from an env file into os.environ.

    Args:
        path: File to read (default: ".env" in the working directory)
        overwrite: Replace variables that are already set

    Returns:
        The variables actually written to os.environ
    """
    env_path = Path(path) if path is not None else Path(".env")
    if not env_path.is_file():
        return {}

    loaded = {
        key: value
        for key, value in parse_env_text(env_path.read_text(encoding="utf-8")).items()
        if overwrite or key not in os.environ
    }
    os.environ.update(loaded)
    return loaded


def find_env_file(
    candidates: list[str] | None = None,
    start_dir: Path | None = None,
) -> Path | None:
    """
    Locate the env file for this run.

    `ENV_FILE` wins when set (and is None if it points nowhere); otherwise
    the first existing candidate in `start_dir` (default: cwd).
    """
    explicit = os.environ.get("ENV_FILE", "").strip()
    if explicit:
        explicit_path = Path(explicit)
        return explicit_path if explicit_path.is_file() else None

    base = start_dir or Path.cwd()
    for name in candidates if candidates is not None else DEFAULT_CANDIDATES:
        if (base / name).is_file():
            return base / name
    return None
