"""
Version ledger for build output.

    dist/
      .versions          every version id appended by a build, oldest first
      .current-version   the single version deploy points the tenant at
      v-<hex>/           one directory per version

A build appends its new id first, then prunes everything else, so a build
that crashed half way is cleaned up by the next one. The pointer is written
last and atomically; a build that never reaches promote() is never current.
"""

from __future__ import annotations

import logging
import os
import re
import secrets
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

VERSION_PREFIX = "v-"
_VERSION_RE = re.compile(r"^v-[0-9a-f]{4,64}$")


def mint_version() -> str:
    """Random version id, e.g. v-3f9c0a1b2c3d4e5f."""
    return f"{VERSION_PREFIX}{secrets.token_hex(8)}"


def is_version_id(value: str) -> bool:
    return bool(_VERSION_RE.match(value))


class VersionLedger:
    def __init__(self, dist_dir: Path):
        self.dist_dir = Path(dist_dir)

    @property
    def versions_file(self) -> Path:
        return self.dist_dir / ".versions"

    @property
    def current_file(self) -> Path:
        return self.dist_dir / ".current-version"

    def version_dir(self, version: str) -> Path:
        return self.dist_dir / version

    def versions(self) -> list[str]:
        if not self.versions_file.is_file():
            return []
        lines = self.versions_file.read_text(encoding="utf-8").splitlines()
        return [line.strip() for line in lines if line.strip()]

    def _write_versions(self, versions: list[str]) -> None:
        self.dist_dir.mkdir(parents=True, exist_ok=True)
        self.versions_file.write_text("\n".join(versions) + ("\n" if versions else ""), encoding="utf-8")

    def append(self, version: str) -> None:
        versions = self.versions()
        if version not in versions:
            versions.append(version)
        self._write_versions(versions)

    def prune(self, keep: str) -> list[str]:
        """
        Delete every recorded version except `keep`.

        Returns:
            The version ids whose directories were removed
        """
        removed: list[str] = []
        for version in self.versions():
            if version == keep:
                continue
            if not is_version_id(version):
                logger.warning("Ignoring malformed ledger entry %r", version)
                continue
            path = self.version_dir(version)
            if path.exists():
                shutil.rmtree(path)
                removed.append(version)
                logger.info("Removed old version: %s", version)

        self._write_versions([keep] if keep in self.versions() else [])
        return removed

    def current(self) -> str | None:
        if not self.current_file.is_file():
            return None
        value = self.current_file.read_text(encoding="utf-8").strip()
        return value or None

    def promote(self, version: str) -> None:
        """Atomically point .current-version at `version`."""
        self.dist_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = self.current_file.with_name(self.current_file.name + ".tmp")
        tmp_path.write_text(version, encoding="utf-8")
        os.replace(tmp_path, self.current_file)
