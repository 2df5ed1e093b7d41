"""
On-disk sample store.

Layout under the samples directory:
    <screen-id>.tsx     repaired component source, one per screen
    manifest.json       {screen-id: {"filename": ..., "sampleCount": N}}
    index.ts            barrel re-exporting every component by PascalCase name

Build wrappers (<screen-id>.wrapper.tsx) may exist transiently and are never
treated as screens.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from acul_samples.screens import to_component_name

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".tsx"
WRAPPER_MARKER = ".wrapper."


@dataclass(frozen=True)
class ManifestEntry:
    filename: str
    sample_count: int

    def to_json(self) -> dict:
        return {"filename": self.filename, "sampleCount": self.sample_count}

    @classmethod
    def from_json(cls, data: Mapping) -> ManifestEntry:
        return cls(filename=str(data["filename"]), sample_count=int(data.get("sampleCount", 0)))


Manifest = dict[str, ManifestEntry]


class SampleStore:
    """Reads and writes samples, the manifest and the barrel index."""

    def __init__(self, samples_dir: Path):
        self.samples_dir = Path(samples_dir)

    @property
    def manifest_path(self) -> Path:
        return self.samples_dir / "manifest.json"

    @property
    def index_path(self) -> Path:
        return self.samples_dir / "index.ts"

    def source_path(self, screen_id: str) -> Path:
        return self.samples_dir / f"{screen_id}{SOURCE_SUFFIX}"

    def ensure_dir(self) -> None:
        self.samples_dir.mkdir(parents=True, exist_ok=True)

    # -------------------------------------------------------------------------
    # Samples
    # -------------------------------------------------------------------------

    def write_sample(self, screen_id: str, code: str) -> Path:
        self.ensure_dir()
        path = self.source_path(screen_id)
        path.write_text(code, encoding="utf-8")
        return path

    def read_sample(self, screen_id: str) -> str | None:
        path = self.source_path(screen_id)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def scan_screens(self) -> list[str]:
        """Screen ids of every source file on disk, sorted."""
        if not self.samples_dir.is_dir():
            return []
        return sorted(
            path.name[: -len(SOURCE_SUFFIX)]
            for path in self.samples_dir.iterdir()
            if path.is_file()
            and path.name.endswith(SOURCE_SUFFIX)
            and WRAPPER_MARKER not in path.name
        )

    # -------------------------------------------------------------------------
    # Manifest
    # -------------------------------------------------------------------------

    def load_manifest(self) -> Manifest | None:
        """Return the manifest, or None when it has not been written yet."""
        if not self.manifest_path.is_file():
            return None
        raw = json.loads(self.manifest_path.read_text(encoding="utf-8"))
        return {screen_id: ManifestEntry.from_json(entry) for screen_id, entry in raw.items()}

    def write_manifest(self, manifest: Manifest) -> Path:
        self.ensure_dir()
        payload = {screen_id: manifest[screen_id].to_json() for screen_id in sorted(manifest)}
        self.manifest_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return self.manifest_path

    def write_index(self, screen_ids: Iterable[str]) -> Path:
        self.ensure_dir()
        lines = [
            f"export {{ default as {to_component_name(screen_id)} }} from './{screen_id}';"
            for screen_id in sorted(screen_ids)
        ]
        self.index_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return self.index_path

    def known_screens(self) -> list[str]:
        """
        Screens downstream steps should act on.

        The manifest is authoritative when present; otherwise fall back to
        scanning the source files on disk.
        """
        manifest = self.load_manifest()
        if manifest is not None:
            return sorted(manifest)
        screens = self.scan_screens()
        if screens:
            logger.info("No manifest found, using %d screens from %s", len(screens), self.samples_dir)
        return screens
