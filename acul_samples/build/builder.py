"""
Build every sample into a versioned, deployable bundle tree.

    dist/<version>/
      <screen-id>/component.tsx   copy of the repaired source
      <screen-id>/component.js    bundled ES module (or a no-op placeholder)
      styles.css                  shared tailwind output
      index.html                  listing of every screen in the version

A screen that fails to compile gets a placeholder module so deploy always has
something to point at. Only a stylesheet or filesystem failure aborts the
build, and then the current-version pointer is left untouched.
"""

from __future__ import annotations

import html
import logging
import re
import tempfile
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from acul_samples.build.compiler import (
    DEFAULT_STYLES_INPUT,
    EsbuildBundler,
    TailwindCompiler,
)
from acul_samples.build.ledger import VersionLedger, mint_version
from acul_samples.core.config import Settings
from acul_samples.core.errors import BuildError, ConfigurationError
from acul_samples.results import BatchReport, ItemResult, ItemStatus
from acul_samples.samples.store import SampleStore

logger = logging.getLogger(__name__)

MOUNT_ELEMENT_ID = "auth0-acul-root"

_NAMED_EXPORT_RE = re.compile(r"^export\s+(?:const|function|class)\s+([A-Za-z_$][\w$]*)", re.MULTILINE)

WRAPPER_TEMPLATE = """import React from 'react';
import {{ createRoot }} from 'react-dom/client';
{component_import}

function mount() {{
  let container = document.getElementById('{mount_id}');
  if (!container) {{
    container = document.createElement('div');
    container.id = '{mount_id}';
    document.body.appendChild(container);
  }}
  createRoot(container).render(<Component />);
}}

if (document.readyState === 'loading') {{
  document.addEventListener('DOMContentLoaded', mount);
}} else {{
  mount();
}}
"""

PLACEHOLDER_TEMPLATE = """// Build failed for {screen_id}; original source: {screen_id}/component.tsx
console.warn('Component {screen_id} has build errors and may not function correctly');
export default function Placeholder() {{
  return null;
}}
"""


def component_import(screen_id: str, source: str) -> str:
    """
    Import statement binding the sample's component to `Component`.

    Default exports are preferred; otherwise the first named export is used.
    """
    if "export default" in source:
        return f"import Component from './{screen_id}';"
    named = _NAMED_EXPORT_RE.search(source)
    if named:
        return f"import {{ {named.group(1)} as Component }} from './{screen_id}';"
    return f"import Component from './{screen_id}';"


def render_wrapper(screen_id: str, source: str) -> str:
    return WRAPPER_TEMPLATE.format(
        component_import=component_import(screen_id, source),
        mount_id=MOUNT_ELEMENT_ID,
    )


def render_placeholder(screen_id: str) -> str:
    return PLACEHOLDER_TEMPLATE.format(screen_id=screen_id)


def render_index(version: str, screen_ids: Sequence[str], base_url: str, css_size: int) -> str:
    version_e = html.escape(version)
    links = "\n".join(
        f'<li class="p-4 bg-white rounded shadow">{html.escape(s)} '
        f'<a href="/{version_e}/{html.escape(s)}/component.js">js</a> '
        f'<a href="/{version_e}/{html.escape(s)}/component.tsx">tsx</a></li>'
        for s in screen_ids
    )
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<title>Auth0 ACUL {version_e}</title>
<link rel="stylesheet" href="/{version_e}/styles.css">
</head>
<body class="bg-gray-50 p-8">
<div class="max-w-4xl mx-auto">
<h1 class="text-3xl font-bold mb-6">Auth0 ACUL Samples</h1>
<div class="bg-blue-50 p-4 rounded mb-6">
<p>Version: <code>{version_e}</code></p>
<p>CSS: <code>{html.escape(base_url)}/{version_e}/styles.css</code> ({round(css_size / 1024)} KB)</p>
</div>
<ul class="grid grid-cols-3 gap-4">
{links}
</ul>
</div>
</body>
</html>
"""


@dataclass
class BuildReport(BatchReport):
    version: str = ""

    @property
    def placeholders(self) -> int:
        return self.count(ItemStatus.PLACEHOLDER)


class SampleBuilder:
    """Builds all known screens into a fresh version directory."""

    def __init__(
        self,
        settings: Settings,
        store: SampleStore | None = None,
        ledger: VersionLedger | None = None,
        bundler: EsbuildBundler | None = None,
        stylesheet: TailwindCompiler | None = None,
        version_factory: Callable[[], str] = mint_version,
    ):
        self._settings = settings
        self._store = store or SampleStore(settings.samples_dir)
        self._ledger = ledger or VersionLedger(settings.dist_dir)
        self._bundler = bundler or EsbuildBundler(settings.esbuild_command)
        self._stylesheet = stylesheet or TailwindCompiler(settings.tailwind_command)
        self._version_factory = version_factory

    def build_screen(self, screen_id: str, version_dir: Path) -> ItemResult:
        """Copy, wrap and bundle one screen. Never raises for compile errors."""
        try:
            source = self._store.read_sample(screen_id)
        except UnicodeDecodeError:
            logger.error("Source for %s is not valid UTF-8", screen_id, extra={"screen": screen_id})
            return ItemResult.failed(screen_id, "source is not valid UTF-8")
        if source is None:
            logger.error("Source missing for %s", screen_id, extra={"screen": screen_id})
            return ItemResult.failed(screen_id, "source file not found")

        screen_dir = version_dir / screen_id
        screen_dir.mkdir(parents=True, exist_ok=True)
        (screen_dir / "component.tsx").write_text(source, encoding="utf-8")

        outfile = screen_dir / "component.js"
        wrapper_path = self._store.samples_dir / f"{screen_id}.wrapper.tsx"
        wrapper_path.write_text(render_wrapper(screen_id, source), encoding="utf-8")
        try:
            result = self._bundler.bundle(wrapper_path, outfile)
        finally:
            wrapper_path.unlink(missing_ok=True)

        if result.ok:
            logger.info("Built %s", screen_id, extra={"screen": screen_id})
            return ItemResult.ok(screen_id, artifact=str(outfile))

        outfile.write_text(render_placeholder(screen_id), encoding="utf-8")
        logger.warning(
            "Compile failed for %s, wrote placeholder: %s",
            screen_id,
            result.summary or "no output",
            extra={"screen": screen_id},
        )
        return ItemResult(
            screen_id,
            ItemStatus.PLACEHOLDER,
            reason=result.summary or "compile failed",
            artifact=str(outfile),
        )

    def build_styles(self, version_dir: Path) -> Path:
        """
        Compile the shared stylesheet.

        Without a project entry a default one is written to a temporary
        directory, so nothing outside the version tree ends up in dist/.

        Raises:
            BuildError: If tailwind fails; without styles the version is unusable
        """
        if self._settings.styles_input.is_file():
            return self._compile_styles(self._settings.styles_input, version_dir)

        logger.info("No %s, using default tailwind entry", self._settings.styles_input)
        with tempfile.TemporaryDirectory(prefix="acul-styles-") as tmp_dir:
            input_path = Path(tmp_dir) / "styles-input.css"
            input_path.write_text(DEFAULT_STYLES_INPUT, encoding="utf-8")
            return self._compile_styles(input_path, version_dir)

    def _compile_styles(self, input_path: Path, version_dir: Path) -> Path:
        outfile = version_dir / "styles.css"
        content_glob = str(self._store.samples_dir / "**" / "*.tsx")
        result = self._stylesheet.compile(input_path, outfile, content_glob)
        if not result.ok or not outfile.is_file():
            raise BuildError(
                "Stylesheet compilation failed",
                details={"output": result.output, "input": str(input_path)},
            )
        return outfile

    def build_all(self, screen_ids: Sequence[str] | None = None) -> BuildReport:
        """
        Build every known screen (or the given ones) into a new version.

        Returns:
            BuildReport with per-screen results and the promoted version

        Raises:
            ConfigurationError: If there is nothing to build
            BuildError: If the stylesheet or the version tree cannot be written
        """
        screens = sorted(set(screen_ids)) if screen_ids else self._store.known_screens()
        if not screens:
            raise ConfigurationError(
                "No samples found. Run acul-fetch first.",
                details={"samples_dir": str(self._store.samples_dir)},
            )

        version = self._version_factory()
        version_dir = self._ledger.version_dir(version)
        report = BuildReport(version=version)
        logger.info("Building %d screens into %s", len(screens), version)

        try:
            self._ledger.append(version)
            self._ledger.prune(keep=version)
            version_dir.mkdir(parents=True, exist_ok=True)

            for screen_id in screens:
                report.add(self.build_screen(screen_id, version_dir))

            styles_path = self.build_styles(version_dir)
            index = render_index(
                version,
                screens,
                self._settings.base_url or "",
                styles_path.stat().st_size,
            )
            (version_dir / "index.html").write_text(index, encoding="utf-8")
        except OSError as e:
            raise BuildError(f"Failed to write build output: {e}", details={"version": version}) from e

        self._ledger.promote(version)
        logger.info("Promoted %s to current version", version)
        return report
