"""
Pytest configuration and shared fixtures.

Provides:
- Isolation from the developer's environment (AUTH0_*, PORT, ENV_FILE ...)
- `settings`: Settings rooted in a temporary project directory
- `store`: SampleStore over the temporary samples directory
- `write_samples`: helper writing sample sources plus a manifest
- `FakeBundler` / `FakeStylesheet`: stand-ins for esbuild and tailwind
- `management_api`: httpx.MockTransport recording Management API calls
"""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Callable
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import httpx  # noqa: E402 (import after path setup)
import pytest  # noqa: E402 (import after path setup)

from acul_samples.build.compiler import ToolResult  # noqa: E402
from acul_samples.core.config import Settings  # noqa: E402
from acul_samples.samples.store import ManifestEntry, SampleStore  # noqa: E402

TEST_DOMAIN = "tenant.test.auth0.com"

_ISOLATED_ENV = (
    "AUTH0_DOMAIN",
    "AUTH0_CLIENT_ID",
    "AUTH0_CLIENT_SECRET",
    "PORT",
    "HOST",
    "BASE_URL",
    "ENV_FILE",
    "SAMPLES_DIR",
    "DIST_DIR",
    "STYLES_INPUT",
    "LOG_LEVEL",
    "STRUCTURED_LOGS",
    "ACUL_REQUEST_DELAY_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch):
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    # load_env_file writes os.environ directly
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    (tmp_path / "src" / "samples").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def make_settings(project_dir: Path) -> Callable[..., Settings]:
    def _make(**overrides) -> Settings:
        values = {
            "samples_dir": project_dir / "src" / "samples",
            "dist_dir": project_dir / "dist",
            "styles_input": project_dir / "src" / "samples-styles.css",
            "auth0_domain": TEST_DOMAIN,
            "auth0_client_id": "test-client-id",
            "auth0_client_secret": "test-client-secret",
            "request_delay_seconds": 0.0,
            "base_url": "http://localhost:5500",
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def settings(make_settings: Callable[..., Settings]) -> Settings:
    return make_settings()


@pytest.fixture
def store(settings: Settings) -> SampleStore:
    return SampleStore(settings.samples_dir)


DEFAULT_SOURCE = """import React from 'react';

export default function Screen() {
  return <div className="p-4">screen</div>;
}
"""


@pytest.fixture
def write_samples(store: SampleStore) -> Callable[..., list[str]]:
    """Write `<id>.tsx` for each screen id and a manifest listing them."""

    def _write(*screen_ids: str, source: str = DEFAULT_SOURCE, manifest: bool = True) -> list[str]:
        for screen_id in screen_ids:
            store.write_sample(screen_id, source)
        if manifest:
            store.write_manifest(
                {s: ManifestEntry(filename=f"{s}.tsx", sample_count=1) for s in screen_ids}
            )
        return list(screen_ids)

    return _write


class FakeBundler:
    """Writes a trivial module, or fails for screens listed in `fail`."""

    def __init__(self, fail: set[str] | None = None):
        self.fail = fail or set()
        self.calls: list[tuple[Path, Path]] = []
        self.wrappers: dict[str, str] = {}

    def bundle(self, entry: Path, outfile: Path) -> ToolResult:
        self.calls.append((entry, outfile))
        screen_id = outfile.parent.name
        self.wrappers[screen_id] = entry.read_text(encoding="utf-8")
        if screen_id in self.fail:
            return ToolResult(ok=False, output=f"✘ [ERROR] Could not resolve import in {screen_id}")
        outfile.write_text(f"// bundled {screen_id}\n", encoding="utf-8")
        return ToolResult(ok=True)


class FakeStylesheet:
    def __init__(self, ok: bool = True):
        self.ok = ok
        self.calls: list[tuple[Path, Path, str]] = []
        self.inputs: list[str] = []

    def compile(self, input_path: Path, outfile: Path, content_glob: str) -> ToolResult:
        self.calls.append((input_path, outfile, content_glob))
        self.inputs.append(input_path.read_text(encoding="utf-8"))
        if not self.ok:
            return ToolResult(ok=False, output="Error: tailwind exploded")
        outfile.write_text("*,:after{box-sizing:border-box}", encoding="utf-8")
        return ToolResult(ok=True)


class ManagementApiStub:
    """Records Management API requests and answers them from simple rules."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_status = 200
        self.fail_paths: set[str] = set()
        # Paths answered with 200 and an HTML body, as a misconfigured proxy would
        self.html_paths: set[str] = set()
        self.rate_limited_once: set[str] = set()
        self._rate_limited_seen: set[str] = set()

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith("/api/v2/")]

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.api_requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.html_paths:
            return httpx.Response(200, text="<html>proxy</html>")

        if path == "/oauth/token":
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "access_denied"})
            return httpx.Response(200, json={"access_token": "mgmt-token", "token_type": "Bearer"})

        assert request.headers["Authorization"] == "Bearer mgmt-token"

        if path in self.rate_limited_once and path not in self._rate_limited_seen:
            self._rate_limited_seen.add(path)
            return httpx.Response(429, json={"message": "Too Many Requests"})

        if path in self.fail_paths:
            return httpx.Response(400, json={"message": "Invalid screen"})

        return httpx.Response(200, json=json.loads(request.content or b"{}"))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def management_api() -> ManagementApiStub:
    return ManagementApiStub()
