"""
Local static server for built versions.

The tenant's login pages load styles.css and component.js straight from this
server, so every response carries permissive CORS headers.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from acul_samples.build.ledger import VersionLedger
from acul_samples.core.config import Settings
from acul_samples.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def create_app(settings: Settings) -> FastAPI:
    """
    Build the static file app for the dist directory.

    Raises:
        ConfigurationError: If nothing has been built yet
    """
    dist_dir = settings.dist_dir
    if not dist_dir.is_dir():
        raise ConfigurationError(
            "No dist directory found. Run acul-build first.",
            details={"dist_dir": str(dist_dir)},
        )

    ledger = VersionLedger(dist_dir)
    app = FastAPI(title="Auth0 ACUL samples", docs_url=None, redoc_url=None, openapi_url=None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    @app.get("/healthz")
    def healthz() -> dict:
        return {"ok": True, "version": ledger.current()}

    app.mount("/", StaticFiles(directory=dist_dir, html=True), name="dist")
    return app


def startup_lines(settings: Settings) -> list[str]:
    """Console banner listing the URLs of the current version."""
    ledger = VersionLedger(settings.dist_dir)
    version = ledger.current()
    base = settings.base_url
    lines = [f"Server: http://{settings.host}:{settings.port}"]
    if not version:
        lines.append("No current version; run acul-build")
        return lines

    lines.append(f"Version: {version}")
    lines.append(f"Index:   {base}/{version}/index.html")
    lines.append(f"CSS:     {base}/{version}/styles.css")
    version_dir = ledger.version_dir(version)
    if version_dir.is_dir():
        for screen_dir in sorted(p for p in version_dir.iterdir() if p.is_dir()):
            lines.append(f"  {screen_dir.name:<40} {base}/{version}/{screen_dir.name}/component.js")
    return lines


def run_server(settings: Settings) -> None:
    import uvicorn

    app = create_app(settings)
    for line in startup_lines(settings):
        logger.info(line)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def find_listening_pids(port: int) -> list[int]:
    """PIDs listening on `port`, via lsof. Empty when none (or lsof is missing)."""
    try:
        result = subprocess.run(
            ["lsof", f"-ti:{port}", "-sTCP:LISTEN"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except FileNotFoundError:
        logger.warning("lsof not found; cannot look up processes on port %d", port)
        return []
    except subprocess.TimeoutExpired:
        logger.warning("lsof timed out looking up port %d", port)
        return []
    return sorted({int(line) for line in result.stdout.split() if line.strip().isdigit()})


def stop_server(port: int) -> list[int]:
    """Send SIGTERM to whatever listens on `port`. Returns the PIDs signalled."""
    stopped: list[int] = []
    for pid in find_listening_pids(port):
        if pid == os.getpid():
            continue
        try:
            os.kill(pid, signal.SIGTERM)
        except ProcessLookupError:
            continue
        stopped.append(pid)
    return stopped
