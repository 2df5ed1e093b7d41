"""
Deploy and cleanup of tenant rendering configuration.

Deploy points each screen at the current build with one PATCH per screen,
spaced by a fixed delay to stay under Management API rate limits. Cleanup
resets every screen to standard rendering with a single bulk PATCH.

Both follow the same run shape:
    validate config -> authenticate -> process screens -> summary report
A failure for one screen is logged and counted; it never stops the run.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from acul_samples.build.ledger import VersionLedger, is_version_id
from acul_samples.core.config import Settings
from acul_samples.core.errors import ConfigurationError, ManagementApiError
from acul_samples.results import BatchReport, ItemResult
from acul_samples.samples.store import SampleStore
from acul_samples.screens import get_prompt_and_screen
from acul_samples.services.management import (
    ManagementClient,
    advanced_rendering,
    standard_rendering,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], ManagementClient]


def default_client_factory(settings: Settings) -> ManagementClient:
    return ManagementClient(
        domain=settings.auth0_domain or "",
        timeout=settings.http_timeout_seconds,
    )


@dataclass
class DeployReport(BatchReport):
    version: str = ""
    css_url: str = ""


class RenderingDeployer:
    """Pushes rendering configuration for local builds to an Auth0 tenant."""

    def __init__(
        self,
        settings: Settings,
        store: SampleStore | None = None,
        ledger: VersionLedger | None = None,
        client_factory: ClientFactory = default_client_factory,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._settings = settings
        self._store = store or SampleStore(settings.samples_dir)
        self._ledger = ledger or VersionLedger(settings.dist_dir)
        self._client_factory = client_factory
        self._sleep = sleep

    def asset_urls(self, version: str, screen_id: str) -> tuple[str, str]:
        base = self._settings.base_url
        return f"{base}/{version}/styles.css", f"{base}/{version}/{screen_id}/component.js"

    def _current_version(self) -> str:
        version = self._ledger.current()
        if not version:
            raise ConfigurationError("No build version found! Run acul-build first.")
        if not self._ledger.version_dir(version).is_dir():
            raise ConfigurationError(
                f"Current version {version} has no build directory. Run acul-build again.",
                details={"version": version},
            )
        return version

    def _work_set(self, screen_ids: Sequence[str] | None, version: str | None = None) -> list[str]:
        if screen_ids:
            return list(dict.fromkeys(screen_ids))
        screens = self._store.known_screens()
        if not screens and version:
            version_dir = self._ledger.version_dir(version)
            if version_dir.is_dir():
                screens = sorted(p.name for p in version_dir.iterdir() if p.is_dir())
        return screens

    def _open_client(self) -> ManagementClient:
        _, client_id, client_secret = self._settings.require_auth0()
        client = self._client_factory(self._settings)
        logger.info("Authenticating with %s", client.domain)
        try:
            client.authenticate(client_id=client_id, client_secret=client_secret)
        except Exception:
            client.close()
            raise
        logger.info("Authentication successful")
        return client

    def deploy(self, screen_ids: Sequence[str] | None = None) -> DeployReport:
        """
        Point each screen at the current version's assets.

        Args:
            screen_ids: Screens to deploy; defaults to every known screen

        Returns:
            DeployReport with succeeded/failed/total counts

        Raises:
            ConfigurationError: Missing credentials, build or screens
            AuthenticationError: Token exchange rejected
        """
        self._settings.require_auth0()
        version = self._current_version()
        screens = self._work_set(screen_ids, version)
        if not screens:
            raise ConfigurationError("No screens to deploy. Run acul-fetch and acul-build first.")

        css_url, _ = self.asset_urls(version, "")
        report = DeployReport(version=version, css_url=css_url)
        logger.info("Deploying %d screens from %s", len(screens), version)

        client = self._open_client()
        try:
            requests_made = 0
            for screen_id in screens:
                component = self._ledger.version_dir(version) / screen_id / "component.js"
                if not component.is_file():
                    logger.warning(
                        "Skipping %s - component file not found", screen_id, extra={"screen": screen_id}
                    )
                    report.add(ItemResult.failed(screen_id, f"not built in {version}"))
                    continue

                if requests_made:
                    self._sleep(self._settings.request_delay_seconds)
                requests_made += 1

                target = get_prompt_and_screen(screen_id)
                _, script_url = self.asset_urls(version, screen_id)
                try:
                    client.update_rendering(target, advanced_rendering(css_url, script_url))
                except ManagementApiError as e:
                    logger.error(
                        "Failed to deploy %s: %s", screen_id, e.message, extra={"screen": screen_id}
                    )
                    report.add(ItemResult.failed(screen_id, e.message))
                    continue

                logger.info("Updated %s/%s", target.prompt, target.screen, extra={"screen": screen_id})
                report.add(ItemResult.ok(screen_id, artifact=script_url))
        finally:
            client.close()

        return report

    def cleanup(self, screen_ids: Sequence[str] | None = None) -> BatchReport:
        """
        Reset screens to standard rendering with one bulk call.

        Local build output is left in place.

        Raises:
            ConfigurationError: Missing credentials
            AuthenticationError: Token exchange rejected
        """
        self._settings.require_auth0()
        report = BatchReport()

        current = self._ledger.current()
        screens = self._work_set(screen_ids, current if current and is_version_id(current) else None)
        if not screens:
            logger.info("No screens to clean up")
            return report

        logger.info("Resetting %d screens to standard rendering", len(screens))
        client = self._open_client()
        try:
            configs = [(get_prompt_and_screen(s), standard_rendering()) for s in screens]
            try:
                client.bulk_update_rendering(configs)
            except ManagementApiError as e:
                logger.error("Bulk reset failed: %s", e.message)
                for screen_id in screens:
                    report.add(ItemResult.failed(screen_id, e.message))
                return report
        finally:
            client.close()

        for screen_id in screens:
            report.add(ItemResult.ok(screen_id))
        return report
