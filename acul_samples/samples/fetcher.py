"""
Fetch ACUL example markdown from GitHub and turn it into screen samples.

Pipeline per remote file (sequential, sorted by filename):
    download -> extract fenced samples -> pick the best -> repair -> write

A download error for one file is logged and counted; it never aborts the
batch. The manifest and barrel index are written once at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import httpx

from acul_samples.core.config import Settings
from acul_samples.core.errors import DiscoveryError, NoMatchError
from acul_samples.results import BatchReport, ItemResult, ItemStatus
from acul_samples.samples.extractor import extract_samples, select_best_sample
from acul_samples.samples.repairer import repair_sample
from acul_samples.samples.store import Manifest, ManifestEntry, SampleStore

logger = logging.getLogger(__name__)

# Used when the GitHub contents listing is unavailable (rate limits, offline mirrors)
DEFAULT_EXAMPLE_FILES: tuple[str, ...] = (
    "login.md",
    "login-id.md",
    "login-password.md",
    "signup.md",
    "signup-id.md",
    "signup-password.md",
    "consent.md",
    "device-code-confirmation.md",
    "email-otp-challenge.md",
    "email-verification-result.md",
    "login-email-verification.md",
    "logout.md",
    "logout-complete.md",
    "mfa-enroll-result.md",
    "mfa-login-options.md",
    "mfa-otp-enrollment-code.md",
    "organization-picker.md",
    "organization-selection.md",
    "redeem-ticket.md",
    "reset-password-request.md",
)


def screen_id_for(filename: str) -> str:
    """Screen id for an example file, e.g. login-id.md -> login-id."""
    return filename[: -len(".md")] if filename.endswith(".md") else filename


def filter_filenames(filenames: Sequence[str], patterns: Sequence[str] | None) -> list[str]:
    """
    Keep filenames containing any pattern (case-insensitive), sorted.

    Raises:
        NoMatchError: If patterns were given and nothing matches
    """
    ordered = sorted(set(filenames))
    needles = [p.lower() for p in patterns or () if p.strip()]
    if not needles:
        return ordered

    matched = [name for name in ordered if any(n in name.lower() for n in needles)]
    if not matched:
        raise NoMatchError(
            f"No example files match: {', '.join(patterns or ())}",
            details={"patterns": list(patterns or ()), "available": ordered},
        )
    return matched


@dataclass
class FetchReport(BatchReport):
    manifest: Manifest = field(default_factory=dict)


class SampleFetcher:
    """Downloads, extracts and repairs example screens."""

    def __init__(
        self,
        settings: Settings,
        store: SampleStore | None = None,
        client: httpx.Client | None = None,
    ):
        self._settings = settings
        self._store = store or SampleStore(settings.samples_dir)
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=settings.http_timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": "acul-samples"},
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> SampleFetcher:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def discover(self) -> list[str]:
        """
        List example markdown files in the upstream repository.

        Falls back to DEFAULT_EXAMPLE_FILES when the listing call fails.

        Raises:
            DiscoveryError: If no files are found
        """
        try:
            resp = self._client.get(
                self._settings.samples_listing_url,
                headers={"Accept": "application/vnd.github+json"},
            )
            resp.raise_for_status()
            entries = resp.json()
            filenames = [
                entry["name"]
                for entry in entries
                if entry.get("type", "file") == "file" and str(entry.get("name", "")).endswith(".md")
            ]
        except (httpx.HTTPError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Directory listing unavailable (%s), using built-in example list", e)
            filenames = list(DEFAULT_EXAMPLE_FILES)

        if not filenames:
            raise DiscoveryError(
                "No example files found",
                details={"listing_url": self._settings.samples_listing_url},
            )
        return sorted(filenames)

    def download(self, filename: str) -> str:
        url = f"{self._settings.samples_raw_base.rstrip('/')}/{filename}"
        resp = self._client.get(url)
        resp.raise_for_status()
        return resp.text

    def process_file(self, filename: str) -> tuple[ItemResult, ManifestEntry | None]:
        screen_id = screen_id_for(filename)
        logger.info("Fetching %s", filename)

        try:
            markdown = self.download(filename)
        except httpx.HTTPError as e:
            logger.error("Error fetching %s: %s", filename, e, extra={"screen": screen_id})
            return ItemResult.failed(screen_id, f"download failed: {e}"), None

        samples = extract_samples(markdown)
        best = select_best_sample(samples)
        if best is None:
            logger.warning("No code samples found in %s", filename, extra={"screen": screen_id})
            return ItemResult(screen_id, ItemStatus.SKIPPED, reason="no code samples"), None

        code = repair_sample(best, screen_id)
        path = self._store.write_sample(screen_id, code)
        logger.info(
            "Saved %s (%d samples found)",
            path.name,
            len(samples),
            extra={"screen": screen_id},
        )
        entry = ManifestEntry(filename=path.name, sample_count=len(samples))
        return ItemResult.ok(screen_id, artifact=str(path)), entry

    def fetch_all(self, patterns: Sequence[str] | None = None) -> FetchReport:
        """
        Fetch every (matching) example and write samples, manifest and index.

        Args:
            patterns: Optional substrings; a file is kept if it matches any

        Returns:
            FetchReport with per-file results and the manifest written

        Raises:
            DiscoveryError: If nothing can be discovered
            NoMatchError: If patterns match no discovered file
        """
        filenames = filter_filenames(self.discover(), patterns)
        logger.info("Processing %d example files", len(filenames))

        report = FetchReport()
        fetched: Manifest = {}
        for filename in filenames:
            result, entry = self.process_file(filename)
            report.add(result)
            if entry is not None:
                fetched[result.screen_id] = entry

        manifest: Manifest = {}
        if patterns:
            # Partial fetches keep screens fetched by earlier runs
            manifest.update(self._store.load_manifest() or {})
        manifest.update(fetched)

        self._store.write_manifest(manifest)
        self._store.write_index(manifest)
        report.manifest = manifest
        logger.info("Wrote manifest with %d screens", len(manifest))
        return report
