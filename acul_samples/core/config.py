"""Tooling configuration using Pydantic Settings.

Settings are read from environment variables (optionally seeded from an env
file, see acul_samples.core.dotenv). A Settings instance is built once in each
command's entry point and passed to the orchestrators explicitly.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from acul_samples.core.dotenv import find_env_file, load_env_file
from acul_samples.core.errors import ConfigurationError

EXAMPLES_REPO = "auth0/universal-login"
EXAMPLES_PATH = "packages/auth0-acul-js/examples"


class Settings(BaseSettings):
    """
    Connection parameters and local paths for the sample pipeline.

    Auth0 credentials are optional here; commands that talk to the
    Management API call `require_auth0()` before any network activity.
    """

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)

    # Auth0 Management API (client-credentials M2M application)
    auth0_domain: str | None = None
    auth0_client_id: str | None = None
    auth0_client_secret: str | None = None

    # Local static server
    host: str = "127.0.0.1"
    port: int = Field(default=5500, ge=1, le=65535)
    base_url: str | None = None

    # Local paths
    samples_dir: Path = Path("src/samples")
    dist_dir: Path = Path("dist")
    styles_input: Path = Path("src/samples-styles.css")

    # Remote example source
    samples_raw_base: str = (
        f"https://raw.githubusercontent.com/{EXAMPLES_REPO}/master/{EXAMPLES_PATH}"
    )
    samples_listing_url: str = f"https://api.github.com/repos/{EXAMPLES_REPO}/contents/{EXAMPLES_PATH}"

    # HTTP behaviour
    request_delay_seconds: float = Field(
        default=0.5, ge=0.0, validation_alias="ACUL_REQUEST_DELAY_SECONDS"
    )
    http_timeout_seconds: float = Field(default=30.0, gt=0.0)

    # External build tools
    esbuild_command: str = "npx esbuild"
    tailwind_command: str = "npx tailwindcss"

    # Logging
    log_level: str = "INFO"
    structured_logs: bool = False

    @field_validator("auth0_domain", mode="before")
    @classmethod
    def normalize_domain(cls, v: str | None) -> str | None:
        """Strip scheme and trailing slash so `https://x.auth0.com/` == `x.auth0.com`."""
        if v is None:
            return None
        domain = str(v).strip()
        for scheme in ("https://", "http://"):
            if domain.lower().startswith(scheme):
                domain = domain[len(scheme) :]
        domain = domain.rstrip("/")
        return domain or None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"log_level must be a standard logging level, got '{v}'")
        return level

    @model_validator(mode="after")
    def default_base_url(self) -> Settings:
        """Derive BASE_URL from PORT when not set explicitly."""
        if not self.base_url:
            self.base_url = f"http://localhost:{self.port}"
        self.base_url = self.base_url.rstrip("/")
        return self

    @property
    def versions_file(self) -> Path:
        return self.dist_dir / ".versions"

    @property
    def current_version_file(self) -> Path:
        return self.dist_dir / ".current-version"

    @property
    def manifest_path(self) -> Path:
        return self.samples_dir / "manifest.json"

    def require_auth0(self) -> tuple[str, str, str]:
        """
        Return (domain, client_id, client_secret) or fail before any network call.

        Raises:
            ConfigurationError: If any of the three values is missing
        """
        missing = [
            name
            for name, value in (
                ("AUTH0_DOMAIN", self.auth0_domain),
                ("AUTH0_CLIENT_ID", self.auth0_client_id),
                ("AUTH0_CLIENT_SECRET", self.auth0_client_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Missing required environment variables: " + ", ".join(missing),
                details={"missing": missing},
            )
        return self.auth0_domain, self.auth0_client_id, self.auth0_client_secret  # type: ignore[return-value]


def get_settings(load_env: bool = True, **overrides) -> Settings:
    """
    Build settings at process entry.

    Args:
        load_env: Seed os.environ from ENV_FILE / .env first (never overwrites)
        **overrides: Explicit field values, mainly for tests

    Returns:
        A validated Settings instance
    """
    if load_env:
        env_path = find_env_file()
        if env_path:
            load_env_file(env_path, overwrite=False)
    return Settings(**overrides)
