"""
Domain-specific exceptions for the ACUL sample tooling.

Only configuration, discovery, authentication and catastrophic build
problems escape a command as exceptions. Per-screen failures are recorded
as results (see acul_samples.results) and summarised at the end of a run.

Each exception maps to a process exit code in the command layer.
"""

from typing import Any


class AculError(Exception):
    """Base exception for all ACUL tooling errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(AculError):
    """
    Raised when required configuration or local state is missing.

    Examples:
    - AUTH0_DOMAIN / AUTH0_CLIENT_ID / AUTH0_CLIENT_SECRET not set
    - No build version found (deploy before build)
    - No samples to build, no dist directory to serve

    Exit code: 2
    """

    pass


class DiscoveryError(AculError):
    """
    Raised when no remote example files can be discovered.

    Exit code: 3
    """

    pass


class NoMatchError(DiscoveryError):
    """
    Raised when fetch patterns filter the remote file list down to nothing.

    Exit code: 3
    """

    pass


class AuthenticationError(AculError):
    """
    Raised when the client-credentials token exchange is rejected.

    Exit code: 4
    """

    pass


class BuildError(AculError):
    """
    Raised when the build cannot produce a usable version.

    Examples:
    - Stylesheet compilation failed
    - Version directory could not be written

    Per-screen compile failures do NOT raise this; they produce placeholders.

    Exit code: 5
    """

    pass


class ManagementApiError(AculError):
    """
    Raised by the Management API client when a request fails.

    Orchestrators catch this per screen and count it as a failed item.

    Exit code: 1
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)


# Exit Code Mapping
ERROR_EXIT_CODE_MAP = {
    ConfigurationError: 2,
    DiscoveryError: 3,
    NoMatchError: 3,
    AuthenticationError: 4,
    BuildError: 5,
    ManagementApiError: 1,
}


def get_exit_code(error: Exception) -> int:
    """
    Get the process exit code for a given exception.

    Args:
        error: The exception instance

    Returns:
        Exit code (defaults to 1 for unknown errors)
    """
    return ERROR_EXIT_CODE_MAP.get(type(error), 1)
