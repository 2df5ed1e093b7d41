"""
Minimal Auth0 Management API client for prompt rendering configuration.

Only the calls this tool needs:
- POST /oauth/token                                         client credentials
- PATCH /api/v2/prompts/{prompt}/screen/{screen}/rendering  one screen
- PATCH /api/v2/prompts/rendering                           many screens

Required M2M scopes: read:prompts, update:prompts.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

import httpx

from acul_samples.core.errors import AuthenticationError, ManagementApiError
from acul_samples.screens import PromptScreen

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


def advanced_rendering(css_url: str, script_url: str) -> dict[str, Any]:
    """Rendering body pointing a screen at locally served assets."""
    return {
        "rendering_mode": "advanced",
        "head_tags": [
            {"tag": "link", "attributes": {"rel": "stylesheet", "href": css_url}},
            {"tag": "script", "attributes": {"src": script_url, "type": "module"}},
        ],
    }


def standard_rendering() -> dict[str, Any]:
    """Rendering body restoring Auth0's default templates."""
    return {"rendering_mode": "standard", "head_tags": []}


class ManagementClient:
    def __init__(
        self,
        *,
        domain: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._domain = domain
        self._sleep = sleep
        self._token: str | None = None
        self._client = httpx.Client(
            base_url=f"https://{domain}",
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ManagementClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def authenticate(self, *, client_id: str, client_secret: str) -> None:
        """
        Exchange client credentials for a Management API token.

        Raises:
            AuthenticationError: If the exchange is rejected or unreachable
        """
        try:
            resp = self._client.post(
                "/oauth/token",
                json={
                    "grant_type": "client_credentials",
                    "client_id": client_id,
                    "client_secret": client_secret,
                    "audience": f"https://{self._domain}/api/v2/",
                },
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(
                f"Token request to {self._domain} failed: {e}",
                details={"domain": self._domain},
            ) from e

        if resp.status_code != 200:
            raise AuthenticationError(
                f"Failed to get token: {resp.status_code} {resp.text}",
                details={"domain": self._domain, "status_code": resp.status_code},
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise AuthenticationError(
                "Token response was not JSON",
                details={"domain": self._domain, "body": resp.text[:200]},
            ) from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise AuthenticationError(
                "Token response did not contain an access_token",
                details={"domain": self._domain},
            )
        self._token = token

    def _request(self, method: str, path: str, **kwargs) -> Any:
        if self._token is None:
            raise AuthenticationError("Management client is not authenticated")

        headers = {"Authorization": f"Bearer {self._token}"}
        attempt = 1
        while True:
            try:
                resp = self._client.request(method, path, headers=headers, **kwargs)
            except httpx.HTTPError as e:
                raise ManagementApiError(f"{method} {path} failed: {e}") from e
            # Back off on rate limiting only; every other error is final
            if resp.status_code != 429 or attempt >= MAX_ATTEMPTS:
                break
            self._sleep(1.0 * attempt)
            attempt += 1

        if resp.is_error:
            raise ManagementApiError(
                f"{method} {path} failed: {resp.status_code} {resp.text}",
                status_code=resp.status_code,
            )
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ManagementApiError(
                f"{method} {path} returned a non-JSON body",
                status_code=resp.status_code,
                details={"body": resp.text[:200]},
            ) from e

    def update_rendering(self, target: PromptScreen, body: dict[str, Any]) -> Any:
        return self._request(
            "PATCH",
            f"/api/v2/prompts/{target.prompt}/screen/{target.screen}/rendering",
            json=body,
        )

    def bulk_update_rendering(self, configs: Sequence[tuple[PromptScreen, dict[str, Any]]]) -> Any:
        payload = {
            "configs": [
                {"prompt": target.prompt, "screen": target.screen, **body}
                for target, body in configs
            ]
        }
        return self._request("PATCH", "/api/v2/prompts/rendering", json=payload)
