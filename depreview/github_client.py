"""GitHub API client construction and auth helpers."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
from dotenv import load_dotenv

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_API_URL_ENV_VAR = "GITHUB_API_URL"
DEFAULT_TIMEOUT_SECONDS = 20

logger = logging.getLogger(__name__)

GetClientFn = Callable[[], httpx.AsyncClient]


class GitHubAuthError(RuntimeError):
    """Raised when required GitHub authentication is missing."""


class GitHubApiError(RuntimeError):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, *, status_code: int, endpoint: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


def _load_env() -> None:
    """Load `.env` from the working directory without overriding the environment."""
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)


def get_github_token() -> str:
    """Read GitHub token from environment and fail fast if missing."""
    token, _source = get_github_token_with_source()
    return token


def get_github_token_with_source() -> tuple[str, str]:
    """Read GitHub token and return token value with environment source key."""
    _load_env()

    github_token = os.getenv("GITHUB_TOKEN")
    if github_token:
        return github_token, "GITHUB_TOKEN"

    gh_token = os.getenv("GH_TOKEN")
    if gh_token:
        return gh_token, "GH_TOKEN"

    message = "Missing GitHub token. Set GITHUB_TOKEN (preferred) or GH_TOKEN."
    raise GitHubAuthError(message)


def get_github_api_base_url() -> str:
    """Return the API base URL, honoring a GitHub Enterprise override."""
    _load_env()
    configured_url = os.getenv(GITHUB_API_URL_ENV_VAR)
    if configured_url:
        return configured_url.rstrip("/")
    return GITHUB_API_BASE_URL


def build_github_client(
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    *,
    trust_env: bool = True,
) -> httpx.AsyncClient:
    """Build an authenticated GitHub HTTP client."""
    token = get_github_token()
    headers = {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    base_url = get_github_api_base_url()
    logger.debug("Building GitHub client for %s", base_url)
    return httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=timeout_seconds,
        trust_env=trust_env,
    )


def static_client_getter(client: httpx.AsyncClient) -> GetClientFn:
    """Return a client-provisioning function that always yields `client`."""

    def get_client() -> httpx.AsyncClient:
        return client

    return get_client


def _ensure_mapping(value: object, *, endpoint: str) -> dict[str, Any]:
    """Ensure a response payload is a JSON object."""
    if not isinstance(value, dict):
        raise GitHubApiError(
            f"Expected JSON object for {endpoint}.",
            status_code=500,
            endpoint=endpoint,
        )
    return value


async def fetch_authenticated_user_login(*, client: httpx.AsyncClient) -> str:
    """Fetch authenticated GitHub user login for token validation."""
    endpoint = "/user"
    response = await client.get(endpoint)
    if response.status_code != 200:
        raise GitHubApiError(
            f"GitHub API request failed with status {response.status_code} for '{endpoint}'.",
            status_code=response.status_code,
            endpoint=endpoint,
        )
    payload = _ensure_mapping(response.json(), endpoint=endpoint)
    login = payload.get("login")
    if not isinstance(login, str):
        raise GitHubApiError(
            "Expected string field 'login' in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    return login
