"""Integration tests for the dependency review tool against the live GitHub API."""

from __future__ import annotations

import json
import os

import pytest

from depreview.dependency_review import GET_DEPENDENCY_REVIEW_COMPARE
from depreview.github_client import build_github_client, static_client_getter
from depreview.schema import CallToolRequest
from depreview.server import build_registry


def _integration_target() -> tuple[str, str, str]:
    """Return owner/repo/basehead configured for integration tests."""
    repo_full_name = os.getenv("GITHUB_TEST_REPO")
    basehead = os.getenv("GITHUB_TEST_BASEHEAD")
    if not repo_full_name or not basehead:
        pytest.skip(
            "Set GITHUB_TEST_REPO and GITHUB_TEST_BASEHEAD to run dependency review "
            "integration tests."
        )
    owner, _separator, repo = repo_full_name.partition("/")
    if not owner or not repo:
        pytest.skip("GITHUB_TEST_REPO must be in owner/repo format.")
    return owner, repo, basehead


def _has_github_token() -> bool:
    """Return whether a GitHub token is configured."""
    return bool(os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN"))


@pytest.mark.integration
@pytest.mark.asyncio
async def test_live_dependency_review_compare() -> None:
    if not _has_github_token():
        pytest.skip("Set GITHUB_TOKEN or GH_TOKEN for integration tests.")
    owner, repo, basehead = _integration_target()

    async with build_github_client(timeout_seconds=20) as client:
        registry = build_registry(static_client_getter(client))
        result = await registry.call(
            CallToolRequest(
                name=GET_DEPENDENCY_REVIEW_COMPARE,
                arguments={"owner": owner, "repo": repo, "basehead": basehead},
            )
        )

    assert result.is_error is False, result.text
    assert isinstance(json.loads(result.text), list)
