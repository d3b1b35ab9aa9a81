"""Dependency review comparison tool."""

from __future__ import annotations

import json
import logging

import httpx

from depreview.github_client import GetClientFn
from depreview.schema import (
    CallToolRequest,
    CallToolResult,
    Tool,
    ToolAnnotation,
    ToolParameter,
    error_result,
    text_result,
)
from depreview.tools import (
    ToolHandler,
    ToolInvocationError,
    ToolParameterError,
    optional_param,
    required_param,
)
from depreview.translations import TranslationFn

GET_DEPENDENCY_REVIEW_COMPARE = "get_dependency_review_compare"

logger = logging.getLogger(__name__)


def dependency_compare_endpoint(owner: str, repo: str, basehead: str, name: str = "") -> str:
    """Build the dependency graph compare path, with an optional manifest filter."""
    endpoint = f"repos/{owner}/{repo}/dependency-graph/compare/{basehead}"
    if name:
        endpoint = f"{endpoint}?name={name}"
    return endpoint


def get_dependency_review_compare(
    get_client: GetClientFn,
    t: TranslationFn,
) -> tuple[Tool, ToolHandler]:
    """Return the descriptor and handler for comparing dependencies between commits."""
    tool = Tool(
        name=GET_DEPENDENCY_REVIEW_COMPARE,
        description=t(
            "TOOL_GET_DEPENDENCY_REVIEW_COMPARE_DESCRIPTION",
            "Get a diff of the dependencies between commits in a GitHub repository.",
        ),
        annotations=ToolAnnotation(
            title=t(
                "TOOL_GET_DEPENDENCY_REVIEW_COMPARE_USER_TITLE",
                "Compare dependencies between commits",
            ),
            read_only_hint=True,
        ),
        parameters=(
            ToolParameter(
                name="owner",
                required=True,
                description="The account owner of the repository.",
            ),
            ToolParameter(
                name="repo",
                required=True,
                description="The name of the repository.",
            ),
            ToolParameter(
                name="basehead",
                required=True,
                description=(
                    "The base and head Git revisions to compare in the format {base}...{head}."
                ),
            ),
            ToolParameter(
                name="name",
                description=(
                    "The full path, relative to the repository root, "
                    "of the dependency manifest file."
                ),
            ),
        ),
    )

    async def handler(request: CallToolRequest) -> CallToolResult:
        try:
            owner = required_param(request, "owner", str)
            repo = required_param(request, "repo", str)
            basehead = required_param(request, "basehead", str)
            name = optional_param(request, "name", str, "")
        except ToolParameterError as error:
            return error_result(str(error))

        try:
            client = get_client()
        except Exception as error:
            raise ToolInvocationError(f"failed to get GitHub client: {error}") from error

        endpoint = dependency_compare_endpoint(owner, repo, basehead, name)
        try:
            http_request = client.build_request("GET", endpoint)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as error:
            raise ToolInvocationError(f"failed to create request: {error}") from error

        logger.debug("GET %s", http_request.url)
        try:
            response = await client.send(http_request, stream=True)
        except httpx.HTTPError as error:
            raise ToolInvocationError(f"failed to get dependency changes: {error}") from error

        try:
            body = await response.aread()
        except httpx.HTTPError as error:
            raise ToolInvocationError(f"failed to read response body: {error}") from error
        finally:
            await response.aclose()

        if response.status_code != 200:
            logger.warning(
                "Dependency review for %s/%s returned status %s",
                owner,
                repo,
                response.status_code,
            )
            return error_result(
                f"failed to get dependency changes: {body.decode('utf-8', errors='replace')}"
            )

        try:
            dependency_changes = json.loads(body)
            if not isinstance(dependency_changes, list):
                raise TypeError(
                    f"expected a JSON array, got {type(dependency_changes).__name__}"
                )
            result = json.dumps(dependency_changes, ensure_ascii=False, separators=(",", ":"))
        except (ValueError, TypeError) as error:
            raise ToolInvocationError(f"failed to marshal dependency changes: {error}") from error

        logger.debug("Received %d dependency changes", len(dependency_changes))
        return text_result(result)

    return tool, handler
