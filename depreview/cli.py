"""Typer CLI for the dependency review tool."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Annotated

import httpx
import typer

from depreview.dependency_review import GET_DEPENDENCY_REVIEW_COMPARE
from depreview.github_client import (
    GitHubApiError,
    GitHubAuthError,
    build_github_client,
    fetch_authenticated_user_login,
    get_github_token_with_source,
    static_client_getter,
)
from depreview.schema import CallToolRequest, CallToolResult
from depreview.server import build_registry
from depreview.tools import ToolInvocationError
from depreview.translations import TranslationHelper

app = typer.Typer(help="Compare GitHub dependency graphs between two revisions.")


def _configure_logging(verbose: bool) -> None:
    """Enable debug logging when requested."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _run_compare(
    arguments: dict[str, object],
    *,
    timeout_seconds: int,
    trust_env: bool,
) -> CallToolResult:
    """Run the compare tool against a freshly built client."""
    async with build_github_client(timeout_seconds=timeout_seconds, trust_env=trust_env) as client:
        registry = build_registry(static_client_getter(client), TranslationHelper())
        request = CallToolRequest(name=GET_DEPENDENCY_REVIEW_COMPARE, arguments=arguments)
        return await registry.call(request)


async def _fetch_login(*, timeout_seconds: int, trust_env: bool) -> str:
    """Fetch the authenticated user login with a freshly built client."""
    async with build_github_client(timeout_seconds=timeout_seconds, trust_env=trust_env) as client:
        return await fetch_authenticated_user_login(client=client)


@app.command("compare")
def compare_command(
    owner: Annotated[str, typer.Option(help="The account owner of the repository.")],
    repo: Annotated[str, typer.Option(help="The name of the repository.")],
    basehead: Annotated[
        str, typer.Option(help="Base and head revisions in the format {base}...{head}.")
    ],
    name: Annotated[
        str | None,
        typer.Option(help="Manifest file path, relative to the repository root."),
    ] = None,
    timeout_seconds: Annotated[int, typer.Option(help="GitHub API timeout in seconds.")] = 20,
    trust_env: Annotated[
        bool,
        typer.Option(
            "--trust-env/--no-trust-env",
            help="Use proxy/SSL environment variables from the current shell.",
        ),
    ] = True,
    verbose: Annotated[bool, typer.Option(help="Enable debug logging.")] = False,
) -> None:
    """Print the dependency changes between two revisions as JSON."""
    _configure_logging(verbose)
    arguments: dict[str, object] = {"owner": owner, "repo": repo, "basehead": basehead}
    if name is not None:
        arguments["name"] = name

    try:
        result = asyncio.run(
            _run_compare(arguments, timeout_seconds=timeout_seconds, trust_env=trust_env)
        )
    except (GitHubAuthError, ToolInvocationError) as error:
        typer.echo(f"Dependency review failed: {error}")
        raise typer.Exit(code=1) from error

    if result.is_error:
        typer.echo(f"Dependency review failed: {result.text}")
        raise typer.Exit(code=1)
    typer.echo(result.text)


@app.command("tools")
def tools_command(
    export_translations: Annotated[
        bool,
        typer.Option(help="Write resolved tool strings to the translation config file."),
    ] = False,
) -> None:
    """Print the tool listing as JSON."""
    translations = TranslationHelper()

    def _unavailable_client() -> httpx.AsyncClient:
        raise GitHubAuthError("Listing tools does not create a GitHub client.")

    registry = build_registry(_unavailable_client, translations)
    typer.echo(json.dumps(registry.list_tools_wire(), indent=2))
    if export_translations:
        path = translations.dump()
        typer.echo(f"Wrote translations to {path}.")


@app.command("auth-check")
def auth_check_command(
    timeout_seconds: Annotated[
        int, typer.Option(help="GitHub API timeout in seconds for the validation call.")
    ] = 20,
    trust_env: Annotated[
        bool,
        typer.Option(
            "--trust-env/--no-trust-env",
            help="Use proxy/SSL environment variables from the current shell.",
        ),
    ] = True,
) -> None:
    """Validate GitHub token setup."""
    try:
        _token, token_source = get_github_token_with_source()
    except GitHubAuthError as error:
        typer.echo(f"GitHub auth check failed: {error}")
        raise typer.Exit(code=1) from error

    typer.echo(f"Token detected in {token_source}.")

    try:
        login = asyncio.run(_fetch_login(timeout_seconds=timeout_seconds, trust_env=trust_env))
    except GitHubApiError as error:
        typer.echo(
            "GitHub auth check failed: "
            f"status={error.status_code} endpoint={error.endpoint}."
        )
        raise typer.Exit(code=1) from error
    except httpx.HTTPError as error:
        typer.echo(f"GitHub auth check failed: network error ({error}).")
        raise typer.Exit(code=1) from error
    except ImportError as error:
        typer.echo(
            "GitHub auth check failed: proxy transport dependency is missing. "
            "Try `github-dependency-review auth-check --no-trust-env`, or install `httpx[socks]`."
        )
        raise typer.Exit(code=1) from error

    typer.echo(f"Authenticated as GitHub user '{login}'.")
    typer.echo("GitHub token setup is valid.")
