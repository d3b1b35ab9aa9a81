"""Tests for tool contracts, argument helpers, and the registry."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from depreview.schema import (
    CallToolRequest,
    CallToolResult,
    Tool,
    ToolAnnotation,
    ToolParameter,
    error_result,
    text_result,
)
from depreview.server import build_registry
from depreview.tools import (
    ToolInvocationError,
    ToolParameterError,
    ToolRegistry,
    optional_param,
    required_param,
)


def make_tool(name: str = "echo_text") -> Tool:
    """Build a small descriptor for registry tests."""
    return Tool(
        name=name,
        description="Echo text back.",
        parameters=(
            ToolParameter(name="text", required=True, description="Text to echo."),
            ToolParameter(name="suffix", description="Optional suffix."),
        ),
        annotations=ToolAnnotation(title="Echo", read_only_hint=True),
    )


async def echo_handler(request: CallToolRequest) -> CallToolResult:
    """Echo the `text` argument."""
    return text_result(str(request.arguments["text"]))


@pytest.mark.unit
def test_required_param_returns_value() -> None:
    request = CallToolRequest(name="echo_text", arguments={"text": "hi"})
    assert required_param(request, "text", str) == "hi"


@pytest.mark.unit
@pytest.mark.parametrize("arguments", [{}, {"text": None}, {"text": ""}])
def test_required_param_rejects_missing_values(arguments: dict[str, object]) -> None:
    request = CallToolRequest(name="echo_text", arguments=arguments)
    with pytest.raises(ToolParameterError, match="missing required parameter: text"):
        required_param(request, "text", str)


@pytest.mark.unit
def test_required_param_rejects_bool_for_int() -> None:
    request = CallToolRequest(name="echo_text", arguments={"count": True})
    with pytest.raises(ToolParameterError, match="parameter count is not of type int"):
        required_param(request, "count", int)


@pytest.mark.unit
def test_optional_param_defaults_when_absent() -> None:
    request = CallToolRequest(name="echo_text", arguments={"suffix": None})
    assert optional_param(request, "suffix", str, "") == ""
    assert optional_param(request, "other", str, "fallback") == "fallback"


@pytest.mark.unit
def test_optional_param_rejects_wrong_type() -> None:
    request = CallToolRequest(name="echo_text", arguments={"suffix": 3})
    with pytest.raises(ToolParameterError, match="parameter suffix is not of type str, is int"):
        optional_param(request, "suffix", str, "")


@pytest.mark.unit
def test_tool_to_wire_uses_camel_case_keys() -> None:
    wire = make_tool().to_wire()

    assert wire["name"] == "echo_text"
    assert wire["inputSchema"] == {
        "type": "object",
        "properties": {
            "text": {"type": "string", "description": "Text to echo."},
            "suffix": {"type": "string", "description": "Optional suffix."},
        },
        "required": ["text"],
    }
    assert wire["annotations"] == {"title": "Echo", "readOnlyHint": True}


@pytest.mark.unit
def test_tool_rejects_duplicate_parameter_names() -> None:
    with pytest.raises(ValidationError):
        Tool(
            name="echo_text",
            description="Echo text back.",
            parameters=(ToolParameter(name="text"), ToolParameter(name="text")),
        )


@pytest.mark.unit
def test_tool_rejects_invalid_name() -> None:
    with pytest.raises(ValidationError):
        Tool(name="Echo Text", description="Echo text back.")


@pytest.mark.unit
def test_result_builders_set_error_flag() -> None:
    assert text_result("ok").is_error is False
    assert error_result("boom").is_error is True
    assert error_result("boom").text == "boom"


@pytest.mark.unit
def test_registry_rejects_duplicate_registration() -> None:
    registry = ToolRegistry()
    registry.register(make_tool(), echo_handler)

    with pytest.raises(ValueError, match="Tool already registered: echo_text"):
        registry.register(make_tool(), echo_handler)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_registry_dispatches_by_name() -> None:
    registry = ToolRegistry()
    registry.register(make_tool(), echo_handler)

    result = await registry.call(CallToolRequest(name="echo_text", arguments={"text": "hello"}))

    assert result.is_error is False
    assert result.text == "hello"
    assert registry.get("echo_text") == make_tool()
    assert registry.get("missing") is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_registry_returns_error_result_for_unknown_tool() -> None:
    result = await ToolRegistry().call(CallToolRequest(name="missing_tool"))

    assert result.is_error is True
    assert result.text == "unknown tool: missing_tool"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_registry_logs_and_reraises_invocation_errors(
    caplog: pytest.LogCaptureFixture,
) -> None:
    async def failing_handler(request: CallToolRequest) -> CallToolResult:
        raise ToolInvocationError("failed to get GitHub client: boom")

    registry = ToolRegistry()
    registry.register(make_tool(), failing_handler)

    with caplog.at_level(logging.ERROR, logger="depreview.tools"):
        with pytest.raises(ToolInvocationError, match="boom"):
            await registry.call(CallToolRequest(name="echo_text", arguments={"text": "x"}))

    assert "Tool echo_text failed" in caplog.text


@pytest.mark.unit
def test_build_registry_lists_dependency_review_tool() -> None:
    def get_client() -> object:
        raise AssertionError("Listing tools must not create a client.")

    registry = build_registry(get_client)  # type: ignore[arg-type]

    assert [tool["name"] for tool in registry.list_tools_wire()] == [
        "get_dependency_review_compare"
    ]
