"""Tool registry and tool contracts."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from depreview.schema import CallToolRequest, CallToolResult, Tool, error_result

logger = logging.getLogger(__name__)

T = TypeVar("T")

ToolHandler = Callable[[CallToolRequest], Awaitable[CallToolResult]]


class ToolParameterError(ValueError):
    """Raised when a tool argument is missing or has the wrong type."""


class ToolInvocationError(RuntimeError):
    """Raised when a tool cannot complete because of an infrastructure fault."""


def _matches_type(value: object, expected_type: type) -> bool:
    """Return whether `value` is an instance of `expected_type`, keeping bools apart from ints."""
    if isinstance(value, bool) and expected_type is not bool:
        return False
    return isinstance(value, expected_type)


def required_param(request: CallToolRequest, name: str, expected_type: type[T]) -> T:
    """Read a required argument; absent, null, and empty values count as missing."""
    value = request.arguments.get(name)
    if value is None:
        raise ToolParameterError(f"missing required parameter: {name}")
    if not _matches_type(value, expected_type):
        raise ToolParameterError(f"parameter {name} is not of type {expected_type.__name__}")
    if not value:
        raise ToolParameterError(f"missing required parameter: {name}")
    return value


def optional_param(request: CallToolRequest, name: str, expected_type: type[T], default: T) -> T:
    """Read an optional argument, returning `default` when it is absent or null."""
    value = request.arguments.get(name)
    if value is None:
        return default
    if not _matches_type(value, expected_type):
        raise ToolParameterError(
            f"parameter {name} is not of type {expected_type.__name__}, "
            f"is {type(value).__name__}"
        )
    return value


class ToolRegistry:
    """Name-indexed collection of tools and their handlers."""

    def __init__(self) -> None:
        self._tools: dict[str, tuple[Tool, ToolHandler]] = {}

    def register(self, tool: Tool, handler: ToolHandler) -> None:
        """Register a tool; names must be unique."""
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = (tool, handler)
        logger.debug("Registered tool %s", tool.name)

    def get(self, name: str) -> Tool | None:
        """Return the descriptor registered under `name`, if any."""
        entry = self._tools.get(name)
        return entry[0] if entry is not None else None

    def list_tools(self) -> list[Tool]:
        """Return registered descriptors in registration order."""
        return [tool for tool, _handler in self._tools.values()]

    def list_tools_wire(self) -> list[dict[str, Any]]:
        """Return the tool listing in its camelCase wire shape."""
        return [tool.to_wire() for tool in self.list_tools()]

    async def call(self, request: CallToolRequest) -> CallToolResult:
        """Dispatch `request` to its handler.

        Unknown tool names produce an error result. Infrastructure failures raised
        by a handler are logged and re-raised unchanged.
        """
        entry = self._tools.get(request.name)
        if entry is None:
            return error_result(f"unknown tool: {request.name}")

        _tool, handler = entry
        try:
            return await handler(request)
        except ToolInvocationError:
            logger.exception("Tool %s failed", request.name)
            raise
