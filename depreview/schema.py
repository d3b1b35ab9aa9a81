"""Schema contract for tool descriptors, requests, and results."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TOOL_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


class ParameterType(StrEnum):
    """JSON schema types supported for tool parameters."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class ToolParameter(BaseModel):
    """One named argument accepted by a tool."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    type: ParameterType = ParameterType.STRING
    description: str = Field(default="")
    required: bool = False


class ToolAnnotation(BaseModel):
    """Behavioral hints shown to the calling agent."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = Field(default="")
    read_only_hint: bool = False


class Tool(BaseModel):
    """Declaration of a callable tool: name, description, and parameters."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    parameters: tuple[ToolParameter, ...] = ()
    annotations: ToolAnnotation = Field(default_factory=ToolAnnotation)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Validate the tool name is a snake_case identifier."""
        if not TOOL_NAME_PATTERN.fullmatch(value):
            raise ValueError("name must be a lowercase snake_case identifier.")
        return value

    @model_validator(mode="after")
    def validate_unique_parameters(self) -> Tool:
        """Validate that parameter names are unique."""
        names = [parameter.name for parameter in self.parameters]
        if len(names) != len(set(names)):
            raise ValueError("parameter names must be unique")
        return self

    @property
    def required(self) -> list[str]:
        """Return names of required parameters in declaration order."""
        return [parameter.name for parameter in self.parameters if parameter.required]

    def input_schema(self) -> dict[str, Any]:
        """Return the JSON schema object describing the tool arguments."""
        properties = {
            parameter.name: {
                "type": parameter.type.value,
                "description": parameter.description,
            }
            for parameter in self.parameters
        }
        return {"type": "object", "properties": properties, "required": self.required}

    def to_wire(self) -> dict[str, Any]:
        """Render the tool in the camelCase shape used by tool listings."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
            "annotations": {
                "title": self.annotations.title,
                "readOnlyHint": self.annotations.read_only_hint,
            },
        }


class TextContent(BaseModel):
    """Plain-text content block inside a tool result."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["text"] = "text"
    text: str


class CallToolRequest(BaseModel):
    """Invocation of a named tool with untyped arguments."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)


class CallToolResult(BaseModel):
    """Outcome of a tool invocation that completed."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: tuple[TextContent, ...] = ()
    is_error: bool = False

    @property
    def text(self) -> str:
        """Return all text content joined by newlines."""
        return "\n".join(block.text for block in self.content)


def text_result(text: str) -> CallToolResult:
    """Build a successful result carrying `text`."""
    return CallToolResult(content=(TextContent(text=text),))


def error_result(text: str) -> CallToolResult:
    """Build an error result carrying a message for the caller."""
    return CallToolResult(content=(TextContent(text=text),), is_error=True)
