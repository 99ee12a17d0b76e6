"""Registry models — tool descriptors and their handler bindings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from actions_mcp.registry.schema import ObjectSchema

ToolHandler = Callable[[dict[str, Any]], Any]
"""A tool implementation.

Receives the validated arguments and returns an
:class:`~actions_mcp.protocol.models.InvocationResult`, a string, or any
JSON-serializable value. May be a plain function or a coroutine function.
"""


class ToolDescriptor(BaseModel):
    """A tool as advertised by ``tools/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    description: str = ""
    input_schema: ObjectSchema = Field(default_factory=ObjectSchema, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        """Return the MCP wire form (``name``, ``description``, ``inputSchema``)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class RegisteredTool:
    """A descriptor bound to the handler that implements it."""

    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name
