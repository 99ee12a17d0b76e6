"""ToolRegistry — the set of tools a gateway can list and invoke."""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from actions_mcp.errors import DuplicateToolError, UnknownToolError
from actions_mcp.registry.models import RegisteredTool, ToolDescriptor, ToolHandler
from actions_mcp.registry.schema import ObjectSchema, parse_schema

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Name-to-tool map with registration-order listing.

    Reads (``list``, ``resolve``) work on an immutable snapshot and never
    take the lock. Writes are serialized by a lock, build a new snapshot and
    swap it in, so a registration never blocks an in-flight resolution.

    Usage::

        registry = ToolRegistry()
        registry.register(ToolDescriptor(name="echo"), echo_handler)

        @registry.tool(input_schema={"type": "object", "properties": {}})
        async def ping(arguments):
            return "pong"
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tools: Mapping[str, RegisteredTool] = MappingProxyType({})

    def register(self, descriptor: ToolDescriptor, handler: ToolHandler) -> RegisteredTool:
        """Add a tool; raise :class:`DuplicateToolError` if the name is taken."""
        entry = RegisteredTool(descriptor=descriptor, handler=handler)
        with self._lock:
            if descriptor.name in self._tools:
                raise DuplicateToolError(descriptor.name)
            updated = dict(self._tools)
            updated[descriptor.name] = entry
            self._tools = MappingProxyType(updated)
        logger.debug("Registered tool %s", descriptor.name)
        return entry

    def unregister(self, name: str) -> None:
        """Remove a tool; raise :class:`UnknownToolError` if absent."""
        with self._lock:
            if name not in self._tools:
                raise UnknownToolError(name)
            updated = dict(self._tools)
            del updated[name]
            self._tools = MappingProxyType(updated)
        logger.debug("Unregistered tool %s", name)

    def tool(
        self,
        name: str | None = None,
        *,
        description: str | None = None,
        input_schema: ObjectSchema | dict[str, Any] | None = None,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator form of :meth:`register`.

        The tool name defaults to the function name and the description to
        its docstring.
        """

        def decorator(func: ToolHandler) -> ToolHandler:
            schema = input_schema
            if schema is None:
                schema = ObjectSchema()
            elif isinstance(schema, dict):
                schema = parse_schema(schema)
            descriptor = ToolDescriptor(
                name=name or func.__name__,  # type: ignore[attr-defined]
                description=description if description is not None else inspect.getdoc(func) or "",
                input_schema=schema,
            )
            self.register(descriptor, func)
            return func

        return decorator

    def list(self) -> list[ToolDescriptor]:
        """Return all descriptors in registration order."""
        return [entry.descriptor for entry in self._tools.values()]

    def names(self) -> list[str]:
        """Return all tool names in registration order."""
        return list(self._tools)

    def resolve(self, name: str) -> RegisteredTool:
        """Return the tool registered under *name*."""
        entry = self._tools.get(name)
        if entry is None:
            raise UnknownToolError(name)
        return entry

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
