"""Shared error types for the gateway.

Every error that can reach the wire carries the JSON-RPC ``code`` it maps
to, so the dispatcher can shape an error envelope without knowing the
concrete failure type.
"""

from __future__ import annotations

from typing import Any

INVALID_PARAMS = -32602
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class GatewayError(Exception):
    """Base error for all gateway failures."""

    code: int = INTERNAL_ERROR


class DuplicateToolError(GatewayError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class UnknownToolError(GatewayError):
    """Requested tool does not exist in the registry."""

    code = INVALID_PARAMS

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidParamsError(GatewayError):
    """The request ``params`` do not have the shape the method expects."""

    code = INVALID_PARAMS


class SchemaValidationError(InvalidParamsError):
    """Tool arguments do not satisfy the tool's declared input schema."""

    def __init__(self, tool_name: str, violations: list[str]) -> None:
        self.tool_name = tool_name
        self.violations = violations
        super().__init__(f"Invalid arguments for tool {tool_name}: " + "; ".join(violations))


class MethodNotFoundError(GatewayError):
    """The JSON-RPC ``method`` is not one the gateway serves."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: Any) -> None:
        self.method = method
        super().__init__("Method not found")


class MalformedRequestError(GatewayError):
    """The request body is not a parseable JSON-RPC envelope."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Malformed request" + (f": {detail}" if detail else ""))


class ToolExecutionError(GatewayError):
    """A tool handler failed.

    Handler-internal exception types never cross this boundary; only the
    original message is carried.
    """

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(detail or f"Tool execution failed: {name}")


class InvocationCancelledError(ToolExecutionError):
    """The invocation was cancelled by the caller while running."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Invocation of {name} was cancelled")


class InvocationTimeoutError(ToolExecutionError):
    """The invocation exceeded its timeout."""

    def __init__(self, name: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(name, f"Invocation of {name} timed out after {timeout}s")
