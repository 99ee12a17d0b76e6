"""MCP protocol layer — JSON-RPC envelopes and method payloads.

The dispatcher lives in :mod:`actions_mcp.protocol.dispatcher`.
"""

from actions_mcp.protocol.models import (
    InitializeResult,
    InvocationResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    Method,
    RequestId,
    ServerInfo,
    TextContent,
)

__all__ = [
    "InitializeResult",
    "InvocationResult",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "Method",
    "RequestId",
    "ServerInfo",
    "TextContent",
]
