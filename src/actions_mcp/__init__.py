"""actions-mcp — a Model Context Protocol tool gateway served over HTTP."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from actions_mcp.protocol.dispatcher import ProtocolDispatcher as ProtocolDispatcher
    from actions_mcp.registry.registry import ToolRegistry as ToolRegistry
    from actions_mcp.runtime.executor import InvocationExecutor as InvocationExecutor
    from actions_mcp.server.app import create_app as create_app

_LAZY_EXPORTS = {
    "ProtocolDispatcher": "actions_mcp.protocol.dispatcher",
    "ToolRegistry": "actions_mcp.registry.registry",
    "InvocationExecutor": "actions_mcp.runtime.executor",
    "create_app": "actions_mcp.server.app",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'actions_mcp' has no attribute {name!r}")
