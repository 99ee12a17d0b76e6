"""Built-in tools shipped with the gateway."""

from actions_mcp.tools.actions import (
    LIST_ACTIONS,
    RUN_ACTION,
    build_default_registry,
    register_builtin_tools,
)

__all__ = [
    "LIST_ACTIONS",
    "RUN_ACTION",
    "build_default_registry",
    "register_builtin_tools",
]
