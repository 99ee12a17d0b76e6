"""Invocation runtime — argument validation and isolated handler execution."""

from actions_mcp.runtime.executor import InvocationExecutor
from actions_mcp.runtime.models import Invocation, InvocationState

__all__ = [
    "Invocation",
    "InvocationExecutor",
    "InvocationState",
]
