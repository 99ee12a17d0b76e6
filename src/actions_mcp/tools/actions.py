"""Built-in ``list_actions`` and ``run_action`` tools.

The action catalogue itself is an external collaborator; these handlers
answer with the reference payloads so the gateway is usable end to end.
"""

from __future__ import annotations

import json
from typing import Any

from actions_mcp.registry.models import ToolDescriptor
from actions_mcp.registry.registry import ToolRegistry
from actions_mcp.registry.schema import NumberSchema, ObjectSchema, StringSchema

DEFAULT_LIST_LIMIT = 20

LIST_ACTIONS = ToolDescriptor(
    name="list_actions",
    description="List available Claude Code actions",
    input_schema=ObjectSchema(
        properties={
            "type": StringSchema(description="Filter by action type"),
            "limit": NumberSchema(
                description=f"Maximum number of actions to return (default: {DEFAULT_LIST_LIMIT})"
            ),
        },
    ),
)

RUN_ACTION = ToolDescriptor(
    name="run_action",
    description="Execute a Claude Code action",
    input_schema=ObjectSchema(
        properties={
            "action_id": StringSchema(description="The action ID to execute"),
            "params": ObjectSchema(description="Parameters for the action"),
        },
        required=("action_id",),
    ),
)


async def list_actions(arguments: dict[str, Any]) -> str:
    filters: dict[str, Any] = {}
    if arguments.get("type") is not None:
        filters["type"] = arguments["type"]
    filters["limit"] = arguments.get("limit", DEFAULT_LIST_LIMIT)
    return json.dumps({"actions": [], "total": 0, "filters": filters})


async def run_action(arguments: dict[str, Any]) -> str:
    return json.dumps(
        {
            "action_id": arguments["action_id"],
            "status": "completed",
            "result": {"success": True},
        }
    )


def register_builtin_tools(registry: ToolRegistry) -> None:
    """Register ``list_actions`` and ``run_action`` on *registry*."""
    registry.register(LIST_ACTIONS, list_actions)
    registry.register(RUN_ACTION, run_action)


def build_default_registry() -> ToolRegistry:
    """Return a fresh registry holding the built-in tools."""
    registry = ToolRegistry()
    register_builtin_tools(registry)
    return registry
