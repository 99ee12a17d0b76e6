"""Tests for the built-in action tools."""

import json

from actions_mcp.registry.schema import ObjectSchema
from actions_mcp.tools.actions import (
    LIST_ACTIONS,
    RUN_ACTION,
    build_default_registry,
    list_actions,
    run_action,
)


class TestListActions:
    async def test_default_filters(self) -> None:
        payload = json.loads(await list_actions({}))
        assert payload == {"actions": [], "total": 0, "filters": {"limit": 20}}

    async def test_filters_echoed(self) -> None:
        payload = json.loads(await list_actions({"type": "deploy", "limit": 5}))
        assert payload["filters"] == {"type": "deploy", "limit": 5}

    def test_schema_has_no_required(self) -> None:
        assert isinstance(LIST_ACTIONS.input_schema, ObjectSchema)
        assert LIST_ACTIONS.input_schema.required is None


class TestRunAction:
    async def test_echoes_action_id(self) -> None:
        payload = json.loads(await run_action({"action_id": "a1", "params": {"x": 1}}))
        assert payload == {"action_id": "a1", "status": "completed", "result": {"success": True}}

    def test_action_id_required(self) -> None:
        assert isinstance(RUN_ACTION.input_schema, ObjectSchema)
        assert RUN_ACTION.input_schema.required == ("action_id",)


class TestDefaultRegistry:
    def test_fresh_instance_each_call(self) -> None:
        first = build_default_registry()
        second = build_default_registry()
        assert first is not second
        assert first.names() == ["list_actions", "run_action"]


class TestWireForm:
    def test_list_actions_descriptor(self) -> None:
        assert LIST_ACTIONS.to_wire() == {
            "name": "list_actions",
            "description": "List available Claude Code actions",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "type": {"type": "string", "description": "Filter by action type"},
                    "limit": {
                        "type": "number",
                        "description": "Maximum number of actions to return (default: 20)",
                    },
                },
            },
        }

    def test_run_action_descriptor(self) -> None:
        assert RUN_ACTION.to_wire() == {
            "name": "run_action",
            "description": "Execute a Claude Code action",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "action_id": {"type": "string", "description": "The action ID to execute"},
                    "params": {"type": "object", "description": "Parameters for the action"},
                },
                "required": ["action_id"],
            },
        }
