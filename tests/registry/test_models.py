"""Tests for ToolDescriptor serialization."""

import pytest
from pydantic import ValidationError

from actions_mcp.registry.models import ToolDescriptor
from actions_mcp.registry.schema import NumberSchema, ObjectSchema, StringSchema
from actions_mcp.tools.actions import LIST_ACTIONS, RUN_ACTION


class TestToolDescriptor:
    def test_defaults(self) -> None:
        tool = ToolDescriptor(name="read_file")
        assert tool.description == ""
        assert tool.input_schema == ObjectSchema()

    def test_populate_by_alias(self) -> None:
        tool = ToolDescriptor.model_validate(
            {
                "name": "search",
                "description": "Search files",
                "inputSchema": {
                    "type": "object",
                    "properties": {"query": {"type": "string"}},
                    "required": ["query"],
                },
            }
        )
        assert isinstance(tool.input_schema, ObjectSchema)
        assert tool.input_schema.properties["query"] == StringSchema()

    def test_wire_shape(self) -> None:
        tool = ToolDescriptor(
            name="count",
            description="Count things",
            input_schema=ObjectSchema(properties={"n": NumberSchema()}),
        )
        assert tool.to_wire() == {
            "name": "count",
            "description": "Count things",
            "inputSchema": {"type": "object", "properties": {"n": {"type": "number"}}},
        }

    def test_round_trip(self) -> None:
        for tool in (LIST_ACTIONS, RUN_ACTION):
            restored = ToolDescriptor.model_validate(tool.to_wire())
            assert restored == tool

    def test_immutable(self) -> None:
        tool = ToolDescriptor(name="a")
        assert tool.model_config.get("frozen") is True

    def test_input_schema_must_be_object(self) -> None:
        with pytest.raises(ValidationError):
            ToolDescriptor(name="s", input_schema=StringSchema())  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            ToolDescriptor.model_validate({"name": "s", "inputSchema": {"type": "string"}})
