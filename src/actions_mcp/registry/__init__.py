"""Tool registry — descriptors, input schemas, and handler bindings."""

from actions_mcp.registry.models import RegisteredTool, ToolDescriptor, ToolHandler
from actions_mcp.registry.registry import ToolRegistry
from actions_mcp.registry.schema import (
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    SchemaNode,
    StringSchema,
    dump_schema,
    parse_schema,
    validate,
)

__all__ = [
    "BooleanSchema",
    "NumberSchema",
    "ObjectSchema",
    "RegisteredTool",
    "SchemaNode",
    "StringSchema",
    "ToolDescriptor",
    "ToolHandler",
    "ToolRegistry",
    "dump_schema",
    "parse_schema",
    "validate",
]
