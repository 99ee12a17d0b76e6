"""Schema nodes — the JSON-Schema subset tools use to declare their inputs.

A schema is a recursive tree discriminated on ``type``::

    ObjectSchema(
        properties={
            "action_id": StringSchema(description="The action ID to execute"),
            "params": ObjectSchema(),
        },
        required=("action_id",),
    )

The wire form is the plain JSON-Schema dict MCP clients expect
(``{"type": "object", "properties": {...}, "required": [...]}``).
:func:`validate` is the single validator used for every tool.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

# ---------------------------------------------------------------------------
# Schema variants
# ---------------------------------------------------------------------------


class _SchemaBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str | None = None


class StringSchema(_SchemaBase):
    """A string value."""

    type: Literal["string"] = "string"


class NumberSchema(_SchemaBase):
    """An integer or floating point value (booleans excluded)."""

    type: Literal["number"] = "number"


class BooleanSchema(_SchemaBase):
    """A boolean value."""

    type: Literal["boolean"] = "boolean"


class ObjectSchema(_SchemaBase):
    """An object with named properties.

    Properties not declared here are accepted as-is, matching JSON Schema's
    default of allowing additional properties.
    """

    type: Literal["object"] = "object"
    properties: dict[str, SchemaNode] | None = None
    required: tuple[str, ...] | None = None

    @model_validator(mode="after")
    def _check_required(self) -> ObjectSchema:
        for name in self.required or ():
            if name not in (self.properties or {}):
                msg = f"required property '{name}' is not declared in properties"
                raise ValueError(msg)
        return self


SchemaNode = Annotated[
    Union[ObjectSchema, StringSchema, NumberSchema, BooleanSchema],
    Field(discriminator="type"),
]

ObjectSchema.model_rebuild()

_schema_adapter: TypeAdapter[Any] = TypeAdapter(SchemaNode)


def parse_schema(data: Any) -> SchemaNode:
    """Build a :data:`SchemaNode` from its JSON-Schema dict form."""
    return _schema_adapter.validate_python(data)  # type: ignore[no-any-return]


def dump_schema(schema: SchemaNode) -> dict[str, Any]:
    """Return the JSON-Schema dict form of *schema*."""
    return schema.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

_KIND_NAMES = {
    "object": "an object",
    "string": "a string",
    "number": "a number",
    "boolean": "a boolean",
}


def _kind_of(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if value is None:
        return "null"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def validate(schema: SchemaNode, value: Any, path: str = "arguments") -> list[str]:
    """Check *value* against *schema* and return every violation found.

    An empty list means the value is valid. Each violation names the
    offending location, e.g. ``arguments.limit: expected a number, got string``.
    """
    kind = _kind_of(value)
    if kind != schema.type:
        return [f"{path}: expected {_KIND_NAMES[schema.type]}, got {kind}"]

    if not isinstance(schema, ObjectSchema):
        return []

    violations: list[str] = []
    for name in schema.required or ():
        if name not in value:
            violations.append(f"{path}: missing required property '{name}'")
    for name, prop_schema in (schema.properties or {}).items():
        if name in value:
            violations.extend(validate(prop_schema, value[name], f"{path}.{name}"))
    return violations
