"""Tool parameter schemas and their documentation.

Parameter trees are a closed set of node kinds (string, number, boolean,
array, enum, object) plus ``UnknownSchema`` for anything else. Schemas can be
written directly with these nodes, or supplied as JSON Schema dicts or pydantic
models, which are converted on the way in.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Literal

from pydantic import BaseModel

NO_DESCRIPTION = "No description provided"
SCHEMA_FALLBACK = "Schema definition available"
NO_PARAMETERS = "No parameters"

ParameterStyle = Literal["markdown", "toon"]


@dataclass(frozen=True, kw_only=True)
class SchemaNode:
    """Base node of a parameter tree."""

    description: str | None = None
    optional: bool = False

    def as_optional(self) -> "SchemaNode":
        """Return a copy of this node marked optional."""
        return replace(self, optional=True)

    def describe(self, description: str) -> "SchemaNode":
        """Return a copy of this node with a description attached."""
        return replace(self, description=description)


@dataclass(frozen=True)
class StringSchema(SchemaNode):
    pass


@dataclass(frozen=True)
class NumberSchema(SchemaNode):
    pass


@dataclass(frozen=True)
class BooleanSchema(SchemaNode):
    pass


@dataclass(frozen=True)
class ArraySchema(SchemaNode):
    items: SchemaNode


@dataclass(frozen=True)
class EnumSchema(SchemaNode):
    values: tuple[str, ...]


@dataclass(frozen=True)
class ObjectSchema(SchemaNode):
    properties: dict[str, SchemaNode] = field(default_factory=dict)


@dataclass(frozen=True)
class UnknownSchema(SchemaNode):
    """Any node kind outside the supported set; documented by its type name."""

    type_name: str = "unknown"


@dataclass(frozen=True)
class ParameterDoc:
    """One documentation row for a parameter."""

    name: str
    type_label: str
    required: bool
    description: str
    depth: int = 0

    @property
    def requirement(self) -> str:
        return "required" if self.required else "optional"


def coerce_schema(value: Any) -> SchemaNode:
    """Convert a supported schema description into a SchemaNode.

    Accepts SchemaNode instances, JSON Schema mappings and pydantic models
    (classes or instances). Anything else becomes an UnknownSchema.
    """
    if isinstance(value, SchemaNode):
        return value
    if isinstance(value, BaseModel):
        value = type(value)
    if isinstance(value, type) and issubclass(value, BaseModel):
        return from_json_schema(value.model_json_schema())
    if isinstance(value, Mapping):
        return from_json_schema(value)
    return UnknownSchema()


def from_json_schema(schema: Mapping[str, Any]) -> SchemaNode:
    """Convert a JSON Schema document into a SchemaNode tree.

    Local ``$ref`` pointers into ``$defs``/``definitions`` are resolved,
    single-member ``allOf`` wrappers are unwrapped and ``null`` members of
    ``anyOf``/``oneOf``/type lists are dropped.
    """
    return _convert(schema, schema, optional=False, seen=frozenset())


def _resolve_ref(ref: str, root: Mapping[str, Any]) -> Mapping[str, Any] | None:
    if not ref.startswith("#/"):
        return None
    target: Any = root
    for part in ref[2:].split("/"):
        if not isinstance(target, Mapping) or part not in target:
            return None
        target = target[part]
    return target if isinstance(target, Mapping) else None


def _convert(
    node: Mapping[str, Any],
    root: Mapping[str, Any],
    optional: bool,
    seen: frozenset[str],
) -> SchemaNode:
    description = node.get("description")

    ref = node.get("$ref")
    if isinstance(ref, str):
        target = _resolve_ref(ref, root)
        if target is None or ref in seen:
            return UnknownSchema(type_name="object", description=description, optional=optional)
        merged = {**target, **{k: v for k, v in node.items() if k != "$ref"}}
        return _convert(merged, root, optional, seen | {ref})

    all_of = node.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1 and isinstance(all_of[0], Mapping):
        merged = {**all_of[0], **{k: v for k, v in node.items() if k != "allOf"}}
        return _convert(merged, root, optional, seen)

    for key in ("anyOf", "oneOf"):
        variants = node.get(key)
        if not isinstance(variants, list):
            continue
        non_null = [v for v in variants if isinstance(v, Mapping) and v.get("type") != "null"]
        if len(non_null) == 1:
            merged = {**non_null[0], **{k: v for k, v in node.items() if k != key}}
            return _convert(merged, root, optional, seen)
        if non_null and all("const" in v for v in non_null):
            values = tuple(str(v["const"]) for v in non_null)
            return EnumSchema(values, description=description, optional=optional)
        return UnknownSchema(type_name="union", description=description, optional=optional)

    if isinstance(node.get("enum"), list):
        values = tuple(str(v) for v in node["enum"] if v is not None)
        return EnumSchema(values, description=description, optional=optional)
    if "const" in node:
        return EnumSchema((str(node["const"]),), description=description, optional=optional)

    type_ = node.get("type")
    if isinstance(type_, list):
        types = [t for t in type_ if t != "null"]
        type_ = types[0] if len(types) == 1 else "union"

    if type_ == "string":
        return StringSchema(description=description, optional=optional)
    if type_ in ("number", "integer"):
        return NumberSchema(description=description, optional=optional)
    if type_ == "boolean":
        return BooleanSchema(description=description, optional=optional)
    if type_ == "array":
        items = node.get("items")
        item_node = (
            _convert(items, root, False, seen) if isinstance(items, Mapping) else UnknownSchema()
        )
        return ArraySchema(item_node, description=description, optional=optional)
    if type_ == "object" or (type_ is None and "properties" in node):
        raw_required = node.get("required")
        required = (
            {name for name in raw_required if isinstance(name, str)}
            if isinstance(raw_required, list | tuple)
            else set()
        )
        raw_properties = node.get("properties")
        if not isinstance(raw_properties, Mapping):
            raw_properties = {}
        properties = {
            # Draft 3 marks required properties with a boolean on the property itself
            name: _convert(
                prop, root, name not in required and prop.get("required") is not True, seen
            )
            for name, prop in raw_properties.items()
            if isinstance(prop, Mapping)
        }
        return ObjectSchema(properties=properties, description=description, optional=optional)

    return UnknownSchema(
        type_name=type_ if isinstance(type_, str) else "unknown",
        description=description,
        optional=optional,
    )


def type_label(node: SchemaNode) -> str:
    """Readable type name for a node; nested kinds are shown inline."""
    if isinstance(node, StringSchema):
        return "string"
    if isinstance(node, NumberSchema):
        return "number"
    if isinstance(node, BooleanSchema):
        return "boolean"
    if isinstance(node, ArraySchema):
        return f"array<{type_label(node.items)}>"
    if isinstance(node, EnumSchema):
        return f"enum({'|'.join(node.values)})"
    if isinstance(node, ObjectSchema):
        return "object"
    if isinstance(node, UnknownSchema):
        return node.type_name
    return "unknown"


def describe_parameters(schema: Any) -> list[ParameterDoc]:
    """Build documentation rows for every field of an object schema.

    Fields of nested objects (and of objects inside arrays) follow their
    parent row with ``depth`` increased by one. Non-object roots have no rows.
    """
    root = coerce_schema(schema)
    if not isinstance(root, ObjectSchema):
        return []
    rows: list[ParameterDoc] = []
    _collect_rows(root, 0, rows)
    return rows


def _collect_rows(obj: ObjectSchema, depth: int, rows: list[ParameterDoc]) -> None:
    for name, node in obj.properties.items():
        rows.append(
            ParameterDoc(
                name=name,
                type_label=type_label(node),
                required=not node.optional,
                description=node.description or NO_DESCRIPTION,
                depth=depth,
            )
        )
        nested = node.items if isinstance(node, ArraySchema) else node
        if isinstance(nested, ObjectSchema):
            _collect_rows(nested, depth + 1, rows)


def format_parameters(schema: Any, style: ParameterStyle = "markdown") -> str:
    """Render the parameter block for a tool.

    Markdown rows look like ``- `query` (string, required): Search query``;
    toon rows look like ``query(string,required): Search query``. Nested rows
    are indented two spaces per level.
    """
    root = coerce_schema(schema)
    if not isinstance(root, ObjectSchema):
        return f"- {SCHEMA_FALLBACK}" if style == "markdown" else SCHEMA_FALLBACK

    rows = describe_parameters(root)
    if not rows:
        return f"- {NO_PARAMETERS}" if style == "markdown" else NO_PARAMETERS

    lines = []
    for row in rows:
        indent = "  " * row.depth
        if style == "markdown":
            lines.append(
                f"{indent}- `{row.name}` ({row.type_label}, {row.requirement}): {row.description}"
            )
        else:
            lines.append(f"{indent}{row.name}({row.type_label},{row.requirement}): {row.description}")
    return "\n".join(lines)


def schema_to_json(schema: Any) -> dict[str, Any]:
    """Export a schema as a JSON Schema dict suitable for serialization."""
    node = coerce_schema(schema)
    data: dict[str, Any]
    if isinstance(node, StringSchema):
        data = {"type": "string"}
    elif isinstance(node, NumberSchema):
        data = {"type": "number"}
    elif isinstance(node, BooleanSchema):
        data = {"type": "boolean"}
    elif isinstance(node, ArraySchema):
        data = {"type": "array", "items": schema_to_json(node.items)}
    elif isinstance(node, EnumSchema):
        data = {"enum": list(node.values)}
    elif isinstance(node, ObjectSchema):
        data = {
            "type": "object",
            "properties": {name: schema_to_json(prop) for name, prop in node.properties.items()},
        }
        required = [name for name, prop in node.properties.items() if not prop.optional]
        if required:
            data["required"] = required
    else:
        data = {}

    if node.description:
        data["description"] = node.description
    return data
