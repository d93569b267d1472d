"""Convert raw OpenAPI schema dicts into the closed :class:`~zodapi.models.SchemaNode` variants.

Raw schemas are duck-typed dicts in which "field absent" and "explicitly
untyped" look the same.  :func:`parse_schema` settles every such question
once, up front, so the emitter can dispatch on a single ``kind`` tag.

Dispatch precedence for one dict:

1. ``$ref`` -> :class:`~zodapi.models.RefSchema`
2. non-empty ``allOf`` -> :class:`~zodapi.models.AllOfSchema`
3. non-empty ``oneOf`` (or ``anyOf``) -> :class:`~zodapi.models.OneOfSchema`
4. ``type`` list -> ``"null"`` stripped, single remaining type parsed as
   nullable, several remaining types fall back to a nullable string
5. ``string`` / ``number`` / ``integer`` / ``boolean`` / ``array`` /
   ``object`` (a dict with ``properties`` but no ``type`` counts as object)
6. anything else -> :class:`~zodapi.models.UnknownSchema`

Schemas that nest themselves without going through a ``$ref`` (possible
with YAML anchors or dicts built in code) are cut at the point of
recursion, as is nesting deeper than :data:`MAX_SCHEMA_DEPTH`.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from zodapi.models import (
    AllOfSchema,
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    OneOfSchema,
    RefSchema,
    SchemaNode,
    StringSchema,
    UnknownSchema,
)

logger = logging.getLogger(__name__)

MAX_SCHEMA_DEPTH = 64
"""Nesting depth beyond which a schema is rendered as unknown."""


def parse_schema(raw: Any) -> SchemaNode:
    """Parse one raw schema dict (and everything nested in it).

    Args:
        raw: A schema dict from the document.  ``None``, non-dicts, and
            empty dicts parse to :class:`~zodapi.models.UnknownSchema`.

    Returns:
        The root of an immutable, finite :class:`~zodapi.models.SchemaNode`
        tree.
    """
    return _parse(raw, frozenset(), 0)


def _parse(raw: Any, stack: frozenset[int], depth: int) -> SchemaNode:
    if not isinstance(raw, dict) or not raw:
        return UnknownSchema()
    if id(raw) in stack:
        logger.warning("Self-referencing inline schema cut at depth %d", depth)
        return UnknownSchema()
    if depth >= MAX_SCHEMA_DEPTH:
        logger.warning("Schema nesting exceeds %d levels; truncated", MAX_SCHEMA_DEPTH)
        return UnknownSchema()

    stack = stack | {id(raw)}
    depth += 1
    nullable = raw.get("nullable") is True
    description = raw.get("description")
    if not isinstance(description, str):
        description = None

    if "$ref" in raw:
        return RefSchema(target=str(raw["$ref"]), nullable=nullable, description=description)

    all_of = raw.get("allOf")
    if isinstance(all_of, list) and all_of:
        return AllOfSchema(
            members=[_parse(member, stack, depth) for member in all_of],
            nullable=nullable,
            description=description,
        )

    for union_key in ("oneOf", "anyOf"):
        variants = raw.get(union_key)
        if isinstance(variants, list) and variants:
            return OneOfSchema(
                members=[_parse(member, stack, depth) for member in variants],
                nullable=nullable,
                description=description,
            )

    schema_type = raw.get("type")
    if isinstance(schema_type, list):
        non_null = [t for t in schema_type if t != "null"]
        if len(non_null) != len(schema_type):
            nullable = True
        if len(non_null) == 1:
            schema_type = non_null[0]
        elif non_null:
            # TODO: emit a real union for multi-type arrays instead of string
            schema_type = "string"
        else:
            schema_type = None

    if schema_type == "string":
        enum_values = raw.get("enum")
        enum: list[Any] | None = None
        if isinstance(enum_values, list):
            enum = [value for value in enum_values if value is not None]
            if len(enum) != len(enum_values):
                nullable = True
            enum = enum or None
        return StringSchema(
            enum=enum,
            format=raw.get("format") if isinstance(raw.get("format"), str) else None,
            min_length=_int_or_none(raw.get("minLength")),
            max_length=_int_or_none(raw.get("maxLength")),
            nullable=nullable,
            description=description,
        )

    if schema_type in ("number", "integer"):
        return NumberSchema(
            integer=schema_type == "integer",
            minimum=_number_or_none(raw.get("minimum")),
            maximum=_number_or_none(raw.get("maximum")),
            nullable=nullable,
            description=description,
        )

    if schema_type == "boolean":
        return BooleanSchema(nullable=nullable, description=description)

    if schema_type == "array":
        items = raw.get("items")
        return ArraySchema(
            items=_parse(items, stack, depth) if isinstance(items, dict) else None,
            nullable=nullable,
            description=description,
        )

    if schema_type == "object" or (schema_type is None and isinstance(raw.get("properties"), dict)):
        properties = raw.get("properties")
        required = raw.get("required")
        return ObjectSchema(
            properties={
                str(name): _parse(prop, stack, depth)
                for name, prop in (properties.items() if isinstance(properties, dict) else ())
            },
            required=[name for name in required if isinstance(name, str)]
            if isinstance(required, list)
            else [],
            nullable=nullable,
            description=description,
        )

    return UnknownSchema(nullable=nullable, description=description)


def _number_or_none(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value
