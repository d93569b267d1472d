"""Render schema nodes as zod validator expressions.

:func:`schema_to_validator_source` is a pure function: it takes one
:class:`~zodapi.models.SchemaNode` (or a raw schema dict, which is parsed
first) and returns TypeScript source text for an equivalent zod validator.
Nothing is resolved or cached here; references to named component schemas
are emitted as ``z.lazy(() => NameSchema)`` so that forward and mutually
recursive references work without eager expansion.

Per-kind output::

    ref (known)       z.lazy(() => PetSchema)
    ref (unknown)     z.unknown()
    allOf             z.intersection(z.intersection(a, b), c)
    oneOf             a.or(b).or(c)
    string            z.string().min(1).max(10) | z.enum(['a', 'b'])
                      | z.string().datetime() | z.string().email()
    number/integer    z.number().min(0).max(9)
    boolean           z.boolean()
    array             z.array(item) | z.array(z.unknown())
    object            z.object({ ... }) | z.object({})
    unknown           z.unknown()

Modifiers are appended afterwards, in order: ``.nullable()``,
``.describe('...')``, ``.optional()``.
"""

from __future__ import annotations

import json
from functools import reduce
from typing import Any, Callable, Collection, Union

from zodapi.generator.builder import object_literal, string_literal
from zodapi.generator.naming import schema_identifier
from zodapi.models import (
    AllOfSchema,
    ArraySchema,
    NumberSchema,
    ObjectSchema,
    OneOfSchema,
    RefSchema,
    SchemaKind,
    SchemaNode,
    StringSchema,
)
from zodapi.parser.nodes import parse_schema
from zodapi.parser.resolver import get_ref_name

ANY_VALIDATOR = "z.unknown()"
VOID_VALIDATOR = "z.void()"


def schema_to_validator_source(
    schema: Union[SchemaNode, dict[str, Any], None],
    is_required: bool = True,
    known_schema_names: Collection[str] = (),
) -> str:
    """Return zod source text validating values described by *schema*.

    Args:
        schema: A parsed schema node, or a raw schema dict.
        is_required: When ``False`` the validator is suffixed with
            ``.optional()``.
        known_schema_names: Names of the component schemas that get their
            own ``<Name>Schema`` declaration.  References to any other name
            render as ``z.unknown()``.

    Example::

        schema_to_validator_source({"type": "string", "enum": ["a", "b"]})
        # "z.enum(['a', 'b'])"
        schema_to_validator_source({"$ref": "#/components/schemas/Pet"}, False, {"Pet"})
        # "z.lazy(() => PetSchema).optional()"
    """
    node = schema if isinstance(schema, SchemaNode) else parse_schema(schema)
    return _emit(node, is_required, frozenset(known_schema_names))


def _emit(node: SchemaNode, is_required: bool, known: frozenset[str]) -> str:
    source = _EMITTERS[node.kind](node, known)
    if node.nullable:
        source += ".nullable()"
    if node.description:
        source += f".describe({string_literal(node.description)})"
    if not is_required:
        source += ".optional()"
    return source


def _emit_ref(node: RefSchema, known: frozenset[str]) -> str:
    name = get_ref_name(node.target)
    if node.target.startswith("#/") and name in known:
        return f"z.lazy(() => {schema_identifier(name)})"
    return ANY_VALIDATOR


def _emit_all_of(node: AllOfSchema, known: frozenset[str]) -> str:
    members = [_emit(member, True, known) for member in node.members]
    if not members:
        return ANY_VALIDATOR
    # z.intersection is binary; fold left for three or more members.
    return reduce(lambda left, right: f"z.intersection({left}, {right})", members)


def _emit_one_of(node: OneOfSchema, known: frozenset[str]) -> str:
    members = [_emit(member, True, known) for member in node.members]
    if not members:
        return ANY_VALIDATOR
    return members[0] + "".join(f".or({member})" for member in members[1:])


def _emit_string(node: StringSchema, known: frozenset[str]) -> str:
    if node.enum:
        values = ", ".join(string_literal(_enum_text(value)) for value in node.enum)
        return f"z.enum([{values}])"
    if node.format == "date-time":
        return "z.string().datetime()"
    if node.format == "email":
        return "z.string().email()"
    source = "z.string()"
    if node.min_length is not None:
        source += f".min({node.min_length})"
    if node.max_length is not None:
        source += f".max({node.max_length})"
    return source


def _enum_text(value: Any) -> str:
    # z.enum only takes strings; other members keep their JSON spelling.
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


def _emit_number(node: NumberSchema, known: frozenset[str]) -> str:
    source = "z.number()"
    if node.minimum is not None:
        source += f".min({node.minimum!r})"
    if node.maximum is not None:
        source += f".max({node.maximum!r})"
    return source


def _emit_boolean(node: SchemaNode, known: frozenset[str]) -> str:
    return "z.boolean()"


def _emit_array(node: ArraySchema, known: frozenset[str]) -> str:
    if node.items is None:
        return f"z.array({ANY_VALIDATOR})"
    return f"z.array({_emit(node.items, True, known)})"


def _emit_object(node: ObjectSchema, known: frozenset[str]) -> str:
    required = set(node.required)
    members = [
        (name, _emit(prop, name in required, known))
        for name, prop in node.properties.items()
    ]
    return object_literal("z.object({", members, "})")


def _emit_unknown(node: SchemaNode, known: frozenset[str]) -> str:
    return ANY_VALIDATOR


_EMITTERS: dict[SchemaKind, Callable[[Any, frozenset[str]], str]] = {
    SchemaKind.REF: _emit_ref,
    SchemaKind.ALL_OF: _emit_all_of,
    SchemaKind.ONE_OF: _emit_one_of,
    SchemaKind.STRING: _emit_string,
    SchemaKind.NUMBER: _emit_number,
    SchemaKind.BOOLEAN: _emit_boolean,
    SchemaKind.ARRAY: _emit_array,
    SchemaKind.OBJECT: _emit_object,
    SchemaKind.UNKNOWN: _emit_unknown,
}
