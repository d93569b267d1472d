"""Flatten ``allOf`` compositions into a single structural schema.

``allOf`` is a structural intersection: every member applies at once.  When
the members are plain objects (the overwhelmingly common case: a base entity
plus extra fields) the intersection can be merged up front into one object
schema, which produces a much simpler validator than a chain of
intersections.

Merge rules, applied in document order:

* ``properties`` -- later members override same-named keys.
* ``required`` -- concatenated; duplicates are kept.
* ``type`` / ``format`` / ``description`` -- the first value seen wins, and
  the composing schema's own values always win.

``oneOf`` is deliberately left alone.  Merging mutually exclusive variants
would produce a schema that matches none of them, so unions are handed to
the emitter intact.
"""

from __future__ import annotations

import logging
from typing import Any

from zodapi.parser.resolver import is_reference_object, resolve_ref

logger = logging.getLogger(__name__)

_SCALAR_KEYS = ("type", "format", "description")


def process_all_of(
    schema: Any,
    document: dict[str, Any],
    _seen: frozenset[str] = frozenset(),
) -> Any:
    """Merge the ``allOf`` members of *schema* into one schema dict.

    Args:
        schema: A raw schema dict.  Non-dicts, and dicts whose ``allOf`` is
            absent, empty, or not a list, are returned unchanged.
        document: The root document used to resolve ``$ref`` members.

    Returns:
        A new dict without the ``allOf`` key.  The input is never mutated.

    Example::

        merged = process_all_of(
            {"allOf": [{"$ref": "#/components/schemas/Base"},
                       {"type": "object", "properties": {"extra": {"type": "string"}}}]},
            document,
        )
        # merged["properties"] holds Base's properties plus "extra"
    """
    if not isinstance(schema, dict):
        return schema
    members = schema.get("allOf")
    if not isinstance(members, list) or not members:
        return schema

    merged = {key: value for key, value in schema.items() if key != "allOf"}
    properties: dict[str, Any] = dict(merged.get("properties") or {})
    required: list[Any] = list(merged.get("required") or [])

    for member in members:
        seen = _seen
        if is_reference_object(member):
            ref = member["$ref"]
            if ref in seen:
                logger.debug("Skipping circular allOf member %r", ref)
                continue
            seen = seen | {ref}
            member = resolve_ref(ref, document)
            if member is None:
                logger.debug("Skipping unresolvable allOf member %r", ref)
                continue
        if not isinstance(member, dict):
            continue
        if "allOf" in member:
            member = process_all_of(member, document, seen)

        properties.update(member.get("properties") or {})
        required.extend(member.get("required") or [])
        for key in _SCALAR_KEYS:
            if merged.get(key) is None and member.get(key) is not None:
                merged[key] = member[key]

    if properties:
        merged["properties"] = properties
    if required:
        merged["required"] = required
    return merged


def process_schema_definitions(document: dict[str, Any]) -> dict[str, Any]:
    """Return ``components.schemas`` with every top-level ``allOf`` flattened.

    Insertion order of the component table is preserved so that generated
    declarations come out in document order.
    """
    components = document.get("components") or {}
    schemas = components.get("schemas") or {}
    if not isinstance(schemas, dict):
        return {}
    return {name: process_all_of(schema, document) for name, schema in schemas.items()}
