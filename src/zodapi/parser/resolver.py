"""Resolve ``$ref`` JSON Reference pointers against a single OpenAPI document.

OpenAPI documents commonly use ``$ref`` pointers (e.g.,
``{"$ref": "#/components/schemas/Pet"}``) in place of an inline schema,
parameter, response, or request body.  Unlike a full dereferencing pass,
resolution here happens *on demand*: callers first test a slot with
:func:`is_reference_object` and only then look the pointer up with
:func:`resolve_ref`.

Only **internal** references (those starting with ``#/``) are supported.
Anything else -- and any pointer whose path does not exist -- resolves to
``None``.  Absence is a normal outcome, never an exception: the generator
renders a missing schema as an accept-anything validator and carries on.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

_FRAGMENT_PREFIX = "#/"


def is_reference_object(obj: Any) -> bool:
    """Return ``True`` if *obj* is a dict carrying a ``$ref`` key.

    Example::

        is_reference_object({"$ref": "#/components/schemas/Pet"})  # True
        is_reference_object({"type": "string"})                    # False
        is_reference_object(None)                                  # False
    """
    return isinstance(obj, dict) and "$ref" in obj


def get_ref_name(ref: str) -> str:
    """Return the final ``/``-delimited segment of a ``$ref`` pointer.

    The name doubles as the component lookup key and as the stem of the
    generated validator identifier (``Pet`` -> ``PetSchema``).

    Args:
        ref: A pointer such as ``"#/components/schemas/Pet"``.

    Returns:
        The last segment (``"Pet"``), or ``""`` for an empty pointer.
    """
    if not ref:
        return ""
    return ref.split("/")[-1]


def resolve_ref(ref: str, document: dict[str, Any]) -> Any | None:
    """Resolve a single ``$ref`` string against *document*.

    Walks the pointer segment by segment, handling RFC 6901 escaping
    (``~1`` for ``/``, ``~0`` for ``~``) and numeric list indices.

    Args:
        ref: The ``$ref`` string (e.g., ``"#/components/schemas/Pet"``).
        document: The root OpenAPI document.

    Returns:
        The node stored at the pointer, or ``None`` if the reference is
        external or any segment along the path is missing.
    """
    if not isinstance(ref, str) or not ref.startswith(_FRAGMENT_PREFIX):
        logger.debug("Unsupported $ref %r; only internal pointers are resolved", ref)
        return None

    current: Any = document
    for segment in ref[len(_FRAGMENT_PREFIX):].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                logger.debug("Cannot resolve $ref %r: key %r not found", ref, segment)
                return None
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                logger.debug("Cannot resolve $ref %r: invalid index %r", ref, segment)
                return None
        else:
            return None

    return current


def dereference(obj: Any, document: dict[str, Any]) -> Any | None:
    """Return *obj* itself, or its target if it is a reference object.

    Follows chains of references (a ``$ref`` whose target is another
    ``$ref``) and stops at a cycle, returning ``None``.
    """
    seen: set[str] = set()
    while is_reference_object(obj):
        ref = obj["$ref"]
        if ref in seen:
            logger.debug("Circular $ref chain at %r", ref)
            return None
        seen.add(ref)
        obj = resolve_ref(ref, document)
    return obj
