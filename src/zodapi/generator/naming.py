"""Identifier derivation for generated declarations.

Endpoint identifiers are built from the HTTP method, the bracket-form path,
and the path-parameter names::

    GET  /users/[id]            -> GET_users_id
    POST /users                 -> POST_users
    GET  /[param1]/[param2]     -> GET__param1_param2

Slashes are removed and bracket segments stripped before the parameter
names are appended.  Any character still not allowed in a JavaScript
identifier (``-``, ``.``, ...) becomes ``_``.  Distinct paths can map to the
same identifier (``/a/b`` and ``/ab``); no disambiguation is attempted.
"""

from __future__ import annotations

import re

_BRACKET_SEGMENT_RE = re.compile(r"\[[^\]]*\]")
_INVALID_CHAR_RE = re.compile(r"[^A-Za-z0-9_$]")


def sanitize_identifier(text: str) -> str:
    """Replace every character that is invalid in a JS identifier with ``_``."""
    cleaned = _INVALID_CHAR_RE.sub("_", text)
    if cleaned and cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    return cleaned


def endpoint_identifier(method: str, path: str, path_params: list[str]) -> str:
    """Return the constant name for one (path, method) endpoint.

    Args:
        method: HTTP method (any case).
        path: Bracket-form path, e.g. ``/users/[id]``.
        path_params: Path-parameter names in template order.
    """
    stem = _BRACKET_SEGMENT_RE.sub("", path.replace("/", ""))
    identifier = f"{method.upper()}_{_INVALID_CHAR_RE.sub('_', stem)}"
    if path_params:
        identifier += "_" + "_".join(_INVALID_CHAR_RE.sub("_", name) for name in path_params)
    return identifier


def schema_identifier(name: str) -> str:
    """Return the constant name of a component schema validator (``Pet`` -> ``PetSchema``)."""
    return f"{sanitize_identifier(name)}Schema"
