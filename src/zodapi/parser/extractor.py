"""Extract the per-path, per-method route table from an OpenAPI 3 document.

This module walks the document's ``paths`` object and builds a
:data:`~zodapi.models.RouteTable`: for every path (rewritten from
``{name}`` to ``[name]`` bracket form) and every HTTP method on it, one
:class:`~zodapi.models.RouteMethodEntry` holding parsed schemas for

* the ``200`` response (``application/json`` content only),
* the request body (``application/json`` content only),
* the query parameters, as a synthetic object schema,
* the path parameters, as a synthetic object schema.

Other status codes and media types are not part of the generated client and
are ignored.  Missing pieces leave the slot empty rather than failing, so
a partially specified document still yields a usable route table.

Parameter merging follows the OpenAPI specification: path-level parameters
provide defaults, and operation-level parameters override them when they
share the same ``name`` and ``in`` values.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from zodapi.models import ObjectSchema, RouteMethodEntry, RouteTable, SchemaNode
from zodapi.parser.composer import process_all_of
from zodapi.parser.nodes import parse_schema
from zodapi.parser.resolver import dereference

logger = logging.getLogger(__name__)

# HTTP methods recognized by OpenAPI
_HTTP_METHODS = frozenset({"get", "put", "post", "delete", "options", "head", "patch", "trace"})

_JSON_MEDIA_TYPE = "application/json"
_PATH_PARAM_RE = re.compile(r"{([^}]+)}")


def to_bracket_path(path: str) -> str:
    """Rewrite ``{name}`` path parameters to ``[name]`` form.

    Example::

        to_bracket_path("/users/{id}/posts")  # "/users/[id]/posts"
    """
    return _PATH_PARAM_RE.sub(r"[\1]", path)


def extract_routes(document: dict[str, Any]) -> RouteTable:
    """Build the route table for every path and method in *document*.

    Args:
        document: An OpenAPI 3.x document (Swagger input must be converted
            first).

    Returns:
        An insertion-ordered mapping of bracket path -> uppercase method ->
        :class:`~zodapi.models.RouteMethodEntry`.  A document without
        ``paths`` yields an empty table.

    Example::

        routes = extract_routes(document)
        entry = routes["/users/[id]"]["GET"]
        entry.path_params  # ["id"]
    """
    routes: RouteTable = {}
    paths = document.get("paths") or {}
    if not isinstance(paths, dict):
        return routes

    for path, path_item in paths.items():
        path_item = dereference(path_item, document)
        if not isinstance(path_item, dict):
            continue

        shared_params = path_item.get("parameters") or []
        methods: dict[str, RouteMethodEntry] = {}

        for method, operation in path_item.items():
            if method == "parameters" or not isinstance(operation, dict):
                continue
            if str(method).lower() not in _HTTP_METHODS:
                continue
            methods[str(method).upper()] = _extract_method(
                str(path), str(method).upper(), operation, shared_params, document
            )

        routes[to_bracket_path(str(path))] = methods

    return routes


def _extract_method(
    path: str,
    method: str,
    operation: dict[str, Any],
    shared_params: list[Any],
    document: dict[str, Any],
) -> RouteMethodEntry:
    parameters = _merge_parameters(shared_params, operation.get("parameters") or [], document)
    query = [p for p in parameters if p.get("in") == "query"]
    path_params = [p for p in parameters if p.get("in") == "path"]

    path_param_names = _PATH_PARAM_RE.findall(path)
    for param in path_params:
        name = param.get("name")
        if isinstance(name, str) and name and name not in path_param_names:
            path_param_names.append(name)

    return RouteMethodEntry(
        method=method,
        response_schema=_json_schema(_success_response(operation, document), document),
        body_schema=_json_schema(dereference(operation.get("requestBody"), document), document),
        query_schema=_parameters_object(query, document),
        path_schema=_parameters_object(path_params, document),
        query_params=[p["name"] for p in query if isinstance(p.get("name"), str)],
        path_params=path_param_names,
        summary=operation.get("summary") if isinstance(operation.get("summary"), str) else None,
    )


def _success_response(operation: dict[str, Any], document: dict[str, Any]) -> Any:
    """Return the ``200`` response object, dereferenced.

    YAML parses an unquoted ``200:`` key as an integer, so both spellings
    are accepted.
    """
    responses = operation.get("responses")
    if not isinstance(responses, dict):
        return None
    response = responses.get("200", responses.get(200))
    return dereference(response, document)


def _json_schema(container: Any, document: dict[str, Any]) -> Optional[SchemaNode]:
    """Return the parsed ``application/json`` schema of a response or request body.

    Returns ``None`` when the container, its content, the JSON media type,
    or the schema is absent or empty.
    """
    if not isinstance(container, dict):
        return None
    content = container.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(_JSON_MEDIA_TYPE)
    if not isinstance(media, dict):
        return None
    schema = media.get("schema")
    if not isinstance(schema, dict) or not schema:
        return None
    if "allOf" in schema:
        schema = process_all_of(schema, document)
    return parse_schema(schema)


def _merge_parameters(
    path_params: list[Any],
    op_params: list[Any],
    document: dict[str, Any],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    ``$ref`` entries are resolved first; entries that are not objects, that
    lack a string ``name`` or ``in``, or references that cannot be resolved,
    are dropped.  Operation-level parameters override path-level parameters
    with the same name and location (``in`` field), per the OpenAPI spec.
    """
    resolved_path = _resolve_parameters(path_params, document)
    resolved_op = _resolve_parameters(op_params, document)

    op_keys = {(p.get("name", ""), p.get("in", "")) for p in resolved_op}
    merged = [
        p for p in resolved_path if (p.get("name", ""), p.get("in", "")) not in op_keys
    ]
    merged.extend(resolved_op)
    return merged


def _resolve_parameters(params: Any, document: dict[str, Any]) -> list[dict[str, Any]]:
    if not isinstance(params, list):
        return []
    resolved: list[dict[str, Any]] = []
    for param in params:
        target = dereference(param, document)
        if (
            isinstance(target, dict)
            and isinstance(target.get("name"), str)
            and isinstance(target.get("in"), str)
        ):
            resolved.append(target)
        else:
            logger.debug("Skipping unusable parameter entry %r", param)
    return resolved


def _parameters_object(
    params: list[dict[str, Any]], document: dict[str, Any]
) -> Optional[ObjectSchema]:
    """Build a synthetic object schema with one property per parameter.

    Path parameters are always required; query parameters honour their
    ``required`` flag.  Returns ``None`` for an empty parameter group.
    """
    properties: dict[str, SchemaNode] = {}
    required: list[str] = []
    for param in params:
        name = param.get("name")
        if not isinstance(name, str) or not name:
            continue
        raw = param.get("schema")
        if isinstance(raw, dict) and "allOf" in raw:
            raw = process_all_of(raw, document)
        properties[name] = parse_schema(raw)
        if param.get("in") == "path" or param.get("required") is True:
            required.append(name)

    if not properties:
        return None
    return ObjectSchema(properties=properties, required=required)
