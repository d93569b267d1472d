"""Convert Swagger 2.0 documents into OpenAPI 3.0 form.

Everything downstream of the loader assumes OpenAPI 3 layout
(``components.schemas``, ``requestBody``, ``content`` maps).  Swagger 2.0
documents are rewritten into that layout before entering the pipeline;
OpenAPI 3.x documents pass through untouched.

Only the parts of a Swagger document the generator reads are converted:

* ``definitions``, ``parameters``, ``responses`` -> ``components.*`` with
  every ``$ref`` rewritten to the new location.
* ``in: body`` parameters -> ``requestBody`` (one entry per ``consumes``
  media type, ``application/json`` by default).
* ``in: formData`` parameters -> a form ``requestBody`` object schema.
* Non-body parameters -> ``schema`` built from ``type``/``format``/
  ``items``/``enum``/bounds.
* Response ``schema`` -> ``content`` per ``produces`` media type.
* ``host`` + ``basePath`` + ``schemes`` -> ``servers``.
* ``x-nullable: true`` -> ``nullable: true``.
"""

from __future__ import annotations

import copy
from typing import Any

from zodapi.exceptions import ConversionError, SpecParseError

_REF_REWRITES = (
    ("#/definitions/", "#/components/schemas/"),
    ("#/parameters/", "#/components/parameters/"),
    ("#/responses/", "#/components/responses/"),
)

_PARAM_SCHEMA_KEYS = (
    "type",
    "format",
    "items",
    "enum",
    "default",
    "minimum",
    "maximum",
    "minLength",
    "maxLength",
    "pattern",
)

_OPERATION_KEYS = frozenset({"get", "put", "post", "delete", "options", "head", "patch"})

_DEFAULT_MEDIA_TYPE = "application/json"
_FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


def convert_to_openapi3(document: dict[str, Any]) -> dict[str, Any]:
    """Return *document* as an OpenAPI 3.x dict.

    Args:
        document: A parsed OpenAPI 3.x or Swagger 2.0 document.

    Returns:
        The same object for OpenAPI 3.x input, or a new converted dict for
        Swagger 2.0 input.

    Raises:
        SpecParseError: If the document declares neither ``openapi: 3.x``
            nor ``swagger: 2.0``.
        ConversionError: If the Swagger document is structurally invalid.
    """
    openapi_version = document.get("openapi")
    if openapi_version is not None:
        if str(openapi_version).startswith("3."):
            return document
        raise SpecParseError(
            f"Unsupported OpenAPI version: {openapi_version}. "
            "Only OpenAPI 3.x and Swagger 2.0 are supported."
        )

    swagger_version = document.get("swagger")
    if swagger_version is None:
        raise SpecParseError(
            "Missing 'openapi' or 'swagger' field. Is this an OpenAPI document?"
        )
    if not str(swagger_version).startswith("2."):
        raise SpecParseError(f"Unsupported Swagger version: {swagger_version}")

    try:
        return _convert_swagger2(_rewrite_refs(copy.deepcopy(document)))
    except (AttributeError, TypeError) as exc:
        raise ConversionError(f"Failed to convert Swagger 2.0 document: {exc}") from exc


def _rewrite_refs(obj: Any) -> Any:
    """Recursively rewrite Swagger ``$ref`` targets and ``x-nullable`` flags in place."""
    if isinstance(obj, dict):
        ref = obj.get("$ref")
        if isinstance(ref, str):
            for old, new in _REF_REWRITES:
                if ref.startswith(old):
                    obj["$ref"] = new + ref[len(old):]
                    break
        if obj.get("x-nullable") is True:
            obj["nullable"] = True
        for value in obj.values():
            _rewrite_refs(value)
    elif isinstance(obj, list):
        for item in obj:
            _rewrite_refs(item)
    return obj


def _convert_swagger2(swagger: dict[str, Any]) -> dict[str, Any]:
    consumes = swagger.get("consumes") or [_DEFAULT_MEDIA_TYPE]
    produces = swagger.get("produces") or [_DEFAULT_MEDIA_TYPE]

    result: dict[str, Any] = {"openapi": "3.0.0"}
    for key in ("info", "tags", "externalDocs", "security"):
        if key in swagger:
            result[key] = swagger[key]
    result.setdefault("info", {"title": "Untitled API", "version": "0.0.0"})

    servers = _build_servers(swagger)
    if servers:
        result["servers"] = servers

    components: dict[str, Any] = {}
    if swagger.get("definitions"):
        components["schemas"] = swagger["definitions"]
    if swagger.get("parameters"):
        components["parameters"] = {
            name: _convert_parameter(param)
            for name, param in swagger["parameters"].items()
            if isinstance(param, dict) and param.get("in") not in ("body", "formData")
        }
    if swagger.get("responses"):
        components["responses"] = {
            name: _convert_response(response, produces)
            for name, response in swagger["responses"].items()
        }
    if components:
        result["components"] = components

    paths: dict[str, Any] = {}
    for path, path_item in (swagger.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        paths[path] = _convert_path_item(path_item, swagger, consumes, produces)
    result["paths"] = paths
    return result


def _build_servers(swagger: dict[str, Any]) -> list[dict[str, Any]]:
    host = swagger.get("host")
    base_path = swagger.get("basePath") or ""
    if not host:
        return [{"url": base_path}] if base_path else []
    schemes = swagger.get("schemes") or ["https"]
    return [{"url": f"{scheme}://{host}{base_path}"} for scheme in schemes]


def _convert_path_item(
    path_item: dict[str, Any],
    swagger: dict[str, Any],
    consumes: list[str],
    produces: list[str],
) -> dict[str, Any]:
    converted: dict[str, Any] = {}
    for key, value in path_item.items():
        if key == "parameters":
            converted["parameters"] = [
                _convert_parameter(param)
                for param in value
                if not _is_body_like(param, swagger)
            ]
        elif key in _OPERATION_KEYS and isinstance(value, dict):
            shared = [p for p in path_item.get("parameters") or [] if _is_body_like(p, swagger)]
            converted[key] = _convert_operation(value, swagger, shared, consumes, produces)
        else:
            converted[key] = value
    return converted


def _convert_operation(
    operation: dict[str, Any],
    swagger: dict[str, Any],
    shared_body_params: list[dict[str, Any]],
    consumes: list[str],
    produces: list[str],
) -> dict[str, Any]:
    op_consumes = operation.get("consumes") or consumes
    op_produces = operation.get("produces") or produces

    converted = {
        key: value
        for key, value in operation.items()
        if key not in ("parameters", "responses", "consumes", "produces", "schemes")
    }

    parameters: list[dict[str, Any]] = []
    body_param: dict[str, Any] | None = None
    form_params: list[dict[str, Any]] = []
    for param in list(shared_body_params) + list(operation.get("parameters") or []):
        target = _body_target(param, swagger)
        location = target.get("in") if isinstance(target, dict) else None
        if location == "body":
            body_param = target
        elif location == "formData":
            form_params.append(target)
        else:
            parameters.append(_convert_parameter(param))
    if parameters:
        converted["parameters"] = parameters

    if body_param is not None:
        converted["requestBody"] = {
            "required": bool(body_param.get("required", False)),
            "content": {
                media_type: {"schema": body_param.get("schema", {})}
                for media_type in op_consumes
            },
        }
        if body_param.get("description"):
            converted["requestBody"]["description"] = body_param["description"]
    elif form_params:
        form_schema: dict[str, Any] = {
            "type": "object",
            "properties": {p["name"]: _parameter_schema(p) for p in form_params},
        }
        required = [p["name"] for p in form_params if p.get("required")]
        if required:
            form_schema["required"] = required
        form_types = [t for t in op_consumes if "form" in t] or [_FORM_MEDIA_TYPE]
        converted["requestBody"] = {
            "content": {media_type: {"schema": form_schema} for media_type in form_types}
        }

    converted["responses"] = {
        status: _convert_response(response, op_produces)
        for status, response in (operation.get("responses") or {}).items()
    }
    return converted


def _is_body_like(param: Any, swagger: dict[str, Any]) -> bool:
    target = _body_target(param, swagger)
    return isinstance(target, dict) and target.get("in") in ("body", "formData")


def _body_target(param: Any, swagger: dict[str, Any]) -> Any:
    """Inline a ``#/components/parameters/`` ref that points at a body/form parameter."""
    if isinstance(param, dict) and isinstance(param.get("$ref"), str):
        name = param["$ref"].split("/")[-1]
        target = (swagger.get("parameters") or {}).get(name)
        if isinstance(target, dict) and target.get("in") in ("body", "formData"):
            return target
    return param


def _convert_parameter(param: Any) -> Any:
    if not isinstance(param, dict) or "$ref" in param or "schema" in param:
        return param
    converted = {
        key: value
        for key, value in param.items()
        if key not in _PARAM_SCHEMA_KEYS and key not in ("collectionFormat", "allowEmptyValue")
    }
    converted["schema"] = _parameter_schema(param)
    return converted


def _parameter_schema(param: dict[str, Any]) -> dict[str, Any]:
    return {key: param[key] for key in _PARAM_SCHEMA_KEYS if key in param}


def _convert_response(response: Any, produces: list[str]) -> Any:
    if not isinstance(response, dict) or "$ref" in response:
        return response
    converted = {key: value for key, value in response.items() if key not in ("schema", "examples")}
    converted.setdefault("description", "")
    if "schema" in response:
        converted["content"] = {
            media_type: {"schema": response["schema"]} for media_type in produces
        }
    return converted
