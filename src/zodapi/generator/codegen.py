"""Assemble and write the generated ``endpoints.ts`` module.

The output file contains, in order:

1. one ``export const <Name>Schema = ...;`` per component schema,
2. one ``const <ID> = createApiEndpoint({...});`` per GET operation
   ("fetch" endpoints), then per non-GET operation ("mutate" endpoints),
3. ``fetchEndpoints`` and ``mutateEndpoints`` maps from path to endpoint
   identifiers,
4. an ``api`` instance built with ``createApi`` and the document's base URL.

Rendering (:func:`render_endpoints_source`) is separate from writing
(:func:`generate_single_file`) so the source text can be inspected without
touching the filesystem.  The file is written only after the whole text has
been assembled, through an atomic temp-file-then-rename.

The generation process:

1. A Jinja2 environment is configured with templates from ``generator/templates/``.
2. Validator expressions are produced by :mod:`zodapi.generator.emitter`.
3. The template is rendered with the assembled context and written to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from zodapi.config import atomic_write
from zodapi.exceptions import GenerationError
from zodapi.generator.builder import object_literal, string_literal
from zodapi.generator.emitter import VOID_VALIDATOR, schema_to_validator_source
from zodapi.generator.naming import endpoint_identifier, schema_identifier
from zodapi.models import GeneratorConfig, RouteMethodEntry, RouteTable, SchemaNode
from zodapi.output import debug
from zodapi.parser.composer import process_schema_definitions
from zodapi.parser.extractor import extract_routes
from zodapi.parser.nodes import parse_schema

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""

_TEMPLATE_NAME = "endpoints.ts.j2"


def generate_routes(
    document: dict[str, Any], config: Optional[GeneratorConfig] = None
) -> Path:
    """Run the whole pipeline on an OpenAPI 3 document and write the output file.

    Args:
        document: An OpenAPI 3.x document (convert Swagger 2.0 first with
            :func:`~zodapi.parser.converter.convert_to_openapi3`).
        config: Output settings.  Defaults to :class:`~zodapi.models.GeneratorConfig`.

    Returns:
        Path of the written file.

    Raises:
        GenerationError: If the output directory or file cannot be written.

    Example::

        document = convert_to_openapi3(load_document("petstore.yaml"))
        path = generate_routes(document, GeneratorConfig(out_dir="web/src"))
    """
    config = config or GeneratorConfig()
    schemas = {
        name: parse_schema(raw) for name, raw in process_schema_definitions(document).items()
    }
    debug(f"Found {len(schemas)} component schemas")

    routes = extract_routes(document)
    debug(f"Extracted {len(routes)} paths")

    base_url = config.base_url if config.base_url is not None else document_base_url(document)
    return generate_single_file(
        routes,
        schemas,
        config.out_dir,
        base_url,
        filename=config.output_filename,
        package_import=config.package_import,
        title=_document_title(document),
    )


def generate_single_file(
    routes: RouteTable,
    schemas: dict[str, SchemaNode],
    out_dir: str | Path,
    base_url: str,
    filename: str = "endpoints.ts",
    package_import: str = "@danstackme/apity",
    title: str = "an OpenAPI document",
) -> Path:
    """Render the endpoints module and write it to ``{out_dir}/{filename}``.

    Directories are created automatically if they do not exist.

    Returns:
        The :class:`~pathlib.Path` of the written file.

    Raises:
        GenerationError: If the directory or file cannot be written.
    """
    source = render_endpoints_source(
        routes, schemas, base_url, package_import=package_import, title=title
    )
    output_path = Path(out_dir) / filename
    try:
        atomic_write(output_path, source)
    except OSError as exc:
        raise GenerationError(f"Failed to write {output_path}: {exc}") from exc
    debug(f"Wrote {len(source)} characters to {output_path}")
    return output_path


def render_endpoints_source(
    routes: RouteTable,
    schemas: dict[str, SchemaNode],
    base_url: str,
    package_import: str = "@danstackme/apity",
    title: str = "an OpenAPI document",
) -> str:
    """Return the full text of the generated endpoints module.

    Identical inputs always produce identical text: every table is iterated
    in insertion order.
    """
    known = frozenset(schemas)

    schema_declarations = [
        (schema_identifier(name), schema_to_validator_source(node, True, known))
        for name, node in schemas.items()
    ]

    endpoints: dict[str, dict[str, Any]] = {}
    fetch_map: dict[str, list[str]] = {}
    mutate_map: dict[str, list[str]] = {}

    # All GET endpoints first, then everything else.
    for is_fetch in (True, False):
        for path, methods in routes.items():
            for method, entry in methods.items():
                if (method == "GET") != is_fetch:
                    continue
                identifier = endpoint_identifier(method, path, entry.path_params)
                if identifier in endpoints:
                    logger.warning(
                        "Endpoint identifier %s is produced by more than one route; "
                        "the later definition replaces the earlier one",
                        identifier,
                    )
                endpoints[identifier] = {
                    "identifier": identifier,
                    "summary": _comment_text(entry.summary),
                    "source": _endpoint_source(entry, known),
                }
                target = fetch_map if is_fetch else mutate_map
                target.setdefault(path, []).append(identifier)

    env = _create_jinja_env()
    return env.get_template(_TEMPLATE_NAME).render(
        source_title=_comment_text(title) or "an OpenAPI document",
        package_import=string_literal(package_import),
        schemas=schema_declarations,
        endpoints=list(endpoints.values()),
        fetch_endpoints=_endpoint_map(fetch_map),
        mutate_endpoints=_endpoint_map(mutate_map),
        base_url=string_literal(base_url),
    )


def document_base_url(document: dict[str, Any]) -> str:
    """Return the first declared server URL, or ``""`` when none is declared."""
    servers = document.get("servers")
    if isinstance(servers, list):
        for server in servers:
            if isinstance(server, dict) and isinstance(server.get("url"), str):
                return server["url"]
    return ""


def _endpoint_source(entry: RouteMethodEntry, known: frozenset[str]) -> str:
    members: list[tuple[str, str]] = [("method", string_literal(entry.method))]
    if entry.response_schema is not None:
        members.append(("response", schema_to_validator_source(entry.response_schema, True, known)))
    else:
        members.append(("response", VOID_VALIDATOR))
    if entry.body_schema is not None:
        members.append(("body", schema_to_validator_source(entry.body_schema, True, known)))
    if entry.query_schema is not None:
        members.append(("query", schema_to_validator_source(entry.query_schema, True, known)))
    # createApiEndpoint takes no path-parameter validator; path params only name the endpoint.
    return object_literal("createApiEndpoint({", members, "})")


def _endpoint_map(mapping: dict[str, list[str]]) -> str:
    members = [(path, f"[{', '.join(identifiers)}]") for path, identifiers in mapping.items()]
    return object_literal("{", members, "} as const")


def _comment_text(text: Optional[str]) -> str:
    if not text:
        return ""
    return " ".join(text.split()).replace("*/", "*\\/")


def _document_title(document: dict[str, Any]) -> str:
    info = document.get("info")
    if isinstance(info, dict) and isinstance(info.get("title"), str):
        return info["title"]
    return "an OpenAPI document"


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for the TypeScript templates.

    Autoescape is disabled for ``.ts.j2`` templates, which produce source
    code rather than HTML.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
