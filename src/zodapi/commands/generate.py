"""Import command -- generate zod endpoint definitions from an OpenAPI document.

Implements the ``zodapi import-openapi`` command.  The document is loaded
from a local file, a URL, or stdin, converted to OpenAPI 3 when it is a
Swagger 2.0 document, and written to ``<outDir>/endpoints.ts``.
"""

from __future__ import annotations

from typing import Optional

import typer

from zodapi.exit_codes import EXIT_GENERIC_FAILURE
from zodapi.output import debug, error, info, print_data, success


def import_openapi_command(
    file: str = typer.Argument(
        ...,
        help="OpenAPI/Swagger document path or URL (use '-' for stdin).",
    ),
    out_dir: Optional[str] = typer.Option(
        None,
        "--outDir",
        "-d",
        help="Directory for the generated endpoints.ts (default: src).",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Override the base URL taken from the document."
    ),
) -> None:
    """Generate typed API routes from an OpenAPI/Swagger document.

    Loads *file*, converts Swagger 2.0 input to OpenAPI 3, extracts every
    route and component schema, and writes a single ``endpoints.ts`` module
    with zod validators and ``createApiEndpoint`` definitions.  The path of
    the written file is printed to stdout.

    Args:
        file: Local path, ``http(s)`` URL, or ``-`` for stdin.
        out_dir: Output directory.  Created if missing.
        base_url: Overrides ``servers[0].url`` in the generated ``createApi``
            call.

    Raises:
        typer.Exit: With code 1 on any failure, after printing
            ``Error: <message>`` to stderr.

    Example::

        zodapi import-openapi ./openapi.yaml -d src/api
        curl -s https://api.example.com/openapi.json | zodapi import-openapi -
    """
    from zodapi.config import resolve_config
    from zodapi.generator import generate_routes
    from zodapi.parser import convert_to_openapi3, load_document

    try:
        config = resolve_config(cli_out_dir=out_dir, cli_base_url=base_url)
        debug(f"Output directory: {config.out_dir}")

        info(f"Reading {file}")
        raw = load_document(file)
        document = convert_to_openapi3(raw)
        debug(f"OpenAPI version: {document.get('openapi')}")

        output_path = generate_routes(document, config)
    except Exception as exc:
        error(str(exc))
        raise typer.Exit(code=EXIT_GENERIC_FAILURE) from None

    success("Successfully generated API routes!")
    print_data(str(output_path))
