"""zodapi -- Generate zod-validated API endpoint definitions from OpenAPI specs.

This package reads an OpenAPI 3.x (or Swagger 2.0) document and writes a
single TypeScript module, ``endpoints.ts``, that declares one zod validator
per component schema and one ``createApiEndpoint`` definition per operation,
grouped into ``fetchEndpoints`` (GET) and ``mutateEndpoints`` maps.

Typical workflow::

    zodapi import-openapi openapi.yaml -d src/api

or, from Python::

    from zodapi import generate_routes
    from zodapi.parser import convert_to_openapi3, load_document

    generate_routes(convert_to_openapi3(load_document("openapi.yaml")))

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for schema nodes, routes and settings.
    config: Output settings resolution and atomic writes.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting system with Rich support.
    parser: Loading, conversion, reference resolution and route extraction.
    generator: Validator emission and endpoints module rendering.
"""

__version__ = "0.1.0"

from zodapi.generator.codegen import generate_routes  # noqa: E402

__all__ = ["__version__", "generate_routes"]
