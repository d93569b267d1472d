"""Code generator -- render zod validators and endpoint definitions.

This sub-package is responsible for the second half of the zodapi pipeline:
taking the component schemas and the route table produced by the parser and
writing one TypeScript module.

Typical usage::

    from zodapi.generator import generate_routes
    from zodapi.parser import convert_to_openapi3, load_document

    document = convert_to_openapi3(load_document("openapi.yaml"))
    path = generate_routes(document)

Sub-modules:

* :mod:`~zodapi.generator.emitter` -- Turn one schema node into a zod
  validator expression.
* :mod:`~zodapi.generator.naming` -- Endpoint and schema identifiers.
* :mod:`~zodapi.generator.builder` -- Indentation-aware source assembly and
  TypeScript literal quoting.
* :mod:`~zodapi.generator.codegen` -- Assemble the endpoints module and write
  it to disk.
"""

from zodapi.generator.codegen import (
    generate_routes,
    generate_single_file,
    render_endpoints_source,
)
from zodapi.generator.emitter import schema_to_validator_source
from zodapi.generator.naming import endpoint_identifier

__all__ = [
    "endpoint_identifier",
    "generate_routes",
    "generate_single_file",
    "render_endpoints_source",
    "schema_to_validator_source",
]
