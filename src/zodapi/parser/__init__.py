"""OpenAPI document parser -- load, convert, resolve, compose, and extract routes.

This sub-package is responsible for the first half of the zodapi pipeline:
turning a raw OpenAPI 3.x or Swagger 2.0 document (JSON or YAML, local file
or remote URL) into a :data:`~zodapi.models.RouteTable` plus a table of
named component schemas that the generator can consume.

Typical usage::

    from zodapi.parser import convert_to_openapi3, extract_routes, load_document

    raw = load_document("petstore.yaml")
    document = convert_to_openapi3(raw)
    routes = extract_routes(document)

Sub-modules:

* :mod:`~zodapi.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection.
* :mod:`~zodapi.parser.converter` -- Swagger 2.0 to OpenAPI 3 conversion.
* :mod:`~zodapi.parser.resolver` -- On-demand ``$ref`` lookup.
* :mod:`~zodapi.parser.composer` -- ``allOf`` flattening.
* :mod:`~zodapi.parser.nodes` -- Raw dict to schema-node conversion.
* :mod:`~zodapi.parser.extractor` -- Walks ``paths`` and produces
  :class:`~zodapi.models.RouteMethodEntry` objects.
"""

from zodapi.parser.composer import process_all_of, process_schema_definitions
from zodapi.parser.converter import convert_to_openapi3
from zodapi.parser.extractor import extract_routes, to_bracket_path
from zodapi.parser.loader import load_document
from zodapi.parser.nodes import parse_schema
from zodapi.parser.resolver import get_ref_name, is_reference_object, resolve_ref

__all__ = [
    "convert_to_openapi3",
    "extract_routes",
    "get_ref_name",
    "is_reference_object",
    "load_document",
    "parse_schema",
    "process_all_of",
    "process_schema_definitions",
    "resolve_ref",
    "to_bracket_path",
]
