"""Canonical Pydantic models shared across all zodapi modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration** -- loaded from ``./zodapi.json``, the environment and CLI
flags: :class:`GeneratorConfig`.

**Schema nodes** -- a closed set of variants describing one OpenAPI schema
after it has been read from the raw document. Every node carries a
:class:`SchemaKind` tag plus the shared ``nullable`` / ``description``
modifiers:
    :class:`RefSchema`, :class:`AllOfSchema`, :class:`OneOfSchema`,
    :class:`StringSchema`, :class:`NumberSchema`, :class:`BooleanSchema`,
    :class:`ArraySchema`, :class:`ObjectSchema`, and :class:`UnknownSchema`.

**Route table** -- produced by the extractor and consumed by the code
generator: :class:`RouteMethodEntry` and the :data:`RouteTable` alias.

Schema nodes are frozen; they are built once per document by
:func:`~zodapi.parser.nodes.parse_schema` and never mutated afterwards.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class GeneratorConfig(BaseModel):
    """Effective settings for one generator run.

    Example::

        GeneratorConfig(out_dir="web/src", base_url="https://api.example.com")
    """

    model_config = ConfigDict(extra="forbid")

    out_dir: str = Field(default="src", description="Directory for the generated file")
    output_filename: str = Field(
        default="endpoints.ts", description="Name of the generated source file"
    )
    package_import: str = Field(
        default="@danstackme/apity",
        description="Module that exports createApi and createApiEndpoint",
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Overrides the document's first server URL when set",
    )


# --- Schema nodes ---


class SchemaKind(str, enum.Enum):
    """Tag identifying which :class:`SchemaNode` variant a node is."""

    REF = "ref"
    ALL_OF = "all_of"
    ONE_OF = "one_of"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"


class SchemaNode(BaseModel):
    """Base class for every schema variant.

    ``nullable`` and ``description`` are modifiers that apply regardless of
    the variant and are rendered after the variant's own validator.
    """

    model_config = ConfigDict(frozen=True)

    kind: SchemaKind
    nullable: bool = False
    description: Optional[str] = None


class RefSchema(SchemaNode):
    """An internal ``$ref`` pointer, kept by name for lazy emission."""

    kind: SchemaKind = SchemaKind.REF
    target: str


class AllOfSchema(SchemaNode):
    """A structural intersection that could not be merged up front."""

    kind: SchemaKind = SchemaKind.ALL_OF
    members: list[SchemaNode] = Field(default_factory=list)


class OneOfSchema(SchemaNode):
    """A union whose branches are tried left to right."""

    kind: SchemaKind = SchemaKind.ONE_OF
    members: list[SchemaNode] = Field(default_factory=list)


class StringSchema(SchemaNode):
    kind: SchemaKind = SchemaKind.STRING
    enum: Optional[list[Any]] = None
    format: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None


class NumberSchema(SchemaNode):
    kind: SchemaKind = SchemaKind.NUMBER
    integer: bool = False
    minimum: Optional[int | float] = None
    maximum: Optional[int | float] = None


class BooleanSchema(SchemaNode):
    kind: SchemaKind = SchemaKind.BOOLEAN


class ArraySchema(SchemaNode):
    kind: SchemaKind = SchemaKind.ARRAY
    items: Optional[SchemaNode] = None


class ObjectSchema(SchemaNode):
    """An object with ordered properties.

    ``required`` keeps document order and may contain duplicates when it was
    produced by an ``allOf`` merge.
    """

    kind: SchemaKind = SchemaKind.OBJECT
    properties: dict[str, SchemaNode] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)


class UnknownSchema(SchemaNode):
    """Absent, unrecognised, or unresolvable schema; accepts anything."""

    kind: SchemaKind = SchemaKind.UNKNOWN


# --- Route table ---


class RouteMethodEntry(BaseModel):
    """Everything the code generator needs for one (path, HTTP method) pair.

    A ``None`` schema means the slot is absent in the document (no 200 JSON
    response, no JSON request body, no query or path parameters).
    """

    method: str = Field(description="Uppercase HTTP method, e.g. GET")
    response_schema: Optional[SchemaNode] = None
    body_schema: Optional[SchemaNode] = None
    query_schema: Optional[SchemaNode] = None
    path_schema: Optional[SchemaNode] = None
    query_params: list[str] = Field(default_factory=list)
    path_params: list[str] = Field(default_factory=list)
    summary: Optional[str] = None


RouteTable = dict[str, dict[str, RouteMethodEntry]]
"""Bracket-normalised path -> uppercase method -> entry, in document order."""
