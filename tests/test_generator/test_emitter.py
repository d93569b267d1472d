"""Tests for zodapi.generator.emitter (schema -> zod source)."""

from __future__ import annotations

from typing import Any

import pytest

from zodapi.generator.emitter import schema_to_validator_source
from zodapi.parser.composer import process_schema_definitions
from zodapi.parser.nodes import parse_schema


KNOWN = {"Pet", "BaseEntity", "Subscription", "FixedSchedule", "WeeklySchedule"}


def emit(raw: Any, is_required: bool = True) -> str:
    return schema_to_validator_source(raw, is_required, KNOWN)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class TestScalars:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ({"type": "string"}, "z.string()"),
            ({"type": "string", "minLength": 5, "maxLength": 10}, "z.string().min(5).max(10)"),
            ({"type": "string", "format": "date-time"}, "z.string().datetime()"),
            ({"type": "string", "format": "email"}, "z.string().email()"),
            ({"type": "string", "format": "uuid"}, "z.string()"),
            ({"type": "number"}, "z.number()"),
            ({"type": "integer", "minimum": 1, "maximum": 100}, "z.number().min(1).max(100)"),
            ({"type": "integer", "minimum": 1}, "z.number().min(1)"),
            ({"type": "number", "maximum": 0.5}, "z.number().max(0.5)"),
            ({"type": "boolean"}, "z.boolean()"),
        ],
    )
    def test_scalar(self, raw: dict[str, Any], expected: str) -> None:
        assert emit(raw) == expected

    def test_enum_preserves_order(self) -> None:
        raw = {"type": "string", "enum": ["pending", "active", "done"]}
        assert emit(raw) == "z.enum(['pending', 'active', 'done'])"

    def test_enum_values_escaped(self) -> None:
        assert emit({"type": "string", "enum": ["it's"]}) == "z.enum(['it\\'s'])"

    def test_enum_null_member_becomes_nullable(self) -> None:
        raw = {"type": "string", "nullable": True, "enum": ["a", "b", None]}
        assert emit(raw) == "z.enum(['a', 'b']).nullable()"

    def test_enum_null_member_without_flag(self) -> None:
        assert emit({"type": "string", "enum": ["a", None]}) == "z.enum(['a']).nullable()"

    def test_enum_of_only_null(self) -> None:
        assert emit({"type": "string", "enum": [None]}) == "z.string().nullable()"

    def test_enum_non_string_members_use_json_text(self) -> None:
        raw = {"type": "string", "enum": [1, True, 2.5]}
        assert emit(raw) == "z.enum(['1', 'true', '2.5'])"

    @pytest.mark.parametrize("bound", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_bounds_skipped(self, bound: float) -> None:
        assert emit({"type": "number", "minimum": bound, "maximum": bound}) == "z.number()"


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------


class TestModifiers:
    def test_nullable(self) -> None:
        assert emit({"type": "string", "nullable": True}) == "z.string().nullable()"

    def test_type_array_with_null(self) -> None:
        assert emit({"type": ["string", "null"]}) == "z.string().nullable()"

    def test_description(self) -> None:
        assert emit({"type": "boolean", "description": "Is active"}) == "z.boolean().describe('Is active')"

    def test_optional(self) -> None:
        assert emit({"type": "string"}, is_required=False) == "z.string().optional()"

    def test_modifier_order(self) -> None:
        raw = {"type": "string", "nullable": True, "description": "Nick"}
        assert emit(raw, is_required=False) == "z.string().nullable().describe('Nick').optional()"


# ---------------------------------------------------------------------------
# References and compositions
# ---------------------------------------------------------------------------


class TestReferences:
    def test_known_ref_is_lazy(self) -> None:
        assert emit({"$ref": "#/components/schemas/Pet"}) == "z.lazy(() => PetSchema)"

    def test_unknown_ref_accepts_anything(self) -> None:
        assert emit({"$ref": "#/components/schemas/Ghost"}) == "z.unknown()"

    def test_external_ref_accepts_anything(self) -> None:
        assert emit({"$ref": "other.yaml#/components/schemas/Pet"}) == "z.unknown()"

    def test_optional_ref(self) -> None:
        assert emit({"$ref": "#/components/schemas/Pet"}, False) == "z.lazy(() => PetSchema).optional()"


class TestCompositions:
    def test_all_of_two_members(self) -> None:
        raw = {
            "allOf": [
                {"$ref": "#/components/schemas/BaseEntity"},
                {"$ref": "#/components/schemas/Subscription"},
            ]
        }
        assert emit(raw) == (
            "z.intersection(z.lazy(() => BaseEntitySchema), z.lazy(() => SubscriptionSchema))"
        )

    def test_all_of_folds_left(self) -> None:
        raw = {"allOf": [{"type": "string"}, {"type": "number"}, {"type": "boolean"}]}
        assert emit(raw) == "z.intersection(z.intersection(z.string(), z.number()), z.boolean())"

    def test_one_of_chains_or(self) -> None:
        raw = {
            "oneOf": [
                {"$ref": "#/components/schemas/FixedSchedule"},
                {"$ref": "#/components/schemas/WeeklySchedule"},
            ]
        }
        assert emit(raw) == "z.lazy(() => FixedScheduleSchema).or(z.lazy(() => WeeklyScheduleSchema))"

    def test_one_of_single_member(self) -> None:
        assert emit({"oneOf": [{"type": "string"}]}) == "z.string()"

    def test_any_of_behaves_like_one_of(self) -> None:
        assert emit({"anyOf": [{"type": "string"}, {"type": "number"}]}) == "z.string().or(z.number())"


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


class TestContainers:
    def test_array_of_refs(self) -> None:
        raw = {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}
        assert emit(raw) == "z.array(z.lazy(() => PetSchema))"

    def test_array_without_items(self) -> None:
        assert emit({"type": "array"}) == "z.array(z.unknown())"

    def test_empty_object(self) -> None:
        assert emit({"type": "object"}) == "z.object({})"

    def test_object_required_and_optional(self) -> None:
        raw = {
            "type": "object",
            "required": ["id"],
            "properties": {
                "id": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}},
            },
        }
        assert emit(raw) == (
            "z.object({\n"
            "  id: z.string(),\n"
            "  tags: z.array(z.string()).optional(),\n"
            "})"
        )

    def test_nested_object_indentation(self) -> None:
        raw = {
            "type": "object",
            "required": ["owner"],
            "properties": {
                "owner": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                }
            },
        }
        assert emit(raw) == (
            "z.object({\n"
            "  owner: z.object({\n"
            "    name: z.string().optional(),\n"
            "  }),\n"
            "})"
        )

    def test_quoted_property_names(self) -> None:
        raw = {"type": "object", "required": ["x-rate"], "properties": {"x-rate": {"type": "number"}}}
        assert emit(raw) == "z.object({\n  'x-rate': z.number(),\n})"


# ---------------------------------------------------------------------------
# Fallbacks and entry points
# ---------------------------------------------------------------------------


class TestFallbacks:
    @pytest.mark.parametrize("raw", [None, {}, {"type": None}, {"type": "file"}])
    def test_unknown(self, raw: Any) -> None:
        assert emit(raw) == "z.unknown()"

    def test_accepts_parsed_node(self) -> None:
        node = parse_schema({"type": "integer", "minimum": 0})
        assert schema_to_validator_source(node) == "z.number().min(0)"

    def test_pure(self) -> None:
        raw = {"type": "object", "properties": {"a": {"$ref": "#/components/schemas/Pet"}}}
        assert emit(raw) == emit(raw)


class TestCompositionFixture:
    """Validators for the composition fixture's component schemas."""

    def test_subscription_entity(self, composition_doc: dict[str, Any]) -> None:
        schemas = process_schema_definitions(composition_doc)
        source = schema_to_validator_source(schemas["SubscriptionEntity"], True, schemas)
        assert source == (
            "z.object({\n"
            "  subscription: z.intersection(z.lazy(() => BaseEntitySchema), "
            "z.lazy(() => SubscriptionSchema)),\n"
            "  schedule: z.lazy(() => FixedScheduleSchema).or(z.lazy(() => WeeklyScheduleSchema)),\n"
            "})"
        )

    def test_employee_merged(self, composition_doc: dict[str, Any]) -> None:
        schemas = process_schema_definitions(composition_doc)
        source = schema_to_validator_source(schemas["Employee"], True, schemas)
        assert source == (
            "z.object({\n"
            "  id: z.string(),\n"
            "  createdAt: z.string().datetime().optional(),\n"
            "  email: z.string().email(),\n"
            "})"
        )
