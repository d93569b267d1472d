"""Tests for zodapi.generator.builder."""

from __future__ import annotations

from zodapi.generator.builder import CodeBuilder, object_literal, property_key, string_literal


class TestCodeBuilder:
    def test_indentation_levels(self) -> None:
        builder = CodeBuilder()
        builder.line("a({")
        with builder.indented():
            builder.line("b: 1,")
            with builder.indented():
                builder.line("c")
        builder.line("})")
        assert builder.render() == "a({\n  b: 1,\n    c\n})"

    def test_multiline_text_indented_per_line(self) -> None:
        builder = CodeBuilder()
        with builder.indented():
            builder.line("x\ny")
        assert builder.render() == "  x\n  y"

    def test_blank_lines_not_padded(self) -> None:
        builder = CodeBuilder()
        with builder.indented():
            builder.line("")
        assert builder.render() == ""


class TestObjectLiteral:
    def test_empty_is_inline(self) -> None:
        assert object_literal("z.object({", [], "})") == "z.object({})"

    def test_members_one_per_line(self) -> None:
        result = object_literal("z.object({", [("id", "z.string()"), ("age", "z.number()")], "})")
        assert result == "z.object({\n  id: z.string(),\n  age: z.number(),\n})"

    def test_nested_value_reindented(self) -> None:
        inner = object_literal("z.object({", [("x", "z.boolean()")], "})")
        result = object_literal("z.object({", [("outer", inner)], "})")
        assert result == (
            "z.object({\n"
            "  outer: z.object({\n"
            "    x: z.boolean(),\n"
            "  }),\n"
            "})"
        )


class TestPropertyKey:
    def test_identifier_unquoted(self) -> None:
        assert property_key("createdAt") == "createdAt"
        assert property_key("$meta") == "$meta"

    def test_non_identifier_quoted(self) -> None:
        assert property_key("content-type") == "'content-type'"
        assert property_key("/users/[id]") == "'/users/[id]'"
        assert property_key("1st") == "'1st'"


class TestStringLiteral:
    def test_plain(self) -> None:
        assert string_literal("GET") == "'GET'"

    def test_escapes(self) -> None:
        assert string_literal("it's") == "'it\\'s'"
        assert string_literal("a\\b") == "'a\\\\b'"
        assert string_literal("line1\nline2") == "'line1\\nline2'"
