"""Small helpers for assembling TypeScript source text.

Validator expressions are built bottom-up as strings.  The only layout rule
the generator needs is for multi-line object literals: the members of a
nested literal are indented one level deeper than the line that opens it.
:class:`CodeBuilder` handles that, so the emitter never counts spaces
itself.
"""

from __future__ import annotations

import re

INDENT = "  "

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class CodeBuilder:
    """Collect lines at a tracked indentation level.

    Example::

        builder = CodeBuilder()
        builder.line("z.object({")
        with builder.indented():
            builder.line("id: z.string(),")
        builder.line("})")
        builder.render()
        # 'z.object({\\n  id: z.string(),\\n})'
    """

    def __init__(self, indent: str = INDENT) -> None:
        self._indent = indent
        self._level = 0
        self._lines: list[str] = []

    def line(self, text: str = "") -> None:
        """Append *text*; every line of a multi-line string is indented."""
        for part in text.split("\n"):
            self._lines.append(f"{self._indent * self._level}{part}" if part else "")

    def indented(self) -> "_Indent":
        """Context manager that raises the indentation level by one."""
        return _Indent(self)

    def render(self) -> str:
        return "\n".join(self._lines)


class _Indent:
    def __init__(self, builder: CodeBuilder) -> None:
        self._builder = builder

    def __enter__(self) -> CodeBuilder:
        self._builder._level += 1
        return self._builder

    def __exit__(self, *exc: object) -> None:
        self._builder._level -= 1


def object_literal(opener: str, members: list[tuple[str, str]], closer: str = "}") -> str:
    """Render ``opener`` + one ``key: value,`` line per member + ``closer``.

    Values may themselves span several lines; their continuation lines are
    indented along with the member.  An empty member list renders inline as
    ``opener + closer`` (e.g. ``z.object({})``).
    """
    if not members:
        return f"{opener}{closer}"
    builder = CodeBuilder()
    builder.line(opener)
    with builder.indented():
        for key, value in members:
            builder.line(f"{property_key(key)}: {value},")
    builder.line(closer)
    return builder.render()


def property_key(name: str) -> str:
    """Return *name* as an object-literal key, quoting it when needed."""
    if _IDENTIFIER_RE.match(name):
        return name
    return string_literal(name)


def string_literal(value: str) -> str:
    """Return *value* as a single-quoted TypeScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("`", "\\`")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"
