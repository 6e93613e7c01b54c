"""
Incremental builder.

Edits already rendered class text in place. The builder never re-parses the
class: it searches for the literal region markers and method signatures the
renderer emits and splices new lines next to them.
"""

from __future__ import annotations

import logging
import re

from .config import GeneratorConfig
from .model.nodes import Member, MemberKind
from .model.renderer import ENDREGION
from .utils import INDENT, with_terminator

logger = logging.getLogger(__name__)

_LEADING_WHITESPACE = re.compile(r"^\s*")


class ClassBuilder:
    """Line buffer of a rendered class file.

    Examples:
        builder = ClassBuilder(text)
        builder.insert_member(Member.make_field("int", "count"), "Elements")
        builder.append_statements_to_method(awake, "count = 0")
        text = builder.to_string()
    """

    def __init__(self, text: str, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()
        self.lines = text.replace("\r\n", "\n").split("\n")

    def find_region_end(self, region: str) -> int | None:
        """Get the index of the first line holding the region's close marker."""
        marker = f"{ENDREGION}{region}"
        for i, line in enumerate(self.lines):
            if marker in line:
                return i
        return None

    def find_method(self, method: Member) -> int | None:
        """Get the index of the first line containing the method's signature."""
        signature = method.get_first_line()
        for i, line in enumerate(self.lines):
            if signature in line:
                return i
        return None

    def insert_member(self, member: Member, region: str, indent_level: int | None = None) -> bool:
        """Insert a rendered member as the last entry of a region.

        The member goes above the blank line that closes the region block,
        so the file keeps the layout a full render would produce. Without an
        explicit indent level the member is indented like the region marker.

        Returns:
            True if the region was found and the member inserted
        """
        end = self.find_region_end(region)
        if end is None:
            logger.warning("Region '%s' not found, %s '%s' was not inserted", region, member.kind.value, member.name)
            return False

        if indent_level is None:
            marker_indent = _LEADING_WHITESPACE.match(self.lines[end]).group(0)
            indent_level = len(marker_indent.expandtabs(len(INDENT))) // len(INDENT)

        index = end - 1 if end > 0 and not self.lines[end - 1].strip() else end
        rendered = member.render(indent_level).split("\n")
        self.lines[index:index] = rendered
        logger.debug("Inserted %d line(s) for '%s' at line %d", len(rendered), member.name, index)
        return True

    def insert_property(self, member: Member, indent_level: int | None = None) -> bool:
        """Insert a property into the configured properties region."""
        return self.insert_member(member, self.config.properties_region, indent_level)

    def insert_empty_line(self, index: int) -> None:
        self.lines.insert(index, "")

    def append_statements_to_method(self, method: Member, *statements: str) -> bool:
        """Append statements to the end of a rendered method body.

        Statements are terminated and indented one level below the signature,
        in call order, right above the method's closing brace (after any
        ``return`` line already in the body).

        Returns:
            True if the method was found and the statements appended
        """
        if method.kind != MemberKind.METHOD:
            logger.warning("'%s' is a %s member, not a method", method.name, method.kind.value)
            return False

        start = self.find_method(method)
        if start is None:
            logger.warning("Method '%s' not found, %d statement(s) dropped", method.get_first_line(), len(statements))
            return False

        indent = _LEADING_WHITESPACE.match(self.lines[start]).group(0)
        close = self._closing_brace(start, indent)
        body = [f"{indent}{INDENT}{with_terminator(s)}" for s in statements]

        # An empty method body renders as a single placeholder line
        if close == start + 3 and not self.lines[start + 2].strip():
            del self.lines[start + 2]
            close -= 1

        self.lines[close:close] = body
        logger.debug("Appended %d statement(s) to '%s'", len(body), method.name)
        return True

    def _closing_brace(self, start: int, indent: str) -> int:
        """Get the index of the closing brace at ``indent`` after ``start``.

        Falls back to the first line holding a closing brace, then to the
        end of the text.
        """
        first_close = None
        for i in range(start + 1, len(self.lines)):
            line = self.lines[i]
            if line.rstrip() == f"{indent}}}":
                return i
            if first_close is None and "}" in line:
                first_close = i
        return first_close if first_close is not None else len(self.lines)

    def to_string(self) -> str:
        return "\n".join(self.lines)

    def __str__(self) -> str:
        return self.to_string()


def insert_member(text: str, member: Member, region: str, indent_level: int | None = None) -> str:
    """Insert a member into a region of rendered text and return the new text."""
    builder = ClassBuilder(text)
    builder.insert_member(member, region, indent_level)
    return builder.to_string()


def append_statements_to_method(text: str, method: Member, *statements: str) -> str:
    """Append statements to a method of rendered text and return the new text."""
    builder = ClassBuilder(text)
    builder.append_statements_to_method(method, *statements)
    return builder.to_string()
