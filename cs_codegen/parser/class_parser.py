"""
Class parser.

Rebuilds a class member tree from source text by running every line of the
class body through an ordered predicate cascade. The order is load-bearing:
a line can satisfy several predicates and the first one wins (for instance
``int X { get; set; }`` must reach the auto-property branch, never the field
branch, so ``is_field`` rejects the auto-property shape).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ..errors import MalformedInputError
from ..model.nodes import AccessLevel, ClassData, Member, MemberKind
from ..utils import split_top_level, unbracket_attribute
from .base import Parser
from .members import FieldParser, MethodParser, PropertyParser

logger = logging.getLogger(__name__)

_HEADER_PATTERN = re.compile(r"^\s*(?P<head>(?:\w+\s+)*?)class\s+(?P<name>\w+(?:<[^>]*>)?)\s*(?::\s*(?P<bases>.*?))?\s*\{?\s*$")
_NAMESPACE_PATTERN = re.compile(r"^namespace\s+([\w.]+)", re.MULTILINE)


@dataclass
class _ParseState:
    cls: Member
    lines: list[str]
    indent: int
    region: str | None = None
    attributes: list[str] = field(default_factory=list)


class ClassParser(Parser):
    # (label, predicate, indent offset from the class header). Evaluated in order.
    CASCADE = (
        ("method", "is_method", 1),
        ("nested_class", "is_class", 1),
        ("class_attribute", "is_attribute", 0),
        ("member_attribute", "is_attribute", 1),
        ("field", "is_field", 1),
        ("one_line_property", "is_one_line_property", 1),
        ("property", "is_property", 1),
        ("auto_property", "is_auto_property", 1),
        ("comment", "is_comment", 1),
    )

    def __init__(self):
        self.method_parser = MethodParser()
        self.field_parser = FieldParser()
        self.property_parser = PropertyParser()

    def classify(self, line: str, indent: int) -> str | None:
        """Get the label of the first cascade predicate the line satisfies."""
        for label, predicate, offset in self.CASCADE:
            if getattr(self, predicate)(line, indent + offset):
                return label
        return None

    def parse(self, source: str, indent: int = 0) -> Member | None:
        """Parse the first class declared at ``indent`` in ``source``.

        Returns:
            The class member, or None if no class header is found

        Raises:
            MalformedInputError: If the class header or a member signature line
                is missing tokens
        """
        lines = source.replace("\r\n", "\n").split("\n")
        header_index = next((i for i, line in enumerate(lines) if self.is_class(line, indent)), None)
        if header_index is None:
            logger.warning("No class declaration found at indent %d in %r", indent, source[:80])
            return None

        header = _HEADER_PATTERN.match(lines[header_index])
        if header is None:
            raise MalformedInputError("Expected a class declaration", lines[header_index])
        head = header.group("head").split()
        cls = Member(
            kind=MemberKind.CLASS,
            name=header.group("name"),
            type_name="class",
            access=AccessLevel.parse(next((w for w in head if self.is_access_keyword(w)), "")),
            prefix=" ".join(w for w in head if self.is_modifier(w)),
            payload=ClassData(
                directives=self.get_directives(source),
                base_types=self.get_inheritance(header.group("bases") or ""),
            ),
        )
        if indent > 0:
            namespace = _NAMESPACE_PATTERN.search(source)
            if namespace:
                cls.class_data.namespace = namespace.group(1)

        start = self.span_start(lines, header_index, indent)
        _, end = self.closure(lines, header_index, indent)
        state = _ParseState(cls=cls, lines=lines, indent=indent)

        for index in range(start, end + 1):
            line = lines[index]
            region = self.region_open(line, indent + 1)
            if region is not None:
                if region not in cls.class_data.regions:
                    cls.class_data.regions.append(region)
                state.region = region
                continue
            if self.region_close(line, indent + 1):
                state.region = None
                continue

            label = self.classify(line, indent)
            if label:
                getattr(self, f"_on_{label}")(state, index)

        if state.attributes:
            logger.debug("Dropping trailing attributes %s in class %s", state.attributes, cls.name)
        return cls

    def get_inheritance(self, bases: str) -> list[str]:
        """Split the text after "class Name :" into base types, skipping keywords."""
        bases = re.split(r"\s+where\s+", bases)[0].rstrip("{ ")
        return [b.strip() for b in split_top_level(bases) if b.strip() and not self.is_keyword(b.strip())]

    # Cascade handlers

    def _add(self, state: _ParseState, member: Member) -> None:
        if state.attributes:
            member.attributes.extend(state.attributes)
            state.attributes.clear()
        state.cls.class_data.members.append(member)

    def _on_method(self, state: _ParseState, index: int) -> None:
        self._add(state, self.method_parser.parse(state.lines, index, state.indent + 1, state.region))

    def _on_nested_class(self, state: _ParseState, index: int) -> None:
        child_indent = state.indent + 1
        start = self.span_start(state.lines, index, child_indent)
        _, end = self.closure(state.lines, index, child_indent)
        nested = self.parse("\n".join(state.lines[start : end + 1]), child_indent)
        # Buffered attributes decorate the nested class and were parsed with it
        state.attributes.clear()
        if nested is not None:
            nested.region = state.region
            state.cls.class_data.members.append(nested)

    def _on_class_attribute(self, state: _ParseState, index: int) -> None:
        state.cls.attributes.append(unbracket_attribute(state.lines[index]))

    def _on_member_attribute(self, state: _ParseState, index: int) -> None:
        state.attributes.append(unbracket_attribute(state.lines[index]))

    def _on_field(self, state: _ParseState, index: int) -> None:
        self._add(state, self.field_parser.parse(state.lines[index], state.region))

    def _add_property(self, state: _ParseState, member: Member) -> None:
        """Add a property, folding the backing field declared right above it into a pair.

        The field must be private, unmodified, of the property's type and in
        the same region, and its name must match the getter's return value.
        """
        members = state.cls.class_data.members
        previous = members[-1] if members else None
        data = member.property_data
        if (
            previous is None
            or state.attributes
            or previous.kind != MemberKind.FIELD
            or previous.access != AccessLevel.PRIVATE
            or previous.prefix
            or previous.region != member.region
            or previous.type_name != member.type_name
            or previous.name != data.backing_field
        ):
            self._add(state, member)
            return

        members.pop()
        data.default_value = previous.field_data.default_value
        kind = MemberKind.FIELD_PROPERTY_PAIR_READONLY if data.read_only else MemberKind.FIELD_PROPERTY_PAIR
        pair = Member(
            kind=kind,
            name=member.name,
            type_name=member.type_name,
            access=member.access,
            region=member.region,
            prefix=member.prefix,
            attributes=previous.attributes,
            payload=data,
        )
        members.append(pair)

    def _on_one_line_property(self, state: _ParseState, index: int) -> None:
        self._add_property(state, self.property_parser.parse_one_line_property(state.lines[index], state.region))

    def _on_property(self, state: _ParseState, index: int) -> None:
        self._add_property(state, self.property_parser.parse_property(state.lines, index, state.indent + 1, state.region))

    def _on_auto_property(self, state: _ParseState, index: int) -> None:
        self._add(state, self.property_parser.parse_auto_property(state.lines[index], state.region))

    def _on_comment(self, state: _ParseState, index: int) -> None:
        text = re.sub(r"^\s*//\s?", "", state.lines[index])
        self._add(state, Member.make_comment(text, state.region))


def parse_class(source: str, indent: int | None = None) -> Member | None:
    """Parse the first class in ``source``.

    Without an explicit indent, a file-level ``namespace`` puts the class
    header one level deep.
    """
    if indent is None:
        indent = 1 if _NAMESPACE_PATTERN.search(source) else 0
    return ClassParser().parse(source, indent)
