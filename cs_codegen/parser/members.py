"""
Member parsers.

Each parser rebuilds one member kind from the text the renderer emits for it.
"""

from __future__ import annotations

import re

from ..errors import MalformedInputError
from ..model.nodes import (
    AccessLevel,
    FieldData,
    Member,
    MemberKind,
    MethodData,
    Parameter,
    PropertyData,
    default_backing_field,
)
from ..utils import INDENT, get_indent, split_top_level
from .base import Parser

_RETURN_PATTERN = re.compile(r"^return\s+(.+?);\s*$")
_ACCESSOR_PATTERN = re.compile(r"^(?:(public|private|protected|internal)\s+)?(get|set)\b")
_STATEMENT_PATTERN = re.compile(r"[^;]+;")


class FieldParser(Parser):
    def parse(self, line: str, region: str | None = None) -> Member:
        signature = self.parse_signature(line)
        default_value = self.filter(line, r"^[^=]*=\s?(.*?);\s*$")

        modifiers = signature.prefix.split()
        if "const" in modifiers:
            kind = MemberKind.CONST_FIELD
        elif "readonly" in modifiers:
            kind = MemberKind.READONLY_FIELD
        else:
            kind = MemberKind.FIELD

        return Member(
            kind=kind,
            name=signature.name,
            type_name=signature.type_name,
            access=AccessLevel.parse(signature.access),
            region=region,
            prefix=signature.prefix,
            payload=FieldData(default_value=default_value or None),
        )


class PropertyParser(Parser):
    """Parses auto-properties, one-line properties and multi-line properties.

    A ``return <expr>;`` line in a getter renames the backing field to
    ``<expr>`` (backing-field inference from the getter body), so custom
    backing fields survive a render/parse cycle.
    """

    def parse_auto_property(self, line: str, region: str | None = None) -> Member:
        signature = self.parse_signature(line)
        setter_access = self.filter(line, r"get;\s*(\w*)\s*set;").strip()
        read_only = re.search(r"\bset\s*;", line) is None
        return Member(
            kind=MemberKind.AUTO_PROPERTY,
            name=signature.name,
            type_name=signature.type_name,
            access=AccessLevel.parse(signature.access),
            region=region,
            prefix=signature.prefix,
            payload=PropertyData(setter_access=setter_access, read_only=read_only),
        )

    def parse_property(self, lines: list[str], start: int, indent: int, region: str | None = None) -> Member:
        """Parse the multi-line property whose header is ``lines[start]``."""
        signature = self.parse_signature(lines[start])
        data = PropertyData(backing_field=default_backing_field(signature.name))
        inner, _ = self.closure(lines, start, indent)
        body_indent = get_indent(indent) + INDENT * 2

        has_setter = False
        for line in inner:
            stripped = line.strip()
            if not stripped or stripped in ("{", "}"):
                continue
            accessor = _ACCESSOR_PATTERN.match(stripped)
            if accessor:
                if accessor.group(2) == "set":
                    has_setter = True
                    data.setter_access = accessor.group(1) or ""
                continue

            statement = self.dedent(line, body_indent)
            if not has_setter:
                returned = _RETURN_PATTERN.match(statement)
                if returned:
                    data.backing_field = returned.group(1)
                    continue
                data.getter_body.append(statement)
            elif stripped != f"{data.backing_field} = value;":
                data.setter_body.append(statement)

        data.read_only = not has_setter
        return self._property(signature, data, region)

    def parse_one_line_property(self, line: str, region: str | None = None) -> Member:
        """Parse "<type> <name> { get { ... } [set { ... }] }" from a single line."""
        signature = self.parse_signature(line)
        data = PropertyData(backing_field=default_backing_field(signature.name), one_line=True)

        getter = re.search(r"\bget\s*\{(.*?)\}", line)
        for statement in _statements(getter.group(1) if getter else ""):
            returned = _RETURN_PATTERN.match(statement)
            if returned:
                data.backing_field = returned.group(1)
            else:
                data.getter_body.append(statement)

        setter = re.search(r"(?:\b(public|private|protected|internal)\s+)?\bset\s*\{(.*?)\}", line)
        if setter:
            data.setter_access = setter.group(1) or ""
            for statement in _statements(setter.group(2)):
                if statement != f"{data.backing_field} = value;":
                    data.setter_body.append(statement)
        data.read_only = setter is None
        return self._property(signature, data, region)

    @staticmethod
    def _property(signature, data: PropertyData, region: str | None) -> Member:
        return Member(
            kind=MemberKind.PROPERTY,
            name=signature.name,
            type_name=signature.type_name,
            access=AccessLevel.parse(signature.access),
            region=region,
            prefix=signature.prefix,
            payload=data,
        )


class MethodParameterParser(Parser):
    def parse(self, text: str) -> Parameter:
        head, _, default_value = text.strip().partition("=")
        words = [w for w in split_top_level(head.strip(), " ") if w]
        if len(words) < 2:
            raise MalformedInputError("Expected a parameter type and name", text)
        return Parameter(
            type_name=" ".join(words[:-1]),
            name=words[-1],
            default_value=default_value.strip() or None,
        )


class MethodParser(Parser):
    SIGNATURE_PATTERN = re.compile(r"^\s*(?P<head>[^(]*?)(?P<name>\w+(?:<[^>]*>)?)\s*\((?P<params>.*)\)\s*$")

    def __init__(self):
        self.parameter_parser = MethodParameterParser()

    def parse(self, lines: list[str], start: int, indent: int, region: str | None = None) -> Member:
        """Parse the method whose signature is ``lines[start]``.

        Body lines keep their indentation relative to the method body. A
        final ``return <expr>;`` at body level becomes the return value.
        """
        line = lines[start]
        match = self.SIGNATURE_PATTERN.match(line)
        if not match:
            raise MalformedInputError("Expected a method signature", line)

        head = [w for w in split_top_level(match.group("head").strip(), " ") if w]
        access = next((w for w in head if self.is_access_keyword(w)), "")
        prefix = " ".join(w for w in head if self.is_modifier(w))
        type_name = head[-1] if head and not self.is_keyword(head[-1]) else ""

        data = MethodData()
        for text in split_top_level(match.group("params")):
            if text.strip():
                data.parameters.append(self.parameter_parser.parse(text))

        inner, _ = self.closure(lines, start, indent)
        body_indent = get_indent(indent) + INDENT
        data.body = [self.dedent(body_line, body_indent) for body_line in inner if body_line.strip()]
        if data.body:
            returned = _RETURN_PATTERN.match(data.body[-1])
            if returned:
                data.return_value = returned.group(1)
                data.body.pop()

        return Member(
            kind=MemberKind.METHOD,
            name=match.group("name"),
            type_name=type_name,
            access=AccessLevel.parse(access),
            region=region,
            prefix=prefix,
            payload=data,
        )


def _statements(text: str) -> list[str]:
    return [s.strip() for s in _STATEMENT_PATTERN.findall(text) if s.strip()]
