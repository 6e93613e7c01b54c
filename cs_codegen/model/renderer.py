"""
Member renderer.

Converts members to formatted C# source text. The output shape is the
grammar the parser reads back, so every literal here (region markers,
brace placement, accessor layout) is load-bearing:
- Allman braces, 4-space indentation
- Attributes on separate lines above declarations
- Members grouped under "#region <name>" / "#endregion <name>" markers
"""

from __future__ import annotations

from collections.abc import Callable

from ..errors import InvalidMemberError
from ..utils import INDENT, bracket_attribute, get_indent, remove_newlines, sanitize_name, with_terminator
from .nodes import FIELD_KINDS, Member, MemberKind, default_backing_field

REGION = "#region "
ENDREGION = "#endregion "

# Modifier literal forced onto the field variants
FIXED_MODIFIERS = {
    MemberKind.CONST_FIELD: "const",
    MemberKind.READONLY_FIELD: "readonly",
}


def render_member(member: Member, indent_level: int = 0) -> str:
    """Render a member; a class renders as a complete file ending with a newline."""
    text = _render(member, indent_level)
    if member.kind == MemberKind.CLASS:
        return text + "\n"
    return text


def method_signature(member: Member) -> str:
    """Get "<access><modifier><type> <name>(<params>)" without indentation."""
    data = member.method_data
    params = ", ".join(p for p in (parameter.render() for parameter in data.parameters) if p)
    return f"{_declaration(member)}({params})"


def _render(member: Member, indent_level: int) -> str:
    if member.kind != MemberKind.COMMENT and not member.get_name():
        raise InvalidMemberError(f"Cannot render a {member.kind.value} member without a name")
    return RENDERERS[member.kind](member, indent_level)


def _modifier(prefix: str) -> str:
    return f"{prefix} " if prefix else ""


def _declaration(member: Member, prefix: str | None = None) -> str:
    """Get "<access><modifier><type> <name>"."""
    prefix = member.prefix if prefix is None else prefix
    head = f"{member.access.keyword()}{_modifier(prefix)}"
    if member.type_name:
        return f"{head}{member.type_name} {member.get_name()}"
    return f"{head}{member.get_name()}"


def _attribute_lines(member: Member, indent: str) -> list[str]:
    return [f"{indent}{bracket_attribute(a)}" for a in member.attributes if a.strip()]


def _field_prefix(member: Member) -> str:
    literal = FIXED_MODIFIERS.get(member.kind)
    if not literal or literal in member.prefix.split():
        return member.prefix
    return f"{member.prefix} {literal}".strip()


def _render_field(member: Member, indent_level: int) -> str:
    indent = get_indent(indent_level)
    line = f"{indent}{_declaration(member, _field_prefix(member))}"
    default_value = member.field_data.default_value
    if default_value:
        line += f" = {default_value}"
    return "\n".join(_attribute_lines(member, indent) + [line + ";"])


def _setter_keyword(setter_access: str) -> str:
    return f"{setter_access} set" if setter_access else "set"


def _render_auto_property(member: Member, indent_level: int) -> str:
    indent = get_indent(indent_level)
    data = member.property_data
    if data.read_only:
        line = f"{indent}{_declaration(member)} {{ get; }}"
    else:
        line = f"{indent}{_declaration(member)} {{ get; {_setter_keyword(data.setter_access)}; }}"
    return "\n".join(_attribute_lines(member, indent) + [line])


def _backing_field(member: Member) -> str:
    data = member.property_data
    return sanitize_name(data.backing_field) or default_backing_field(member.name)


def _property_lines(member: Member, indent: str, read_only: bool) -> list[str]:
    """Render the property block (without attributes) as a list of lines."""
    data = member.property_data
    backing = _backing_field(member)
    header = f"{indent}{_declaration(member)}"

    if data.one_line:
        getter = " ".join([*(remove_newlines(line) for line in data.getter_body), f"return {backing};"])
        text = f"{header} {{ get {{ {getter} }}"
        if not read_only:
            setter_lines = " ".join([*(remove_newlines(line) for line in data.setter_body), f"{backing} = value;"])
            text += f" {_setter_keyword(data.setter_access)} {{ {setter_lines} }}"
        return [text + " }"]

    accessor_indent = indent + INDENT
    body_indent = accessor_indent + INDENT
    lines = [header, f"{indent}{{", f"{accessor_indent}get", f"{accessor_indent}{{"]
    lines.extend(f"{body_indent}{remove_newlines(line)}" for line in data.getter_body)
    lines.append(f"{body_indent}return {backing};")
    lines.append(f"{accessor_indent}}}")
    if not read_only:
        lines.append(f"{accessor_indent}{_setter_keyword(data.setter_access)}")
        lines.append(f"{accessor_indent}{{")
        lines.extend(f"{body_indent}{remove_newlines(line)}" for line in data.setter_body)
        lines.append(f"{body_indent}{backing} = value;")
        lines.append(f"{accessor_indent}}}")
    lines.append(f"{indent}}}")
    return lines


def _render_property(member: Member, indent_level: int) -> str:
    indent = get_indent(indent_level)
    lines = _attribute_lines(member, indent) + _property_lines(member, indent, member.property_data.read_only)
    return "\n".join(lines)


def _render_field_property_pair(member: Member, indent_level: int) -> str:
    indent = get_indent(indent_level)
    data = member.property_data
    field_line = f"{indent}private {member.type_name} {_backing_field(member)}"
    if data.default_value:
        field_line += f" = {data.default_value}"
    read_only = data.read_only or member.kind == MemberKind.FIELD_PROPERTY_PAIR_READONLY
    lines = _attribute_lines(member, indent) + [field_line + ";"] + _property_lines(member, indent, read_only)
    return "\n".join(lines)


def _render_method(member: Member, indent_level: int) -> str:
    indent = get_indent(indent_level)
    data = member.method_data
    body_indent = indent + INDENT

    lines = _attribute_lines(member, indent)
    lines.append(f"{indent}{method_signature(member)}")
    lines.append(f"{indent}{{")
    body = []
    for line in data.body:
        line = remove_newlines(line)
        body.append(f"{body_indent}{with_terminator(line)}" if line else "")
    if data.return_value:
        body.append(f"{body_indent}return {data.return_value};")
    lines.extend(body or [""])
    lines.append(f"{indent}}}")
    return "\n".join(lines)


def _render_comment(member: Member, indent_level: int) -> str:
    text = remove_newlines(member.comment_data.text)
    return f"{get_indent(indent_level)}// {text}".rstrip()


def _render_class(member: Member, indent_level: int) -> str:
    data = member.class_data
    lines: list[str] = []
    level = indent_level

    if data.namespace:
        lines.append(f"namespace {data.namespace}")
        lines.append("{")
        level += 1

    indent = get_indent(level)
    for directive in data.directives:
        lines.append(f"{indent}using {directive};")
    lines.append("")
    lines.extend(f"{indent}{bracket_attribute(a)}" for a in member.attributes if a.strip())

    declaration = f"{indent}{member.access.keyword()}{_modifier(member.prefix)}class {member.get_name()}"
    if data.base_types:
        declaration += f" : {', '.join(data.base_types)}"
    lines.append(declaration)
    lines.append(f"{indent}{{")
    lines.extend(_member_block(member, level))
    lines.append(f"{indent}}}")

    if data.namespace:
        lines.append("}")

    return "\n".join(lines)


def _member_block(member: Member, level: int) -> list[str]:
    """Render the class body, grouping members by declared region."""
    data = member.class_data
    child_level = level + 1
    lines: list[str] = []

    if not data.regions:
        if not data.members:
            lines.append("")
        for child in data.members:
            lines.append(_render(child, child_level))
            lines.append("")
        return lines

    marker_indent = get_indent(child_level)
    declared = set(data.regions)
    ungrouped = [child for child in data.members if child.region not in declared]
    for child in ungrouped:
        lines.append(_render(child, child_level))
    if ungrouped:
        lines.append("")

    for region in data.regions:
        lines.append(f"{marker_indent}{REGION}{region}")
        lines.append("")
        for child in data.members_in(region):
            lines.append(_render(child, child_level))
        lines.append("")
        lines.append(f"{marker_indent}{ENDREGION}{region}")
        lines.append("")
    return lines


RENDERERS: dict[MemberKind, Callable[[Member, int], str]] = {
    **{kind: _render_field for kind in FIELD_KINDS},
    MemberKind.AUTO_PROPERTY: _render_auto_property,
    MemberKind.PROPERTY: _render_property,
    MemberKind.FIELD_PROPERTY_PAIR: _render_field_property_pair,
    MemberKind.FIELD_PROPERTY_PAIR_READONLY: _render_field_property_pair,
    MemberKind.METHOD: _render_method,
    MemberKind.COMMENT: _render_comment,
    MemberKind.CLASS: _render_class,
}
