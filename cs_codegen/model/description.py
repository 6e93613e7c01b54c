"""
Dictionary (JSON) form of a member tree.

Class descriptions arrive from the editor integration as JSON documents:

    {
        "kind": "class",
        "name": "Bae",
        "access": "public",
        "prefix": "sealed",
        "directives": ["UnityEngine"],
        "base_types": ["DUIPanel"],
        "regions": ["Elements"],
        "members": [{"kind": "field", "type": "string", "name": "label", "region": "Elements"}]
    }
"""

from __future__ import annotations

from typing import Any

from ..config import GeneratorConfig
from ..errors import InvalidMemberError
from .nodes import (
    DEFAULT_REGIONS,
    FIELD_KINDS,
    PROPERTY_KINDS,
    ClassData,
    CommentData,
    FieldData,
    Member,
    MemberKind,
    MethodData,
    Parameter,
    PropertyData,
    default_backing_field,
    default_return_value,
)


def member_from_dict(d: dict[str, Any], config: GeneratorConfig | None = None) -> Member:
    """Build a member (recursively for classes) from its description."""
    config = config or GeneratorConfig()
    try:
        kind = MemberKind(d.get("kind", "class"))
    except ValueError as e:
        raise InvalidMemberError(f"Unknown member kind: {d.get('kind')!r}") from e

    name = d.get("name", "")
    type_name = d.get("type", "class" if kind == MemberKind.CLASS else "")
    region = d.get("region") or None
    prefix = d.get("prefix", "")

    if kind in FIELD_KINDS:
        payload = FieldData(default_value=d.get("default_value") or None)
        if region is None:
            region = DEFAULT_REGIONS.get(kind)
    elif kind in PROPERTY_KINDS:
        payload = PropertyData(
            setter_access=d.get("setter_access", ""),
            backing_field=d.get("backing_field") or default_backing_field(name, config.backing_field_prefix),
            read_only=bool(d.get("read_only", kind == MemberKind.FIELD_PROPERTY_PAIR_READONLY)),
            one_line=bool(d.get("one_line", False)),
            getter_body=list(d.get("getter_body", [])),
            setter_body=list(d.get("setter_body", [])),
            default_value=d.get("default_value") or None,
        )
    elif kind == MemberKind.METHOD:
        return_value = d.get("return_value")
        payload = MethodData(
            parameters=[_parameter_from_dict(p) for p in d.get("parameters", [])],
            body=list(d.get("body", [])),
            return_value=default_return_value(type_name) if return_value is None else return_value.strip().rstrip(";"),
        )
    elif kind == MemberKind.COMMENT:
        payload = CommentData(text=d.get("text", ""))
    else:
        payload = ClassData(
            directives=list(d.get("directives", [])),
            base_types=list(d.get("base_types", [])),
            regions=list(d.get("regions", [])),
            members=[member_from_dict(m, config) for m in d.get("members", [])],
            namespace=d.get("namespace", ""),
        )

    return Member(
        kind=kind,
        name=name,
        type_name=type_name,
        access=d.get("access", ""),
        region=region,
        prefix=prefix,
        attributes=list(d.get("attributes", [])),
        payload=payload,
    )


def member_to_dict(member: Member) -> dict[str, Any]:
    """Convert a member (recursively for classes) to its description."""
    d: dict[str, Any] = {"kind": member.kind.value}
    if member.kind != MemberKind.COMMENT:
        d["name"] = member.name
        d["type"] = member.type_name
        d["access"] = member.access.value or "none"
        d["prefix"] = member.prefix
        d["attributes"] = list(member.attributes)
    d["region"] = member.region

    payload = member.payload
    if isinstance(payload, FieldData):
        d["default_value"] = payload.default_value
    elif isinstance(payload, PropertyData):
        d["setter_access"] = payload.setter_access
        d["read_only"] = payload.read_only
        if member.kind != MemberKind.AUTO_PROPERTY:
            d["backing_field"] = payload.backing_field
            d["one_line"] = payload.one_line
            d["getter_body"] = list(payload.getter_body)
            d["setter_body"] = list(payload.setter_body)
            d["default_value"] = payload.default_value
    elif isinstance(payload, MethodData):
        d["parameters"] = [
            {"type": p.type_name, "name": p.name, "default_value": p.default_value} for p in payload.parameters
        ]
        d["body"] = list(payload.body)
        d["return_value"] = payload.return_value
    elif isinstance(payload, CommentData):
        d["text"] = payload.text
    elif isinstance(payload, ClassData):
        d["namespace"] = payload.namespace
        d["directives"] = list(payload.directives)
        d["base_types"] = list(payload.base_types)
        d["regions"] = list(payload.regions)
        d["members"] = [member_to_dict(m) for m in payload.members]
    return d


def _parameter_from_dict(d: dict[str, Any]) -> Parameter:
    return Parameter(type_name=d.get("type", ""), name=d.get("name", ""), default_value=d.get("default_value") or None)
