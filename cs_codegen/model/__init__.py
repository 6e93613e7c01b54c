"""
Member model: tagged member variants, their renderer and their dictionary form.
"""

from __future__ import annotations

from .description import member_from_dict, member_to_dict
from .nodes import (
    AccessLevel,
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
from .renderer import ENDREGION, REGION, method_signature, render_member

__all__ = [
    "AccessLevel",
    "ClassData",
    "CommentData",
    "ENDREGION",
    "FieldData",
    "Member",
    "MemberKind",
    "MethodData",
    "Parameter",
    "PropertyData",
    "REGION",
    "default_backing_field",
    "default_return_value",
    "member_from_dict",
    "member_to_dict",
    "method_signature",
    "render_member",
]
