"""
Member model definitions.

Every construct of a generated class body (field, property, method, comment,
nested class) is a single ``Member`` carrying an explicit ``kind`` and a
kind-specific payload. Render and parse code dispatch on ``kind``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..errors import InvalidMemberError
from ..utils import sanitize_name

DEFAULT_BACKING_FIELD_PREFIX = "m_"


class AccessLevel(str, Enum):
    """C# access levels. NONE renders no keyword."""

    PRIVATE = "private"
    PROTECTED = "protected"
    PUBLIC = "public"
    INTERNAL = "internal"
    NONE = ""

    def keyword(self) -> str:
        """Get the keyword followed by one space, or "" for NONE."""
        return f"{self.value} " if self.value else ""

    @classmethod
    def parse(cls, text: str | None) -> AccessLevel:
        """Map a keyword (or None/""/"none") to an access level."""
        if not text or text.strip().lower() == "none":
            return cls.NONE
        return cls(text.strip().lower())


class MemberKind(str, Enum):
    """Discriminant of the member variants."""

    FIELD = "field"
    CONST_FIELD = "const_field"
    READONLY_FIELD = "readonly_field"
    AUTO_PROPERTY = "auto_property"
    PROPERTY = "property"
    FIELD_PROPERTY_PAIR = "field_property_pair"
    FIELD_PROPERTY_PAIR_READONLY = "field_property_pair_readonly"
    METHOD = "method"
    COMMENT = "comment"
    CLASS = "class"


FIELD_KINDS = frozenset({MemberKind.FIELD, MemberKind.CONST_FIELD, MemberKind.READONLY_FIELD})
PROPERTY_KINDS = frozenset(
    {
        MemberKind.AUTO_PROPERTY,
        MemberKind.PROPERTY,
        MemberKind.FIELD_PROPERTY_PAIR,
        MemberKind.FIELD_PROPERTY_PAIR_READONLY,
    }
)

# Region a member lands in when the caller does not name one
DEFAULT_REGIONS = {
    MemberKind.CONST_FIELD: "Constants",
    MemberKind.READONLY_FIELD: "Readonly",
}


def default_backing_field(name: str, prefix: str = DEFAULT_BACKING_FIELD_PREFIX) -> str:
    """Conventional backing field of a property, e.g. "Count" -> "m_count"."""
    return prefix + sanitize_name(name).lower()


def default_return_value(type_name: str) -> str:
    """Placeholder return expression for a method of the given type."""
    if not type_name or type_name == "void":
        return ""
    return f"default({type_name})"


@dataclass
class Parameter:
    """Represents a method parameter."""

    type_name: str = ""
    name: str = ""
    default_value: str | None = None

    def render(self) -> str:
        """Render as "<type> <name>[ = <default>]"; string defaults are quoted."""
        if not self.name:
            return ""
        default = ""
        if self.default_value:
            value = self.default_value
            if self.type_name == "string" and not value.startswith('"'):
                value = f'"{value}"'
            default = f" = {value}"
        return f"{self.type_name} {self.name}{default}"

    def __str__(self) -> str:
        return self.render()


@dataclass
class FieldData:
    """Payload of field, const field and readonly field members."""

    default_value: str | None = None


@dataclass
class PropertyData:
    """Payload of auto-property, property and field/property pair members.

    Auto-properties only use ``setter_access`` and ``read_only``.
    ``default_value`` is the initializer of the backing field rendered by
    field/property pairs.
    """

    setter_access: str = ""
    backing_field: str = ""
    read_only: bool = False
    one_line: bool = False
    getter_body: list[str] = field(default_factory=list)
    setter_body: list[str] = field(default_factory=list)
    default_value: str | None = None


@dataclass
class MethodData:
    """Payload of method members."""

    parameters: list[Parameter] = field(default_factory=list)
    body: list[str] = field(default_factory=list)
    return_value: str = ""


@dataclass
class CommentData:
    """Payload of comment members."""

    text: str = ""


@dataclass
class ClassData:
    """Payload of class members."""

    directives: list[str] = field(default_factory=list)
    base_types: list[str] = field(default_factory=list)
    regions: list[str] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    namespace: str = ""

    def members_in(self, region: str | None) -> list[Member]:
        """Get the members tagged with a region, in insertion order."""
        return [m for m in self.members if m.region == region]

    def find(self, name: str) -> Member | None:
        """Get the first member with the given name."""
        return next((m for m in self.members if m.name == name), None)


Payload = Union[FieldData, PropertyData, MethodData, CommentData, ClassData]

_PAYLOAD_TYPES: dict[MemberKind, type] = {
    MemberKind.FIELD: FieldData,
    MemberKind.CONST_FIELD: FieldData,
    MemberKind.READONLY_FIELD: FieldData,
    MemberKind.AUTO_PROPERTY: PropertyData,
    MemberKind.PROPERTY: PropertyData,
    MemberKind.FIELD_PROPERTY_PAIR: PropertyData,
    MemberKind.FIELD_PROPERTY_PAIR_READONLY: PropertyData,
    MemberKind.METHOD: MethodData,
    MemberKind.COMMENT: CommentData,
    MemberKind.CLASS: ClassData,
}


@dataclass
class Member:
    """A single declared construct of a class body.

    Mutators return ``self`` so descriptions can be built as chains:

        Member.make_method("int", "Kill").add_lines("var kill = 0", "kill++")
    """

    kind: MemberKind
    name: str = ""
    type_name: str = ""
    access: AccessLevel = AccessLevel.NONE
    region: str | None = None
    prefix: str = ""
    attributes: list[str] = field(default_factory=list)
    payload: Payload | None = None

    def __post_init__(self):
        self.kind = MemberKind(self.kind)
        if not isinstance(self.access, AccessLevel):
            self.access = AccessLevel.parse(self.access)
        if self.payload is None:
            self.payload = _PAYLOAD_TYPES[self.kind]()
        elif not isinstance(self.payload, _PAYLOAD_TYPES[self.kind]):
            raise InvalidMemberError(f"{type(self.payload).__name__} is not a valid payload for a {self.kind.value} member")

    # Factories

    @classmethod
    def make_field(
        cls,
        type_name: str,
        name: str,
        access: AccessLevel = AccessLevel.NONE,
        prefix: str = "",
        default_value: str | None = None,
        region: str | None = None,
    ) -> Member:
        return cls(MemberKind.FIELD, name, type_name, access, region, prefix or "", payload=FieldData(default_value or None))

    @classmethod
    def make_const_field(
        cls,
        type_name: str,
        name: str,
        default_value: str,
        access: AccessLevel = AccessLevel.NONE,
        region: str | None = None,
    ) -> Member:
        region = region or DEFAULT_REGIONS[MemberKind.CONST_FIELD]
        return cls(MemberKind.CONST_FIELD, name, type_name, access, region, "const", payload=FieldData(default_value or None))

    @classmethod
    def make_readonly_field(
        cls,
        type_name: str,
        name: str,
        access: AccessLevel = AccessLevel.NONE,
        default_value: str | None = None,
        region: str | None = None,
    ) -> Member:
        region = region or DEFAULT_REGIONS[MemberKind.READONLY_FIELD]
        return cls(MemberKind.READONLY_FIELD, name, type_name, access, region, "readonly", payload=FieldData(default_value or None))

    @classmethod
    def make_auto_property(
        cls,
        type_name: str,
        name: str,
        access: AccessLevel = AccessLevel.NONE,
        setter_access: str = "",
        prefix: str = "",
        region: str | None = None,
        read_only: bool = False,
    ) -> Member:
        data = PropertyData(setter_access=setter_access or "", read_only=read_only)
        return cls(MemberKind.AUTO_PROPERTY, name, type_name, access, region, prefix or "", payload=data)

    @classmethod
    def make_property(
        cls,
        type_name: str,
        name: str,
        access: AccessLevel = AccessLevel.NONE,
        backing_field: str | None = None,
        prefix: str = "",
        setter_access: str = "",
        region: str | None = None,
        read_only: bool = False,
        one_line: bool = False,
        backing_field_prefix: str = DEFAULT_BACKING_FIELD_PREFIX,
    ) -> Member:
        data = PropertyData(
            setter_access=setter_access or "",
            backing_field=backing_field or default_backing_field(name, backing_field_prefix),
            read_only=read_only,
            one_line=one_line,
        )
        return cls(MemberKind.PROPERTY, name, type_name, access, region, prefix or "", payload=data)

    @classmethod
    def make_field_property_pair(
        cls,
        type_name: str,
        name: str,
        access: AccessLevel = AccessLevel.NONE,
        backing_field: str | None = None,
        default_value: str | None = None,
        read_only: bool = False,
        region: str | None = None,
        backing_field_prefix: str = DEFAULT_BACKING_FIELD_PREFIX,
    ) -> Member:
        kind = MemberKind.FIELD_PROPERTY_PAIR_READONLY if read_only else MemberKind.FIELD_PROPERTY_PAIR
        data = PropertyData(
            backing_field=backing_field or default_backing_field(name, backing_field_prefix),
            read_only=read_only,
            default_value=default_value or None,
        )
        return cls(kind, name, type_name, access, region, payload=data)

    @classmethod
    def make_method(
        cls,
        type_name: str,
        name: str,
        *parameters: Parameter,
        access: AccessLevel = AccessLevel.NONE,
        prefix: str = "",
        region: str | None = None,
        return_value: str | None = None,
    ) -> Member:
        if return_value is None:
            return_value = default_return_value(type_name)
        data = MethodData(parameters=list(parameters), return_value=_strip_terminator(return_value))
        return cls(MemberKind.METHOD, name, type_name, access, region, prefix or "", payload=data)

    @classmethod
    def make_comment(cls, text: str, region: str | None = None) -> Member:
        return cls(MemberKind.COMMENT, region=region, payload=CommentData(text))

    @classmethod
    def make_class(
        cls,
        name: str,
        access: AccessLevel = AccessLevel.NONE,
        prefix: str = "",
        directives: list[str] | tuple = (),
        base_types: list[str] | tuple = (),
        regions: list[str] | tuple = (),
        namespace: str = "",
        region: str | None = None,
    ) -> Member:
        data = ClassData(
            directives=list(directives),
            base_types=list(base_types),
            regions=list(regions),
            namespace=namespace or "",
        )
        return cls(MemberKind.CLASS, name, "class", access, region, prefix or "", payload=data)

    # Typed payload access

    def _payload_for(self, kinds: frozenset | set) -> Payload:
        if self.kind not in kinds:
            raise InvalidMemberError(f"'{self.name}' is a {self.kind.value} member")
        return self.payload

    @property
    def field_data(self) -> FieldData:
        return self._payload_for(FIELD_KINDS)

    @property
    def property_data(self) -> PropertyData:
        return self._payload_for(PROPERTY_KINDS)

    @property
    def method_data(self) -> MethodData:
        return self._payload_for({MemberKind.METHOD})

    @property
    def comment_data(self) -> CommentData:
        return self._payload_for({MemberKind.COMMENT})

    @property
    def class_data(self) -> ClassData:
        return self._payload_for({MemberKind.CLASS})

    # Shared mutators

    def set_access(self, access: AccessLevel | str) -> Member:
        self.access = access if isinstance(access, AccessLevel) else AccessLevel.parse(access)
        return self

    def set_region(self, region: str | None) -> Member:
        self.region = region
        return self

    def set_prefix(self, prefix: str) -> Member:
        self.prefix = prefix or ""
        return self

    def add_attributes(self, *attributes: str) -> Member:
        self.attributes.extend(attributes)
        return self

    # Field mutators

    def set_default_value(self, value: str | None) -> Member:
        if self.kind in FIELD_KINDS:
            self.field_data.default_value = value or None
        else:
            self.property_data.default_value = value or None
        return self

    # Property mutators

    def set_setter_access(self, setter_access: str) -> Member:
        self.property_data.setter_access = setter_access or ""
        return self

    def set_backing_field(self, backing_field: str) -> Member:
        self.property_data.backing_field = backing_field
        return self

    def set_read_only(self, read_only: bool = True) -> Member:
        self.property_data.read_only = read_only
        return self

    def set_one_line(self, one_line: bool = True) -> Member:
        self.property_data.one_line = one_line
        return self

    def add_getter_lines(self, *lines: str) -> Member:
        self.property_data.getter_body.extend(lines)
        return self

    def add_setter_lines(self, *lines: str) -> Member:
        self.property_data.setter_body.extend(lines)
        return self

    # Method mutators

    def add_parameters(self, *parameters: Parameter) -> Member:
        self.method_data.parameters.extend(parameters)
        return self

    def add_lines(self, *lines: str) -> Member:
        self.method_data.body.extend(lines)
        return self

    def set_return_value(self, return_value: str) -> Member:
        self.method_data.return_value = _strip_terminator(return_value)
        return self

    # Class mutators

    def add_members(self, *members: Member) -> Member:
        self.class_data.members.extend(members)
        return self

    def insert_members(self, *members: Member) -> Member:
        """Put members at the front of the class, keeping their order."""
        self.class_data.members[0:0] = members
        return self

    def add_directives(self, *directives: str) -> Member:
        self.class_data.directives.extend(directives)
        return self

    def add_base_types(self, *base_types: str) -> Member:
        self.class_data.base_types.extend(base_types)
        return self

    def add_regions(self, *regions: str) -> Member:
        self.class_data.regions.extend(regions)
        return self

    def set_namespace(self, namespace: str) -> Member:
        self.class_data.namespace = namespace or ""
        return self

    # Rendering

    def get_name(self) -> str:
        """Get the sanitized identifier."""
        return sanitize_name(self.name)

    def get_first_line(self) -> str:
        """Get the unindented signature line of a method."""
        from .renderer import method_signature

        return method_signature(self)

    def render(self, indent_level: int = 0) -> str:
        """Render the member at the given nesting level."""
        from .renderer import render_member

        return render_member(self, indent_level)

    def __str__(self) -> str:
        return self.render(0)


def _strip_terminator(value: str | None) -> str:
    if not value:
        return ""
    value = value.strip()
    while value.endswith(";"):
        value = value[:-1].rstrip()
    return value
