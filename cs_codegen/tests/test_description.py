import pytest

from cs_codegen.config import GeneratorConfig
from cs_codegen.errors import InvalidMemberError
from cs_codegen.model import AccessLevel, Member, MemberKind, Parameter, member_from_dict, member_to_dict


class TestMemberFromDict:
    """Test building members from JSON descriptions"""

    def test_class_description(self):
        cls = member_from_dict(
            {
                "name": "Bae",
                "access": "public",
                "prefix": "sealed",
                "directives": ["UnityEngine"],
                "base_types": ["DUIPanel"],
                "regions": ["Elements"],
                "members": [{"kind": "field", "type": "string", "name": "label", "region": "Elements"}],
            }
        )
        assert cls.kind == MemberKind.CLASS
        assert cls.type_name == "class"
        assert cls.access == AccessLevel.PUBLIC
        assert cls.class_data.members[0].name == "label"

    def test_default_regions(self):
        const = member_from_dict({"kind": "const_field", "type": "int", "name": "Max", "default_value": "1"})
        readonly = member_from_dict({"kind": "readonly_field", "type": "int", "name": "id"})
        assert const.region == "Constants"
        assert readonly.region == "Readonly"

    def test_backing_field_prefix_from_config(self):
        config = GeneratorConfig(backing_field_prefix="_")
        member = member_from_dict({"kind": "property", "type": "int", "name": "Count"}, config)
        assert member.property_data.backing_field == "_count"

    def test_method_defaults(self):
        method = member_from_dict(
            {"kind": "method", "type": "int", "name": "Add", "parameters": [{"type": "int", "name": "a"}, {"type": "int", "name": "b", "default_value": "1"}]}
        )
        assert method.method_data.return_value == "default(int)"
        assert method.get_first_line() == "int Add(int a, int b = 1)"

    def test_readonly_pair(self):
        pair = member_from_dict({"kind": "field_property_pair_readonly", "type": "int", "name": "Count"})
        assert pair.property_data.read_only

    def test_unknown_kind(self):
        with pytest.raises(InvalidMemberError):
            member_from_dict({"kind": "delegate", "name": "X"})


class TestMemberToDict:
    def test_roundtrip_renders_identically(self):
        cls = (
            Member.make_class("Foo", access=AccessLevel.INTERNAL, namespace="Game", directives=["System"])
            .add_regions("Methods")
            .add_attributes("Serializable")
            .add_members(
                Member.make_comment("note"),
                Member.make_const_field("int", "Max", "4"),
                Member.make_field_property_pair("string", "Owner", access=AccessLevel.PUBLIC, default_value='"me"'),
                Member.make_property("int", "Count", one_line=True).add_getter_lines("Touch();"),
                Member.make_method("bool", "Ready", Parameter("string", "why", "now"), region="Methods").add_lines("Check()"),
            )
        )
        restored = member_from_dict(member_to_dict(cls))
        assert restored.render() == cls.render()
        assert member_to_dict(restored) == member_to_dict(cls)

    def test_access_none_is_explicit(self):
        assert member_to_dict(Member.make_field("int", "a"))["access"] == "none"

    def test_comment_has_only_text_and_region(self):
        assert member_to_dict(Member.make_comment("hi")) == {"kind": "comment", "region": None, "text": "hi"}
