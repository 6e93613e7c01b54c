"""
Rendering tests for single members.
"""

from __future__ import annotations

import pytest

from cs_codegen.errors import InvalidMemberError
from cs_codegen.model import AccessLevel, Member, MemberKind, MethodData, Parameter


class TestAccessLevel:
    def test_keyword_has_single_trailing_space(self):
        assert AccessLevel.PUBLIC.keyword() == "public "
        assert AccessLevel.PRIVATE.keyword() == "private "
        assert AccessLevel.NONE.keyword() == ""

    def test_parse(self):
        assert AccessLevel.parse("Protected") == AccessLevel.PROTECTED
        assert AccessLevel.parse("none") == AccessLevel.NONE
        assert AccessLevel.parse(None) == AccessLevel.NONE
        assert AccessLevel.parse("") == AccessLevel.NONE


class TestParameter:
    def test_string_default_is_quoted(self):
        assert Parameter("string", "n", "hi").render() == 'string n = "hi"'

    def test_quoted_string_default_is_not_quoted_twice(self):
        assert Parameter("string", "n", '"hi"').render() == 'string n = "hi"'

    def test_other_defaults_are_raw(self):
        assert Parameter("int", "count", "1").render() == "int count = 1"
        assert Parameter("float", "speed").render() == "float speed"

    def test_nameless_parameter_renders_nothing(self):
        assert Parameter("int", "").render() == ""


class TestField:
    def test_plain_field(self):
        assert Member.make_field("string", "label").render() == "string label;"

    def test_field_with_access_prefix_default_and_indent(self):
        member = Member.make_field("int", "count", access=AccessLevel.PRIVATE, prefix="static", default_value="0")
        assert member.render(1) == "    private static int count = 0;"

    def test_attributes_render_above_at_same_indent(self):
        member = Member.make_field("float", "speed").add_attributes("SerializeField", "[Range(0, 10)]")
        assert member.render(1) == "    [SerializeField]\n    [Range(0, 10)]\n    float speed;"

    def test_const_field(self):
        member = Member.make_const_field("int", "MaxSlots", "16", access=AccessLevel.PUBLIC)
        assert member.region == "Constants"
        assert member.render() == "public const int MaxSlots = 16;"

    def test_readonly_field(self):
        member = Member.make_readonly_field("string", "id", default_value='"a"')
        assert member.region == "Readonly"
        assert member.render() == 'readonly string id = "a";'

    def test_const_literal_is_not_duplicated(self):
        member = Member(MemberKind.CONST_FIELD, "Max", "int", prefix="const").set_default_value("1")
        assert member.render() == "const int Max = 1;"

    def test_explicit_region_overrides_default(self):
        assert Member.make_const_field("int", "Max", "1", region="Limits").region == "Limits"

    def test_name_is_sanitized(self):
        assert Member.make_field("int", "my count()").render() == "int mycount;"


class TestProperties:
    def test_auto_property(self):
        member = Member.make_auto_property("int", "Count", access=AccessLevel.PUBLIC)
        assert member.render() == "public int Count { get; set; }"

    def test_auto_property_setter_access(self):
        member = Member.make_auto_property("int", "Count", access=AccessLevel.PUBLIC, setter_access="private")
        assert member.render() == "public int Count { get; private set; }"

    def test_getter_only_auto_property(self):
        member = Member.make_auto_property("int", "Count", access=AccessLevel.PUBLIC, read_only=True)
        assert member.render() == "public int Count { get; }"

    def test_property(self):
        member = Member.make_property("int", "Count", access=AccessLevel.PUBLIC)
        expected = "\n".join(
            [
                "public int Count",
                "{",
                "    get",
                "    {",
                "        return m_count;",
                "    }",
                "    set",
                "    {",
                "        m_count = value;",
                "    }",
                "}",
            ]
        )
        assert member.render() == expected

    def test_property_bodies_and_setter_access(self):
        member = (
            Member.make_property("float", "Speed", backing_field="speed", setter_access="protected")
            .add_getter_lines("Debug.Log(speed);")
            .add_setter_lines("Refresh();")
        )
        lines = member.render(1).split("\n")
        assert lines[4] == "            Debug.Log(speed);"
        assert lines[5] == "            return speed;"
        assert lines[7] == "        protected set"
        assert lines[9] == "            Refresh();"
        assert lines[10] == "            speed = value;"

    def test_read_only_property_omits_setter(self):
        member = Member.make_property("int", "Count", read_only=True).add_setter_lines("Refresh();")
        text = member.render()
        assert "set" not in text
        assert "Refresh" not in text
        assert text.endswith("        return m_count;\n    }\n}")

    def test_one_line_property(self):
        member = Member.make_property("int", "Count", access=AccessLevel.PUBLIC, one_line=True)
        assert member.render() == "public int Count { get { return m_count; } set { m_count = value; } }"

    def test_one_line_read_only_property(self):
        member = Member.make_property("int", "Count", one_line=True, read_only=True).add_getter_lines("Touch();")
        assert member.render() == "int Count { get { Touch(); return m_count; } }"

    def test_backing_field_prefix(self):
        member = Member.make_property("int", "Count", backing_field_prefix="_")
        assert member.property_data.backing_field == "_count"

    def test_field_property_pair(self):
        member = Member.make_field_property_pair("int", "Count", access=AccessLevel.PUBLIC, default_value="0")
        lines = member.render().split("\n")
        assert lines[0] == "private int m_count = 0;"
        assert lines[1] == "public int Count"
        assert "    set" in lines

    def test_readonly_field_property_pair(self):
        member = Member.make_field_property_pair("int", "Count", read_only=True)
        assert member.kind == MemberKind.FIELD_PROPERTY_PAIR_READONLY
        lines = member.render().split("\n")
        assert lines[0] == "private int m_count;"
        assert "    set" not in lines


class TestMethod:
    def test_method_with_body_and_default_return(self):
        member = (
            Member.make_method("int", "Kill", Parameter("string", "n", "hi"), access=AccessLevel.PUBLIC)
            .add_lines("var kill = 0", "kill++")
        )
        expected = "\n".join(
            [
                'public int Kill(string n = "hi")',
                "{",
                "    var kill = 0;",
                "    kill++;",
                "    return default(int);",
                "}",
            ]
        )
        assert member.render() == expected

    def test_empty_void_method_renders_placeholder_line(self):
        assert Member.make_method("void", "Awake").render(1) == "    void Awake()\n    {\n\n    }"

    def test_return_line_is_independent_of_body(self):
        member = Member.make_method("bool", "Ready").add_lines("return false;").set_return_value("true;")
        assert member.render().split("\n")[2:4] == ["    return false;", "    return true;"]

    def test_control_lines_are_not_terminated(self):
        member = Member.make_method("void", "Tick").add_lines("if (ready)", "{", "Run()", "}")
        assert member.render().split("\n")[2:6] == ["    if (ready)", "    {", "    Run();", "    }"]

    def test_whitespace_only_lines_are_kept_verbatim(self):
        member = Member.make_method("void", "Tick").add_lines("Run()", " ", "Stop()")
        assert member.render(1).split("\n")[2:5] == ["        Run();", "         ", "        Stop();"]

    def test_constructor_has_no_type(self):
        member = Member.make_method("", "Inventory", Parameter("int", "size"), access=AccessLevel.PUBLIC)
        assert member.get_first_line() == "public Inventory(int size)"
        assert "return" not in member.render()

    def test_multiple_parameters(self):
        member = Member.make_method("void", "Move").add_parameters(Parameter("float", "x"), Parameter("float", "y", "0"))
        assert member.get_first_line() == "void Move(float x, float y = 0)"


def test_comment():
    assert Member.make_comment("hello").render(1) == "    // hello"


class TestInvalidMembers:
    def test_nameless_member_cannot_render(self):
        with pytest.raises(InvalidMemberError):
            Member.make_field("int", "").render()

    def test_name_empty_once_sanitized_cannot_render(self):
        with pytest.raises(InvalidMemberError):
            Member.make_method("void", "()").render()

    def test_nameless_comment_renders(self):
        assert Member.make_comment("").render() == "//"

    def test_wrong_kind_mutator(self):
        with pytest.raises(InvalidMemberError):
            Member.make_field("int", "x").add_lines("a")

    def test_wrong_payload(self):
        with pytest.raises(InvalidMemberError):
            Member(MemberKind.FIELD, "x", "int", payload=MethodData())

    def test_render_is_pure(self):
        member = Member.make_property("int", "Count").add_getter_lines("Touch();")
        assert member.render() == member.render()
