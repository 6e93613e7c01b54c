"""
End-to-end tests of the cs_codegen command line on temporary files.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from cs_codegen.cli import cli
from cs_codegen.model import AccessLevel, Member, member_to_dict

NO_COMMENT = {"add_generation_comment": False}


def make_bae(*extra_members):
    return (
        Member.make_class("Bae", access=AccessLevel.PUBLIC, prefix="sealed")
        .add_directives("UnityEngine", "DynamicUI")
        .add_base_types("DUIPanel")
        .add_regions("Elements")
        .add_members(Member.make_field("string", "label", region="Elements"), *extra_members)
    )


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(NO_COMMENT))
    return path


@pytest.fixture
def bae_file(tmp_path):
    path = tmp_path / "Bae.cs"
    path.write_text(make_bae().render())
    return path


class TestRender:
    def test_render_with_generation_comment(self, runner, tmp_path):
        description = tmp_path / "bae.json"
        description.write_text(json.dumps(member_to_dict(make_bae())))
        output = tmp_path / "Bae.cs"

        result = runner.invoke(cli, ["render", str(description), str(output)])

        assert result.exit_code == 0, result.output
        first, rest = output.read_text().split("\n", 1)
        assert first.startswith("// Generated by: cs_codegen render bae.json")
        assert rest == make_bae().render()

    def test_render_without_generation_comment(self, runner, tmp_path, config_file):
        description = tmp_path / "bae.json"
        description.write_text(json.dumps(member_to_dict(make_bae())))
        output = tmp_path / "Bae.cs"

        result = runner.invoke(cli, ["--config", str(config_file), "render", str(description), str(output)])

        assert result.exit_code == 0, result.output
        assert output.read_text() == make_bae().render()

    def test_render_refuses_to_overwrite_without_force(self, runner, tmp_path, bae_file):
        description = tmp_path / "bae.json"
        description.write_text(json.dumps(member_to_dict(make_bae())))

        result = runner.invoke(cli, ["render", str(description), str(bae_file)])
        assert result.exit_code != 0
        assert "already exists" in result.output

        result = runner.invoke(cli, ["render", "--force", str(description), str(bae_file)])
        assert result.exit_code == 0, result.output

    def test_render_rejects_non_class(self, runner, tmp_path):
        description = tmp_path / "field.json"
        description.write_text(json.dumps({"kind": "field", "type": "int", "name": "a"}))

        result = runner.invoke(cli, ["render", str(description), str(tmp_path / "out.cs")])

        assert result.exit_code != 0
        assert "not a class" in result.output


class TestParse:
    def test_parse_to_stdout(self, runner, bae_file):
        result = runner.invoke(cli, ["parse", str(bae_file)])

        assert result.exit_code == 0, result.output
        description = json.loads(result.output)
        assert description["name"] == "Bae"
        assert description["base_types"] == ["DUIPanel"]
        assert description["members"][0]["region"] == "Elements"

    def test_parse_to_file(self, runner, tmp_path, bae_file):
        output = tmp_path / "bae.json"
        result = runner.invoke(cli, ["parse", str(bae_file), str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text()) == member_to_dict(make_bae())

    def test_parse_without_class_fails(self, runner, tmp_path):
        source = tmp_path / "Empty.cs"
        source.write_text("using System;\n")

        result = runner.invoke(cli, ["parse", str(source)])

        assert result.exit_code != 0
        assert "No class declaration found" in result.output

    def test_parse_malformed_member_fails(self, runner, tmp_path):
        source = tmp_path / "Bad.cs"
        source.write_text("class Bad\n{\n    public int;\n}\n")

        result = runner.invoke(cli, ["parse", str(source)])

        assert result.exit_code != 0
        assert "public int;" in result.output


class TestInsert:
    def test_insert_into_region(self, runner, tmp_path, bae_file, config_file):
        count = Member.make_field("int", "count", region="Elements")
        member = tmp_path / "count.json"
        member.write_text(json.dumps(member_to_dict(count)))

        result = runner.invoke(cli, ["--config", str(config_file), "insert", str(bae_file), str(member), "--region", "Elements"])

        assert result.exit_code == 0, result.output
        assert bae_file.read_text() == make_bae(count).render()

    def test_insert_missing_region_fails_and_keeps_file(self, runner, tmp_path, bae_file):
        member = tmp_path / "count.json"
        member.write_text(json.dumps(member_to_dict(Member.make_field("int", "count"))))
        before = bae_file.read_text()

        result = runner.invoke(cli, ["insert", str(bae_file), str(member)])

        assert result.exit_code != 0
        assert "Region 'Properties' not found" in result.output
        assert bae_file.read_text() == before


class TestAppend:
    def test_append_statements(self, runner, tmp_path, config_file):
        source = tmp_path / "Bae.cs"
        source.write_text(make_bae(Member.make_method("void", "Awake", access=AccessLevel.PUBLIC)).render())

        result = runner.invoke(cli, ["--config", str(config_file), "append", str(source), "Awake", "count = 0", "Init()"])

        assert result.exit_code == 0, result.output
        expected = make_bae(Member.make_method("void", "Awake", access=AccessLevel.PUBLIC).add_lines("count = 0", "Init()"))
        assert source.read_text() == expected.render()

    def test_append_unknown_method_fails(self, runner, bae_file):
        result = runner.invoke(cli, ["append", str(bae_file), "Missing", "x = 1"])

        assert result.exit_code != 0
        assert "Method 'Missing' not found" in result.output


class TestScaffold:
    def test_scaffold(self, runner, tmp_path, config_file):
        output = tmp_path / "Bae.cs"

        result = runner.invoke(
            cli,
            [
                "--config",
                str(config_file),
                "scaffold",
                "Bae",
                str(output),
                "--modifier",
                "sealed",
                "--using",
                "UnityEngine",
                "--using",
                "DynamicUI",
                "--base",
                "DUIPanel",
                "--region",
                "Elements",
            ],
        )

        assert result.exit_code == 0, result.output
        expected = Member.make_class(
            "Bae",
            access=AccessLevel.PUBLIC,
            prefix="sealed",
            directives=["UnityEngine", "DynamicUI"],
            base_types=["DUIPanel"],
            regions=["Elements"],
        )
        assert output.read_text() == expected.render()

    def test_scaffold_generation_comment_lists_options(self, runner, tmp_path):
        output = tmp_path / "Foo.cs"

        result = runner.invoke(cli, ["scaffold", "Foo", str(output), "--namespace", "Game", "--region", "A", "--region", "B"])

        assert result.exit_code == 0, result.output
        first = output.read_text().split("\n")[0]
        assert first.startswith("// Generated by: cs_codegen scaffold Foo")
        assert "--region A --region B" in first
        assert "--namespace Game" in first

    def test_scaffolded_file_parses(self, runner, tmp_path):
        output = tmp_path / "Foo.cs"
        runner.invoke(cli, ["scaffold", "Foo", str(output), "--namespace", "Game", "--region", "Elements"])

        result = runner.invoke(cli, ["parse", str(output)])

        assert result.exit_code == 0, result.output
        description = json.loads(result.output)
        assert description["namespace"] == "Game"
        assert description["regions"] == ["Elements"]
