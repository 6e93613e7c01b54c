import json
import logging
from pathlib import Path

import click

from .builder import ClassBuilder
from .cli_utils import reconstruct_command_line
from .config import GeneratorConfig
from .errors import CodeGenError
from .model import AccessLevel, Member, MemberKind, member_from_dict, member_to_dict
from .parser import parse_class
from .writer import AtomicWriter, read_all_text

ACCESS_CHOICES = [level.value for level in AccessLevel if level.value] + ["none"]


def _load_json(path: str) -> dict:
    with open(path) as f:
        return json.load(f)


def _write(config: GeneratorConfig, path: str, text: str, force: bool = True) -> None:
    writer = AtomicWriter()
    try:
        if force:
            writer.write(Path(path), text, validate=config.validate_output)
        else:
            writer.write_if_not_exists(Path(path), text, validate=config.validate_output)
    except (CodeGenError, OSError) as e:
        raise click.ClickException(str(e)) from e


def _with_generation_comment(config: GeneratorConfig, text: str) -> str:
    if not config.add_generation_comment:
        return text
    command = reconstruct_command_line(click.get_current_context().command)
    return Member.make_comment(f"Generated by: {command}").render() + "\n" + text


def _parse(config: GeneratorConfig, path: str) -> Member:
    try:
        source = read_all_text(path)
        indent = config.parse_indent or None
        cls = parse_class(source, indent)
    except (CodeGenError, OSError) as e:
        raise click.ClickException(str(e)) from e
    if cls is None:
        raise click.ClickException(f"No class declaration found in {path}")
    return cls


@click.group()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug messages")
@click.pass_context
def cli(ctx, config, verbose):
    """Render, parse and edit C# class files."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if config is not None:
        config = GeneratorConfig.from_dict(_load_json(config))
    else:
        config = GeneratorConfig()
    ctx.obj = config


@cli.command()
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite an existing output file")
@click.argument("description", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
@click.pass_obj
def render(config, force, description, output):
    """Render a JSON class description to a C# file."""
    try:
        cls = member_from_dict(_load_json(description), config)
        if cls.kind != MemberKind.CLASS:
            raise click.ClickException(f"{description} describes a {cls.kind.value}, not a class")
        text = cls.render()
    except (CodeGenError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    _write(config, output, _with_generation_comment(config, text), force)


@cli.command()
@click.argument("source", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
@click.pass_obj
def parse(config, source, output):
    """Parse a C# class file to a JSON description."""
    cls = _parse(config, source)
    out = json.dumps(member_to_dict(cls), indent=2)
    if output is None:
        click.echo(out)
    else:
        with open(output, "w") as f:
            f.write(out + "\n")


@cli.command()
@click.option("--region", "-r", default=None, type=str, help="Target region (defaults to the properties region)")
@click.option("--indent-level", default=None, type=int, help="Nesting level of the member (defaults to the region marker's)")
@click.argument("source", type=click.Path(exists=True, resolve_path=True))
@click.argument("member", type=click.Path(exists=True, resolve_path=True))
@click.pass_obj
def insert(config, region, indent_level, source, member):
    """Insert a JSON-described member at the end of a region of SOURCE."""
    try:
        new_member = member_from_dict(_load_json(member), config)
        builder = ClassBuilder(read_all_text(source), config)
        if region is None:
            inserted = builder.insert_property(new_member, indent_level)
        else:
            inserted = builder.insert_member(new_member, region, indent_level)
    except (CodeGenError, OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if not inserted:
        raise click.ClickException(f"Region '{region or config.properties_region}' not found in {source}")
    _write(config, source, builder.to_string())


@cli.command()
@click.argument("source", type=click.Path(exists=True, resolve_path=True))
@click.argument("method", type=str)
@click.argument("statements", nargs=-1, required=True)
@click.pass_obj
def append(config, source, method, statements):
    """Append STATEMENTS to the body of METHOD in SOURCE."""
    cls = _parse(config, source)
    target = next((m for m in cls.class_data.members if m.kind == MemberKind.METHOD and m.name == method), None)
    if target is None:
        raise click.ClickException(f"Method '{method}' not found in class {cls.name}")

    builder = ClassBuilder(read_all_text(source), config)
    if not builder.append_statements_to_method(target, *statements):
        raise click.ClickException(f"Signature '{target.get_first_line()}' not found in {source}")
    _write(config, source, builder.to_string())


@cli.command()
@click.option("--access", "-a", default="public", type=click.Choice(ACCESS_CHOICES))
@click.option("--modifier", "-m", default="", type=str, help="Class modifier, e.g. sealed")
@click.option("--using", "-u", "directives", multiple=True, help="Using directive, repeatable")
@click.option("--base", "-b", "base_types", multiple=True, help="Base type, repeatable")
@click.option("--region", "-r", "regions", multiple=True, help="Region, repeatable")
@click.option("--namespace", "-n", default="", type=str)
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite an existing output file")
@click.argument("name", type=str)
@click.argument("output", type=click.Path(resolve_path=True))
@click.pass_obj
def scaffold(config, access, modifier, directives, base_types, regions, namespace, force, name, output):
    """Create an empty class file named NAME."""
    cls = Member.make_class(
        name,
        access=AccessLevel.parse(access),
        prefix=modifier,
        directives=directives,
        base_types=base_types,
        regions=regions,
        namespace=namespace,
    )
    try:
        text = cls.render()
    except CodeGenError as e:
        raise click.ClickException(str(e)) from e

    _write(config, output, _with_generation_comment(config, text), force)
