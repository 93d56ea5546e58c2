"""Render command - prints the generated plugin source."""

from pathlib import Path

import click

from decorpack.cli.core import register_single
from decorpack.cli.output import machine_output, user_output
from decorpack.core.codegen import render, render_constants
from decorpack.core.context import DecorpackContext


@click.command("render")
@click.argument("descriptor", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Write to a file instead of stdout.",
)
@click.option("--constants", is_flag=True, help="Render DecorItemIDs.cs instead of the plugin.")
@click.pass_obj
def render_cmd(
    ctx: DecorpackContext, descriptor: Path, output: Path | None, constants: bool
) -> None:
    """Render the C# plugin source for DESCRIPTOR."""
    pack = register_single(descriptor)
    if constants:
        source = render_constants(pack, ctx.render_options)
    else:
        source = render(pack, ctx.render_options)

    if output is None:
        machine_output(source, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(source, encoding="utf-8")
    user_output(f"Wrote {output}")
