"""New command - creates an empty pack descriptor."""

from pathlib import Path

import click

from decorpack.cli.ensure import Ensure
from decorpack.cli.output import user_output
from decorpack.core.context import DecorpackContext
from decorpack.core.descriptor import save_pack
from decorpack.core.naming import sanitize_project_name
from decorpack.core.templates import new_pack


@click.command("new")
@click.argument("name")
@click.option("--author", default=None, help="Pack author (defaults to config default_author).")
@click.option("--version", "pack_version", default="1.0.0", show_default=True)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Descriptor path (defaults to {Name}.json).",
)
@click.pass_obj
def new_cmd(
    ctx: DecorpackContext,
    name: str,
    author: str | None,
    pack_version: str,
    output: Path | None,
) -> None:
    """Create a new pack descriptor named NAME."""
    Ensure.invariant(
        bool(sanitize_project_name(name)),
        f"Pack name '{name}' must contain at least one letter or digit",
    )
    if author is None:
        author = ctx.global_config.default_author

    if output is None:
        output = Path(f"{sanitize_project_name(name)}.json")
    Ensure.path_not_exists(output, f"{output} already exists - Choose a different --output")

    pack = new_pack(name, author=author, version=pack_version)
    save_pack(pack, output)
    user_output(f"Created {output} ({pack.id})")
