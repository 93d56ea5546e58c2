"""Init command - writes the global configuration file."""

from pathlib import Path

import click

from decorpack.cli.ensure import Ensure
from decorpack.cli.output import user_output
from decorpack.core.config_store import GlobalConfig
from decorpack.core.context import DecorpackContext


@click.command("init")
@click.option("--author", default="", help="Default author for new packs.")
@click.option(
    "--output-dir",
    type=click.Path(path_type=Path),
    default=Path("dist"),
    show_default=True,
    help="Directory bundles are written to.",
)
@click.option(
    "--indent-size",
    type=click.IntRange(1, 8),
    default=4,
    show_default=True,
    help="Indentation of generated C#.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_obj
def init_cmd(
    ctx: DecorpackContext, author: str, output_dir: Path, indent_size: int, force: bool
) -> None:
    """Create the global config file (~/.decorpack/config.toml)."""
    store = ctx.config_store
    Ensure.invariant(
        force or not store.exists(),
        f"Config already exists at {store.path()} - Use --force to overwrite",
    )
    store.save(GlobalConfig(default_author=author, output_dir=output_dir, indent_size=indent_size))
    user_output(f"Wrote config to {store.path()}")
