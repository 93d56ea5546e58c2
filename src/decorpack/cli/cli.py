import logging
import os

import click

from decorpack.cli.commands.bundle_cmd import bundle_cmd
from decorpack.cli.commands.checklist_cmd import checklist_cmd
from decorpack.cli.commands.config import config_group
from decorpack.cli.commands.ids_cmd import ids_cmd
from decorpack.cli.commands.init_cmd import init_cmd
from decorpack.cli.commands.item import item_group
from decorpack.cli.commands.new_cmd import new_cmd
from decorpack.cli.commands.publish_cmd import publish_cmd
from decorpack.cli.commands.render_cmd import render_cmd
from decorpack.cli.commands.templates_cmd import templates_cmd
from decorpack.cli.commands.validate_cmd import validate_cmd
from decorpack.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def _configure_logging(debug: bool) -> None:
    if debug or os.getenv("DECORPACK_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="decorpack")
@click.option("--debug", is_flag=True, help="Enable debug logging (or set DECORPACK_DEBUG=1).")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Assign stable item ids and generate C# projects for decor expansion packs."""
    _configure_logging(debug)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


# Register all commands
cli.add_command(bundle_cmd)
cli.add_command(checklist_cmd)
cli.add_command(config_group)
cli.add_command(ids_cmd)
cli.add_command(init_cmd)
cli.add_command(item_group)
cli.add_command(new_cmd)
cli.add_command(publish_cmd)
cli.add_command(render_cmd)
cli.add_command(templates_cmd)
cli.add_command(validate_cmd)


def main() -> None:
    """CLI entry point used by the `decorpack` console script."""
    cli()
