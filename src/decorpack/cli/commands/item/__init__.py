"""Item editing commands for pack descriptors."""

import click

from decorpack.cli.commands.item.add_cmd import add_item_cmd
from decorpack.cli.commands.item.duplicate_cmd import duplicate_item_cmd
from decorpack.cli.commands.item.remove_cmd import remove_item_cmd


@click.group("item")
def item_group() -> None:
    """Add, remove and duplicate items in a descriptor."""
    pass


# Register subcommands
item_group.add_command(add_item_cmd)
item_group.add_command(duplicate_item_cmd)
item_group.add_command(remove_item_cmd)
