from pathlib import Path

import click

from decorpack.cli.core import load_descriptor
from decorpack.cli.ensure import Ensure
from decorpack.cli.output import user_output
from decorpack.core.descriptor import save_pack
from decorpack.core.templates import remove_item


@click.command("remove")
@click.argument("descriptor", type=click.Path(path_type=Path))
@click.argument("key")
def remove_item_cmd(descriptor: Path, key: str) -> None:
    """Remove the item KEY from DESCRIPTOR."""
    pack = load_descriptor(descriptor)
    updated = Ensure.not_none(remove_item(pack, key), f"No item '{key}' in {descriptor}")
    save_pack(updated, descriptor)
    user_output(f"Removed '{key}' from {descriptor}")
