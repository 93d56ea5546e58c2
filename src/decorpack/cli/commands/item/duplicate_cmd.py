from pathlib import Path

import click

from decorpack.cli.core import load_descriptor
from decorpack.cli.ensure import Ensure
from decorpack.cli.output import user_output
from decorpack.core.descriptor import save_pack
from decorpack.core.templates import duplicate_item


@click.command("duplicate")
@click.argument("descriptor", type=click.Path(path_type=Path))
@click.argument("key")
def duplicate_item_cmd(descriptor: Path, key: str) -> None:
    """Append a copy of item KEY to DESCRIPTOR as KEY_copy."""
    pack = load_descriptor(descriptor)
    updated = Ensure.not_none(duplicate_item(pack, key), f"No item '{key}' in {descriptor}")
    copy = updated.items[-1]
    save_pack(updated, descriptor)
    user_output(f"Duplicated '{key}' as '{copy.internal_key}'")
