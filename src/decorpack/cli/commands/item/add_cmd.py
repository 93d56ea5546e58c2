from dataclasses import replace
from pathlib import Path

import click

from decorpack.cli.core import load_descriptor
from decorpack.cli.ensure import Ensure
from decorpack.cli.output import user_output
from decorpack.core.descriptor import save_pack
from decorpack.core.templates import (
    DEFAULT_ITEM_KEY,
    add_item,
    item_from_template,
    template_ids,
)
from decorpack.core.types import Item


@click.command("add")
@click.argument("descriptor", type=click.Path(path_type=Path))
@click.argument("key", required=False, default=None)
@click.option(
    "-t",
    "--template",
    "template_id",
    default=None,
    help="Start from a template (see `decorpack templates`).",
)
@click.option("--name", "display_name", default=None, help="Display name of the item.")
def add_item_cmd(
    descriptor: Path, key: str | None, template_id: str | None, display_name: str | None
) -> None:
    """Add an item to DESCRIPTOR.

    KEY defaults to the template id, or "new_item". A key already used in
    the pack gets a numeric suffix.
    """
    pack = load_descriptor(descriptor)

    if key is None:
        key = template_id if template_id is not None else DEFAULT_ITEM_KEY
    Ensure.valid_item_key(key)

    if template_id is None:
        item = Item(internal_key=key)
    else:
        item = Ensure.not_none(
            item_from_template(template_id, key),
            f"Unknown template '{template_id}' - Available: {', '.join(template_ids())}",
        )

    if display_name is not None:
        item = replace(item, display_name=display_name)

    updated = add_item(pack, item)
    added = updated.items[-1]
    save_pack(updated, descriptor)
    user_output(f"Added '{added.internal_key}' ({added.display_name}) to {descriptor}")