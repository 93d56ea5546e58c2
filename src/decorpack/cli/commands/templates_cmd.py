"""Templates command - lists starter item templates."""

import click
from rich.console import Console
from rich.table import Table

from decorpack.core.templates import ITEM_TEMPLATES
from decorpack.core.types import BoxSize


@click.command("templates")
def templates_cmd() -> None:
    """List the item templates usable with `item add --template`."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Template")
    table.add_column("Category")
    table.add_column("Box")
    table.add_column("Cost", justify="right")
    table.add_column("Description")

    for template in ITEM_TEMPLATES:
        overrides = template.overrides
        table.add_row(
            template.id,
            overrides["category"],
            BoxSize(overrides["box_size"]).label,
            f"{overrides['base_cost']:g}",
            template.description,
        )

    Console(width=120).print(table)
