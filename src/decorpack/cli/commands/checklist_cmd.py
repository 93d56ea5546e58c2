"""Checklist command - lists the asset files a pack needs."""

from pathlib import Path

import click

from decorpack.cli.core import load_descriptor
from decorpack.cli.json_output import emit_json
from decorpack.cli.json_schemas import ChecklistCommandResponse
from decorpack.cli.output import machine_output
from decorpack.core.assembler import asset_checklist, project_name


@click.command("checklist")
@click.argument("descriptor", type=click.Path(path_type=Path))
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
def checklist_cmd(descriptor: Path, output_json: bool) -> None:
    """Print every asset path DESCRIPTOR's project expects."""
    pack = load_descriptor(descriptor)
    assets = asset_checklist(pack)

    if output_json:
        response = ChecklistCommandResponse(
            pack_id=pack.id, project_name=project_name(pack), assets=assets
        )
        emit_json(response.model_dump(mode="json"))
        return

    for path in assets:
        machine_output(path)
