"""Ids command - registers descriptors and prints the assigned ids."""

from pathlib import Path

import click

from decorpack.cli.core import print_report_errors, register_descriptors
from decorpack.cli.json_output import emit_json
from decorpack.cli.json_schemas import ErrorInfo, IdsCommandResponse, ItemIdInfo, PackIdsInfo
from decorpack.cli.output import machine_output
from decorpack.core.errors import RegistrationError
from decorpack.core.registry import RegistrationReport


def _pack_info(report: RegistrationReport) -> PackIdsInfo:
    items: list[ItemIdInfo] = []
    errors: list[ErrorInfo] = []
    if report.pack_error is not None:
        errors.append(
            ErrorInfo(
                kind=report.pack_error.kind, message=report.pack_error.message, internal_key=None
            )
        )
    for outcome in report.outcomes:
        if isinstance(outcome.result, RegistrationError):
            errors.append(
                ErrorInfo(
                    kind=outcome.result.kind,
                    message=outcome.result.message,
                    internal_key=outcome.internal_key,
                )
            )
            continue
        assert report.pack is not None
        item = report.pack.find_item(outcome.internal_key)
        assert item is not None
        items.append(
            ItemIdInfo(internal_key=outcome.internal_key, id=outcome.result, category=item.category)
        )
    return PackIdsInfo(pack_id=report.pack_id, items=items, errors=errors)


@click.command("ids")
@click.argument("descriptors", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
def ids_cmd(descriptors: tuple[Path, ...], output_json: bool) -> None:
    """Register DESCRIPTORS together and print every assigned id.

    Exits non-zero if any pack or item fails to register.
    """
    _, reports = register_descriptors(descriptors)

    if output_json:
        response = IdsCommandResponse(packs=[_pack_info(report) for report in reports])
        emit_json(response.model_dump(mode="json"))
    else:
        for report in reports:
            for key, item_id in report.assigned_ids.items():
                machine_output(f"{item_id}\t{report.pack_id}\t{key}")
            print_report_errors(report)

    if not all(report.ok for report in reports):
        raise SystemExit(1)
