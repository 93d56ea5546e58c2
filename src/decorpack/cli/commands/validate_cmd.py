"""Validate command - dry-run registration of descriptors."""

from pathlib import Path

import click

from decorpack.cli.core import print_report_errors, register_descriptors
from decorpack.cli.output import user_output
from decorpack.core.codegen import missing_fields


@click.command("validate")
@click.argument("descriptors", nargs=-1, required=True, type=click.Path(path_type=Path))
def validate_cmd(descriptors: tuple[Path, ...]) -> None:
    """Check that DESCRIPTORS register cleanly and can be rendered."""
    _, reports = register_descriptors(descriptors)

    failed = False
    for path, report in zip(descriptors, reports, strict=True):
        if report.ok:
            assert report.pack is not None
            missing = missing_fields(report.pack)
            if missing:
                failed = True
                user_output(
                    click.style("Error: ", fg="red")
                    + f"{path}: required fields not set: {', '.join(missing)}"
                )
                continue
            count = len(report.pack.items)
            user_output(
                click.style("✓ ", fg="green") + f"{path}: {report.pack_id} ({count} items)"
            )
        else:
            failed = True
            print_report_errors(report)

    if failed:
        raise SystemExit(1)
