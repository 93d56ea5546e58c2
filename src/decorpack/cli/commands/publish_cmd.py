"""Publish command - hands assigned ids to a JSON id map."""

from pathlib import Path

import click

from decorpack.cli.core import print_report_errors, register_descriptors
from decorpack.cli.output import user_output
from decorpack.core.host_sink import JsonFileHostSink, RangeCheckingHostSink


@click.command("publish")
@click.argument("descriptors", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Id map file to write.",
)
def publish_cmd(descriptors: tuple[Path, ...], output: Path) -> None:
    """Register DESCRIPTORS and publish their items to an id map.

    Items that fail registration are reported and left out. Disabled packs
    are skipped.
    """
    registry, reports = register_descriptors(descriptors)
    for report in reports:
        print_report_errors(report)

    sink = JsonFileHostSink(output)
    result = registry.publish(RangeCheckingHostSink(sink))
    sink.flush()

    user_output(f"Published {len(result.active)} items to {output}")
    if result.rejected:
        user_output(f"Rejected: {', '.join(f'{pack}:{key}' for pack, key in result.rejected)}")
    if result.skipped_packs:
        user_output(f"Skipped disabled packs: {', '.join(result.skipped_packs)}")

    if not all(report.ok for report in reports) or result.rejected:
        raise SystemExit(1)
