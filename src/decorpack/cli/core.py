"""Shared helpers for commands that load and register descriptors."""

from pathlib import Path

import click

from decorpack.cli.ensure import Ensure
from decorpack.cli.output import user_output
from decorpack.core.descriptor import load_pack
from decorpack.core.registry import RegistrationReport, Registry, register_packs
from decorpack.core.types import Pack


def load_descriptor(path: Path) -> Pack:
    """Load a descriptor file, exiting with a styled error if it is missing or invalid."""
    Ensure.path_exists(path, f"Descriptor not found: {path}")
    return Ensure.ok(load_pack(path), str(path))


def register_descriptors(
    paths: tuple[Path, ...] | list[Path],
) -> tuple[Registry, list[RegistrationReport]]:
    """Register every descriptor into one fresh registry.

    Namespaces are registered before items, so descriptors may be given in
    any order regardless of their dependencies.
    """
    packs = [load_descriptor(path) for path in paths]
    registry = Registry()
    return registry, register_packs(registry, packs)


def print_report_errors(report: RegistrationReport) -> None:
    """Print every failure of a report to stderr."""
    if report.pack_error is not None:
        user_output(
            click.style("Error: ", fg="red")
            + f"{report.pack_id}: {report.pack_error.message}"
        )
    for outcome in report.outcomes:
        if outcome.ok:
            continue
        user_output(
            click.style("Error: ", fg="red")
            + f"{report.pack_id}:{outcome.internal_key}: {outcome.result}"
        )


def register_single(path: Path) -> Pack:
    """Register one descriptor and return the registered pack.

    Exits with every registration error listed if any item fails.
    """
    _, reports = register_descriptors([path])
    report = reports[0]
    if not report.ok:
        print_report_errors(report)
        raise SystemExit(1)
    assert report.pack is not None
    return report.pack
