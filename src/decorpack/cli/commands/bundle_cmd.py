"""Bundle command - writes the complete project archive."""

from pathlib import Path

import click

from decorpack.cli.core import register_single
from decorpack.cli.ensure import Ensure
from decorpack.cli.output import user_output
from decorpack.core.assembler import bundle
from decorpack.core.codegen import missing_fields
from decorpack.core.context import DecorpackContext


@click.command("bundle")
@click.argument("descriptor", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory for the zip (defaults to config output_dir).",
)
@click.pass_obj
def bundle_cmd(ctx: DecorpackContext, descriptor: Path, output_dir: Path | None) -> None:
    """Assemble DESCRIPTOR into {Project}_Project.zip."""
    pack = register_single(descriptor)
    missing = missing_fields(pack)
    Ensure.invariant(not missing, f"Required fields not set: {', '.join(missing)}")

    project = bundle(pack, year=ctx.time.current_year(), options=ctx.render_options)
    destination = output_dir if output_dir is not None else ctx.global_config.output_dir
    archive_path = ctx.archive_writer.write(project, destination)

    user_output(
        click.style("✓ ", fg="green")
        + f"Bundled {len(pack.items)} items ({len(project.files)} files) into {archive_path}"
    )
