import click

from decorpack.cli.ensure import Ensure
from decorpack.cli.json_output import emit_json
from decorpack.cli.json_schemas import GlobalConfigInfo
from decorpack.cli.output import machine_output, user_output
from decorpack.core.config_store import CONFIG_KEYS
from decorpack.core.context import DecorpackContext


@click.group("config")
def config_group() -> None:
    """Manage decorpack configuration."""


@config_group.command("list")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
def config_list(ctx: DecorpackContext, output_json: bool) -> None:
    """Print a list of configuration keys and values."""
    config = ctx.global_config
    if output_json:
        info = GlobalConfigInfo(
            default_author=config.default_author,
            output_dir=str(config.output_dir),
            indent_size=config.indent_size,
            exists=ctx.config_store.exists(),
        )
        emit_json(info.model_dump(mode="json"))
        return

    user_output(click.style("Global configuration:", bold=True))
    if not ctx.config_store.exists():
        user_output("  (not configured - run 'decorpack init' to create; showing defaults)")
    for key in CONFIG_KEYS:
        user_output(f"  {key}={config.get(key)}")


@config_group.command("get")
@click.argument("key")
@click.pass_obj
def config_get(ctx: DecorpackContext, key: str) -> None:
    """Print the value of a configuration key."""
    Ensure.invariant(
        key in CONFIG_KEYS, f"Invalid key: {key} - Use one of {', '.join(CONFIG_KEYS)}"
    )
    machine_output(ctx.global_config.get(key))


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(ctx: DecorpackContext, key: str, value: str) -> None:
    """Set a configuration key, creating the config file if needed."""
    Ensure.invariant(
        key in CONFIG_KEYS, f"Invalid key: {key} - Use one of {', '.join(CONFIG_KEYS)}"
    )
    try:
        updated = ctx.global_config.with_value(key, value)
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    ctx.config_store.save(updated)
    user_output(f"Set {key}={updated.get(key)}")
