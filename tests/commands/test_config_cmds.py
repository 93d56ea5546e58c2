"""Tests for the config command group."""

import json
from pathlib import Path

from click.testing import CliRunner

from decorpack.cli.cli import cli
from decorpack.core.config_store import GlobalConfig, InMemoryConfigStore
from decorpack.core.context import DecorpackContext


def test_config_list_without_config_file() -> None:
    """'config list' shows defaults and hints at init when no file exists."""
    result = CliRunner().invoke(cli, ["config", "list"], obj=DecorpackContext.for_test())

    assert result.exit_code == 0, result.output
    assert "not configured" in result.output
    assert "  output_dir=dist" in result.output
    assert "  indent_size=4" in result.output


def test_config_list_json() -> None:
    config = GlobalConfig(default_author="Jane", output_dir=Path("build"), indent_size=2)
    ctx = DecorpackContext.for_test(global_config=config)

    result = CliRunner().invoke(cli, ["config", "list", "--json"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "default_author": "Jane",
        "output_dir": "build",
        "indent_size": 2,
        "exists": True,
    }


def test_config_get() -> None:
    config = GlobalConfig(default_author="Jane", output_dir=Path("build"), indent_size=2)
    ctx = DecorpackContext.for_test(global_config=config)

    result = CliRunner().invoke(cli, ["config", "get", "default_author"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert result.stdout == "Jane\n"


def test_config_get_invalid_key() -> None:
    result = CliRunner().invoke(cli, ["config", "get", "colour"], obj=DecorpackContext.for_test())

    assert result.exit_code == 1
    assert "Invalid key: colour" in result.output


def test_config_set_saves_to_store() -> None:
    store = InMemoryConfigStore()
    ctx = DecorpackContext.for_test(config_store=store)

    result = CliRunner().invoke(cli, ["config", "set", "indent_size", "2"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Set indent_size=2" in result.output
    assert store.load().indent_size == 2


def test_config_set_invalid_value() -> None:
    store = InMemoryConfigStore()
    ctx = DecorpackContext.for_test(config_store=store)

    result = CliRunner().invoke(cli, ["config", "set", "indent_size", "zero"], obj=ctx)

    assert result.exit_code == 1
    assert "indent_size must be an integer" in result.output
    assert not store.exists()
