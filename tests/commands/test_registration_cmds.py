"""Tests for the ids, validate and publish commands."""

import json
from pathlib import Path

from click.testing import CliRunner

from decorpack.cli.cli import cli
from decorpack.core.context import DecorpackContext
from decorpack.core.ids import candidate_id
from decorpack.core.types import Item, Pack
from tests.test_utils.descriptors import registered, sample_pack, write_descriptor


def test_ids_prints_tab_separated_assignments() -> None:
    """'decorpack ids' prints id, pack and key for every item."""
    runner = CliRunner()
    with runner.isolated_filesystem():
        pack = sample_pack()
        write_descriptor(Path("pack.json"), pack)
        ids = registered(pack)

        result = runner.invoke(cli, ["ids", "pack.json"], obj=DecorpackContext.for_test())

        assert result.exit_code == 0, result.output
        lamp = ids.find_item("desk_lamp")
        assert lamp is not None
        assert f"{lamp.assigned_id}\tcom.jane.cozy\tdesk_lamp" in result.output
        assert lamp.assigned_id == candidate_id("com.jane.cozy", "desk_lamp")


def test_ids_json() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_descriptor(Path("pack.json"), sample_pack())

        result = runner.invoke(
            cli, ["ids", "pack.json", "--json"], obj=DecorpackContext.for_test()
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        pack = data["packs"][0]
        assert pack["pack_id"] == "com.jane.cozy"
        assert [item["internal_key"] for item in pack["items"]] == ["desk_lamp", "rug"]
        assert pack["items"][0]["category"] == "Fixtures"
        assert pack["errors"] == []


def test_ids_reports_errors_and_fails() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        pack = Pack(
            id="com.jane.cozy",
            display_name="Cozy",
            items=(Item(internal_key="lamp"), Item(internal_key="Bad-Key")),
        )
        write_descriptor(Path("pack.json"), pack)

        result = runner.invoke(cli, ["ids", "pack.json"], obj=DecorpackContext.for_test())

        assert result.exit_code == 1
        assert "com.jane.cozy:Bad-Key: Invalid internal key 'Bad-Key'" in result.output
        assert "\tcom.jane.cozy\tlamp" in result.output


def test_ids_descriptor_order_does_not_matter() -> None:
    """A dependent pack may be listed before the pack it depends on."""
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_descriptor(Path("base.json"), sample_pack(pack_id="com.base.pack", keys=("shelf",)))
        write_descriptor(
            Path("child.json"),
            sample_pack(pack_id="com.child.pack", keys=("vase",), dependencies=("com.base.pack",)),
        )

        result = runner.invoke(
            cli, ["ids", "child.json", "base.json"], obj=DecorpackContext.for_test()
        )

        assert result.exit_code == 0, result.output
        assert "\tcom.child.pack\tvase" in result.output
        assert "\tcom.base.pack\tshelf" in result.output


def test_ids_missing_dependency() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_descriptor(
            Path("child.json"),
            sample_pack(pack_id="com.child.pack", keys=("vase",), dependencies=("com.base.pack",)),
        )

        result = runner.invoke(
            cli, ["ids", "child.json", "--json"], obj=DecorpackContext.for_test()
        )

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        error = data["packs"][0]["errors"][0]
        assert error["kind"] == "DependencyError"
        assert error["internal_key"] == "vase"


def test_ids_invalid_descriptor() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("broken.json").write_text('{"pluginName": "A"}', encoding="utf-8")

        result = runner.invoke(cli, ["ids", "broken.json"], obj=DecorpackContext.for_test())

        assert result.exit_code == 1
        assert "broken.json: Invalid descriptor at 'pluginId'" in result.output


def test_validate_success() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_descriptor(Path("pack.json"), sample_pack())

        result = runner.invoke(cli, ["validate", "pack.json"], obj=DecorpackContext.for_test())

        assert result.exit_code == 0, result.output
        assert "pack.json: com.jane.cozy (2 items)" in result.output


def test_validate_duplicate_pack_ids() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_descriptor(Path("a.json"), sample_pack())
        write_descriptor(Path("b.json"), sample_pack(display_name="Copy"))

        result = runner.invoke(
            cli, ["validate", "a.json", "b.json"], obj=DecorpackContext.for_test()
        )

        assert result.exit_code == 1
        assert "com.jane.cozy: Pack 'com.jane.cozy' is already registered" in result.output


def test_validate_unrenderable_pack() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_descriptor(Path("pack.json"), sample_pack(display_name="???"))

        result = runner.invoke(cli, ["validate", "pack.json"], obj=DecorpackContext.for_test())

        assert result.exit_code == 1
        assert "required fields not set: pluginName" in result.output


def test_publish_writes_id_map() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        pack = sample_pack()
        write_descriptor(Path("pack.json"), pack)
        lamp = registered(pack).find_item("desk_lamp")
        assert lamp is not None

        result = runner.invoke(
            cli, ["publish", "pack.json", "-o", "out/ids.json"], obj=DecorpackContext.for_test()
        )

        assert result.exit_code == 0, result.output
        assert "Published 2 items to out/ids.json" in result.output
        data = json.loads(Path("out/ids.json").read_text(encoding="utf-8"))
        assert data[str(lamp.assigned_id)] == {
            "pack": "com.jane.cozy",
            "key": "desk_lamp",
            "name": "Desk Lamp",
        }


def test_publish_skips_disabled_packs() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        write_descriptor(Path("on.json"), sample_pack(pack_id="com.on.pack", keys=("lamp",)))
        write_descriptor(
            Path("off.json"), sample_pack(pack_id="com.off.pack", keys=("rug",), enabled=False)
        )

        result = runner.invoke(
            cli,
            ["publish", "on.json", "off.json", "-o", "ids.json"],
            obj=DecorpackContext.for_test(),
        )

        assert result.exit_code == 0, result.output
        assert "Published 1 items to ids.json" in result.output
        assert "Skipped disabled packs: com.off.pack" in result.output
        data = json.loads(Path("ids.json").read_text(encoding="utf-8"))
        assert [entry["pack"] for entry in data.values()] == ["com.on.pack"]
