"""Tests for item templates and pack editing helpers."""

from decorpack.core.templates import (
    ITEM_TEMPLATES,
    add_item,
    duplicate_item,
    get_template,
    item_from_template,
    new_pack,
    remove_item,
    template_ids,
)
from decorpack.core.types import AssetReferences, BoxSize, Category, Item, Pack, Vector3


class TestTemplates:
    """Tests for the built-in templates."""

    def test_ten_templates_with_unique_ids(self) -> None:
        ids = template_ids()
        assert len(ids) == 10
        assert len(set(ids)) == 10

    def test_every_template_builds_a_valid_item(self) -> None:
        for template in ITEM_TEMPLATES:
            item = item_from_template(template.id, "my_item")
            assert item is not None
            assert item.category in {member.value for member in Category}
            assert BoxSize(item.box_size).base_reference_id == item.base_reference_id

    def test_desk_lamp(self) -> None:
        item = item_from_template("desk_lamp", "lamp")

        assert item is not None
        assert item.display_name == "LED Desk Lamp"
        assert item.category == "Lighting"
        assert item.base_cost == 80.0
        assert item.is_interactable
        assert item.visual_scale == Vector3(0.7, 0.7, 0.7)
        assert item.asset_refs == AssetReferences.derive("lamp")

    def test_wall_art_placement(self) -> None:
        item = item_from_template("wall_art", "frame")

        assert item is not None
        assert item.can_place_on_walls
        assert not item.can_place_on_floor
        assert item.allow_floating

    def test_unknown_template(self) -> None:
        assert get_template("spaceship") is None
        assert item_from_template("spaceship", "x") is None


class TestAddItem:
    """Tests for appending items to a pack."""

    def test_default_item(self) -> None:
        pack = add_item(Pack(id="a.pack", display_name="A"))
        assert pack.item_keys() == ["new_item"]

    def test_taken_key_gets_suffix_and_assets_follow(self) -> None:
        pack = add_item(Pack(id="a.pack", display_name="A"))

        pack = add_item(pack)

        assert pack.item_keys() == ["new_item", "new_item_1"]
        assert pack.items[1].asset_refs == AssetReferences.derive("new_item_1")

    def test_explicit_assets_survive_rekey(self) -> None:
        custom = AssetReferences(icon="i", mesh="m", material="t")
        pack = add_item(Pack(id="a.pack", display_name="A"), Item(internal_key="lamp"))

        pack = add_item(pack, Item(internal_key="lamp", assets=custom))

        assert pack.item_keys() == ["lamp", "lamp_1"]
        assert pack.items[1].asset_refs == custom


class TestDuplicateAndRemove:
    """Tests for copying and dropping items."""

    def test_duplicate(self) -> None:
        pack = Pack(
            id="a.pack",
            display_name="A",
            items=(Item(internal_key="lamp", display_name="Lamp", assigned_id=770000),),
        )

        updated = duplicate_item(pack, "lamp")

        assert updated is not None
        copy = updated.items[1]
        assert copy.internal_key == "lamp_copy"
        assert copy.display_name == "Lamp (Copy)"
        assert copy.assigned_id is None
        assert copy.asset_refs == AssetReferences.derive("lamp")

    def test_duplicate_twice(self) -> None:
        pack = Pack(id="a.pack", display_name="A", items=(Item(internal_key="lamp"),))
        once = duplicate_item(pack, "lamp")
        assert once is not None

        twice = duplicate_item(once, "lamp")

        assert twice is not None
        assert twice.item_keys() == ["lamp", "lamp_copy", "lamp_copy_1"]

    def test_duplicate_unknown(self) -> None:
        assert duplicate_item(Pack(id="a.pack", display_name="A"), "lamp") is None

    def test_remove(self) -> None:
        pack = Pack(
            id="a.pack",
            display_name="A",
            items=(Item(internal_key="lamp"), Item(internal_key="rug")),
        )

        updated = remove_item(pack, "lamp")

        assert updated is not None
        assert updated.item_keys() == ["rug"]
        assert remove_item(pack, "ghost") is None


def test_new_pack() -> None:
    pack = new_pack("Cozy Lights", author="Jane Doe", version="0.2.0")

    assert pack.id == "com.janedoe.cozylights"
    assert pack.display_name == "Cozy Lights"
    assert pack.version == "0.2.0"
    assert pack.items == ()
