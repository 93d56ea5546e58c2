"""Tests for identifier and file-name helpers."""

import itertools

from decorpack.core.naming import (
    copy_key,
    item_field_name,
    make_plugin_id,
    sanitize_namespace,
    sanitize_project_name,
    to_camel_case,
    to_upper_snake_case,
    unique_key,
)


def test_sanitize_project_name() -> None:
    assert sanitize_project_name("My Decor Pack!") == "MyDecorPack"
    assert sanitize_project_name("Pack_2.0") == "Pack20"
    assert sanitize_project_name("   ") == ""


def test_sanitize_namespace() -> None:
    assert sanitize_namespace("com.jane.cozy") == "com_jane_cozy"
    assert sanitize_namespace("com.jane-doe.pack") == "com_janedoe_pack"


class TestToCamelCase:
    """Tests for item key to field name conversion."""

    def test_simple_keys(self) -> None:
        assert to_camel_case("desk_lamp") == "deskLamp"
        assert to_camel_case("desk_lamp_led") == "deskLampLed"
        assert to_camel_case("lamp") == "lamp"

    def test_underscores_not_before_letters_are_kept(self) -> None:
        assert to_camel_case("lamp_2") == "lamp_2"
        assert to_camel_case("a__b") == "a_B"
        assert to_camel_case("_lamp") == "Lamp"
        assert to_camel_case("lamp_") == "lamp_"

    def test_distinct_keys_give_distinct_names(self) -> None:
        alphabet = "ab_1"
        keys = [
            "".join(chars)
            for length in range(1, 5)
            for chars in itertools.product(alphabet, repeat=length)
            if not chars[0].isdigit()
        ]

        names = {to_camel_case(key) for key in keys}

        assert len(names) == len(keys)

    def test_field_name(self) -> None:
        assert item_field_name("desk_lamp") == "deskLampId"


def test_to_upper_snake_case() -> None:
    assert to_upper_snake_case("desk_lamp") == "DESK_LAMP"
    assert to_upper_snake_case("lamp_2") == "LAMP_2"


class TestMakePluginId:
    """Tests for plugin id derivation."""

    def test_lowercases_and_strips(self) -> None:
        assert make_plugin_id("Jane Doe", "Cozy Lights!") == "com.janedoe.cozylights"

    def test_fallbacks(self) -> None:
        assert make_plugin_id("", "") == "com.author.pack"
        assert make_plugin_id("???", "Pack") == "com.author.pack"


class TestUniqueKeys:
    """Tests for collision-free key generation."""

    def test_free_base_is_kept(self) -> None:
        assert unique_key("new_item", []) == "new_item"

    def test_numbered_suffix(self) -> None:
        assert unique_key("new_item", ["new_item", "new_item_1"]) == "new_item_2"

    def test_copy_key(self) -> None:
        assert copy_key("lamp", ["lamp"]) == "lamp_copy"
        assert copy_key("lamp", ["lamp", "lamp_copy"]) == "lamp_copy_1"
