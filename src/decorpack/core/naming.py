"""Naming utilities for generated identifiers and file names.

This module provides pure functions that turn user-authored names (pack
names, plugin ids, item keys) into C# identifiers and filesystem-safe names.
All functions are pure (no I/O) and total over their documented inputs.
"""

import re


def sanitize_project_name(name: str) -> str:
    """Strip everything except ASCII letters and digits.

    Used for the project, assembly and plugin class names.

    Examples:
        >>> sanitize_project_name("My Decor Pack!")
        'MyDecorPack'
        >>> sanitize_project_name("   ")
        ''
    """
    return re.sub(r"[^a-zA-Z0-9]", "", name)


def sanitize_namespace(plugin_id: str) -> str:
    """Turn a dotted plugin id into a C# namespace identifier.

    Dots become underscores, anything else outside ``[A-Za-z0-9_]`` is dropped.

    Example:
        >>> sanitize_namespace("com.jane-doe.pack")
        'com_janedoe_pack'
    """
    return re.sub(r"[^a-zA-Z0-9_]", "", plugin_id.replace(".", "_"))


def to_camel_case(internal_key: str) -> str:
    """Convert a snake_case item key to camelCase.

    A letter directly after an underscore is upper-cased and that underscore
    dropped. Underscores before digits, before other underscores, or at the
    end are kept. Since valid keys never contain upper-case letters, each
    upper-case letter in the result maps back to exactly one ``_x`` pair, so
    distinct keys always give distinct names.

    Examples:
        >>> to_camel_case("desk_lamp_led")
        'deskLampLed'
        >>> to_camel_case("lamp_2")
        'lamp_2'
        >>> to_camel_case("a__b")
        'a_B'
    """
    return re.sub(r"_([a-z])", lambda match: match.group(1).upper(), internal_key)


def item_field_name(internal_key: str) -> str:
    """Name of the generated int field holding an item's id."""
    return f"{to_camel_case(internal_key)}Id"


def to_upper_snake_case(internal_key: str) -> str:
    """Constant name for an item key.

    Example:
        >>> to_upper_snake_case("desk_lamp")
        'DESK_LAMP'
    """
    return re.sub(r"[^A-Z0-9]", "_", internal_key.upper())


def make_plugin_id(author: str, pack_name: str) -> str:
    """Build a ``com.{author}.{pack}`` plugin id from free-form names.

    Examples:
        >>> make_plugin_id("Jane Doe", "Cozy Lights!")
        'com.janedoe.cozylights'
        >>> make_plugin_id("", "")
        'com.author.pack'
    """
    clean_author = re.sub(r"[^a-z0-9]", "", author.lower()) or "author"
    clean_pack = re.sub(r"[^a-z0-9]", "", pack_name.lower()) or "pack"
    return f"com.{clean_author}.{clean_pack}"


def unique_key(base: str, existing: set[str] | list[str]) -> str:
    """First of ``base``, ``base_1``, ``base_2``, ... not already taken.

    Example:
        >>> unique_key("new_item", ["new_item"])
        'new_item_1'
    """
    taken = set(existing)
    if base not in taken:
        return base
    counter = 1
    while f"{base}_{counter}" in taken:
        counter += 1
    return f"{base}_{counter}"


def copy_key(base: str, existing: set[str] | list[str]) -> str:
    """Key for a duplicated item: ``base_copy``, then ``base_copy_1``, ...

    Example:
        >>> copy_key("lamp", ["lamp", "lamp_copy"])
        'lamp_copy_1'
    """
    return unique_key(f"{base}_copy", existing)
