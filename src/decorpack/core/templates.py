"""Starter templates for new items and packs.

Each template is a partial set of Item field overrides applied on top of the
default item. Keys, asset names and ids always come from the caller.
"""

from dataclasses import dataclass, replace
from typing import Any

from decorpack.core.naming import copy_key, make_plugin_id, unique_key
from decorpack.core.types import AssetReferences, BoxSize, Category, Item, Pack, Vector3

DEFAULT_ITEM_KEY = "new_item"


@dataclass(frozen=True)
class ItemTemplate:
    id: str
    name: str
    description: str
    overrides: dict[str, Any]


def _placement(
    floor: bool, walls: bool, ceiling: bool, contact: bool, floating: bool
) -> dict[str, bool]:
    return {
        "can_place_on_floor": floor,
        "can_place_on_walls": walls,
        "can_place_on_ceiling": ceiling,
        "requires_floor_contact": contact,
        "allow_floating": floating,
    }


ITEM_TEMPLATES: tuple[ItemTemplate, ...] = (
    ItemTemplate(
        id="small_decor",
        name="Small Decoration",
        description="Basic small decorative item like a vase or figurine",
        overrides={
            "display_name": "Small Decoration",
            "description": "A small decorative item",
            "category": Category.FIXTURES.value,
            "base_cost": 50.0,
            "box_size": BoxSize.SMALL.value,
            "base_reference_id": 2,
            "collision_size": Vector3(0.4, 0.6, 0.4),
            "collision_center": Vector3(0.0, 0.3, 0.0),
            "visual_scale": Vector3(0.8, 0.8, 0.8),
            **_placement(True, False, False, True, False),
        },
    ),
    ItemTemplate(
        id="wall_art",
        name="Wall Art",
        description="Picture frame or artwork for walls",
        overrides={
            "display_name": "Wall Art",
            "description": "A beautiful piece of wall art",
            "category": Category.WALL_DECOR.value,
            "base_cost": 120.0,
            "box_size": BoxSize.SMALL.value,
            "base_reference_id": 2,
            "collision_size": Vector3(0.8, 0.8, 0.1),
            "collision_center": Vector3(0.0, 0.0, 0.0),
            "visual_scale": Vector3(1.0, 1.0, 0.2),
            **_placement(False, True, False, False, True),
        },
    ),
    ItemTemplate(
        id="floor_plant",
        name="Floor Plant",
        description="Large potted plant for floor placement",
        overrides={
            "display_name": "Floor Plant",
            "description": "A lush decorative plant",
            "category": Category.FLOOR_DECOR.value,
            "base_cost": 200.0,
            "box_size": BoxSize.MEDIUM.value,
            "base_reference_id": 3,
            "collision_size": Vector3(0.6, 1.8, 0.6),
            "collision_center": Vector3(0.0, 0.9, 0.0),
            "visual_scale": Vector3(1.0, 1.0, 1.0),
            **_placement(True, False, False, True, False),
        },
    ),
    ItemTemplate(
        id="desk_lamp",
        name="Desk Lamp",
        description="Modern LED desk lamp",
        overrides={
            "display_name": "LED Desk Lamp",
            "description": "Energy-efficient LED lamp",
            "category": Category.LIGHTING.value,
            "base_cost": 80.0,
            "box_size": BoxSize.SMALL.value,
            "base_reference_id": 2,
            "collision_size": Vector3(0.3, 0.5, 0.3),
            "collision_center": Vector3(0.0, 0.25, 0.0),
            "visual_scale": Vector3(0.7, 0.7, 0.7),
            "is_interactable": True,
            **_placement(True, False, False, True, False),
        },
    ),
    ItemTemplate(
        id="ceiling_light",
        name="Ceiling Light",
        description="Overhead lighting fixture",
        overrides={
            "display_name": "Ceiling Light",
            "description": "Modern ceiling light fixture",
            "category": Category.LIGHTING.value,
            "base_cost": 150.0,
            "box_size": BoxSize.MEDIUM.value,
            "base_reference_id": 3,
            "collision_size": Vector3(0.8, 0.3, 0.8),
            "collision_center": Vector3(0.0, -0.15, 0.0),
            "visual_scale": Vector3(1.0, 1.0, 1.0),
            **_placement(False, False, True, False, True),
        },
    ),
    ItemTemplate(
        id="sculpture",
        name="Art Sculpture",
        description="Modern art sculpture piece",
        overrides={
            "display_name": "Modern Sculpture",
            "description": "An abstract art sculpture",
            "category": Category.FIXTURES.value,
            "base_cost": 300.0,
            "box_size": BoxSize.MEDIUM.value,
            "base_reference_id": 3,
            "collision_size": Vector3(1.0, 1.6, 1.0),
            "collision_center": Vector3(0.0, 0.8, 0.0),
            "visual_scale": Vector3(1.2, 1.2, 1.2),
            "is_moveable": False,
            **_placement(True, False, False, True, False),
        },
    ),
    ItemTemplate(
        id="shelf_item",
        name="Shelf Decoration",
        description="Small item for shelf placement",
        overrides={
            "display_name": "Shelf Decoration",
            "description": "Perfect for shelves and tables",
            "category": Category.FIXTURES.value,
            "base_cost": 40.0,
            "box_size": BoxSize.SMALL.value,
            "base_reference_id": 2,
            "collision_size": Vector3(0.3, 0.3, 0.3),
            "collision_center": Vector3(0.0, 0.15, 0.0),
            "visual_scale": Vector3(0.6, 0.6, 0.6),
            **_placement(True, False, False, True, True),
        },
    ),
    ItemTemplate(
        id="outdoor_decor",
        name="Outdoor Decoration",
        description="Weather-resistant outdoor item",
        overrides={
            "display_name": "Outdoor Decoration",
            "description": "Durable outdoor decorative piece",
            "category": Category.OUTDOOR.value,
            "base_cost": 180.0,
            "box_size": BoxSize.MEDIUM.value,
            "base_reference_id": 3,
            "collision_size": Vector3(1.2, 1.0, 1.2),
            "collision_center": Vector3(0.0, 0.5, 0.0),
            "visual_scale": Vector3(1.0, 1.0, 1.0),
            "has_physics": True,
            **_placement(True, False, False, True, False),
        },
    ),
    ItemTemplate(
        id="tv_electronics",
        name="TV/Electronics",
        description="Electronic device like TV or monitor",
        overrides={
            "display_name": "Smart TV",
            "description": "55-inch smart television",
            "category": Category.FIXTURES.value,
            "base_cost": 500.0,
            "box_size": BoxSize.LARGE.value,
            "base_reference_id": 4,
            "collision_size": Vector3(1.4, 0.8, 0.2),
            "collision_center": Vector3(0.0, 0.4, 0.0),
            "visual_scale": Vector3(1.0, 1.0, 0.5),
            "is_interactable": True,
            **_placement(True, True, False, False, True),
        },
    ),
    ItemTemplate(
        id="seasonal_decor",
        name="Seasonal Decoration",
        description="Holiday or seasonal themed item",
        overrides={
            "display_name": "Seasonal Decoration",
            "description": "Festive seasonal decor",
            "category": Category.SEASONAL.value,
            "base_cost": 60.0,
            "box_size": BoxSize.SMALL.value,
            "base_reference_id": 2,
            "collision_size": Vector3(0.5, 0.7, 0.5),
            "collision_center": Vector3(0.0, 0.35, 0.0),
            "visual_scale": Vector3(0.9, 0.9, 0.9),
            **_placement(True, False, False, True, False),
        },
    ),
)


def get_template(template_id: str) -> ItemTemplate | None:
    for template in ITEM_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def template_ids() -> list[str]:
    return [template.id for template in ITEM_TEMPLATES]


def item_from_template(template_id: str, internal_key: str) -> Item | None:
    """Build an item from a template, or None if the template is unknown.

    Asset names are derived from ``internal_key``.
    """
    template = get_template(template_id)
    if template is None:
        return None
    return Item(internal_key=internal_key, **template.overrides)


def add_item(pack: Pack, item: Item | None = None) -> Pack:
    """Append an item under a key not yet used in the pack.

    A taken key gets a numeric suffix (``new_item`` -> ``new_item_1``);
    asset names follow the final key unless the item set them explicitly.
    """
    base = item if item is not None else Item(internal_key=DEFAULT_ITEM_KEY)
    key = unique_key(base.internal_key or DEFAULT_ITEM_KEY, pack.item_keys())
    if key != base.internal_key:
        base = _rekey(base, key)
    return replace(pack, items=(*pack.items, base))


def _rekey(item: Item, key: str) -> Item:
    assets = item.asset_refs
    if assets == AssetReferences.derive(item.internal_key):
        assets = AssetReferences.derive(key)
    return replace(item, internal_key=key, assets=assets, assigned_id=None)


def duplicate_item(pack: Pack, internal_key: str) -> Pack | None:
    """Append a copy of an item as ``{key}_copy`` (``_copy_1``, ...).

    The copy keeps the original's asset names and is named "{name} (Copy)".

    Returns:
        The updated pack, or None if the key is not in the pack
    """
    original = pack.find_item(internal_key)
    if original is None:
        return None
    copy = replace(
        original,
        internal_key=copy_key(internal_key, pack.item_keys()),
        display_name=f"{original.display_name} (Copy)",
        assigned_id=None,
    )
    return replace(pack, items=(*pack.items, copy))


def remove_item(pack: Pack, internal_key: str) -> Pack | None:
    """Drop an item from a pack; None if the key is not in the pack."""
    if pack.find_item(internal_key) is None:
        return None
    return replace(
        pack, items=tuple(item for item in pack.items if item.internal_key != internal_key)
    )


def new_pack(display_name: str, author: str = "", version: str = "1.0.0") -> Pack:
    """Empty pack with a plugin id derived from author and name."""
    return Pack(
        id=make_plugin_id(author, display_name),
        display_name=display_name,
        version=version,
        author=author,
    )
