"""JSON descriptor format for packs.

Descriptors use the camelCase layout of the pack editor's project files, so
projects saved from the editor load unchanged:

    {
      "pluginId": "com.jane.cozy",
      "pluginName": "Cozy Pack",
      "version": "1.0.0",
      "author": "Jane",
      "dependencies": [],
      "items": [{"internalName": "desk_lamp", "itemName": "Desk Lamp", ...}],
      "configuration": {"options": [{"name": "Brightness", "type": "float",
                                     "defaultValue": 1.0, "min": 0, "max": 2}]},
      "useAssemblyResources": true
    }

Unknown keys (e.g. editor-only fields like ``customMesh``) are ignored.
Pydantic models live only at this boundary; the rest of the package works on
the frozen dataclasses from ``decorpack.core.types``.
"""

import logging
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from decorpack.core.errors import ValidationError
from decorpack.core.types import (
    DEFAULT_BOX_SIZE,
    DEFAULT_CATEGORY,
    AssetReferences,
    ConfigOption,
    ConfigValue,
    Item,
    Pack,
    Vector3,
)

logger = logging.getLogger(__name__)

OPTION_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, extra="ignore", allow_inf_nan=False
)


class Vector3Model(BaseModel):
    model_config = _MODEL_CONFIG

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_vector(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    @staticmethod
    def from_vector(vector: Vector3) -> "Vector3Model":
        return Vector3Model(x=vector.x, y=vector.y, z=vector.z)


class ItemModel(BaseModel):
    """One entry of ``items``.

    Defaults mirror the editor's default item. Empty asset names fall back
    to names derived from the internal name.
    """

    model_config = _MODEL_CONFIG

    internal_name: str
    item_name: str = "New Item"
    description: str = "A new decor item"
    category: str = DEFAULT_CATEGORY.value
    base_cost: float = 100.0
    box_size: str = DEFAULT_BOX_SIZE.value
    base_reference_id: int = 2
    weight: float | None = None
    collision_size: Vector3Model = Field(default_factory=lambda: Vector3Model(x=0.8, y=0.8, z=0.8))
    collision_center: Vector3Model = Field(
        default_factory=lambda: Vector3Model(x=0.0, y=0.4, z=0.0)
    )
    is_walkable: bool = False
    visual_scale: Vector3Model = Field(default_factory=lambda: Vector3Model(x=1.0, y=1.0, z=1.0))
    can_place_on_floor: bool = True
    can_place_on_walls: bool = False
    can_place_on_ceiling: bool = False
    requires_floor_contact: bool = True
    allow_floating: bool = False
    is_interactable: bool = False
    is_moveable: bool = True
    can_rotate: bool = True
    can_scale: bool = False
    cast_shadows: bool = True
    receive_shadows: bool = True
    has_physics: bool = False
    is_kinematic: bool = True
    required_level: int = 1
    is_unlocked: bool = True
    icon_asset_name: str = ""
    mesh_asset_name: str = ""
    material_asset_name: str = ""
    assigned_id: int | None = None

    def to_item(self) -> Item:
        return Item(
            internal_key=self.internal_name,
            display_name=self.item_name,
            description=self.description,
            category=self.category,
            base_cost=self.base_cost,
            box_size=self.box_size,
            base_reference_id=self.base_reference_id,
            weight=self.weight,
            collision_size=self.collision_size.to_vector(),
            collision_center=self.collision_center.to_vector(),
            is_walkable=self.is_walkable,
            visual_scale=self.visual_scale.to_vector(),
            can_place_on_floor=self.can_place_on_floor,
            can_place_on_walls=self.can_place_on_walls,
            can_place_on_ceiling=self.can_place_on_ceiling,
            requires_floor_contact=self.requires_floor_contact,
            allow_floating=self.allow_floating,
            is_interactable=self.is_interactable,
            is_moveable=self.is_moveable,
            can_rotate=self.can_rotate,
            can_scale=self.can_scale,
            cast_shadows=self.cast_shadows,
            receive_shadows=self.receive_shadows,
            has_physics=self.has_physics,
            is_kinematic=self.is_kinematic,
            required_level=self.required_level,
            is_unlocked=self.is_unlocked,
            assets=AssetReferences.resolve(
                self.internal_name,
                icon=self.icon_asset_name,
                mesh=self.mesh_asset_name,
                material=self.material_asset_name,
            ),
            assigned_id=self.assigned_id,
        )

    @staticmethod
    def from_item(item: Item) -> "ItemModel":
        assets = item.asset_refs
        return ItemModel(
            internal_name=item.internal_key,
            item_name=item.display_name,
            description=item.description,
            category=item.category,
            base_cost=item.base_cost,
            box_size=item.box_size,
            base_reference_id=item.base_reference_id,
            weight=item.weight,
            collision_size=Vector3Model.from_vector(item.collision_size),
            collision_center=Vector3Model.from_vector(item.collision_center),
            is_walkable=item.is_walkable,
            visual_scale=Vector3Model.from_vector(item.visual_scale),
            can_place_on_floor=item.can_place_on_floor,
            can_place_on_walls=item.can_place_on_walls,
            can_place_on_ceiling=item.can_place_on_ceiling,
            requires_floor_contact=item.requires_floor_contact,
            allow_floating=item.allow_floating,
            is_interactable=item.is_interactable,
            is_moveable=item.is_moveable,
            can_rotate=item.can_rotate,
            can_scale=item.can_scale,
            cast_shadows=item.cast_shadows,
            receive_shadows=item.receive_shadows,
            has_physics=item.has_physics,
            is_kinematic=item.is_kinematic,
            required_level=item.required_level,
            is_unlocked=item.is_unlocked,
            icon_asset_name=assets.icon,
            mesh_asset_name=assets.mesh,
            material_asset_name=assets.material,
            assigned_id=item.assigned_id,
        )


class OptionModel(BaseModel):
    """One BepInEx config entry; ``defaultValue`` is checked against ``type``."""

    model_config = _MODEL_CONFIG

    name: str
    kind: str = Field(default="float", alias="type")
    default_value: Any = None
    description: str = ""
    min: float | None = None
    max: float | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Option names become C# field names."""
        if not OPTION_NAME_PATTERN.match(v):
            msg = f"option name '{v}' is not a valid C# identifier"
            raise ValueError(msg)
        return v

    def to_option(self) -> ConfigOption:
        """Resolve the untyped default against the declared kind.

        Raises:
            ValueError: If the default does not fit the kind
        """
        return ConfigOption(
            name=self.name,
            default=ConfigValue.parse(self.kind, self.default_value),
            description=self.description,
            minimum=self.min,
            maximum=self.max,
        )

    @staticmethod
    def from_option(option: ConfigOption) -> "OptionModel":
        return OptionModel(
            name=option.name,
            kind=option.default.kind,
            default_value=option.default.value,
            description=option.description,
            min=option.minimum,
            max=option.maximum,
        )


class ConfigurationModel(BaseModel):
    model_config = _MODEL_CONFIG

    options: list[OptionModel] = Field(default_factory=list)


class PackModel(BaseModel):
    """Top-level descriptor document."""

    model_config = _MODEL_CONFIG

    plugin_id: str
    plugin_name: str
    version: str = "1.0.0"
    author: str = ""
    dependencies: list[str] = Field(default_factory=list)
    items: list[ItemModel] = Field(default_factory=list)
    configuration: ConfigurationModel = Field(default_factory=ConfigurationModel)
    use_assembly_resources: bool = True
    enabled: bool = True

    @staticmethod
    def from_pack(pack: Pack) -> "PackModel":
        return PackModel(
            plugin_id=pack.id,
            plugin_name=pack.display_name,
            version=pack.version,
            author=pack.author,
            dependencies=list(pack.dependencies),
            items=[ItemModel.from_item(item) for item in pack.items],
            configuration=ConfigurationModel(
                options=[OptionModel.from_option(option) for option in pack.options]
            ),
            use_assembly_resources=pack.use_assembly_resources,
            enabled=pack.enabled,
        )


def serialize(pack: Pack) -> str:
    """Render a pack as descriptor JSON (2-space indent, trailing newline)."""
    model = PackModel.from_pack(pack)
    return model.model_dump_json(by_alias=True, indent=2, exclude_none=True) + "\n"


def deserialize(text: str) -> Pack | ValidationError:
    """Parse descriptor JSON into a Pack.

    Only the document shape and config option types are checked here. Item
    keys, categories and dependencies are validated on registration.

    Returns:
        The Pack, or ValidationError naming the first offending field
    """
    try:
        model = PackModel.model_validate_json(text)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        logger.debug("Descriptor rejected: %s", e)
        return ValidationError(
            message=f"Invalid descriptor at '{location or '<root>'}': {first['msg']}",
            field=location,
            reason="InvalidDescriptor",
        )

    options: list[ConfigOption] = []
    for index, option in enumerate(model.configuration.options):
        try:
            options.append(option.to_option())
        except ValueError as e:
            return ValidationError(
                message=f"Invalid default for option '{option.name}': {e}",
                field=f"configuration.options.{index}.defaultValue",
                reason="InvalidDescriptor",
            )

    return Pack(
        id=model.plugin_id,
        display_name=model.plugin_name,
        version=model.version,
        author=model.author,
        dependencies=tuple(model.dependencies),
        items=tuple(item.to_item() for item in model.items),
        enabled=model.enabled,
        options=tuple(options),
        use_assembly_resources=model.use_assembly_resources,
    )


def load_pack(path: Path) -> Pack | ValidationError:
    """Read and parse a descriptor file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Descriptor not found: {path}")
    return deserialize(path.read_text(encoding="utf-8"))


def save_pack(pack: Pack, path: Path) -> None:
    """Write a pack as a descriptor file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(pack), encoding="utf-8")
    logger.debug("Wrote descriptor for %s to %s", pack.id, path)
