"""Data structures for decor packs and their items.

All records are frozen dataclasses with tuple-valued collections so that two
packs built from the same descriptor compare equal field by field. The
registry replaces records wholesale (via ``dataclasses.replace``) instead of
mutating them, which keeps every registration step all-or-nothing.
"""

import math
import re
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import ClassVar, Literal

INTERNAL_KEY_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")
ASSET_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")


class Category(StrEnum):
    """Closed allow-list of item categories understood by the host mod."""

    FIXTURES = "Fixtures"
    WALL_DECOR = "WallDecor"
    FLOOR_DECOR = "FloorDecor"
    LIGHTING = "Lighting"
    OUTDOOR = "Outdoor"
    SEASONAL = "Seasonal"


DEFAULT_CATEGORY = Category.FIXTURES


class BoxSize(StrEnum):
    """Delivery box sizes. Each maps to a base reference id in the host."""

    SMALL = "_8x8x8"
    MEDIUM = "_15x15x15"
    LARGE = "_25x20x15"

    @property
    def base_reference_id(self) -> int:
        return _BOX_REFERENCE_IDS[self]

    @property
    def label(self) -> str:
        return _BOX_LABELS[self]


_BOX_REFERENCE_IDS = {BoxSize.SMALL: 2, BoxSize.MEDIUM: 3, BoxSize.LARGE: 4}
_BOX_LABELS = {BoxSize.SMALL: "Small", BoxSize.MEDIUM: "Medium", BoxSize.LARGE: "Large"}

DEFAULT_BOX_SIZE = BoxSize.SMALL


@dataclass(frozen=True)
class Vector3:
    """Three-component float vector (x, y, z)."""

    x: float
    y: float
    z: float

    ONE: ClassVar["Vector3"]
    ZERO: ClassVar["Vector3"]

    def is_one(self) -> bool:
        return self.x == 1 and self.y == 1 and self.z == 1

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


Vector3.ONE = Vector3(1.0, 1.0, 1.0)
Vector3.ZERO = Vector3(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class AssetReferences:
    """Names of the icon, mesh and material assets of one item."""

    icon: str
    mesh: str
    material: str

    @staticmethod
    def derive(internal_key: str) -> "AssetReferences":
        """Default asset names for an item key.

        Example:
            >>> AssetReferences.derive("desk_lamp")
            AssetReferences(icon='desk_lamp_icon', mesh='desk_lamp', material='desk_lamp_material')
        """
        return AssetReferences(
            icon=f"{internal_key}_icon",
            mesh=internal_key,
            material=f"{internal_key}_material",
        )

    @staticmethod
    def resolve(
        internal_key: str,
        icon: str | None = None,
        mesh: str | None = None,
        material: str | None = None,
    ) -> "AssetReferences":
        """Derive asset names from the key, keeping any non-empty override."""
        derived = AssetReferences.derive(internal_key)
        return AssetReferences(
            icon=icon or derived.icon,
            mesh=mesh or derived.mesh,
            material=material or derived.material,
        )


ConfigKind = Literal["float", "int", "bool", "string"]
CONFIG_KINDS: tuple[ConfigKind, ...] = ("float", "int", "bool", "string")


@dataclass(frozen=True)
class ConfigValue:
    """Tagged configuration value: ``kind`` always matches the type of ``value``.

    Untyped input (JSON, CLI strings) is resolved once through ``parse`` and
    only typed values travel further into the generator.
    """

    kind: ConfigKind
    value: float | int | bool | str

    @staticmethod
    def parse(kind: str, raw: object) -> "ConfigValue":
        """Resolve a raw value against its declared kind.

        Raises:
            ValueError: If the kind is unknown or the value does not fit it
        """
        match kind:
            case "float":
                if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
                    raise ValueError(f"Expected a float value, got {raw!r}")
                number = float(raw)
                if not math.isfinite(number):
                    raise ValueError(f"Expected a finite float value, got {raw!r}")
                return ConfigValue(kind="float", value=number)
            case "int":
                if isinstance(raw, bool):
                    raise ValueError(f"Expected an int value, got {raw!r}")
                if isinstance(raw, float) and not raw.is_integer():
                    raise ValueError(f"Expected an int value, got {raw!r}")
                if not isinstance(raw, (int, float, str)):
                    raise ValueError(f"Expected an int value, got {raw!r}")
                return ConfigValue(kind="int", value=int(raw))
            case "bool":
                if isinstance(raw, bool):
                    return ConfigValue(kind="bool", value=raw)
                if isinstance(raw, str) and raw.lower() in ("true", "false"):
                    return ConfigValue(kind="bool", value=raw.lower() == "true")
                raise ValueError(f"Expected a bool value, got {raw!r}")
            case "string":
                if raw is None:
                    return ConfigValue(kind="string", value="")
                return ConfigValue(kind="string", value=str(raw))
            case _:
                raise ValueError(f"Unknown config kind '{kind}' (expected one of {CONFIG_KINDS})")


@dataclass(frozen=True)
class ConfigOption:
    """A BepInEx configuration entry exposed by the generated plugin."""

    name: str
    default: ConfigValue
    description: str = ""
    minimum: float | None = None
    maximum: float | None = None

    @property
    def has_range(self) -> bool:
        return self.minimum is not None and self.maximum is not None


@dataclass(frozen=True)
class Item:
    """A single decor item descriptor.

    ``assigned_id`` stays ``None`` until a Registry assigns it; the registry
    stores a copy with the id filled in and never changes it afterwards.
    """

    internal_key: str
    display_name: str = "New Item"
    description: str = "A new decor item"
    category: str = DEFAULT_CATEGORY.value

    # Economics
    base_cost: float = 100.0

    # Physical
    box_size: str = DEFAULT_BOX_SIZE.value
    base_reference_id: int = 2
    weight: float | None = None

    # Collision
    collision_size: Vector3 = Vector3(0.8, 0.8, 0.8)
    collision_center: Vector3 = Vector3(0.0, 0.4, 0.0)
    is_walkable: bool = False

    # Visual
    visual_scale: Vector3 = Vector3.ONE

    # Placement
    can_place_on_floor: bool = True
    can_place_on_walls: bool = False
    can_place_on_ceiling: bool = False
    requires_floor_contact: bool = True
    allow_floating: bool = False

    # Interaction
    is_interactable: bool = False
    is_moveable: bool = True
    can_rotate: bool = True
    can_scale: bool = False

    # Rendering
    cast_shadows: bool = True
    receive_shadows: bool = True

    # Physics
    has_physics: bool = False
    is_kinematic: bool = True

    # Unlock
    required_level: int = 1
    is_unlocked: bool = True

    assets: AssetReferences | None = None
    assigned_id: int | None = None

    def __post_init__(self) -> None:
        refs = self.assets
        if refs is None:
            object.__setattr__(self, "assets", AssetReferences.derive(self.internal_key))
        elif not (refs.icon and refs.mesh and refs.material):
            resolved = AssetReferences.resolve(
                self.internal_key, refs.icon, refs.mesh, refs.material
            )
            object.__setattr__(self, "assets", resolved)

    @property
    def asset_refs(self) -> AssetReferences:
        """Asset references, never None after construction."""
        assert self.assets is not None
        return self.assets

    def without_id(self) -> "Item":
        """Copy of the descriptor data with the assignment stripped."""
        if self.assigned_id is None:
            return self
        return replace(self, assigned_id=None)


def is_valid_internal_key(key: str) -> bool:
    """Check key against the lowercase alnum + underscore pattern."""
    return bool(INTERNAL_KEY_PATTERN.match(key))


def is_valid_asset_name(name: str) -> bool:
    """Check an asset name is a plain file name with no path separators.

    Examples:
        >>> is_valid_asset_name("desk_lamp_icon")
        True
        >>> is_valid_asset_name("../evil")
        False
    """
    return bool(ASSET_NAME_PATTERN.match(name))


@dataclass(frozen=True)
class PackMetadata:
    """Descriptive fields of a pack supplied at registration."""

    display_name: str
    version: str = "1.0.0"
    author: str = ""
    options: tuple[ConfigOption, ...] = ()
    use_assembly_resources: bool = True


@dataclass(frozen=True)
class Pack:
    """A namespaced collection of items registered under one identity.

    Attributes:
        id: Globally unique plugin id, e.g. "com.author.packname"
        display_name: Human readable pack name (also drives file names)
        version: Semver-like version string
        author: Pack author
        dependencies: Ids of packs that must be registered first
        items: Items in registration order
        enabled: Whether the pack participates in publishing
        options: Configuration entries of the generated plugin
        use_assembly_resources: Register the pack with its assembly for
            embedded resource loading
    """

    id: str
    display_name: str
    version: str = "1.0.0"
    author: str = ""
    dependencies: tuple[str, ...] = ()
    items: tuple[Item, ...] = ()
    enabled: bool = True
    options: tuple[ConfigOption, ...] = field(default=())
    use_assembly_resources: bool = True

    @property
    def metadata(self) -> PackMetadata:
        return PackMetadata(
            display_name=self.display_name,
            version=self.version,
            author=self.author,
            options=self.options,
            use_assembly_resources=self.use_assembly_resources,
        )

    def find_item(self, internal_key: str) -> Item | None:
        for item in self.items:
            if item.internal_key == internal_key:
                return item
        return None

    def item_keys(self) -> list[str]:
        return [item.internal_key for item in self.items]
