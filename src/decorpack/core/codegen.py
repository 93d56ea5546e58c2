"""C# plugin source generation for a decor pack.

``render`` is a pure function of the pack: the same pack always produces
byte-identical text, which the live preview and the tests rely on. No
timestamps or environment data are embedded.

Each item becomes one ``DecorItemData`` initializer whose fields are written
in a fixed order: identity, economics, physical, collision, placement,
interaction, rendering, physics, unlock, asset references. Two fields are
conditional: ``VisualScale`` is left out when it is (1, 1, 1) and
``IsUnlocked`` is only written when false.

Generation never fails per field. If the pack id or display name is unset,
the output carries ``<<UNSET:...>>`` tokens, which can never compile.
"""

from dataclasses import dataclass

from decorpack.core.naming import (
    item_field_name,
    sanitize_namespace,
    sanitize_project_name,
    to_upper_snake_case,
)
from decorpack.core.types import ConfigOption, ConfigValue, Item, Pack, Vector3

GENERATOR_NAME = "decorpack"
API_NAMESPACE = "SupermarketDecorMod1.API"
CONFIG_SECTION = "General"


@dataclass(frozen=True)
class RenderOptions:
    """Formatting knobs for generated source."""

    indent_size: int = 4


def placeholder(field_name: str) -> str:
    """Token emitted in place of a required pack field that is unset."""
    return f"<<UNSET:{field_name}>>"


def missing_fields(pack: Pack) -> list[str]:
    """Names of required pack fields that would render as placeholders."""
    missing: list[str] = []
    if not pack.id.strip():
        missing.append("pluginId")
    if not sanitize_project_name(pack.display_name):
        missing.append("pluginName")
    return missing


def has_placeholders(source: str) -> bool:
    return "<<UNSET:" in source


def escape_string(value: str) -> str:
    """Escape a value for embedding in a C# string literal."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def escape_interpolated(value: str) -> str:
    """Escape an already string-escaped value for a C# interpolated string.

    Example:
        >>> escape_interpolated("Demo {1}")
        'Demo {{1}}'
    """
    return value.replace("{", "{{").replace("}", "}}")


def format_number(value: float) -> str:
    """Shortest decimal text for a number; integral values lose the fraction.

    Examples:
        >>> format_number(2.0)
        '2'
        >>> format_number(0.8)
        '0.8'
    """
    number = float(value)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def format_float(value: float) -> str:
    """C# single-precision literal, e.g. ``150f`` or ``0.25f``."""
    return f"{format_number(value)}f"


def format_vector3(vector: Vector3) -> str:
    return (
        f"new Vector3({format_float(vector.x)}, {format_float(vector.y)}, "
        f"{format_float(vector.z)})"
    )


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_config_value(value: ConfigValue) -> str:
    match value.kind:
        case "float":
            return format_float(float(value.value))
        case "int":
            return str(int(value.value))
        case "bool":
            return format_bool(bool(value.value))
        case _:
            return f'"{escape_string(str(value.value))}"'


def plugin_class_name(pack: Pack) -> str:
    sanitized = sanitize_project_name(pack.display_name)
    if not sanitized:
        return placeholder("pluginName")
    return f"{sanitized}Plugin"


def _plugin_id(pack: Pack) -> str:
    return escape_string(pack.id) if pack.id.strip() else placeholder("pluginId")


def _plugin_name(pack: Pack) -> str:
    if not pack.display_name.strip():
        return placeholder("pluginName")
    return escape_string(pack.display_name)


def _comment_text(value: str) -> str:
    return " ".join(value.split())


def _namespace(pack: Pack) -> str:
    namespace = sanitize_namespace(pack.id)
    return namespace if namespace else placeholder("pluginId")


class _Writer:
    """Line accumulator with indentation levels."""

    def __init__(self, indent_size: int) -> None:
        self._unit = " " * indent_size
        self.lines: list[str] = []

    def line(self, level: int, text: str = "") -> None:
        self.lines.append(f"{self._unit * level}{text}" if text else "")


def render(pack: Pack, options: RenderOptions | None = None) -> str:
    """Render the plugin source file for a pack.

    Args:
        pack: Pack with its items in registration order
        options: Formatting options (defaults to 4-space indentation)

    Returns:
        Complete C# source text, ending with a newline
    """
    opts = options if options is not None else RenderOptions()
    out = _Writer(opts.indent_size)

    title = _comment_text(pack.display_name) or placeholder("pluginName")
    out.line(0, f"// Generated by {GENERATOR_NAME}")
    out.line(0, f"// Pack: {title} v{_comment_text(pack.version)}")
    out.line(0, f"// Author: {_comment_text(pack.author)}")
    out.line(0)
    for using in (
        "BepInEx",
        "BepInEx.Configuration",
        API_NAMESPACE,
        "UnityEngine",
        "System.Collections.Generic",
    ):
        out.line(0, f"using {using};")
    out.line(0)

    out.line(0, f"namespace {_namespace(pack)}")
    out.line(0, "{")
    out.line(1, "/// <summary>")
    out.line(1, f"/// {title} - Expansion pack for Super Decor")
    out.line(1, "/// </summary>")
    version = escape_string(pack.version)
    out.line(1, f'[BepInPlugin("{_plugin_id(pack)}", "{_plugin_name(pack)}", "{version}")]')
    out.line(
        1,
        "[BepInDependency(DecorExpansionAPI.BASE_MOD_GUID, "
        "BepInDependency.DependencyFlags.HardDependency)]",
    )
    for dependency in pack.dependencies:
        out.line(
            1,
            f'[BepInDependency("{escape_string(dependency)}", '
            f"BepInDependency.DependencyFlags.HardDependency)]",
        )
    out.line(1, f"public class {plugin_class_name(pack)} : BaseUnityPlugin")
    out.line(1, "{")

    _write_config_fields(out, pack.options)
    _write_item_id_fields(out, pack.items)
    _write_awake(out, pack)
    out.line(0)
    _write_register_items(out, pack)
    out.line(0)
    _write_register_item(out, pack)
    out.line(0)
    _write_registered_count(out, pack.items)

    out.line(1, "}")
    out.line(0, "}")
    return "\n".join(out.lines) + "\n"


def _write_config_fields(out: _Writer, options: tuple[ConfigOption, ...]) -> None:
    if not options:
        return
    out.line(2, "// Configuration")
    for option in options:
        out.line(2, f"private ConfigEntry<{option.default.kind}> {option.name};")
    out.line(0)


def _write_item_id_fields(out: _Writer, items: tuple[Item, ...]) -> None:
    if not items:
        return
    out.line(2, "// Store the IDs assigned by the API")
    for item in items:
        out.line(2, f"private int {item_field_name(item.internal_key)} = -1;")
    out.line(0)


def _write_awake(out: _Writer, pack: Pack) -> None:
    out.line(2, "private void Awake()")
    out.line(2, "{")

    if pack.options:
        out.line(3, "// Load config")
        for option in pack.options:
            _write_config_binding(out, option)
        out.line(0)

    out.line(3, "// Check if base mod is ready")
    out.line(3, "if (!DecorExpansionAPI.IsBaseModReady())")
    out.line(3, "{")
    out.line(4, 'Logger.LogError("Supermarket Decor Framework is not loaded!");')
    out.line(4, "return;")
    out.line(3, "}")
    out.line(0)

    if pack.use_assembly_resources:
        out.line(3, "// Register with assembly for asset loading")
        out.line(3, "if (!DecorExpansionAPI.RegisterExpansionPackWithAssembly(")
    else:
        out.line(3, "// Register expansion pack")
        out.line(3, "if (!DecorExpansionAPI.RegisterExpansionPack(")

    arguments = [
        f'packId: "{_plugin_id(pack)}"',
        f'packName: "{_plugin_name(pack)}"',
        f'packVersion: "{escape_string(pack.version)}"',
        f'author: "{escape_string(pack.author)}"',
    ]
    if pack.use_assembly_resources:
        arguments.append("assembly: System.Reflection.Assembly.GetExecutingAssembly()")
    if pack.dependencies:
        quoted = ", ".join(f'"{escape_string(dep)}"' for dep in pack.dependencies)
        arguments.append(f"dependencies: new[] {{ {quoted} }}")
    for index, argument in enumerate(arguments):
        suffix = "))" if index == len(arguments) - 1 else ","
        out.line(4, f"{argument}{suffix}")

    out.line(3, "{")
    out.line(4, 'Logger.LogError("Failed to register expansion pack!");')
    out.line(4, "return;")
    out.line(3, "}")
    out.line(0)
    out.line(3, "// Register items")
    out.line(3, "RegisterItems();")
    out.line(2, "}")


def _write_config_binding(out: _Writer, option: ConfigOption) -> None:
    default = format_config_value(option.default)
    key = escape_string(option.name)
    head = f'{option.name} = Config.Bind("{CONFIG_SECTION}", "{key}", {default}'
    ranged = option.has_range and option.default.kind in ("float", "int")
    if not option.description and not ranged:
        out.line(3, f"{head});")
        return

    out.line(3, f"{head},")
    description = f'new ConfigDescription("{escape_string(option.description)}"'
    if not ranged:
        out.line(4, f"{description}));")
        return

    assert option.minimum is not None and option.maximum is not None
    out.line(4, f"{description},")
    if option.default.kind == "float":
        bounds = f"{format_float(option.minimum)}, {format_float(option.maximum)}"
        out.line(5, f"new AcceptableValueRange<float>({bounds})));")
    else:
        bounds = f"{int(option.minimum)}, {int(option.maximum)}"
        out.line(5, f"new AcceptableValueRange<int>({bounds})));")


def _write_register_items(out: _Writer, pack: Pack) -> None:
    out.line(2, "private void RegisterItems()")
    out.line(2, "{")
    for index, item in enumerate(pack.items):
        if index > 0:
            out.line(0)
        out.line(3, f"// {_comment_text(item.display_name)}")
        out.line(3, f"{item_field_name(item.internal_key)} = RegisterItem(new DecorItemData")
        out.line(3, "{")
        for assignment in item_assignments(item, pack):
            out.line(4, assignment)
        out.line(3, "});")
    if pack.items:
        out.line(0)
    name = escape_interpolated(_plugin_name(pack))
    out.line(3, f'Logger.LogInfo($"{name} registered {{GetRegisteredCount()}} items");')
    out.line(2, "}")


def item_assignments(item: Item, pack: Pack) -> list[str]:
    """Property assignments for one item, in emission order, comma separated.

    The last assignment carries no trailing comma.
    """
    assets = item.asset_refs
    fields: list[str] = [
        # Identity
        f'InternalName = "{escape_string(item.internal_key)}"',
        f'ItemName = "{escape_string(item.display_name)}"',
        f'Description = "{escape_string(item.description)}"',
        f"Category = DecorCategories.{item.category}",
        # Economics
        f"BaseCost = {format_float(item.base_cost)}",
        # Physical
        f"BoxSize = BoxSize.{item.box_size}",
        f"BaseReferenceID = {item.base_reference_id}",
    ]
    if item.weight is not None:
        fields.append(f"Weight = {format_float(item.weight)}")

    # Collision
    fields.extend(
        [
            f"CollisionSize = {format_vector3(item.collision_size)}",
            f"CollisionCenter = {format_vector3(item.collision_center)}",
            f"IsWalkable = {format_bool(item.is_walkable)}",
        ]
    )
    if not item.visual_scale.is_one():
        fields.append(f"VisualScale = {format_vector3(item.visual_scale)}")

    fields.extend(
        [
            # Placement
            f"CanPlaceOnFloor = {format_bool(item.can_place_on_floor)}",
            f"CanPlaceOnWalls = {format_bool(item.can_place_on_walls)}",
            f"CanPlaceOnCeiling = {format_bool(item.can_place_on_ceiling)}",
            f"RequiresFloorContact = {format_bool(item.requires_floor_contact)}",
            f"AllowFloating = {format_bool(item.allow_floating)}",
            # Interaction
            f"IsInteractable = {format_bool(item.is_interactable)}",
            f"IsMoveable = {format_bool(item.is_moveable)}",
            f"CanRotate = {format_bool(item.can_rotate)}",
            f"CanScale = {format_bool(item.can_scale)}",
            # Rendering
            f"CastShadows = {format_bool(item.cast_shadows)}",
            f"ReceiveShadows = {format_bool(item.receive_shadows)}",
            # Physics
            f"HasPhysics = {format_bool(item.has_physics)}",
            f"IsKinematic = {format_bool(item.is_kinematic)}",
            # Unlock
            f"RequiredLevel = {item.required_level}",
        ]
    )
    if not item.is_unlocked:
        fields.append("IsUnlocked = false")

    fields.append(f'AssetBundleName = "{_plugin_id(pack)}"')
    if assets.icon:
        fields.append(f'IconAssetName = "{escape_string(assets.icon)}"')
    if assets.mesh:
        fields.append(f'MeshAssetName = "{escape_string(assets.mesh)}"')
    if assets.material:
        fields.append(f'MaterialAssetName = "{escape_string(assets.material)}"')

    return [f"{text}," for text in fields[:-1]] + [fields[-1]]


def _write_register_item(out: _Writer, pack: Pack) -> None:
    out.line(2, "/// <summary>")
    out.line(2, "/// Register a single item and return its ID")
    out.line(2, "/// </summary>")
    out.line(2, "private int RegisterItem(DecorItemData itemData)")
    out.line(2, "{")
    out.line(3, f'int id = DecorExpansionAPI.RegisterDecorItem("{_plugin_id(pack)}", itemData);')
    out.line(3, "if (id > 0)")
    out.line(3, "{")
    out.line(4, 'Logger.LogInfo($"Registered {itemData.ItemName} with ID: {id}");')
    out.line(3, "}")
    out.line(3, "else")
    out.line(3, "{")
    out.line(4, 'Logger.LogError($"Failed to register {itemData.ItemName}");')
    out.line(3, "}")
    out.line(3, "return id;")
    out.line(2, "}")


def _write_registered_count(out: _Writer, items: tuple[Item, ...]) -> None:
    out.line(2, "/// <summary>")
    out.line(2, "/// Get count of successfully registered items")
    out.line(2, "/// </summary>")
    out.line(2, "private int GetRegisteredCount()")
    out.line(2, "{")
    out.line(3, "int count = 0;")
    for item in items:
        out.line(3, f"if ({item_field_name(item.internal_key)} > 0) count++;")
    out.line(3, "return count;")
    out.line(2, "}")


def render_constants(pack: Pack, options: RenderOptions | None = None) -> str:
    """Render the static class mapping each item constant to its internal key."""
    opts = options if options is not None else RenderOptions()
    out = _Writer(opts.indent_size)
    out.line(0, f"// Generated by {GENERATOR_NAME}")
    out.line(0, "// Constants for every item key in this pack")
    out.line(0)
    out.line(0, f"namespace {_namespace(pack)}")
    out.line(0, "{")
    out.line(1, "public static class DecorItemIDs")
    out.line(1, "{")
    for item in pack.items:
        declaration = (
            f'public const string {to_upper_snake_case(item.internal_key)} = '
            f'"{escape_string(item.internal_key)}";'
        )
        if item.assigned_id is not None:
            declaration = f"{declaration} // id {item.assigned_id}"
        out.line(2, declaration)
    out.line(1, "}")
    out.line(0, "}")
    return "\n".join(out.lines) + "\n"
