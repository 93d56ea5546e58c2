"""Tests for C# plugin source generation."""

from decorpack.core.codegen import (
    RenderOptions,
    escape_interpolated,
    escape_string,
    format_float,
    format_number,
    has_placeholders,
    item_assignments,
    missing_fields,
    plugin_class_name,
    render,
    render_constants,
)
from decorpack.core.types import ConfigOption, ConfigValue, Item, Pack, Vector3


def _pack(*items: Item, **overrides: object) -> Pack:
    fields: dict[str, object] = {
        "id": "com.jane.cozy",
        "display_name": "Cozy Pack",
        "version": "1.2.0",
        "author": "Jane",
        "items": items,
    }
    fields.update(overrides)
    return Pack(**fields)  # type: ignore[arg-type]


def _lamp(**overrides: object) -> Item:
    fields: dict[str, object] = {"display_name": "Desk Lamp"}
    fields.update(overrides)
    return Item(internal_key="desk_lamp", **fields)  # type: ignore[arg-type]


class TestNumberFormatting:
    """Tests for numeric literals."""

    def test_integral_values_drop_fraction(self) -> None:
        assert format_number(2.0) == "2"
        assert format_number(150) == "150"
        assert format_number(-0.0) == "0"

    def test_fractions_keep_shortest_form(self) -> None:
        assert format_number(0.8) == "0.8"
        assert format_number(0.25) == "0.25"

    def test_float_suffix(self) -> None:
        assert format_float(1.0) == "1f"
        assert format_float(0.4) == "0.4f"


class TestEscapeString:
    """Tests for C# string literal escaping."""

    def test_quotes_and_backslashes(self) -> None:
        assert escape_string('a "b" \\ c') == 'a \\"b\\" \\\\ c'

    def test_control_characters(self) -> None:
        assert escape_string("line1\nline2\ttab\r") == "line1\\nline2\\ttab\\r"

    def test_interpolation_braces_are_doubled(self) -> None:
        assert escape_interpolated("{a} }{") == "{{a}} }}{{"


class TestRender:
    """Tests for the plugin class source."""

    def test_is_deterministic(self) -> None:
        pack = _pack(_lamp(), Item(internal_key="rug"))
        assert render(pack) == render(pack)

    def test_ends_with_single_newline(self) -> None:
        source = render(_pack(_lamp()))
        assert source.endswith("}\n")
        assert not source.endswith("\n\n")

    def test_header_and_plugin_attribute(self) -> None:
        source = render(_pack(_lamp()))

        assert source.startswith("// Generated by decorpack\n// Pack: Cozy Pack v1.2.0\n")
        assert "namespace com_jane_cozy" in source
        assert '[BepInPlugin("com.jane.cozy", "Cozy Pack", "1.2.0")]' in source
        assert "public class CozyPackPlugin : BaseUnityPlugin" in source

    def test_item_fields_and_registration(self) -> None:
        source = render(_pack(_lamp()))

        assert "        private int deskLampId = -1;" in source
        assert "            deskLampId = RegisterItem(new DecorItemData" in source
        assert "            if (deskLampId > 0) count++;" in source
        assert "            // Desk Lamp" in source

    def test_registers_with_assembly_by_default(self) -> None:
        source = render(_pack(_lamp()))

        assert "RegisterExpansionPackWithAssembly(" in source
        assert "assembly: System.Reflection.Assembly.GetExecutingAssembly()))" in source

    def test_registers_without_assembly(self) -> None:
        source = render(_pack(_lamp(), use_assembly_resources=False))

        assert "DecorExpansionAPI.RegisterExpansionPack(" in source
        assert "assembly:" not in source
        assert 'author: "Jane"))' in source

    def test_pack_dependencies(self) -> None:
        source = render(_pack(_lamp(), dependencies=("com.base.pack",)))

        assert (
            '[BepInDependency("com.base.pack", BepInDependency.DependencyFlags.HardDependency)]'
            in source
        )
        assert 'dependencies: new[] { "com.base.pack" }))' in source

    def test_indent_size(self) -> None:
        source = render(_pack(_lamp()), RenderOptions(indent_size=2))

        assert '\n  [BepInPlugin("com.jane.cozy"' in source
        assert "\n      deskLampId = RegisterItem(" in source

    def test_item_order_is_preserved(self) -> None:
        source = render(_pack(Item(internal_key="zebra"), Item(internal_key="apple")))
        assert source.index('InternalName = "zebra"') < source.index('InternalName = "apple"')

    def test_empty_pack_still_renders(self) -> None:
        source = render(_pack())

        assert "private void RegisterItems()" in source
        assert "private int " not in source.split("private void Awake()")[0]

    def test_multiline_item_name_stays_in_comment(self) -> None:
        source = render(_pack(_lamp(display_name="Lamp\nint x = ;")))

        assert "            // Lamp int x = ;" in source
        assert not [line for line in source.splitlines() if line.strip() == "int x = ;"]

    def test_braces_in_pack_name_are_escaped_in_log_message(self) -> None:
        source = render(_pack(_lamp(), display_name="Demo {"))

        assert 'Logger.LogInfo($"Demo {{ registered {GetRegisteredCount()} items");' in source
        assert '[BepInPlugin("com.jane.cozy", "Demo {", "1.2.0")]' in source


class TestItemAssignments:
    """Tests for the per-item initializer fields."""

    def test_field_order_and_values(self) -> None:
        lines = item_assignments(_lamp(category="Lighting", base_cost=80.0), _pack())

        assert lines[:7] == [
            'InternalName = "desk_lamp",',
            'ItemName = "Desk Lamp",',
            'Description = "A new decor item",',
            "Category = DecorCategories.Lighting,",
            "BaseCost = 80f,",
            "BoxSize = BoxSize._8x8x8,",
            "BaseReferenceID = 2,",
        ]
        assert "CollisionSize = new Vector3(0.8f, 0.8f, 0.8f)," in lines
        assert "CollisionCenter = new Vector3(0f, 0.4f, 0f)," in lines
        assert 'AssetBundleName = "com.jane.cozy",' in lines

    def test_only_last_field_lacks_comma(self) -> None:
        lines = item_assignments(_lamp(), _pack())

        assert all(line.endswith(",") for line in lines[:-1])
        assert lines[-1] == 'MaterialAssetName = "desk_lamp_material"'

    def test_vectors_use_float_literals(self) -> None:
        lines = item_assignments(_lamp(collision_size=Vector3(2.0, 1.0, 1.0)), _pack())
        assert "CollisionSize = new Vector3(2f, 1f, 1f)," in lines

    def test_unit_scale_is_omitted(self) -> None:
        lines = item_assignments(_lamp(), _pack())
        assert not any(line.startswith("VisualScale") for line in lines)

    def test_custom_scale_is_written(self) -> None:
        lines = item_assignments(_lamp(visual_scale=Vector3(0.5, 0.5, 0.5)), _pack())
        assert "VisualScale = new Vector3(0.5f, 0.5f, 0.5f)," in lines

    def test_is_unlocked_only_when_false(self) -> None:
        unlocked = item_assignments(_lamp(), _pack())
        locked = item_assignments(_lamp(is_unlocked=False, required_level=5), _pack())

        assert not any(line.startswith("IsUnlocked") for line in unlocked)
        assert "IsUnlocked = false," in locked
        assert "RequiredLevel = 5," in locked

    def test_weight_only_when_set(self) -> None:
        without = item_assignments(_lamp(), _pack())
        weighted = item_assignments(_lamp(weight=2.5), _pack())

        assert not any(line.startswith("Weight") for line in without)
        assert "Weight = 2.5f," in weighted

    def test_flags(self) -> None:
        lines = item_assignments(
            _lamp(can_place_on_walls=True, has_physics=True, is_kinematic=False), _pack()
        )

        assert "CanPlaceOnWalls = true," in lines
        assert "HasPhysics = true," in lines
        assert "IsKinematic = false," in lines
        assert "CanPlaceOnFloor = true," in lines

    def test_strings_are_escaped(self) -> None:
        lines = item_assignments(_lamp(display_name='The "Big" Lamp', description="a\nb"), _pack())

        assert 'ItemName = "The \\"Big\\" Lamp",' in lines
        assert 'Description = "a\\nb",' in lines


class TestPlaceholders:
    """Tests for unset required pack fields."""

    def test_missing_fields(self) -> None:
        assert missing_fields(_pack()) == []
        assert missing_fields(_pack(id="", display_name="!!!")) == ["pluginId", "pluginName"]

    def test_unset_fields_render_placeholders(self) -> None:
        source = render(_pack(_lamp(), id="", display_name=""))

        assert has_placeholders(source)
        assert "<<UNSET:pluginId>>" in source
        assert "<<UNSET:pluginName>>" in source

    def test_complete_pack_has_no_placeholders(self) -> None:
        assert not has_placeholders(render(_pack(_lamp())))

    def test_class_name(self) -> None:
        assert plugin_class_name(_pack(display_name="My Decor Pack!")) == "MyDecorPackPlugin"
        assert plugin_class_name(_pack(display_name="")) == "<<UNSET:pluginName>>"


class TestConfigBindings:
    """Tests for BepInEx config entries."""

    def test_plain_binding(self) -> None:
        option = ConfigOption(name="EnableGlow", default=ConfigValue(kind="bool", value=True))

        source = render(_pack(options=(option,)))

        assert "        private ConfigEntry<bool> EnableGlow;" in source
        assert '            EnableGlow = Config.Bind("General", "EnableGlow", true);' in source

    def test_binding_with_description(self) -> None:
        option = ConfigOption(
            name="Greeting",
            default=ConfigValue(kind="string", value="hi"),
            description="Shown on load",
        )

        source = render(_pack(options=(option,)))

        assert '            Greeting = Config.Bind("General", "Greeting", "hi",' in source
        assert '                new ConfigDescription("Shown on load"));' in source

    def test_binding_with_float_range(self) -> None:
        option = ConfigOption(
            name="Brightness",
            default=ConfigValue(kind="float", value=1.0),
            description="Lamp brightness",
            minimum=0.0,
            maximum=2.0,
        )

        source = render(_pack(options=(option,)))

        assert '            Brightness = Config.Bind("General", "Brightness", 1f,' in source
        assert '                new ConfigDescription("Lamp brightness",' in source
        assert "                    new AcceptableValueRange<float>(0f, 2f)));" in source

    def test_binding_with_int_range(self) -> None:
        option = ConfigOption(
            name="MaxItems",
            default=ConfigValue(kind="int", value=10),
            minimum=1,
            maximum=50,
        )

        source = render(_pack(options=(option,)))

        assert "new AcceptableValueRange<int>(1, 50)));" in source
        assert '                new ConfigDescription("",' in source


class TestRenderConstants:
    """Tests for the DecorItemIDs constants class."""

    def test_constants_with_ids(self) -> None:
        pack = _pack(_lamp(assigned_id=761234), Item(internal_key="rug"))

        source = render_constants(pack)

        assert "    public static class DecorItemIDs" in source
        assert '        public const string DESK_LAMP = "desk_lamp"; // id 761234' in source
        assert '        public const string RUG = "rug";\n' in source
        assert source.endswith("}\n")
