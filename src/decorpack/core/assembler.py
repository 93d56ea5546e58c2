"""Assemble a complete C# plugin project from a pack.

``bundle`` is pure composition over ``codegen``: it decides directory layout
and file names, nothing else. The result is an ordered mapping of relative
path to file bytes that an ArchiveWriter turns into a zip.

Layout (relative to the project root):

    {Project}.csproj
    build.bat
    build.ps1
    README.md
    .gitignore
    Properties/AssemblyInfo.cs
    src/{Project}Plugin.cs
    src/DecorItemIDs.cs
    Resources/README.md
    Resources/Icons/{icon}.png
    Resources/Meshes/{mesh}.json
    Resources/Textures/{material}.png
"""

import json
import struct
import zlib
from dataclasses import dataclass
from xml.sax.saxutils import escape as xml_escape

from decorpack.core.codegen import RenderOptions, render, render_constants
from decorpack.core.naming import sanitize_project_name
from decorpack.core.types import Pack, is_valid_asset_name

FALLBACK_PROJECT_NAME = "ExpansionPack"
TARGET_FRAMEWORK = "net472"

ICONS_DIR = "Resources/Icons"
MESHES_DIR = "Resources/Meshes"
TEXTURES_DIR = "Resources/Textures"


@dataclass(frozen=True)
class ProjectBundle:
    """Files of a generated project, keyed by path relative to the project root."""

    project_name: str
    files: dict[str, bytes]

    @property
    def archive_name(self) -> str:
        return f"{self.project_name}_Project.zip"

    def paths(self) -> list[str]:
        return list(self.files)

    def text(self, path: str) -> str:
        return self.files[path].decode("utf-8")


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    body = kind + data
    return struct.pack(">I", len(data)) + body + struct.pack(">I", zlib.crc32(body) & 0xFFFFFFFF)


def _transparent_png() -> bytes:
    """A valid 1x1 fully transparent RGBA PNG."""
    header = struct.pack(">IIBBBBB", 1, 1, 8, 6, 0, 0, 0)
    # One scanline: filter byte followed by a single RGBA pixel.
    pixels = zlib.compress(b"\x00" + b"\x00\x00\x00\x00", 9)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", pixels)
        + _png_chunk(b"IEND", b"")
    )


PLACEHOLDER_PNG = _transparent_png()


def placeholder_mesh(name: str) -> bytes:
    """Empty mesh document in the format the host's mesh loader reads."""
    mesh = {"name": name, "vertices": [], "triangles": [], "normals": [], "uv": []}
    return (json.dumps(mesh, indent=2) + "\n").encode("utf-8")


def project_name(pack: Pack) -> str:
    """Project, assembly and file-name stem for a pack."""
    return sanitize_project_name(pack.display_name) or FALLBACK_PROJECT_NAME


def asset_checklist(pack: Pack) -> list[str]:
    """Every asset path the project expects, without duplicates, in item order.

    Paths are relative to the project root, e.g. ``Resources/Icons/lamp_icon.png``.
    Names that are not plain file names are left out.
    """
    seen: dict[str, None] = {}
    for item in pack.items:
        refs = item.asset_refs
        if is_valid_asset_name(refs.icon):
            seen.setdefault(f"{ICONS_DIR}/{refs.icon}.png")
        if is_valid_asset_name(refs.mesh):
            seen.setdefault(f"{MESHES_DIR}/{refs.mesh}.json")
        if is_valid_asset_name(refs.material):
            seen.setdefault(f"{TEXTURES_DIR}/{refs.material}.png")
    return list(seen)


def bundle(pack: Pack, *, year: int, options: RenderOptions | None = None) -> ProjectBundle:
    """Compose every file of the plugin project for a pack.

    Args:
        pack: Pack to assemble, normally taken from a Registry after registration
        year: Copyright year written into AssemblyInfo.cs
        options: Formatting options for generated C# files

    Returns:
        ProjectBundle whose file order matches the documented layout
    """
    name = project_name(pack)
    assets = asset_checklist(pack)

    files: dict[str, bytes] = {}

    def add(path: str, text: str) -> None:
        files[path] = text.encode("utf-8")

    add(f"{name}.csproj", _csproj(pack, name, assets))
    add("build.bat", _build_bat(name))
    add("build.ps1", _build_ps1(name))
    add("README.md", _readme(pack))
    add(".gitignore", GITIGNORE)
    add("Properties/AssemblyInfo.cs", _assembly_info(pack, year))
    add(f"src/{name}Plugin.cs", render(pack, options))
    add("src/DecorItemIDs.cs", render_constants(pack, options))
    add("Resources/README.md", _resources_readme(assets))

    for path in assets:
        if path.startswith(MESHES_DIR):
            mesh_name = path.removeprefix(f"{MESHES_DIR}/").removesuffix(".json")
            files[path] = placeholder_mesh(mesh_name)
        else:
            files[path] = PLACEHOLDER_PNG

    return ProjectBundle(project_name=name, files=files)


def _windows_path(path: str) -> str:
    return path.replace("/", "\\")


def _csproj(pack: Pack, name: str, assets: list[str]) -> str:
    resources = "\n".join(
        f'    <EmbeddedResource Include="{_windows_path(path)}" />' for path in assets
    )
    return f"""<Project Sdk="Microsoft.NET.Sdk">

  <PropertyGroup>
    <TargetFramework>{TARGET_FRAMEWORK}</TargetFramework>
    <AssemblyName>{name}</AssemblyName>
    <Description>{xml_escape(pack.display_name)} - Expansion pack for Super Decor</Description>
    <Version>{xml_escape(pack.version)}</Version>
    <Authors>{xml_escape(pack.author)}</Authors>
    <LangVersion>latest</LangVersion>
    <AllowUnsafeBlocks>true</AllowUnsafeBlocks>
    <GenerateAssemblyInfo>false</GenerateAssemblyInfo>
  </PropertyGroup>

  <ItemGroup>
    <Reference Include="BepInEx">
      <HintPath>$(BepInExPath)\\core\\BepInEx.dll</HintPath>
      <Private>False</Private>
    </Reference>
    <Reference Include="UnityEngine">
      <HintPath>$(UnityPath)\\UnityEngine.dll</HintPath>
      <Private>False</Private>
    </Reference>
    <Reference Include="UnityEngine.CoreModule">
      <HintPath>$(UnityPath)\\UnityEngine.CoreModule.dll</HintPath>
      <Private>False</Private>
    </Reference>
    <Reference Include="SupermarketDecorMod1">
      <HintPath>$(BepInExPath)\\plugins\\SupermarketDecorMod1.dll</HintPath>
      <Private>False</Private>
    </Reference>
  </ItemGroup>

  <ItemGroup>
{resources}
  </ItemGroup>

  <PropertyGroup>
    <BepInExPath Condition="'$(BepInExPath)' == ''">C:\\Program Files (x86)\\Steam\\steamapps\\common\\Supermarket Simulator\\BepInEx</BepInExPath>
    <UnityPath Condition="'$(UnityPath)' == ''">C:\\Program Files (x86)\\Steam\\steamapps\\common\\Supermarket Simulator\\Supermarket Simulator_Data\\Managed</UnityPath>
  </PropertyGroup>

  <Target Name="PostBuild" AfterTargets="PostBuildEvent">
    <Copy SourceFiles="$(TargetPath)" DestinationFolder="$(BepInExPath)\\plugins" Condition="Exists('$(BepInExPath)\\plugins')" />
    <Message Text="Copied $(TargetFileName) to BepInEx plugins folder" Importance="high" Condition="Exists('$(BepInExPath)\\plugins')" />
  </Target>

</Project>
"""


def _build_bat(name: str) -> str:
    return f"""@echo off
echo Building {name}...
echo.

dotnet restore
dotnet build -c Release

if %ERRORLEVEL% NEQ 0 (
    echo Build failed!
    pause
    exit /b %ERRORLEVEL%
)

echo.
echo Build completed successfully!
echo Output: bin\\Release\\{TARGET_FRAMEWORK}\\{name}.dll
echo.
echo To install, copy the DLL to your BepInEx\\plugins folder
pause
"""


def _build_ps1(name: str) -> str:
    return f"""# {name} Build Script

param(
    [string]$Configuration = "Release",
    [string]$BepInExPath = $env:BEPINEX_PATH,
    [switch]$Install
)

Write-Host "Building {name}..." -ForegroundColor Green

dotnet build -c $Configuration

if ($LASTEXITCODE -ne 0) {{
    Write-Host "Build failed!" -ForegroundColor Red
    exit $LASTEXITCODE
}}

Write-Host "Build completed successfully!" -ForegroundColor Green
$outputPath = "bin\\$Configuration\\{TARGET_FRAMEWORK}\\{name}.dll"
Write-Host "Output: $outputPath" -ForegroundColor Yellow

if ($Install -and $BepInExPath) {{
    $pluginsPath = Join-Path $BepInExPath "plugins"
    if (Test-Path $pluginsPath) {{
        Write-Host "Installing to BepInEx plugins folder..." -ForegroundColor Cyan
        Copy-Item $outputPath $pluginsPath -Force
        Write-Host "Installation complete!" -ForegroundColor Green
    }} else {{
        Write-Host "BepInEx plugins folder not found at: $pluginsPath" -ForegroundColor Red
    }}
}}
"""


def _readme(pack: Pack) -> str:
    lines = [f"# {pack.display_name}", ""]
    if pack.author:
        lines.extend([f"By {pack.author}", ""])
    lines.extend(
        [
            f"Version: {pack.version}",
            "",
            "## Description",
            "",
            f"An expansion pack for the Super Decor mod that adds {len(pack.items)} "
            f"decorative items to Supermarket Simulator.",
            "",
            "## Items Included",
            "",
        ]
    )
    lines.extend(f"- **{item.display_name}**: {item.description}" for item in pack.items)
    lines.extend(
        [
            "",
            "## Building",
            "",
            "1. Update `BepInExPath` and `UnityPath` in the .csproj to match your game install.",
            "2. Replace the placeholder files under `Resources/` with real assets",
            "   (see `Resources/README.md`).",
            "3. Run `build.bat`, or `dotnet build -c Release`.",
            f"4. Copy `bin\\Release\\{TARGET_FRAMEWORK}\\*.dll` to `BepInEx\\plugins`, or run",
            '   `.\\build.ps1 -Install -BepInExPath "C:\\path\\to\\game\\BepInEx"`.',
            "",
            "## Credits",
            "",
            "- Super Decor Mod Framework by Leptoon",
            "",
        ]
    )
    return "\n".join(lines)


def _resources_readme(assets: list[str]) -> str:
    def section(title: str, prefix: str) -> list[str]:
        entries = [
            f"- {path.removeprefix('Resources/')}" for path in assets if path.startswith(prefix)
        ]
        return [f"### {title}", "", *(entries or ["- (none)"]), ""]

    lines = [
        "# Resource Files",
        "",
        "Every file listed here is embedded into the plugin assembly. The project",
        "ships placeholders (transparent 1x1 PNGs and empty meshes); replace them",
        "with real assets before release.",
        "",
        "## Required Files",
        "",
        *section("Icons (PNG, 128x128 recommended)", ICONS_DIR),
        *section("Meshes (JSON exported from Unity)", MESHES_DIR),
        *section("Textures (PNG, power-of-two dimensions)", TEXTURES_DIR),
    ]
    return "\n".join(lines)


def _assembly_info(pack: Pack, year: int) -> str:
    def quoted(value: str) -> str:
        return value.replace("\\", "\\\\").replace('"', '\\"')

    name = quoted(pack.display_name)
    author = quoted(pack.author)
    version = quoted(pack.version)
    return f"""using System.Reflection;
using System.Runtime.InteropServices;

[assembly: AssemblyTitle("{name}")]
[assembly: AssemblyDescription("{name} - Expansion pack for Super Decor")]
[assembly: AssemblyConfiguration("")]
[assembly: AssemblyCompany("{author}")]
[assembly: AssemblyProduct("{name}")]
[assembly: AssemblyCopyright("Copyright (c) {author} {year}")]
[assembly: AssemblyTrademark("")]
[assembly: AssemblyCulture("")]

[assembly: ComVisible(false)]

[assembly: AssemblyVersion("{version}")]
[assembly: AssemblyFileVersion("{version}")]
"""


GITIGNORE = """# User-specific files
*.rsuser
*.suo
*.user
*.userosscache
*.sln.docstates

# Build results
[Dd]ebug/
[Rr]elease/
[Rr]eleases/
x64/
x86/
bld/
[Bb]in/
[Oo]bj/
[Ll]og/
[Ll]ogs/

# Visual Studio cache/options directory
.vs/

# .NET
project.lock.json
project.fragment.lock.json
artifacts/
*.pdb
*.tmp
*.log

# NuGet
*.nupkg
**/[Pp]ackages/*
!**/[Pp]ackages/build/
*.nuget.props
*.nuget.targets
"""
