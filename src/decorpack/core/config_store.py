"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.decorpack/config.toml.
The file is optional; every field has a default.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import tomlkit

DEFAULT_INDENT_SIZE = 4
CONFIG_KEYS = ("default_author", "output_dir", "indent_size")


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in DecorpackContext.

    Attributes:
        default_author: Author used by `decorpack new` when none is given
        output_dir: Directory bundles are written to by default
        indent_size: Spaces per indentation level in generated C#
    """

    default_author: str
    output_dir: Path
    indent_size: int

    @staticmethod
    def default() -> "GlobalConfig":
        return GlobalConfig(
            default_author="",
            output_dir=Path("dist"),
            indent_size=DEFAULT_INDENT_SIZE,
        )

    def get(self, key: str) -> str:
        """String form of a config value, as shown by `config get`.

        Raises:
            KeyError: If key is not a config key
        """
        match key:
            case "default_author":
                return self.default_author
            case "output_dir":
                return str(self.output_dir)
            case "indent_size":
                return str(self.indent_size)
            case _:
                raise KeyError(key)

    def with_value(self, key: str, value: str) -> "GlobalConfig":
        """Copy with one field replaced, parsing the string value.

        Raises:
            KeyError: If key is not a config key
            ValueError: If the value is invalid for the key
        """
        match key:
            case "default_author":
                return GlobalConfig(value, self.output_dir, self.indent_size)
            case "output_dir":
                return GlobalConfig(self.default_author, Path(value), self.indent_size)
            case "indent_size":
                return GlobalConfig(self.default_author, self.output_dir, parse_indent_size(value))
            case _:
                raise KeyError(key)


def parse_indent_size(raw: object) -> int:
    """Validate an indent size: an integer from 1 to 8.

    Raises:
        ValueError: If the value is not an integer in range
    """
    if isinstance(raw, bool):
        raise ValueError(f"indent_size must be an integer, got {raw!r}")
    if isinstance(raw, str):
        if not raw.strip().isdigit():
            raise ValueError(f"indent_size must be an integer, got {raw!r}")
        raw = int(raw)
    if not isinstance(raw, int):
        raise ValueError(f"indent_size must be an integer, got {raw!r}")
    if not 1 <= raw <= 8:
        raise ValueError(f"indent_size must be between 1 and 8, got {raw}")
    return raw


class ConfigStore(ABC):
    """Abstract interface for global config operations.

    Provides dependency injection for global config access, enabling
    in-memory implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if global config exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load global config.

        Raises:
            FileNotFoundError: If config doesn't exist
            ValueError: If config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: GlobalConfig) -> None:
        """Save global config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Path to the config file (for error messages and debugging)."""
        ...

    def load_or_default(self) -> GlobalConfig:
        if not self.exists():
            return GlobalConfig.default()
        return self.load()


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.decorpack/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> GlobalConfig:
        """Load global config from disk.

        Missing keys take their defaults.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If the file is not valid TOML or a value is invalid
        """
        config_path = self.path()

        if not config_path.exists():
            raise FileNotFoundError(f"Global config not found at {config_path}")

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

        defaults = GlobalConfig.default()
        output_dir = data.get("output_dir")
        try:
            indent_size = parse_indent_size(data.get("indent_size", defaults.indent_size))
        except ValueError as e:
            raise ValueError(f"{e} (in {config_path})") from e

        return GlobalConfig(
            default_author=str(data.get("default_author", defaults.default_author)),
            output_dir=Path(output_dir).expanduser() if output_dir else defaults.output_dir,
            indent_size=indent_size,
        )

    def save(self, config: GlobalConfig) -> None:
        """Save global config, keeping comments and unknown keys of an existing file.

        Raises:
            PermissionError: If directory or file cannot be written
        """
        config_path = self.path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Cannot write to directory: {parent}\n"
                f"The directory exists but is not writable.\n\n"
                f"To fix this manually:\n"
                f"  1. Ensure it's writable: chmod 755 {parent}\n"
                f"  2. Run decorpack init again"
            )

        try:
            parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            raise PermissionError(
                f"Cannot create directory: {parent}\n"
                f"Check permissions on your home directory.\n\n"
                f"To fix this manually:\n"
                f"  1. Create the directory: mkdir -p {parent}\n"
                f"  2. Ensure it's writable: chmod 755 {parent}"
            ) from None

        if config_path.exists() and not os.access(config_path, os.W_OK):
            raise PermissionError(
                f"Cannot write to file: {config_path}\n"
                f"The file exists but is not writable.\n\n"
                f"To fix this manually:\n"
                f"  1. Make it writable: chmod 644 {config_path}\n"
                f"  2. Run decorpack init again"
            )

        if config_path.exists():
            doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("Global decorpack configuration"))

        doc["default_author"] = config.default_author
        doc["output_dir"] = str(config.output_dir)
        doc["indent_size"] = config.indent_size

        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".decorpack" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: GlobalConfig | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> GlobalConfig:
        if self._config is None:
            raise FileNotFoundError(f"Global config not found at {self.path()}")
        return self._config

    def save(self, config: GlobalConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/decorpack/config.toml")
