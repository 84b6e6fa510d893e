"""
Configuration file support for polygeom.

Provides hierarchical configuration loading from:
1. Project config: .polygeom.toml or polygeom.toml in project root
2. User config: ~/.config/polygeom/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import logging
import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from polygeom.exceptions import PolygeomError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

# Config file names to search for in project directories
CONFIG_FILENAMES = [".polygeom.toml", "polygeom.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "polygeom" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"format", "verbose", "quiet"},
    "swell": {"amount"},
    "separate": {"direction"},
}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    format: str = "table"
    verbose: bool = False
    quiet: bool = False


@dataclass
class SwellConfig:
    """Outward offset applied by ``polygeom swell``."""

    amount: float = 1.0


@dataclass
class SeparateConfig:
    """Axis used by ``polygeom separate`` when none is given."""

    direction: tuple[float, float] = (1.0, 0.0)


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    swell: SwellConfig = field(default_factory=SwellConfig)
    separate: SeparateConfig = field(default_factory=SeparateConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            _merge_config(config, _load_toml_file(USER_CONFIG_PATH), str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            _merge_config(config, _load_toml_file(project_config), str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


class ConfigError(PolygeomError):
    """Configuration-related errors."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        # Stop at filesystem root
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML data

    Raises:
        ConfigError: If TOML is invalid or the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    logger.debug(f"Loaded config file {path}")
    return data


def _parse_direction(value: Any, source: str) -> tuple[float, float]:
    if not isinstance(value, list) or len(value) != 2:
        raise ConfigError(
            f"Invalid separate.direction in {source}: expected [dx, dy], got {value!r}"
        )
    dx, dy = (float(c) for c in value)
    if dx == 0 and dy == 0:
        raise ConfigError(f"Invalid separate.direction in {source}: must not be [0, 0]")
    return dx, dy


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    # Warn about unknown top-level keys
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "defaults" in data:
        defaults_data = data["defaults"]
        _warn_unknown_keys(defaults_data, KNOWN_KEYS["defaults"], "defaults", source)

        if "format" in defaults_data:
            if defaults_data["format"] not in ("table", "json"):
                raise ConfigError(
                    f"Invalid defaults.format in {source}: {defaults_data['format']!r}"
                )
            config.defaults.format = defaults_data["format"]
            sources["defaults.format"] = source
        if "verbose" in defaults_data:
            config.defaults.verbose = bool(defaults_data["verbose"])
            sources["defaults.verbose"] = source
        if "quiet" in defaults_data:
            config.defaults.quiet = bool(defaults_data["quiet"])
            sources["defaults.quiet"] = source

    if "swell" in data:
        swell_data = data["swell"]
        _warn_unknown_keys(swell_data, KNOWN_KEYS["swell"], "swell", source)

        if "amount" in swell_data:
            amount = float(swell_data["amount"])
            if amount < 0:
                raise ConfigError(f"Invalid swell.amount in {source}: must be >= 0")
            config.swell.amount = amount
            sources["swell.amount"] = source

    if "separate" in data:
        separate_data = data["separate"]
        _warn_unknown_keys(separate_data, KNOWN_KEYS["separate"], "separate", source)

        if "direction" in separate_data:
            config.separate.direction = _parse_direction(separate_data["direction"], source)
            sources["separate.direction"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# polygeom configuration file
# Place as .polygeom.toml in project root or ~/.config/polygeom/config.toml for user defaults

[defaults]
# Output format: table, json
# format = "table"

# Enable debug logging by default
# verbose = false

# Suppress non-essential output
# quiet = false

[swell]
# Outward offset distance used by `polygeom swell`
# amount = 1.0

[separate]
# Separation axis used by `polygeom separate` (only the orientation matters)
# direction = [1.0, 0.0]
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
