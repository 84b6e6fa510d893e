"""
Config command for the polygeom CLI.

Usage:
    polygeom config --show          Show effective configuration with sources
    polygeom config --init          Create template config file
    polygeom config --init --user   Create the user-level template
    polygeom config --paths         Show config file paths
"""

from pathlib import Path

from polygeom import config as polygeom_config
from polygeom.config import (
    CONFIG_FILENAMES,
    Config,
    ConfigError,
    generate_template,
    get_config_paths,
)

from .utils import print_error


def run_config(args) -> int:
    """Run the config subcommand; ``--show`` is the default action."""
    try:
        if args.init:
            return _init_config(args.user)
        elif args.paths:
            return _show_paths()
        return _show_config()
    except ConfigError as e:
        print_error(e)
        return 1


def _show_config() -> int:
    """Show effective configuration with sources."""
    config = Config.load()

    print("# Effective polygeom configuration")
    print()

    print("[defaults]")
    _print_value("format", config.defaults.format, config.get_source("defaults.format"))
    _print_value("verbose", config.defaults.verbose, config.get_source("defaults.verbose"))
    _print_value("quiet", config.defaults.quiet, config.get_source("defaults.quiet"))
    print()

    print("[swell]")
    _print_value("amount", config.swell.amount, config.get_source("swell.amount"))
    print()

    print("[separate]")
    _print_value("direction", config.separate.direction, config.get_source("separate.direction"))

    return 0


def _print_value(key: str, value, source: str) -> None:
    """Print a config value in TOML form with its source."""
    if isinstance(value, str):
        formatted = f'"{value}"'
    elif isinstance(value, bool):
        formatted = "true" if value else "false"
    elif isinstance(value, tuple):
        formatted = "[" + ", ".join(str(v) for v in value) + "]"
    else:
        formatted = str(value)

    source_display = Path(source).name if source != "default" else source
    print(f"{key} = {formatted}  # from: {source_display}")


def _show_paths() -> int:
    """Show config file paths."""
    paths = get_config_paths()

    print("Config file paths:")
    print()

    print(f"User config: {polygeom_config.USER_CONFIG_PATH}")
    print("  Status: exists" if paths["user"] else "  Status: not found")
    print()

    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")

    return 0


def _init_config(user: bool = False) -> int:
    """Create a template config file."""
    if user:
        target = polygeom_config.USER_CONFIG_PATH
        target.parent.mkdir(parents=True, exist_ok=True)
    else:
        target = Path.cwd() / CONFIG_FILENAMES[0]

    if target.exists():
        raise ConfigError(
            "Config file already exists",
            context={"path": str(target)},
            suggestions=["Remove it first or edit it by hand"],
        )

    try:
        target.write_text(generate_template())
    except OSError as e:
        raise ConfigError("Cannot write config file", context={"path": str(target), "error": str(e)}) from e

    print(f"Created config template: {target}")
    print()
    print("Uncomment and modify values as needed.")
    return 0
