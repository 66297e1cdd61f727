"""Configuration management for glide."""

from glide_cli.config.commands import (
    DeclaredCommand,
    expand_command,
    parse_command,
    parse_commands,
    validate_command,
)
from glide_cli.config.config import (
    PROJECT_CONFIG_NAME,
    Config,
    ConfigManager,
    DefaultsConfig,
    ProjectConfig,
    discover_configs,
    load_command_map,
    load_declared_command_map,
)

__all__ = [
    "PROJECT_CONFIG_NAME",
    "Config",
    "ConfigManager",
    "DefaultsConfig",
    "ProjectConfig",
    "DeclaredCommand",
    "discover_configs",
    "expand_command",
    "load_command_map",
    "load_declared_command_map",
    "parse_command",
    "parse_commands",
    "validate_command",
]
