"""
Core module for the glide_cli package.

Provides the Command Registry, command categories and the context-aware
visibility rules.
"""

from glide_cli.core.categories import CATEGORY_INFO, Category, CategoryInfo, category_info, category_key
from glide_cli.core.datamodels import CommandDescriptor, CommandMetadata, CommandNode
from glide_cli.core.exceptions import (
    CommandConflictError,
    CommandParseError,
    ConfigError,
    GlideError,
    ModeError,
    RegistryError,
)
from glide_cli.core.protected import PROTECTED_COMMANDS, is_protected
from glide_cli.core.registry import CommandRegistry
from glide_cli.core.visibility import Visibility, should_show_category, should_show_command

__all__ = [
    # Registry
    "CommandRegistry",
    # Models
    "CommandDescriptor",
    "CommandMetadata",
    "CommandNode",
    "Category",
    "CategoryInfo",
    "CATEGORY_INFO",
    "category_info",
    "category_key",
    "Visibility",
    # Visibility
    "should_show_command",
    "should_show_category",
    # Protected names
    "PROTECTED_COMMANDS",
    "is_protected",
    # Exceptions
    "GlideError",
    "RegistryError",
    "CommandConflictError",
    "ConfigError",
    "CommandParseError",
    "ModeError",
]
