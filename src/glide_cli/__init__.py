"""
glide_cli - context-aware development CLI.

The command registry and visibility rules live in glide_cli.core; the
command line front end in glide_cli.cli.
"""

__version__ = "0.1.0"

from glide_cli.core import (  # noqa: E402
    Category,
    CommandConflictError,
    CommandMetadata,
    CommandNode,
    CommandRegistry,
    GlideError,
    Visibility,
    should_show_category,
    should_show_command,
)

__all__ = [
    "__version__",
    "Category",
    "CommandConflictError",
    "CommandMetadata",
    "CommandNode",
    "CommandRegistry",
    "GlideError",
    "Visibility",
    "should_show_category",
    "should_show_command",
]
