"""
Command sources for the glide CLI.

Commands are registered from:
1. Package builtins
2. Plugins in ~/.glide/plugins/ and <project>/.glide/plugins/
3. Declared commands in .glide.yml files
"""

from __future__ import annotations

from glide_cli.cli.commands.declared import (
    add_declared_command,
    create_declared_command,
    load_declared_commands,
)
from glide_cli.cli.commands.loader import load_all_plugins, load_plugin

__all__ = [
    "add_declared_command",
    "create_declared_command",
    "load_declared_commands",
    "load_all_plugins",
    "load_plugin",
]
