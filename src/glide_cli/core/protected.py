"""
Names reserved for built-in commands.

Declared commands (from .glide.yml or plugin commands.yml files) may never
use one of these as a name or alias.
"""

from __future__ import annotations

PROTECTED_COMMANDS: frozenset[str] = frozenset({
    "help",
    "setup",
    "plugins",
    "plugin",
    "self-update",
    "update",
    "upgrade",
    "version",
    "completion",
    "global",
    "config",
    "context",
})


def is_protected(name: str) -> bool:
    """Check whether a name is reserved for a built-in command."""
    return name in PROTECTED_COMMANDS
