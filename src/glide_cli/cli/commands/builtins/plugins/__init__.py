"""Plugins command - inspect loaded plugins."""
from __future__ import annotations

from typing import TYPE_CHECKING

from glide_cli.core.datamodels import CommandNode

if TYPE_CHECKING:
    from glide_cli.cli.app import Application


def create_plugins_command(app: "Application") -> CommandNode:
    """Build `plugins` with its `list` and `info` subcommands."""

    def list_plugins(node: CommandNode, args: list[str]) -> int:
        if not app.plugins:
            print("No plugins loaded.")
            return 0
        print("\nLoaded plugins:")
        for info in app.plugins:
            commands = info.commands + info.declared_commands
            print(f"  {info.name:<20} {', '.join(commands) or '(no commands)'}")
        print()
        return 0

    def plugin_info(node: CommandNode, args: list[str]) -> int:
        if not args:
            print(f"Usage: {node.path} <plugin>")
            return 1
        for info in app.plugins:
            if info.name == args[0]:
                print(f"Name:     {info.name}")
                print(f"Path:     {info.path}")
                print(f"Commands: {', '.join(info.commands) or '-'}")
                print(f"Declared: {', '.join(info.declared_commands) or '-'}")
                return 0
        print(f"Plugin not found: {args[0]}")
        return 1

    plugins = CommandNode(
        name="plugins",
        short="Manage and inspect plugins",
        usage="plugins [command]",
    )
    plugins.add_command(
        CommandNode(name="list", short="List loaded plugins", usage="list", handler=list_plugins),
        CommandNode(name="info", short="Show plugin details", usage="info <plugin>", handler=plugin_info),
    )
    return plugins
