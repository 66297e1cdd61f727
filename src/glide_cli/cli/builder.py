"""
Command tree builder.

Registers the built-in commands with the application registry and turns the
registry into the root CommandNode handed to the front end.
"""

from __future__ import annotations

from functools import partial

from glide_cli.cli.app import Application
from glide_cli.cli.commands.builtins.completion import create_completion_command
from glide_cli.cli.commands.builtins.config import create_config_command
from glide_cli.cli.commands.builtins.context import create_context_command
from glide_cli.cli.commands.builtins.docker import COMPOSE_COMMANDS, create_compose_command
from glide_cli.cli.commands.builtins.global_commands import create_global_command
from glide_cli.cli.commands.builtins.help import create_help_command
from glide_cli.cli.commands.builtins.plugins import create_plugins_command
from glide_cli.cli.commands.builtins.self_update import create_self_update_command
from glide_cli.cli.commands.builtins.setup import create_setup_command
from glide_cli.cli.commands.builtins.version import create_version_command
from glide_cli.core.categories import Category
from glide_cli.core.datamodels import CommandMetadata, CommandNode
from glide_cli.core.visibility import Visibility

ROOT_DESCRIPTION = "Context-aware development CLI"


class Builder:
    """Populates an Application's registry and builds its command tree."""

    def __init__(self, app: Application):
        self.app = app
        self.registry = app.registry

    def register_builtin_commands(self) -> None:
        app = self.app
        register = self.registry.register

        register(
            "help",
            partial(create_help_command, app),
            CommandMetadata(category=Category.HELP, description="Show help for commands and topics"),
        )
        register(
            "version",
            partial(create_version_command, app),
            CommandMetadata(category=Category.CORE, description="Display version information"),
        )
        register(
            "setup",
            partial(create_setup_command, app),
            CommandMetadata(category=Category.SETUP, description="Initial setup and configuration"),
        )
        register(
            "plugins",
            partial(create_plugins_command, app),
            CommandMetadata(
                category=Category.CORE,
                description="Manage and inspect plugins",
                aliases=["plugin"],
            ),
        )
        register(
            "completion",
            partial(create_completion_command, app),
            CommandMetadata(category=Category.SETUP, description="Generate shell completion scripts"),
        )
        register(
            "self-update",
            partial(create_self_update_command, app),
            CommandMetadata(
                category=Category.CORE,
                description="Update glide to the latest version",
                aliases=["update", "upgrade"],
            ),
        )
        register(
            "global",
            partial(create_global_command, app),
            CommandMetadata(
                category=Category.GLOBAL,
                description="Manage all worktrees of the project",
                aliases=["g"],
            ),
        )
        for name, (_, description) in COMPOSE_COMMANDS.items():
            register(
                name,
                partial(create_compose_command, app, name),
                CommandMetadata(
                    category=Category.DOCKER,
                    description=description,
                    visibility=Visibility.NON_ROOT,
                ),
            )
        register(
            "config",
            partial(create_config_command, app),
            CommandMetadata(category=Category.DEBUG, description="Show the loaded configuration", hidden=True),
        )
        register(
            "context",
            partial(create_context_command, app),
            CommandMetadata(category=Category.DEBUG, description="Show the detected project context", hidden=True),
        )

    def build(self) -> CommandNode:
        """Build the root node with one child per registered command."""
        root = CommandNode(name="glide", short=ROOT_DESCRIPTION, usage="glide [command]")
        root.add_command(*self.registry.create_all())
        return root
