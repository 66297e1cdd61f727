"""
Declared commands - commands defined in configuration instead of code.

A declared command runs its shell template with all trailing arguments
passed through untouched. Names reserved for built-in commands are never
shadowed: such declarations are dropped.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from glide_cli.cli.shell import run_declared
from glide_cli.config.commands import DeclaredCommand, parse_commands, validate_command
from glide_cli.core.categories import Category
from glide_cli.core.datamodels import (
    ANNOTATION_DECLARED,
    ANNOTATION_DECLARED_CMD,
    CommandMetadata,
    CommandNode,
)
from glide_cli.core.exceptions import CommandConflictError, CommandParseError
from glide_cli.core.protected import is_protected
from glide_cli.core.registry import CommandRegistry

logger = logging.getLogger(__name__)


def _run(command: DeclaredCommand, node: CommandNode, args: list[str]) -> int:
    return run_declared(command.cmd, args)


def create_declared_command(name: str, command: DeclaredCommand) -> CommandNode:
    """Build the command node for a declared command."""
    return CommandNode(
        name=name,
        short=command.description,
        long=command.help or command.description,
        usage=f"{name} [args...]",
        disable_flag_parsing=True,
        annotations={
            ANNOTATION_DECLARED: "true",
            ANNOTATION_DECLARED_CMD: command.cmd,
        },
        handler=partial(_run, command),
    )


def add_declared_command(
    registry: CommandRegistry,
    name: str,
    command: DeclaredCommand,
) -> bool:
    """Register a declared command.

    Returns:
        True if registered, False if dropped because the name or alias is
        reserved for a built-in command.

    Raises:
        CommandConflictError: If the name or alias collides with another
            registered command.
    """
    if is_protected(name) or (command.alias and is_protected(command.alias)):
        logger.debug(f"Ignoring declared command '{name}': name is reserved")
        return False

    category = Category.parse(command.category) or Category.YAML
    registry.register(
        name,
        partial(create_declared_command, name, command),
        CommandMetadata(
            name=name,
            category=category,
            description=command.description,
            aliases=[command.alias] if command.alias else [],
        ),
    )
    return True


def load_declared_commands(
    registry: CommandRegistry,
    commands: dict[str, Any],
    strict: bool = True,
) -> list[str]:
    """Parse and register a raw `commands:` mapping.

    Args:
        registry: Registry to add to
        commands: Raw mapping from a config file
        strict: Raise on conflicts and malformed entries. When False they are
            logged and skipped, and the existing command keeps the name.

    Returns:
        Names of the commands that were registered.
    """
    if strict:
        parsed = parse_commands(commands)
    else:
        parsed = {}
        for name, value in commands.items():
            try:
                parsed.update(parse_commands({name: value}))
            except CommandParseError as e:
                logger.warning(f"Skipping declared command: {e}")

    added = []
    for name, command in parsed.items():
        try:
            validate_command(name, command)
            if add_declared_command(registry, name, command):
                added.append(name)
        except (CommandConflictError, CommandParseError) as e:
            if strict:
                raise
            logger.warning(f"Skipping declared command '{name}': {e}")
    return added
