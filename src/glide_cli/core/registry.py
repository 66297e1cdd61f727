"""
Command Registry for managing command descriptors.
"""

from __future__ import annotations

from typing import Callable, Iterator

from glide_cli.core.categories import Category
from glide_cli.core.datamodels import CommandDescriptor, CommandMetadata, CommandNode
from glide_cli.core.exceptions import CommandConflictError, RegistryError

Factory = Callable[[], CommandNode]


class CommandRegistry:
    """Registry mapping command names and aliases to descriptors.

    A registry is created empty for each invocation, populated during
    startup, and only read afterwards. Registration never overwrites: any
    collision between names and aliases raises CommandConflictError and
    leaves the registry untouched.
    """

    def __init__(self):
        self._commands: dict[str, CommandDescriptor] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        factory: Factory,
        metadata: CommandMetadata | None = None,
    ) -> None:
        """Register a command factory under a canonical name.

        Args:
            name: Canonical command name
            factory: Zero-argument callable returning a fresh CommandNode
            metadata: Category, description, aliases and display flags

        Raises:
            RegistryError: If the name is empty
            CommandConflictError: If the name or an alias is already taken
        """
        if not name:
            raise RegistryError("item name cannot be empty")

        metadata = metadata or CommandMetadata()

        if name in self._commands:
            raise CommandConflictError(f"item {name} already registered", name)
        if name in self._aliases:
            raise CommandConflictError(
                f"item name {name} conflicts with existing alias", name
            )

        seen: set[str] = set()
        for alias in metadata.aliases:
            if alias in self._commands or alias == name:
                raise CommandConflictError(
                    f"alias {alias} conflicts with existing item", alias
                )
            if alias in self._aliases or alias in seen:
                raise CommandConflictError(f"alias {alias} already registered", alias)
            seen.add(alias)

        if metadata.name != name:
            metadata = metadata.model_copy(update={"name": name})

        self._commands[name] = CommandDescriptor(
            name=name,
            factory=factory,
            metadata=metadata,
        )
        for alias in metadata.aliases:
            self._aliases[alias] = name

    def _canonical(self, key: str) -> str | None:
        if key in self._commands:
            return key
        return self._aliases.get(key)

    def get(self, key: str) -> tuple[Factory | None, bool]:
        """Get a command factory by name or alias."""
        canonical = self._canonical(key)
        if canonical is None:
            return None, False
        return self._commands[canonical].factory, True

    def get_metadata(self, key: str) -> tuple[CommandMetadata | None, bool]:
        """Get command metadata by name or alias."""
        canonical = self._canonical(key)
        if canonical is None:
            return None, False
        return self._commands[canonical].metadata, True

    def get_descriptor(self, key: str) -> CommandDescriptor | None:
        """Get the full descriptor by name or alias, or None if unknown."""
        canonical = self._canonical(key)
        return self._commands[canonical] if canonical is not None else None

    def resolve_alias(self, key: str) -> tuple[str, bool]:
        """Resolve an alias to its canonical name.

        Canonical names are not aliases: resolving one reports False.
        """
        if key in self._commands or key not in self._aliases:
            return "", False
        return self._aliases[key], True

    def get_aliases(self, name: str) -> list[str] | None:
        """Get the aliases of a canonical command, or None if unknown."""
        descriptor = self._commands.get(name)
        if descriptor is None:
            return None
        return list(descriptor.metadata.aliases)

    def is_alias(self, key: str) -> bool:
        """Check whether a key is a registered alias (not a canonical name)."""
        return key in self._aliases and key not in self._commands

    def get_by_category(self, category: Category | str) -> list[str]:
        """Get canonical names in a category, in registration order.

        Accepts a Category member or the raw key of a plugin category.
        """
        return [
            name
            for name, descriptor in self._commands.items()
            if descriptor.metadata.category == category
        ]

    def create_all(self) -> list[CommandNode]:
        """Build every registered command, in registration order."""
        return [descriptor.build() for descriptor in self._commands.values()]

    def create_by_category(self, category: Category | str) -> list[CommandNode]:
        """Build the commands of one category, in registration order."""
        return [
            descriptor.build()
            for descriptor in self._commands.values()
            if descriptor.metadata.category == category
        ]

    def names(self) -> list[str]:
        """Canonical names in registration order."""
        return list(self._commands)

    def completion_words(self) -> list[str]:
        """Names and aliases of all non-hidden commands, for shell completion."""
        words = []
        for descriptor in self._commands.values():
            if descriptor.metadata.hidden:
                continue
            words.append(descriptor.name)
            words.extend(descriptor.metadata.aliases)
        return words

    def __contains__(self, key: str) -> bool:
        return self._canonical(key) is not None

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)
