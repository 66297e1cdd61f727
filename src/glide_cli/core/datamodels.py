"""
Data models for the command registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from pydantic import BaseModel, Field, field_validator

from glide_cli.core.categories import Category, category_key
from glide_cli.core.visibility import Visibility

# Annotation keys set on command nodes
ANNOTATION_CATEGORY = "category"
ANNOTATION_VISIBILITY = "visibility"
ANNOTATION_DECLARED = "declared_command"
ANNOTATION_DECLARED_CMD = "declared_cmd"
ANNOTATION_PLUGIN = "plugin"
ANNOTATION_PLUGIN_CATEGORY = "plugin_category"

Handler = Callable[["CommandNode", list[str]], "int | None"]


@dataclass(eq=False)
class CommandNode:
    """A runnable command in the CLI tree.

    Nodes are produced by registry factories and attached to a root node by
    the builder. ``handler`` receives the node itself and the remaining
    arguments and returns an exit code (None means 0).
    """

    name: str
    short: str = ""
    long: str = ""
    usage: str | None = None
    aliases: list[str] = field(default_factory=list)
    hidden: bool = False
    disable_flag_parsing: bool = False
    annotations: dict[str, str] = field(default_factory=dict)
    handler: Handler | None = None
    children: list[CommandNode] = field(default_factory=list)
    parent: CommandNode | None = field(default=None, repr=False)

    def add_command(self, *nodes: CommandNode) -> None:
        for node in nodes:
            node.parent = self
            self.children.append(node)

    def find(self, key: str) -> CommandNode | None:
        """Find a direct child by name or alias."""
        for child in self.children:
            if child.name == key:
                return child
        for child in self.children:
            if key in child.aliases:
                return child
        return None

    def root(self) -> CommandNode:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def path(self) -> str:
        """Space separated command path from the root, e.g. 'glide global list'."""
        parts = []
        node: CommandNode | None = self
        while node is not None:
            parts.append(node.name)
            node = node.parent
        return " ".join(reversed(parts))

    @property
    def category(self) -> str | None:
        return self.annotations.get(ANNOTATION_CATEGORY)

    @property
    def is_declared(self) -> bool:
        return ANNOTATION_DECLARED in self.annotations

    @property
    def is_plugin(self) -> bool:
        return bool(self.annotations.get(ANNOTATION_PLUGIN))

    def visible_children(self) -> list[CommandNode]:
        return sorted((c for c in self.children if not c.hidden), key=lambda c: c.name)


class CommandMetadata(BaseModel):
    """Metadata recorded for a registered command.

    ``category`` is a Category member, or the raw key of a category unknown
    to glide (for example one declared by a plugin in its CATEGORIES list).
    """

    name: str = ""
    category: Category | str = Category.CORE
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    hidden: bool = False
    visibility: Visibility | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value):
        return Category.coerce(value)

    @field_validator("visibility", mode="before")
    @classmethod
    def _parse_visibility(cls, value):
        return Visibility.parse(value)


class CommandDescriptor(BaseModel):
    """Registry entry for a single command."""

    name: str
    factory: Callable[[], CommandNode] = Field(exclude=True)
    metadata: CommandMetadata

    model_config = {"arbitrary_types_allowed": True}

    def build(self) -> CommandNode:
        """Create the command node and apply registry metadata to it."""
        node = self.factory()
        meta = self.metadata
        if meta.aliases:
            node.aliases = list(meta.aliases)
        node.annotations[ANNOTATION_CATEGORY] = category_key(meta.category)
        if meta.visibility is not None:
            node.annotations[ANNOTATION_VISIBILITY] = meta.visibility.value
        if meta.hidden:
            node.hidden = True
        return node
