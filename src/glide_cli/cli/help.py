"""
Context-aware help composition.

compose_help() turns the built command tree into category sections holding
only what is visible in the current project context; render_help() formats
them for the terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from glide_cli.context.types import DevelopmentMode, Location, ProjectContext
from glide_cli.core.categories import Category, CategoryInfo, category_info
from glide_cli.core.datamodels import (
    ANNOTATION_CATEGORY,
    ANNOTATION_DECLARED_CMD,
    ANNOTATION_PLUGIN,
    ANNOTATION_PLUGIN_CATEGORY,
    ANNOTATION_VISIBILITY,
    CommandNode,
)
from glide_cli.core.visibility import should_show_category, should_show_command


@dataclass
class SubcommandEntry:
    """A plugin subcommand listed under its plugin."""

    name: str
    description: str
    aliases: list[str] = field(default_factory=list)


@dataclass
class HelpEntry:
    """A command as displayed in help."""

    name: str
    description: str
    aliases: list[str] = field(default_factory=list)
    category: str = Category.CORE.value
    is_plugin: bool = False
    is_declared: bool = False
    plugin_name: str = ""
    subcommands: list[SubcommandEntry] = field(default_factory=list)


@dataclass
class HelpSection:
    """All visible commands of one category."""

    key: str
    info: CategoryInfo
    entries: list[HelpEntry] = field(default_factory=list)


def _entry_for(node: CommandNode) -> HelpEntry:
    annotations = node.annotations
    category = annotations.get(ANNOTATION_CATEGORY, Category.CORE.value)
    plugin_name = annotations.get(ANNOTATION_PLUGIN, "")

    if plugin_name and category == Category.CORE.value:
        # Plugin commands without an explicit category
        category = Category.PLUGIN.value
    if plugin_name and annotations.get(ANNOTATION_PLUGIN_CATEGORY):
        category = annotations[ANNOTATION_PLUGIN_CATEGORY]

    return HelpEntry(
        name=node.name,
        description=node.short,
        aliases=list(node.aliases),
        category=category,
        is_plugin=bool(plugin_name),
        is_declared=node.is_declared,
        plugin_name=plugin_name,
    )


def plugin_subcommands(node: CommandNode) -> list[SubcommandEntry]:
    """Non-hidden children of a plugin command, sorted by name."""
    return [
        SubcommandEntry(name=child.name, description=child.short, aliases=list(child.aliases))
        for child in node.visible_children()
    ]


def compose_help(
    root: CommandNode,
    ctx: ProjectContext | None,
    categories: dict[str, CategoryInfo] | None = None,
) -> list[HelpSection]:
    """Collect the visible commands of a tree grouped by category.

    Args:
        root: Root of the built command tree
        ctx: Detected project context (None when not in a project)
        categories: Extra category definitions contributed by plugins

    Returns:
        Sections ordered by category priority, entries ordered by name.
    """
    by_category: dict[str, list[HelpEntry]] = {}

    for node in root.children:
        if node.hidden:
            continue
        # Declared commands are the user's own and always listed
        if not node.is_declared and not should_show_command(
            node.annotations.get(ANNOTATION_VISIBILITY), ctx
        ):
            continue

        entry = _entry_for(node)
        if entry.category == Category.PLUGIN.value:
            entry.subcommands = plugin_subcommands(node)
        by_category.setdefault(entry.category, []).append(entry)

    sections = []
    for key, entries in by_category.items():
        has_declared = any(entry.is_declared for entry in entries)
        if not has_declared and not should_show_category(key, ctx):
            continue
        entries.sort(key=lambda e: e.name)
        sections.append(HelpSection(key=key, info=category_info(key, categories), entries=entries))

    sections.sort(key=lambda s: (s.info.priority, s.key))
    return sections


def context_tip(ctx: ProjectContext | None) -> str:
    if ctx is None or ctx.development_mode == DevelopmentMode.UNKNOWN:
        return "Tip: Run 'glide setup' to configure your project."
    if ctx.development_mode == DevelopmentMode.MULTI_WORKTREE:
        if ctx.location == Location.ROOT:
            return "Tip: You're in the project root. Use 'glide global' commands to manage worktrees."
        if ctx.location == Location.MAIN_REPO:
            return "Tip: You're in vcs/ (main branch). Worktrees live in worktrees/."
        return "Tip: You're in a worktree. All commands operate on this feature branch."
    if ctx.development_mode == DevelopmentMode.STANDALONE:
        return "Tip: Standalone mode active. Commands from .glide.yml are available."
    return "Tip: Single-repo mode active. All commands operate on the current branch."


def render_help(
    sections: list[HelpSection],
    ctx: ProjectContext | None,
    root: CommandNode,
) -> str:
    """Format composed sections as the top-level help text."""
    lines = [root.short or root.name, ""]
    lines.append(ctx.describe() if ctx is not None else "No project detected")
    lines += ["", "Usage:", f"  {root.name} [flags]", f"  {root.name} [command]"]

    for section in sections:
        header = section.info.name
        if section.info.description:
            header += f" - {section.info.description}"
        lines += ["", header]

        width = max(len(e.name) for e in section.entries)
        alias_width = max((len(", ".join(e.aliases)) for e in section.entries), default=0) or 1

        for entry in section.entries:
            aliases = ", ".join(entry.aliases)
            lines.append(f"  {entry.name:<{width}}  {aliases:<{alias_width}}  {entry.description}".rstrip())
            if entry.is_plugin and entry.plugin_name and entry.plugin_name != entry.name:
                lines.append(f"  {'':<{width}}  {'':<{alias_width}}  from {entry.plugin_name} plugin")
            for i, sub in enumerate(entry.subcommands):
                branch = "└─ " if i == len(entry.subcommands) - 1 else "├─ "
                sub_aliases = ", ".join(sub.aliases)
                lines.append(
                    f"    {branch}{sub.name:<{max(width - 3, 1)}}  {sub_aliases:<{alias_width}}  {sub.description}".rstrip()
                )

    lines += [
        "",
        "Getting Help:",
        f"  {root.name} help [command]         Show detailed help for a command",
        f"  {root.name} help modes             Development modes explained",
        "",
        context_tip(ctx),
    ]
    return "\n".join(lines) + "\n"


def render_command_help(node: CommandNode) -> str:
    """Format the detailed help of a single command."""
    lines = [node.long or node.short or node.name, "", "Usage:"]
    parent_path = node.parent.path if node.parent is not None else ""
    usage = node.usage or node.name
    lines.append(f"  {parent_path} {usage}".rstrip() if parent_path else f"  {usage}")

    if node.aliases:
        lines += ["", "Aliases:", f"  {', '.join([node.name, *node.aliases])}"]

    if node.is_declared:
        lines += ["", "Runs:", f"  {node.annotations.get(ANNOTATION_DECLARED_CMD, '')}"]

    children = node.visible_children()
    if children:
        width = max(len(c.name) for c in children)
        lines += ["", "Available Commands:"]
        lines += [f"  {c.name:<{width}}  {c.short}".rstrip() for c in children]

    if node.is_plugin:
        lines += ["", f"Provided by plugin: {node.annotations[ANNOTATION_PLUGIN]}"]

    return "\n".join(lines) + "\n"
