#!/usr/bin/env python3
"""
Tests for context-aware help composition.
"""

import pytest

from glide_cli.cli.commands.declared import add_declared_command, create_declared_command
from glide_cli.cli.help import compose_help, render_command_help, render_help
from glide_cli.config.commands import DeclaredCommand
from glide_cli.context import DevelopmentMode, Location, ProjectContext
from glide_cli.core import Category, CommandMetadata, CommandNode, CommandRegistry, Visibility
from glide_cli.core.categories import CategoryInfo
from glide_cli.core.datamodels import (
    ANNOTATION_CATEGORY,
    ANNOTATION_PLUGIN,
    ANNOTATION_PLUGIN_CATEGORY,
    ANNOTATION_VISIBILITY,
)

SINGLE = ProjectContext(development_mode=DevelopmentMode.SINGLE_REPO, location=Location.PROJECT)
MW_ROOT = ProjectContext(development_mode=DevelopmentMode.MULTI_WORKTREE, location=Location.ROOT)
MW_WORKTREE = ProjectContext(
    development_mode=DevelopmentMode.MULTI_WORKTREE,
    location=Location.WORKTREE,
    worktree_name="feature-x",
)


def build_root(registry):
    root = CommandNode(name="glide", short="Context-aware development CLI")
    root.add_command(*registry.create_all())
    return root


def section_keys(sections):
    return [s.key for s in sections]


def entry_names(sections, key):
    for section in sections:
        if section.key == key:
            return [e.name for e in section.entries]
    return None


@pytest.fixture
def registry():
    registry = CommandRegistry()
    registry.register("help", lambda: CommandNode(name="help", short="Show help"),
                      CommandMetadata(category=Category.HELP))
    registry.register("version", lambda: CommandNode(name="version", short="Show version"),
                      CommandMetadata(category=Category.CORE))
    registry.register("global", lambda: CommandNode(name="global", short="Worktrees"),
                      CommandMetadata(category=Category.GLOBAL, aliases=["g"]))
    registry.register("up", lambda: CommandNode(name="up", short="Start containers"),
                      CommandMetadata(category=Category.DOCKER, visibility=Visibility.NON_ROOT))
    registry.register("down", lambda: CommandNode(name="down", short="Stop containers"),
                      CommandMetadata(category=Category.DOCKER, visibility=Visibility.NON_ROOT))
    registry.register("context", lambda: CommandNode(name="context", short="Debug"),
                      CommandMetadata(category=Category.DEBUG, hidden=True))
    return registry


# ============================================================================
# Section Composition Tests
# ============================================================================

class TestComposeHelp:
    """Tests for compose_help."""

    def test_no_project(self, registry):
        """Test that project-only categories are hidden outside projects."""
        sections = compose_help(build_root(registry), None)
        assert section_keys(sections) == ["core", "help"]

    def test_single_repo(self, registry):
        sections = compose_help(build_root(registry), SINGLE)
        assert section_keys(sections) == ["core", "docker", "help"]
        assert entry_names(sections, "docker") == ["down", "up"]

    def test_multi_worktree_root(self, registry):
        """Test that non-root commands disappear at the root, taking their section."""
        sections = compose_help(build_root(registry), MW_ROOT)
        assert section_keys(sections) == ["core", "global", "help"]

    def test_multi_worktree_worktree(self, registry):
        sections = compose_help(build_root(registry), MW_WORKTREE)
        assert section_keys(sections) == ["core", "global", "docker", "help"]

    def test_hidden_commands_skipped(self, registry):
        for ctx in (None, SINGLE, MW_ROOT):
            sections = compose_help(build_root(registry), ctx)
            assert "debug" not in section_keys(sections)

    def test_entry_fields(self, registry):
        sections = compose_help(build_root(registry), MW_WORKTREE)
        entry = next(s for s in sections if s.key == "global").entries[0]
        assert entry.name == "global"
        assert entry.description == "Worktrees"
        assert entry.aliases == ["g"]
        assert not entry.is_plugin
        assert not entry.is_declared

    def test_sections_ordered_by_priority(self, registry):
        registry.register("db", lambda: CommandNode(name="db"), CommandMetadata(category=Category.DATABASE))
        registry.register("lint", lambda: CommandNode(name="lint"), CommandMetadata(category=Category.DEVELOPER))
        registry.register("pytest", lambda: CommandNode(name="pytest"), CommandMetadata(category=Category.TESTING))
        sections = compose_help(build_root(registry), MW_WORKTREE)
        assert section_keys(sections) == [
            "core", "global", "docker", "testing", "developer", "database", "help",
        ]


class TestDeclaredInHelp:
    """Tests for declared commands in help."""

    def test_declared_command_listed(self, registry):
        add_declared_command(registry, "test", DeclaredCommand(cmd="pytest", description="Run tests"))
        sections = compose_help(build_root(registry), SINGLE)
        assert section_keys(sections) == ["core", "docker", "yaml", "help"]
        entry = next(s for s in sections if s.key == "yaml").entries[0]
        assert entry.is_declared
        assert entry.description == "Run tests"

    def test_declared_in_project_category_shown_outside_project(self, registry):
        """Test that a section holding a declared command is never dropped."""
        add_declared_command(registry, "migrate", DeclaredCommand(cmd="./migrate", category="database"))
        sections = compose_help(build_root(registry), None)
        assert "database" in section_keys(sections)

    def test_declared_ignores_visibility_tag(self):
        root = CommandNode(name="glide")
        node = create_declared_command("deploy", DeclaredCommand(cmd="./deploy"))
        node.annotations[ANNOTATION_CATEGORY] = "yaml"
        node.annotations[ANNOTATION_VISIBILITY] = "worktree-only"
        root.add_command(node)
        assert entry_names(compose_help(root, None), "yaml") == ["deploy"]


class TestPluginsInHelp:
    """Tests for plugin commands in help."""

    def make_plugin_node(self, category=None, plugin_category=None):
        node = CommandNode(name="db", short="Database helpers", annotations={ANNOTATION_PLUGIN: "dbtools"})
        if category:
            node.annotations[ANNOTATION_CATEGORY] = category
        if plugin_category:
            node.annotations[ANNOTATION_PLUGIN_CATEGORY] = plugin_category
        node.add_command(
            CommandNode(name="shell", short="Open a shell", aliases=["sh"]),
            CommandNode(name="dump", short="Dump the database"),
            CommandNode(name="secret", hidden=True),
        )
        return node

    def test_plugin_without_category(self):
        """Test that uncategorized plugin commands go to the plugin section."""
        root = CommandNode(name="glide")
        root.add_command(self.make_plugin_node())
        sections = compose_help(root, None)
        assert section_keys(sections) == ["plugin"]
        entry = sections[0].entries[0]
        assert entry.is_plugin
        assert entry.plugin_name == "dbtools"
        assert [(s.name, s.aliases) for s in entry.subcommands] == [("dump", []), ("shell", ["sh"])]

    def test_plugin_core_category_moves_to_plugin(self):
        root = CommandNode(name="glide")
        root.add_command(self.make_plugin_node(category="core"))
        assert section_keys(compose_help(root, None)) == ["plugin"]

    def test_plugin_explicit_category(self):
        root = CommandNode(name="glide")
        root.add_command(self.make_plugin_node(category="developer"))
        sections = compose_help(root, SINGLE)
        assert section_keys(sections) == ["developer"]
        assert sections[0].entries[0].subcommands == []

    def test_plugin_category_override(self):
        """Test that plugin_category wins and custom categories sort last."""
        root = CommandNode(name="glide")
        root.add_command(self.make_plugin_node(plugin_category="data"))
        root.add_command(CommandNode(name="version", annotations={ANNOTATION_CATEGORY: "core"}))
        sections = compose_help(root, None)
        assert section_keys(sections) == ["core", "data"]
        assert sections[1].info.name == "Data"

    def test_custom_category_info(self):
        root = CommandNode(name="glide")
        root.add_command(self.make_plugin_node(plugin_category="data"))
        root.add_command(CommandNode(name="x", annotations={ANNOTATION_CATEGORY: "plugin"}))
        extra = {"data": CategoryInfo(name="Data Tools", priority=65)}
        sections = compose_help(root, None, extra)
        assert section_keys(sections) == ["data", "plugin"]
        assert sections[0].info.name == "Data Tools"

    def test_unknown_categories_sorted_by_key(self):
        root = CommandNode(name="glide")
        root.add_command(
            CommandNode(name="b", annotations={ANNOTATION_CATEGORY: "zeta"}),
            CommandNode(name="a", annotations={ANNOTATION_CATEGORY: "alpha"}),
        )
        assert section_keys(compose_help(root, None)) == ["alpha", "zeta"]


# ============================================================================
# Rendering Tests
# ============================================================================

class TestRenderHelp:
    """Tests for the rendered help text."""

    def test_render_sections(self, registry):
        root = build_root(registry)
        text = render_help(compose_help(root, MW_WORKTREE), MW_WORKTREE, root)
        assert "Multi-worktree mode • Worktree: feature-x" in text
        assert "Global Commands" in text
        assert "Docker Management" in text
        assert "Help & Documentation" in text
        assert "context" not in text.split("Getting Help:")[0]
        assert text.index("Core Commands") < text.index("Docker Management") < text.index("Help & Documentation")

    def test_render_no_project(self, registry):
        root = build_root(registry)
        text = render_help(compose_help(root, None), None, root)
        assert "No project detected" in text
        assert "glide setup" in text
        assert "Docker Management" not in text

    def test_render_plugin_subcommands(self):
        root = CommandNode(name="glide")
        plugin = CommandNode(name="db", short="Database helpers", annotations={ANNOTATION_PLUGIN: "dbtools"})
        plugin.add_command(CommandNode(name="dump", short="Dump"), CommandNode(name="shell", short="Shell"))
        root.add_command(plugin)
        text = render_help(compose_help(root, None), None, root)
        assert "├─ dump" in text
        assert "└─ shell" in text
        assert "from dbtools plugin" in text

    def test_render_command_help(self):
        root = CommandNode(name="glide")
        group = CommandNode(name="global", short="Worktrees", aliases=["g"], usage="global [command]")
        group.add_command(CommandNode(name="list", short="List all worktrees"))
        root.add_command(group)

        text = render_command_help(group)
        assert "glide global [command]" in text
        assert "global, g" in text
        assert "list" in text

    def test_render_declared_command_help(self):
        root = CommandNode(name="glide")
        node = create_declared_command("deploy", DeclaredCommand(cmd="./deploy.sh $1", description="Deploy"))
        root.add_command(node)
        text = render_command_help(node)
        assert "./deploy.sh $1" in text
