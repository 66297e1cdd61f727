#!/usr/bin/env python3
"""
Tests for declared commands: parsing, expansion and registration.
"""

import pytest
from unittest.mock import patch

from glide_cli.cli.commands import declared
from glide_cli.cli.commands.declared import (
    add_declared_command,
    create_declared_command,
    load_declared_commands,
)
from glide_cli.config.commands import (
    DeclaredCommand,
    expand_command,
    parse_command,
    parse_commands,
    validate_command,
)
from glide_cli.core import (
    PROTECTED_COMMANDS,
    Category,
    CommandConflictError,
    CommandMetadata,
    CommandNode,
    CommandParseError,
    CommandRegistry,
    is_protected,
)
from glide_cli.core.datamodels import ANNOTATION_CATEGORY, ANNOTATION_DECLARED, ANNOTATION_DECLARED_CMD


# ============================================================================
# Parsing Tests
# ============================================================================

class TestParseCommand:
    """Tests for parsing command entries."""

    def test_string_form(self):
        """Test a plain shell string."""
        cmd = parse_command("build", "docker build .")
        assert cmd.cmd == "docker build ."
        assert cmd.alias is None
        assert cmd.description == ""

    def test_mapping_form(self):
        """Test the full mapping form."""
        cmd = parse_command("deploy", {
            "cmd": "./deploy.sh $1",
            "alias": "d",
            "description": "Deploy",
            "help": "Usage: glide deploy <env>",
            "category": "developer",
        })
        assert cmd.cmd == "./deploy.sh $1"
        assert cmd.alias == "d"
        assert cmd.description == "Deploy"
        assert cmd.help.startswith("Usage")
        assert cmd.category == "developer"

    def test_mapping_without_cmd(self):
        """Test that a mapping without cmd names the command in the error."""
        with pytest.raises(CommandParseError, match="error parsing command deploy: command must have 'cmd' field"):
            parse_command("deploy", {"description": "Deploy"})

    def test_invalid_type(self):
        with pytest.raises(CommandParseError, match="invalid command format for broken"):
            parse_command("broken", ["not", "valid"])

    def test_unknown_keys_ignored(self):
        cmd = parse_command("x", {"cmd": "echo", "color": "red"})
        assert cmd.cmd == "echo"

    def test_parse_commands_keeps_order(self):
        parsed = parse_commands({"b": "echo b", "a": {"cmd": "echo a"}, "c": "echo c"})
        assert list(parsed) == ["b", "a", "c"]

    def test_parse_commands_empty(self):
        assert parse_commands(None) == {}
        assert parse_commands({}) == {}


class TestExpandCommand:
    """Tests for argument substitution."""

    def test_positional(self):
        assert expand_command("deploy.sh $1 $2", ["staging", "v2"]) == "deploy.sh staging v2"

    def test_missing_positional_kept(self):
        assert expand_command("echo $1 $3", ["a"]) == "echo a $3"

    def test_all_args(self):
        assert expand_command("pytest $@", ["-x", "tests/"]) == "pytest -x tests/"
        assert expand_command("echo $*", ["a", "b"]) == "echo a b"

    def test_no_args(self):
        assert expand_command("make build", []) == "make build"
        assert expand_command("pytest $@", []) == "pytest "

    def test_double_digit_positional(self):
        args = [str(i) for i in range(1, 12)]
        assert expand_command("$11-$1", args) == "11-1"


class TestValidateCommand:
    """Tests for validate_command."""

    def test_empty_command(self):
        with pytest.raises(CommandParseError, match="command blank cannot be empty"):
            validate_command("blank", DeclaredCommand(cmd="  "))

    def test_self_reference(self):
        with pytest.raises(CommandParseError, match="circular reference"):
            validate_command("loop", DeclaredCommand(cmd="echo start && glide loop"))

    def test_alias_self_reference(self):
        with pytest.raises(CommandParseError, match="circular reference"):
            validate_command("loop", DeclaredCommand(cmd="glide l --fast", alias="l"))

    def test_calling_other_command_ok(self):
        validate_command("all", DeclaredCommand(cmd="glide lint && glide test"))

    def test_prefix_is_not_self_reference(self):
        validate_command("test", DeclaredCommand(cmd="glide test-all"))


# ============================================================================
# Protected Names
# ============================================================================

class TestProtected:
    """Tests for the protected name set."""

    def test_protected_names(self):
        for name in ("help", "setup", "plugins", "plugin", "self-update", "update",
                     "upgrade", "version", "completion", "global", "config", "context"):
            assert is_protected(name)
        assert len(PROTECTED_COMMANDS) == 12

    def test_unprotected_names(self):
        for name in ("test", "up", "lint", "Help", ""):
            assert not is_protected(name)


# ============================================================================
# Registration Tests
# ============================================================================

class TestAddDeclaredCommand:
    """Tests for add_declared_command."""

    @pytest.fixture
    def registry(self):
        return CommandRegistry()

    def test_add_command(self, registry):
        """Test that a declared command is registered in the yaml category."""
        command = DeclaredCommand(cmd="pytest $@", description="Run tests", alias="t")
        assert add_declared_command(registry, "test", command)

        meta, found = registry.get_metadata("t")
        assert found
        assert meta.name == "test"
        assert meta.category == Category.YAML
        assert meta.description == "Run tests"
        assert registry.resolve_alias("t") == ("test", True)

    def test_known_category(self, registry):
        add_declared_command(registry, "lint", DeclaredCommand(cmd="ruff .", category="developer"))
        meta, _ = registry.get_metadata("lint")
        assert meta.category == Category.DEVELOPER

    def test_unknown_category_falls_back(self, registry):
        add_declared_command(registry, "lint", DeclaredCommand(cmd="ruff .", category="quality"))
        meta, _ = registry.get_metadata("lint")
        assert meta.category == Category.YAML

    def test_protected_name_dropped(self, registry):
        """Test that a declared command cannot shadow a protected name."""
        assert not add_declared_command(registry, "help", DeclaredCommand(cmd="echo hi"))
        assert "help" not in registry

    def test_protected_alias_dropped(self, registry):
        assert not add_declared_command(registry, "status", DeclaredCommand(cmd="git status", alias="version"))
        assert "status" not in registry
        assert "version" not in registry

    def test_protected_drop_keeps_builtin(self, registry):
        """Test that a built-in help survives a declared help."""
        registry.register("help", lambda: CommandNode(name="help"), CommandMetadata(category=Category.HELP))

        assert not add_declared_command(registry, "help", DeclaredCommand(cmd="echo hi"))

        node = registry.create_all()[0]
        assert node.name == "help"
        assert ANNOTATION_DECLARED not in node.annotations
        assert node.annotations[ANNOTATION_CATEGORY] == "help"

    def test_conflict_propagates(self, registry):
        registry.register("up", lambda: CommandNode(name="up"))
        with pytest.raises(CommandConflictError, match="item up already registered"):
            add_declared_command(registry, "up", DeclaredCommand(cmd="echo up"))

    def test_alias_conflict_propagates(self, registry):
        registry.register("up", lambda: CommandNode(name="up"))
        with pytest.raises(CommandConflictError, match="alias up conflicts with existing item"):
            add_declared_command(registry, "start", DeclaredCommand(cmd="echo up", alias="up"))


class TestDeclaredNode:
    """Tests for nodes built from declared commands."""

    def test_node_properties(self):
        command = DeclaredCommand(cmd="pytest $@", description="Run tests", help="Runs pytest")
        node = create_declared_command("test", command)

        assert node.name == "test"
        assert node.short == "Run tests"
        assert node.long == "Runs pytest"
        assert node.disable_flag_parsing
        assert node.is_declared
        assert node.annotations[ANNOTATION_DECLARED] == "true"
        assert node.annotations[ANNOTATION_DECLARED_CMD] == "pytest $@"

    def test_long_falls_back_to_description(self):
        node = create_declared_command("t", DeclaredCommand(cmd="x", description="Short"))
        assert node.long == "Short"

    def test_handler_runs_template(self):
        """Test that the handler expands and runs the template."""
        node = create_declared_command("deploy", DeclaredCommand(cmd="./deploy.sh $1"))
        with patch.object(declared, "run_declared", return_value=3) as run:
            assert node.handler(node, ["prod", "--force"]) == 3
        run.assert_called_once_with("./deploy.sh $1", ["prod", "--force"])

    def test_registry_builds_declared_node(self):
        registry = CommandRegistry()
        add_declared_command(registry, "test", DeclaredCommand(cmd="pytest", alias="t"))
        node = registry.create_all()[0]
        assert node.is_declared
        assert node.aliases == ["t"]
        assert node.annotations[ANNOTATION_CATEGORY] == "yaml"


class TestLoadDeclaredCommands:
    """Tests for load_declared_commands."""

    def test_load_in_order(self):
        registry = CommandRegistry()
        added = load_declared_commands(registry, {
            "test": "pytest",
            "lint": {"cmd": "ruff .", "alias": "l"},
            "help": "echo shadow",
        })
        assert added == ["test", "lint"]
        assert registry.names() == ["test", "lint"]

    def test_strict_raises_on_conflict(self):
        registry = CommandRegistry()
        registry.register("up", lambda: CommandNode(name="up"))
        with pytest.raises(CommandConflictError):
            load_declared_commands(registry, {"up": "echo up"})

    def test_strict_raises_on_parse_error(self):
        with pytest.raises(CommandParseError):
            load_declared_commands(CommandRegistry(), {"bad": {"description": "no cmd"}})

    def test_non_strict_skips_bad_entries(self):
        """Test that non-strict loading skips conflicts and malformed entries."""
        registry = CommandRegistry()
        registry.register("up", lambda: CommandNode(name="up"))
        added = load_declared_commands(registry, {
            "up": "echo up",
            "bad": {"description": "no cmd"},
            "loop": "glide loop",
            "ok": "echo ok",
        }, strict=False)
        assert added == ["ok"]
        assert registry.names() == ["up", "ok"]
