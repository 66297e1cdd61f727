"""
Plugin loader - discovers and loads plugins from plugin directories.

Plugins are loaded from ~/.glide/plugins/ and <project>/.glide/plugins/.
Each plugin must be in its own subdirectory with an __init__.py file that
defines a ``register`` function:

    # ~/.glide/plugins/db/__init__.py
    from glide_cli.core import CommandMetadata, CommandNode

    CATEGORIES = [
        {"id": "data", "name": "Data Tools", "description": "...", "priority": 65},
    ]

    def create_db_command():
        db = CommandNode(name="db", short="Database helpers")
        db.add_command(CommandNode(name="dump", short="Dump the database",
                                   handler=lambda node, args: 0))
        return db

    def register(registry):
        registry.register("db", create_db_command,
                          CommandMetadata(category="data", description="Database helpers"))

Commands may use any built-in category or one of the plugin's own CATEGORIES
ids. A commands.yml next to __init__.py may declare extra shell commands using
the same format as .glide.yml.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path

import yaml
from pydantic import ValidationError

from glide_cli.cli.app import Application, PluginInfo
from glide_cli.cli.commands.declared import load_declared_commands
from glide_cli.core.categories import Category, CategoryInfo
from glide_cli.core.datamodels import (
    ANNOTATION_PLUGIN,
    CommandMetadata,
    CommandNode,
)
from glide_cli.core.exceptions import CommandConflictError, RegistryError
from glide_cli.core.registry import CommandRegistry, Factory

logger = logging.getLogger(__name__)

# Default user plugins directory
USER_PLUGINS_DIR = Path.home() / ".glide" / "plugins"

PLUGIN_COMMANDS_FILE = "commands.yml"


def plugin_dirs(project_root: Path | None = None) -> list[Path]:
    """Plugin directories to search, global first."""
    dirs = [USER_PLUGINS_DIR]
    if project_root is not None:
        dirs.append(project_root / ".glide" / "plugins")
    return dirs


def discover_plugins(plugins_dir: Path) -> list[Path]:
    """
    Discover plugin directories in the given path.

    Each plugin must be in its own subdirectory with an __init__.py file.

    Args:
        plugins_dir: Directory to search

    Returns:
        List of __init__.py paths for valid plugins.
    """
    if not plugins_dir.exists():
        return []

    if not plugins_dir.is_dir():
        logger.warning(f"Plugins path is not a directory: {plugins_dir}")
        return []

    plugin_paths = []
    for subdir in sorted(plugins_dir.iterdir()):
        if not subdir.is_dir():
            continue
        # Skip hidden and private directories
        if subdir.name.startswith((".", "_")):
            continue
        init_file = subdir / "__init__.py"
        if init_file.exists():
            plugin_paths.append(init_file)
        else:
            logger.debug(f"Skipping {subdir.name}: no __init__.py")

    return plugin_paths


@dataclass
class _Registration:
    name: str
    factory: Factory
    metadata: CommandMetadata


@dataclass
class PluginRegistrar:
    """Registry facade handed to a plugin's register() function.

    Registrations are staged and only committed to the real registry after
    the plugin module finished loading. Nodes built from plugin factories
    carry the plugin annotation.
    """

    plugin_name: str
    staged: list[_Registration] = field(default_factory=list)

    def register(
        self,
        name: str,
        factory: Factory,
        metadata: CommandMetadata | None = None,
    ) -> None:
        if not name:
            raise RegistryError("item name cannot be empty")
        metadata = metadata or CommandMetadata(category=Category.PLUGIN)
        self.staged.append(_Registration(name, self._wrap(factory), metadata))

    def _wrap(self, factory: Factory) -> Factory:
        plugin_name = self.plugin_name

        def build() -> CommandNode:
            node = factory()
            node.annotations.setdefault(ANNOTATION_PLUGIN, plugin_name)
            return node

        return build


def _parse_categories(module, plugin_name: str) -> dict[str, CategoryInfo]:
    categories = {}
    for raw in getattr(module, "CATEGORIES", None) or []:
        try:
            key = raw["id"]
            categories[key] = CategoryInfo.model_validate(
                {k: v for k, v in raw.items() if k != "id"}
            )
        except (KeyError, TypeError, ValidationError) as e:
            logger.warning(f"Plugin '{plugin_name}' declares an invalid category: {e}")
    return categories


def load_plugin_commands_file(path: Path) -> dict:
    """Read the raw `commands:` mapping of a plugin commands.yml."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        logger.warning(f"Skipping {path}: {e}")
        return {}
    commands = data.get("commands") if isinstance(data, dict) else None
    return commands if isinstance(commands, dict) else {}


def load_plugin(
    plugin_path: Path,
    registry: CommandRegistry,
    prefix: str = "glide_plugin",
) -> tuple[str, bool, str, PluginInfo | None, dict[str, CategoryInfo]]:
    """
    Load a single plugin module and register its commands.

    Args:
        plugin_path: Path to the plugin's __init__.py file.
        registry: Registry receiving the plugin's commands
        prefix: Module name prefix for sys.modules

    Returns:
        Tuple of (plugin_name, success, error_message, plugin_info, categories)
    """
    plugin_name = plugin_path.parent.name
    module_name = f"{prefix}.{plugin_name}"

    try:
        spec = spec_from_file_location(module_name, plugin_path)
        if spec is None or spec.loader is None:
            return (plugin_name, False, "Could not create module spec", None, {})

        module = module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)

        register = getattr(module, "register", None)
        registrar = PluginRegistrar(plugin_name)
        if callable(register):
            register(registrar)

    except SyntaxError as e:
        return (plugin_name, False, f"Syntax error: {e}", None, {})
    except ImportError as e:
        return (plugin_name, False, f"Import error: {e}", None, {})
    except Exception as e:
        return (plugin_name, False, f"Error: {e}", None, {})

    info = PluginInfo(name=plugin_name, path=plugin_path.parent)
    for reg in registrar.staged:
        try:
            registry.register(reg.name, reg.factory, reg.metadata)
            info.commands.append(reg.name)
        except CommandConflictError as e:
            logger.warning(f"Plugin '{plugin_name}' command '{reg.name}' not registered: {e}")

    commands_file = plugin_path.parent / PLUGIN_COMMANDS_FILE
    if commands_file.is_file():
        raw = load_plugin_commands_file(commands_file)
        info.declared_commands = load_declared_commands(registry, raw, strict=False)

    return (plugin_name, True, "", info, _parse_categories(module, plugin_name))


def load_all_plugins(app: Application, dirs: list[Path] | None = None) -> int:
    """
    Load plugins from every plugin directory into the application registry.

    Args:
        app: Application whose registry, plugin list and categories are filled
        dirs: Directories to search (default: global then project plugins)

    Returns:
        Number of successfully loaded plugins.
    """
    ctx = app.project_context
    if dirs is None:
        dirs = plugin_dirs(ctx.project_root if ctx is not None else None)

    total_loaded = 0
    for plugins_dir in dirs:
        for plugin_path in discover_plugins(plugins_dir):
            name, success, error, info, categories = load_plugin(plugin_path, app.registry)
            if success:
                total_loaded += 1
                app.plugins.append(info)
                app.categories.update(categories)
                logger.debug(f"Loaded plugin: {name}")
            else:
                logger.warning(f"Failed to load plugin '{name}': {error}")

    return total_loaded
