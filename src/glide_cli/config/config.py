"""
Configuration management for glide.

Global settings live in ~/.glide.yml. Projects may add a .glide.yml at their
root (or in sub-directories) to declare project commands.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

if TYPE_CHECKING:
    from glide_cli.context.types import ProjectContext

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".glide.yml"

VALID_MODES = ("multi-worktree", "single-repo")


class DockerDefaults(BaseModel):
    """Docker related defaults."""

    compose_timeout: int = Field(default=30, description="Seconds to wait for compose operations")
    remove_orphans: bool = Field(default=False, description="Pass --remove-orphans to 'down'")


class ColorDefaults(BaseModel):
    """Color output settings."""

    enabled: Literal["auto", "always", "never"] = "auto"


class DefaultsConfig(BaseModel):
    """Default settings applied to every project."""

    model_config = {"extra": "ignore"}

    docker: DockerDefaults = Field(default_factory=DockerDefaults)
    colors: ColorDefaults = Field(default_factory=ColorDefaults)


class ProjectConfig(BaseModel):
    """A project registered in the global configuration."""

    model_config = {"extra": "ignore"}

    path: str = Field(description="Path to the project root")
    mode: Optional[str] = Field(default=None, description="multi-worktree or single-repo")
    commands: dict[str, Any] = Field(default_factory=dict)

    @field_validator("mode")
    @classmethod
    def _check_mode(cls, value: Optional[str]) -> Optional[str]:
        if value and value not in VALID_MODES:
            raise ValueError(f"invalid mode: {value}")
        return value or None


class Config(BaseModel):
    """Configuration settings for glide.

    All settings are optional.
    """

    model_config = {"extra": "ignore"}  # Ignore unknown top-level keys

    projects: dict[str, ProjectConfig] = Field(default_factory=dict)
    default_project: Optional[str] = Field(
        default=None,
        description="Project used when the working directory matches none"
    )
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    commands: dict[str, Any] = Field(
        default_factory=dict,
        description="Declared commands available everywhere"
    )


DEFAULT_CONFIG_TEXT = """\
# glide configuration file
#
# projects:
#   myproject:
#     path: ~/code/myproject
#     mode: multi-worktree
#     commands:
#       deploy: ./scripts/deploy.sh $1
#
# commands:
#   hello:
#     cmd: echo "hello $@"
#     description: Say hello
defaults:
  docker:
    compose_timeout: 30
    remove_orphans: false
  colors:
    enabled: auto
"""


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("top level must be a mapping")
    return data


class ConfigManager:
    """Manages loading and saving the global configuration."""

    CONFIG_FILE = Path.home() / ".glide.yml"

    def __init__(self, config_file: Path | None = None):
        self.config_file = config_file or self.CONFIG_FILE
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current config, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self, create_if_missing: bool = False) -> Config:
        """Load configuration from file.

        Args:
            create_if_missing: If True, write a commented default file when none exists.

        Returns:
            Config object with loaded settings, or defaults if the file is
            missing or invalid.
        """
        if not self.config_file.exists():
            if create_if_missing:
                self._create_default_config()
            self._config = Config()
            return self._config

        try:
            self._config = Config.model_validate(_read_yaml(self.config_file))
        except (yaml.YAMLError, ValidationError, ValueError, OSError) as e:
            logger.warning(f"Invalid config file {self.config_file} ({e}), using defaults")
            self._config = Config()
        return self._config

    def _create_default_config(self) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(DEFAULT_CONFIG_TEXT)

    def save(self, config: Optional[Config] = None) -> Path:
        """Save configuration to file.

        Args:
            config: Config to save. If None, saves current config.

        Returns:
            Path to saved config file.
        """
        if config is not None:
            self._config = config
        if self._config is None:
            self._config = Config()

        data = self._config.model_dump(exclude_none=True, exclude_defaults=True)
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(yaml.safe_dump(data, sort_keys=False))
        return self.config_file

    def add_project(self, name: str, path: str, mode: str) -> None:
        """Register a project, making it the default if none is set.

        Re-registering a name keeps the commands already declared for it.
        """
        config = self.config
        previous = config.projects.get(name)
        config.projects[name] = ProjectConfig(
            path=path,
            mode=mode,
            commands=previous.commands if previous is not None else {},
        )
        if not config.default_project:
            config.default_project = name
        self.save(config)

    def active_project(self, ctx: ProjectContext | None) -> ProjectConfig | None:
        """Find the configured project matching the detected context."""
        config = self.config
        if ctx is not None and ctx.project_root is not None:
            root = ctx.project_root.resolve()
            for project in config.projects.values():
                project_path = Path(project.path).expanduser().resolve()
                if root == project_path or project_path in root.parents:
                    return project

        if config.default_project:
            return config.projects.get(config.default_project)
        return None


def discover_configs(start_dir: Path, home: Path | None = None) -> list[Path]:
    """Find .glide.yml files from start_dir up to the project root.

    The walk stops at the home directory, the filesystem root, or the first
    directory containing .git. Returns deepest first (highest priority).
    """
    home = (home or Path.home()).resolve()
    configs: list[Path] = []

    current = start_dir.resolve()
    while True:
        if current == home or current.parent == current:
            break

        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            configs.append(candidate)

        if (current / ".git").exists():
            break
        current = current.parent

    return configs


def load_command_map(path: Path) -> dict[str, Any]:
    """Read the raw `commands:` mapping of a config file."""
    try:
        data = _read_yaml(path)
    except (yaml.YAMLError, ValueError, OSError) as e:
        logger.warning(f"Skipping unreadable config {path}: {e}")
        return {}
    commands = data.get("commands") or {}
    if not isinstance(commands, dict):
        logger.warning(f"Ignoring 'commands' in {path}: expected a mapping")
        return {}
    return commands


def load_declared_command_map(
    manager: ConfigManager,
    ctx: ProjectContext | None,
    start_dir: Path | None = None,
) -> dict[str, Any]:
    """Merge declared commands from every configuration source.

    Priority, lowest first: global config, the active project entry, then
    .glide.yml files discovered from the working directory upward (deeper
    files win).
    """
    merged: dict[str, Any] = dict(manager.config.commands)

    project = manager.active_project(ctx)
    if project is not None:
        merged.update(project.commands)

    if start_dir is None and ctx is not None:
        start_dir = ctx.working_dir
    if start_dir is not None:
        for path in reversed(discover_configs(start_dir)):
            if path.resolve() == manager.config_file.resolve():
                continue
            merged.update(load_command_map(path))

    return merged
