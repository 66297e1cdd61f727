"""
Application state for a single glide invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from glide_cli import __version__
from glide_cli.config.config import Config, ConfigManager
from glide_cli.context.detector import ContextDetector
from glide_cli.context.types import ProjectContext
from glide_cli.core.categories import CategoryInfo
from glide_cli.core.registry import CommandRegistry


@dataclass
class PluginInfo:
    """A plugin loaded for this invocation."""

    name: str
    path: Path
    commands: list[str] = field(default_factory=list)
    declared_commands: list[str] = field(default_factory=list)


@dataclass
class Application:
    """Everything the command builders need, passed explicitly.

    Owns the one CommandRegistry of the process.
    """

    project_context: ProjectContext | None
    config_manager: ConfigManager
    registry: CommandRegistry = field(default_factory=CommandRegistry)
    plugins: list[PluginInfo] = field(default_factory=list)
    categories: dict[str, CategoryInfo] = field(default_factory=dict)
    working_dir: Path = field(default_factory=Path.cwd)
    version: str = __version__

    @property
    def config(self) -> Config:
        return self.config_manager.config

    @classmethod
    def create(
        cls,
        working_dir: Path | None = None,
        config_file: Path | None = None,
    ) -> Application:
        working_dir = Path(working_dir or Path.cwd()).resolve()
        ctx = ContextDetector(working_dir).detect()
        return cls(
            project_context=ctx,
            config_manager=ConfigManager(config_file),
            working_dir=working_dir,
        )
