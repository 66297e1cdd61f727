"""
Project context data models.

A ProjectContext describes where glide is being run from: the development
mode of the surrounding project and the location inside it. It is produced
once per invocation by the ContextDetector and treated as read-only.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class DevelopmentMode(str, Enum):
    """Layout of the surrounding project."""

    SINGLE_REPO = "single-repo"
    MULTI_WORKTREE = "multi-worktree"
    STANDALONE = "standalone"  # Non-git directory with a .glide.yml
    UNKNOWN = ""


class Location(str, Enum):
    """Where the working directory sits inside the project."""

    ROOT = "root"  # Project root (multi-worktree only)
    MAIN_REPO = "main-repo"  # vcs/ (multi-worktree only)
    WORKTREE = "worktree"  # worktrees/<name>/
    PROJECT = "project"  # Single repo or standalone project
    UNKNOWN = "unknown"


class ProjectContext(BaseModel):
    """Detected project context."""

    working_dir: Path | None = None
    project_root: Path | None = None
    project_name: str = ""

    development_mode: DevelopmentMode = DevelopmentMode.UNKNOWN
    location: Location = Location.UNKNOWN
    worktree_name: str = ""

    compose_files: list[Path] = Field(default_factory=list)
    compose_override: Path | None = None
    docker_running: bool = False

    model_config = {"frozen": True}

    @property
    def has_project(self) -> bool:
        return self.development_mode != DevelopmentMode.UNKNOWN

    @property
    def is_multi_worktree(self) -> bool:
        return self.development_mode == DevelopmentMode.MULTI_WORKTREE

    @property
    def is_root(self) -> bool:
        return self.is_multi_worktree and self.location == Location.ROOT

    @property
    def is_main_repo(self) -> bool:
        return self.is_multi_worktree and self.location == Location.MAIN_REPO

    @property
    def is_worktree(self) -> bool:
        return self.is_multi_worktree and self.location == Location.WORKTREE

    def describe(self) -> str:
        """One-line human readable summary, used in help output."""
        mode = self.development_mode
        if mode == DevelopmentMode.MULTI_WORKTREE:
            text = "Multi-worktree mode"
            if self.location == Location.ROOT:
                text += " • Project root"
            elif self.location == Location.MAIN_REPO:
                text += " • Main repository (vcs/)"
            elif self.location == Location.WORKTREE:
                text += f" • Worktree: {self.worktree_name}" if self.worktree_name else " • Worktree"
            return text
        if mode == DevelopmentMode.SINGLE_REPO:
            return "Single-repo mode"
        if mode == DevelopmentMode.STANDALONE:
            return "Standalone mode"
        return "No project detected"
