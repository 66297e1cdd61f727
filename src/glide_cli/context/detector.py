"""
Project context detection.

Finds the project root above the working directory and classifies the
layout:

    multi-worktree   <root>/vcs/.git and <root>/worktrees/
    single-repo      <root>/.git
    standalone       <root>/.glide.yml without git
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from glide_cli.context.types import DevelopmentMode, Location, ProjectContext

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".glide.yml"
COMPOSE_FILE = "docker-compose.yml"
COMPOSE_OVERRIDE_FILE = "docker-compose.override.yml"


class ContextDetector:
    """Detects the ProjectContext for a working directory."""

    def __init__(
        self,
        working_dir: Path | None = None,
        max_traversal: int = 5,
        check_docker: bool = False,
    ):
        self.working_dir = Path(working_dir or os.getcwd()).resolve()
        self.max_traversal = max_traversal
        self.check_docker = check_docker

    def find_root(self) -> Path | None:
        """Walk up from the working directory looking for a project root."""
        current = self.working_dir

        for _ in range(self.max_traversal + 1):
            # Multi-worktree root holds the main checkout in vcs/
            if (current / "vcs" / ".git").exists():
                return current

            # Inside worktrees/<name>/ or vcs/: the root is the parent of that segment
            for marker in ("worktrees", "vcs"):
                candidate = _prefix_before(current, marker)
                if candidate is not None and (candidate / "vcs" / ".git").exists():
                    return candidate

            if (current / ".git").exists():
                return current
            if (current / PROJECT_CONFIG_NAME).is_file() and current != Path.home():
                return current

            if current.parent == current:
                break
            current = current.parent

        return None

    def detect_mode(self, root: Path) -> DevelopmentMode:
        if (root / "vcs").is_dir() and (root / "worktrees").is_dir():
            return DevelopmentMode.MULTI_WORKTREE
        if (root / ".git").exists():
            return DevelopmentMode.SINGLE_REPO
        if (root / PROJECT_CONFIG_NAME).is_file():
            return DevelopmentMode.STANDALONE
        return DevelopmentMode.UNKNOWN

    def identify_location(
        self, root: Path, mode: DevelopmentMode
    ) -> tuple[Location, str]:
        """Return the location and, inside a worktree, its name."""
        if mode in (DevelopmentMode.SINGLE_REPO, DevelopmentMode.STANDALONE):
            return Location.PROJECT, ""
        if mode != DevelopmentMode.MULTI_WORKTREE:
            return Location.UNKNOWN, ""

        try:
            rel = self.working_dir.relative_to(root)
        except ValueError:
            return Location.UNKNOWN, ""

        parts = rel.parts
        if not parts:
            return Location.ROOT, ""
        if parts[0] == "vcs":
            return Location.MAIN_REPO, ""
        if parts[0] == "worktrees":
            if len(parts) >= 2:
                return Location.WORKTREE, parts[1]
            # worktrees/ itself is not inside any checkout
            return Location.ROOT, ""
        return Location.ROOT, ""

    def resolve_compose_files(
        self, root: Path, location: Location, worktree_name: str
    ) -> tuple[list[Path], Path | None]:
        if location == Location.MAIN_REPO:
            checkout = root / "vcs"
        elif location == Location.WORKTREE and worktree_name:
            checkout = root / "worktrees" / worktree_name
        elif location == Location.PROJECT:
            checkout = root
        else:
            return [], None

        files = []
        compose = checkout / COMPOSE_FILE
        if compose.is_file():
            files.append(compose)

        override = root / COMPOSE_OVERRIDE_FILE
        if override.is_file():
            files.append(override)
            return files, override
        return files, None

    def docker_running(self) -> bool:
        try:
            result = subprocess.run(
                ["docker", "info"],
                capture_output=True,
                timeout=5,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"Docker status check failed: {e}")
            return False
        return result.returncode == 0

    def detect(self) -> ProjectContext | None:
        """Detect the project context, or None when not inside a project."""
        root = self.find_root()
        if root is None:
            logger.debug(f"No project root found above {self.working_dir}")
            return None

        mode = self.detect_mode(root)
        location, worktree_name = self.identify_location(root, mode)
        compose_files, override = self.resolve_compose_files(root, location, worktree_name)

        ctx = ProjectContext(
            working_dir=self.working_dir,
            project_root=root,
            project_name=root.name,
            development_mode=mode,
            location=location,
            worktree_name=worktree_name,
            compose_files=compose_files,
            compose_override=override,
            docker_running=self.docker_running() if self.check_docker else False,
        )
        logger.debug(
            f"Detected context: mode={mode.value or 'none'} "
            f"location={location.value} root={root}"
        )
        return ctx


def _prefix_before(path: Path, segment: str) -> Path | None:
    parts = path.parts
    if segment not in parts[1:]:
        return None
    idx = len(parts) - 1 - parts[::-1].index(segment)
    return Path(*parts[:idx])


def detect_context(working_dir: Path | None = None, check_docker: bool = False) -> ProjectContext | None:
    """Convenience wrapper around ContextDetector.detect()."""
    return ContextDetector(working_dir, check_docker=check_docker).detect()
