"""Setup command - register a project with glide.

Creates the directory layout of the chosen development mode and records the
project in ~/.glide.yml so that its declared commands are picked up from any
directory inside it.
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from glide_cli.config.config import ConfigManager, ProjectConfig
from glide_cli.context.types import DevelopmentMode
from glide_cli.core.datamodels import CommandNode
from glide_cli.core.exceptions import ConfigError

if TYPE_CHECKING:
    from glide_cli.cli.app import Application

MODE_NAMES = {
    "multi-worktree": DevelopmentMode.MULTI_WORKTREE,
    "multi": DevelopmentMode.MULTI_WORKTREE,
    "single-repo": DevelopmentMode.SINGLE_REPO,
    "single": DevelopmentMode.SINGLE_REPO,
}

MULTI_WORKTREE_DIRS = ("vcs", "worktrees")

GITIGNORE_TEXT = """\
# glide multi-worktree structure
vcs/
worktrees/
docker-compose.override.yml
.env.local
*.log
"""


def parse_mode(value: str | None) -> DevelopmentMode | None:
    """Map a --mode value (long or short form) to a DevelopmentMode."""
    if not value:
        return None
    try:
        return MODE_NAMES[value]
    except KeyError:
        raise ConfigError(
            f"invalid mode: {value} (valid modes: multi-worktree, multi, single-repo, single)"
        ) from None


def find_project(manager: ConfigManager, path: Path) -> tuple[str, ProjectConfig] | None:
    """Find the configured project registered for exactly this path."""
    for name, project in manager.config.projects.items():
        if Path(project.path).expanduser().resolve() == path:
            return name, project
    return None


def create_project_structure(path: Path, mode: DevelopmentMode) -> list[str]:
    """Create the project directory (and the multi-worktree layout).

    Returns:
        Paths created, relative to the project.
    """
    created = []
    path.mkdir(parents=True, exist_ok=True)
    if mode != DevelopmentMode.MULTI_WORKTREE:
        return created

    for name in MULTI_WORKTREE_DIRS:
        directory = path / name
        if not directory.exists():
            directory.mkdir()
            created.append(f"{name}/")

    gitignore = path / ".gitignore"
    if not gitignore.exists():
        gitignore.write_text(GITIGNORE_TEXT)
        created.append(".gitignore")
    return created


def build_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Register a project with glide", add_help=False)
    parser.add_argument("--mode", help="Development mode: multi-worktree (multi) or single-repo (single)")
    parser.add_argument("--path", type=Path, help="Project path (defaults to the detected project or cwd)")
    parser.add_argument("--name", help="Project name (defaults to the directory name)")
    parser.add_argument("--force", "-f", action="store_true", help="Reconfigure an already registered project")
    return parser


def create_setup_command(app: "Application") -> CommandNode:
    def run(node: CommandNode, args: list[str]) -> int:
        try:
            opts = build_parser(node.path).parse_args(args)
        except SystemExit as e:
            return e.code or 0

        ctx = app.project_context
        detected_root = ctx.project_root.resolve() if ctx is not None and ctx.project_root else None
        if opts.path is not None:
            path = opts.path.expanduser().resolve()
        else:
            path = detected_root or app.working_dir.resolve()

        mode = parse_mode(opts.mode)
        if mode is None:
            mode = DevelopmentMode.SINGLE_REPO
            if path == detected_root and ctx.is_multi_worktree:
                mode = DevelopmentMode.MULTI_WORKTREE

        manager = app.config_manager
        existing = find_project(manager, path)
        if existing is not None and not opts.force and (opts.mode is None or existing[1].mode == mode.value):
            name, project = existing
            print(f"Project '{name}' is already configured.")
            print(f"  Path: {project.path}")
            print(f"  Mode: {project.mode or 'auto'}")
            print(f"\nUse '{node.path} --force' to reconfigure it.")
            return 0

        name = opts.name or (existing[0] if existing is not None else path.name)
        for created in create_project_structure(path, mode):
            print(f"  Created {created}")
        manager.add_project(name, str(path), mode.value)

        print(f"\nSetup complete: {name} ({mode.value})")
        print(f"  Path:   {path}")
        print(f"  Config: {manager.config_file}")
        if mode == DevelopmentMode.MULTI_WORKTREE:
            print("\nNext steps:")
            print(f"  cd {path}")
            print("  git clone <your-repo-url> vcs")
        return 0

    return CommandNode(
        name="setup",
        short="Initial setup and configuration",
        long=(
            "Register the current project with glide.\n\n"
            "Creates the layout of the chosen development mode (vcs/ and worktrees/\n"
            "for multi-worktree) and records the project in ~/.glide.yml."
        ),
        usage="setup [--mode MODE] [--path PATH] [--name NAME] [--force]",
        handler=run,
    )
