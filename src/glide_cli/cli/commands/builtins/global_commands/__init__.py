"""Global command - operations across all worktrees of a project.

Only meaningful from a multi-worktree project; elsewhere the subcommands
raise ModeError.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from glide_cli.context.detector import COMPOSE_FILE
from glide_cli.context.types import DevelopmentMode, ProjectContext
from glide_cli.core.datamodels import CommandNode
from glide_cli.core.exceptions import ModeError

if TYPE_CHECKING:
    from glide_cli.cli.app import Application


def require_multi_worktree(ctx: ProjectContext | None, command: str) -> ProjectContext:
    """Return the context, or raise ModeError outside multi-worktree mode."""
    if ctx is None or not ctx.is_multi_worktree:
        current = ctx.development_mode.value if ctx is not None else ""
        raise ModeError(current, DevelopmentMode.MULTI_WORKTREE.value, command)
    return ctx


def list_worktrees(project_root: Path) -> list[tuple[str, Path]]:
    """(name, path) of the main checkout and every worktree, main first."""
    entries = []
    vcs = project_root / "vcs"
    if vcs.is_dir():
        entries.append(("vcs", vcs))
    worktrees = project_root / "worktrees"
    if worktrees.is_dir():
        entries += [
            (path.name, path)
            for path in sorted(worktrees.iterdir())
            if path.is_dir() and not path.name.startswith(".")
        ]
    return entries


def create_global_command(app: "Application") -> CommandNode:
    def run_list(node: CommandNode, args: list[str]) -> int:
        ctx = require_multi_worktree(app.project_context, node.path)
        entries = list_worktrees(ctx.project_root)
        if not entries:
            print("No worktrees found.")
            return 0

        current = ctx.worktree_name or ("vcs" if ctx.is_main_repo else "")
        print(f"\nWorktrees of {ctx.project_name}:")
        for name, path in entries:
            marker = "*" if name == current else " "
            compose = "docker" if (path / COMPOSE_FILE).exists() else ""
            print(f" {marker} {name:<24} {compose:<7} {path}")
        print()
        return 0

    node = CommandNode(
        name="global",
        short="Manage all worktrees of the project",
        long="Commands that operate on the whole multi-worktree project.",
        usage="global [command]",
    )
    node.add_command(
        CommandNode(name="list", short="List all worktrees", usage="list", aliases=["ls"], handler=run_list)
    )
    return node
