"""Context command - show the detected project context."""
from __future__ import annotations

from typing import TYPE_CHECKING

from glide_cli.core.datamodels import CommandNode

if TYPE_CHECKING:
    from glide_cli.cli.app import Application


def create_context_command(app: "Application") -> CommandNode:
    def run(node: CommandNode, args: list[str]) -> int:
        ctx = app.project_context
        if ctx is None:
            print("No project detected")
            print(f"  Working dir: {app.working_dir}")
            return 0

        print(ctx.describe())
        print(f"  Working dir:  {ctx.working_dir}")
        print(f"  Project root: {ctx.project_root}")
        print(f"  Project name: {ctx.project_name}")
        print(f"  Mode:         {ctx.development_mode.value or '-'}")
        print(f"  Location:     {ctx.location.value}")
        if ctx.worktree_name:
            print(f"  Worktree:     {ctx.worktree_name}")
        for path in ctx.compose_files:
            print(f"  Compose file: {path}")
        return 0

    return CommandNode(
        name="context",
        short="Show the detected project context",
        usage="context",
        handler=run,
    )
