"""Version command - print the glide version."""
from __future__ import annotations

from typing import TYPE_CHECKING

from glide_cli.core.datamodels import CommandNode

if TYPE_CHECKING:
    from glide_cli.cli.app import Application


def create_version_command(app: "Application") -> CommandNode:
    def run(node: CommandNode, args: list[str]) -> int:
        print(f"glide version {app.version}")
        return 0

    return CommandNode(
        name="version",
        short="Display version information",
        usage="version",
        handler=run,
    )
