"""Self-update command - upgrade the installed glide package.

glide is distributed as a Python package, so updating means asking pip (of
the interpreter glide runs under) to upgrade the distribution in place.
"""
from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from glide_cli.cli.shell import run_command
from glide_cli.core.datamodels import CommandNode

if TYPE_CHECKING:
    from glide_cli.cli.app import Application

DISTRIBUTION = "glide-cli"


def pip_upgrade_command(force: bool = False) -> list[str]:
    """argv that upgrades glide with the running interpreter's pip."""
    argv = [sys.executable, "-m", "pip", "install", "--upgrade", DISTRIBUTION]
    if force:
        argv.append("--force-reinstall")
    return argv


def confirm(question: str) -> bool:
    try:
        return input(f"{question} [y/N]: ").strip().lower() == "y"
    except (EOFError, KeyboardInterrupt):
        print()
        return False


def create_self_update_command(app: "Application") -> CommandNode:
    def run(node: CommandNode, args: list[str]) -> int:
        unknown = [arg for arg in args if arg not in ("--force", "-y", "--yes")]
        if unknown:
            print(f"Error: unknown flag {unknown[0]} for \"{node.path}\"", file=sys.stderr)
            return 1

        print(f"Current version: {app.version}")
        if "-y" not in args and "--yes" not in args:
            if not confirm(f"Upgrade {DISTRIBUTION} with pip?"):
                print("Update cancelled")
                return 0

        code = run_command(pip_upgrade_command(force="--force" in args))
        if code != 0:
            print("Update failed; the installed version has not been modified.", file=sys.stderr)
            return code
        print(f"Run '{node.root().name} version' to verify the update.")
        return 0

    return CommandNode(
        name="self-update",
        short="Update glide to the latest version",
        long=(
            "Upgrade the installed glide package with pip.\n\n"
            "Flags:\n"
            "  --force     Reinstall even if already on the latest version\n"
            "  -y, --yes   Do not ask for confirmation"
        ),
        usage="self-update [--force] [--yes]",
        handler=run,
    )
