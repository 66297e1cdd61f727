"""Help command - context-aware command listing and help topics."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from glide_cli.cli.help import compose_help, render_command_help, render_help
from glide_cli.core.datamodels import CommandNode

if TYPE_CHECKING:
    from glide_cli.cli.app import Application

logger = logging.getLogger(__name__)

MODES_TOPIC = """\
Development Modes

Single-repo mode
  One git checkout. All commands operate on the current branch.

Multi-worktree mode
  A project root holding vcs/ (the main checkout) and worktrees/ (one
  directory per feature branch). Run 'glide global' commands from the root;
  container commands run inside vcs/ or a worktree.

Standalone mode
  A directory without git that carries a .glide.yml. Only the commands it
  declares are available.
"""

GETTING_STARTED_TOPIC = """\
Getting Started

  1. cd into a project (a git checkout or a directory with .glide.yml)
  2. Run 'glide setup' (add --mode multi for a multi-worktree layout)
     to register it in ~/.glide.yml
  3. Run 'glide help' to see the commands available there
  4. Declare project commands in .glide.yml:

       commands:
         test: go test ./...
         lint:
           cmd: golangci-lint run $@
           description: Run the linter
           alias: l

  5. Run 'glide completion bash' to enable shell completion
"""

TOPICS = {
    "modes": MODES_TOPIC,
    "getting-started": GETTING_STARTED_TOPIC,
}


def _lookup(root: CommandNode, path: list[str]) -> CommandNode | None:
    node = root
    for key in path:
        node = node.find(key)
        if node is None:
            return None
    return node


def create_help_command(app: "Application") -> CommandNode:
    def run(node: CommandNode, args: list[str]) -> int:
        root = node.root()
        if not args:
            sections = compose_help(root, app.project_context, app.categories)
            print(render_help(sections, app.project_context, root), end="")
            return 0

        if args[0] in TOPICS:
            print(TOPICS[args[0]], end="")
            return 0

        target = _lookup(root, args)
        if target is None:
            logger.error(f"Unknown help topic: {' '.join(args)}")
            print(f"Available topics: {', '.join(TOPICS)}")
            return 1
        print(render_command_help(target), end="")
        return 0

    return CommandNode(
        name="help",
        short="Show help for commands and topics",
        long="Show context-aware help. With a command name, show that command's "
        "details. Topics: " + ", ".join(TOPICS) + ".",
        usage="help [command | topic]",
        handler=run,
    )
