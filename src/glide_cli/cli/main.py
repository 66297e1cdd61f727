#!/usr/bin/env python3
"""
glide - context-aware development CLI.

Usage:
    glide                       Show context-aware help
    glide <command> [args...]   Run a command
    glide -v <command>          Run with debug logging
    glide help <command>        Show help for a command
"""

from __future__ import annotations

import argparse
import difflib
import logging
import sys
from pathlib import Path

from glide_cli import __version__
from glide_cli.cli.app import Application
from glide_cli.cli.builder import Builder
from glide_cli.cli.commands.declared import load_declared_commands
from glide_cli.cli.commands.loader import load_all_plugins
from glide_cli.cli.help import render_command_help
from glide_cli.config.config import load_declared_command_map
from glide_cli.core.datamodels import CommandNode
from glide_cli.core.exceptions import GlideError
from glide_cli.utils.logging import close_logging, configure_logging

logger = logging.getLogger(__name__)

HELP_FLAGS = ("-h", "--help")


def build_parser() -> argparse.ArgumentParser:
    """Parser for the options accepted before the command name."""
    parser = argparse.ArgumentParser(
        prog="glide",
        description="Context-aware development CLI",
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show help")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument("--log-file", type=Path, metavar="PATH", help="Also write debug logs to PATH")
    return parser


def split_global_args(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split leading option tokens from the command and its arguments."""
    i = 0
    while i < len(argv) and argv[i].startswith("-"):
        if argv[i] == "--log-file":
            i += 1
        i += 1
    return argv[:i], argv[i:]


def suggestions(root: CommandNode, token: str) -> list[str]:
    """Close matches among the visible command names and aliases."""
    words = []
    for child in root.children:
        if not child.hidden:
            words.append(child.name)
            words.extend(child.aliases)
    return difflib.get_close_matches(token, words, n=3, cutoff=0.6)


def execute(root: CommandNode, args: list[str]) -> int:
    """Dispatch args through the command tree and run the matched handler.

    Args:
        root: Root of the built command tree
        args: Command name followed by its arguments

    Returns:
        Exit code of the command.
    """
    if not args:
        args = ["help"] if root.find("help") is not None else []

    node = root
    remaining = list(args)
    while remaining and not node.disable_flag_parsing:
        child = node.find(remaining[0])
        if child is None:
            break
        node = child
        remaining.pop(0)

    if node is root and remaining:
        token = remaining[0]
        print(f'Error: unknown command "{token}" for "{root.name}"', file=sys.stderr)
        matches = suggestions(root, token)
        if matches:
            print("\nDid you mean this?", file=sys.stderr)
            for match in matches:
                print(f"\t{match}", file=sys.stderr)
        print(f"\nRun '{root.name} help' for usage.", file=sys.stderr)
        return 1

    if not node.disable_flag_parsing and remaining[:1] and remaining[0] in HELP_FLAGS:
        print(render_command_help(node), end="")
        return 0

    if node.handler is None:
        if remaining:
            print(f'Error: unknown command "{remaining[0]}" for "{node.path}"', file=sys.stderr)
            print(render_command_help(node), end="", file=sys.stderr)
            return 1
        print(render_command_help(node), end="")
        return 0

    logger.debug(f"Running {node.path} with {remaining}")
    result = node.handler(node, remaining)
    return result or 0


def build_application(working_dir: Path | None = None, config_file: Path | None = None) -> tuple[Application, CommandNode]:
    """Create the application and build its full command tree.

    Registration order: built-ins, then plugins, then declared commands.
    """
    app = Application.create(working_dir=working_dir, config_file=config_file)
    builder = Builder(app)
    builder.register_builtin_commands()

    loaded = load_all_plugins(app)
    logger.debug(f"Loaded {loaded} plugin(s)")

    commands = load_declared_command_map(app.config_manager, app.project_context, app.working_dir)
    # Built-in and plugin commands keep their names; clashing entries are skipped
    load_declared_commands(app.registry, commands, strict=False)

    return app, builder.build()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the glide CLI."""
    argv = sys.argv[1:] if argv is None else list(argv)
    leading, rest = split_global_args(argv)
    opts = build_parser().parse_args(leading)

    if opts.version:
        print(f"glide version {__version__}")
        return 0

    configure_logging(verbose=opts.verbose, log_file=opts.log_file)
    try:
        _, root = build_application()
        if opts.help:
            rest = ["help", *rest]
        return execute(root, rest)
    except GlideError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        return 130
    finally:
        close_logging()


if __name__ == "__main__":
    sys.exit(main())
