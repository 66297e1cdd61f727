"""
Shell execution for declared and pass-through commands.

Commands inherit stdin/stdout/stderr and the current environment.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import TYPE_CHECKING

from glide_cli.config.commands import expand_command

if TYPE_CHECKING:
    from glide_cli.context.types import ProjectContext

logger = logging.getLogger(__name__)

# Exit code used by shells for "command not found"
EXIT_NOT_FOUND = 127


def run_command(argv: list[str], cwd: str | os.PathLike | None = None) -> int:
    """Run a command without a shell and return its exit code."""
    logger.debug(f"Running: {' '.join(argv)}")
    try:
        result = subprocess.run(argv, cwd=cwd, env=os.environ.copy())
    except FileNotFoundError:
        logger.error(f"Command not found: {argv[0]}")
        return EXIT_NOT_FOUND
    except KeyboardInterrupt:
        return 130
    return result.returncode


def run_shell(script: str, cwd: str | os.PathLike | None = None) -> int:
    """Run a script through `sh -c` (pipes, redirects, multi-line scripts)."""
    return run_command(["sh", "-c", script], cwd=cwd)


def run_declared(template: str, args: list[str], cwd: str | os.PathLike | None = None) -> int:
    """Expand a declared command template with args and run it."""
    return run_shell(expand_command(template, args), cwd=cwd)


def compose_command(ctx: ProjectContext | None) -> list[str]:
    """Build the `docker compose` prefix with the context's compose files."""
    argv = ["docker", "compose"]
    if ctx is not None:
        for path in ctx.compose_files:
            argv.extend(["-f", str(path)])
    return argv
