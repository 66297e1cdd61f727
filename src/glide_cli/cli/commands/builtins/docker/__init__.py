"""Docker commands - `docker compose` pass-through with resolved compose files."""
from __future__ import annotations

from typing import TYPE_CHECKING

from glide_cli.cli.shell import compose_command, run_command
from glide_cli.core.datamodels import CommandNode
from glide_cli.core.exceptions import GlideError

if TYPE_CHECKING:
    from glide_cli.cli.app import Application

# name -> (compose subcommand, description)
COMPOSE_COMMANDS = {
    "up": (["up"], "Start containers"),
    "down": (["down"], "Stop and remove containers"),
    "status": (["ps"], "Show container status"),
    "logs": (["logs"], "Show container logs"),
}


def create_compose_command(app: "Application", name: str) -> CommandNode:
    """Build one pass-through command; all trailing args go to docker compose."""
    subcommand, description = COMPOSE_COMMANDS[name]

    def run(node: CommandNode, args: list[str]) -> int:
        ctx = app.project_context
        if ctx is None or not ctx.has_project:
            raise GlideError(f"'{name}' must be run inside a project")
        if not ctx.compose_files:
            raise GlideError(f"no docker-compose.yml found for {ctx.project_name}")
        argv = compose_command(ctx) + subcommand
        if name == "down" and app.config.defaults.docker.remove_orphans and "--remove-orphans" not in args:
            argv.append("--remove-orphans")
        return run_command(argv + args, cwd=ctx.compose_files[0].parent)

    return CommandNode(
        name=name,
        short=description,
        long=f"{description}. Runs 'docker compose {' '.join(subcommand)}' with the "
        "compose files of the current checkout; all arguments are passed through.",
        usage=f"{name} [docker compose args...]",
        disable_flag_parsing=True,
        handler=run,
    )
