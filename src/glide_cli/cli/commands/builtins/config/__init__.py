"""Config command - dump the loaded configuration."""
from __future__ import annotations

from typing import TYPE_CHECKING

import yaml

from glide_cli.core.datamodels import CommandNode

if TYPE_CHECKING:
    from glide_cli.cli.app import Application


def create_config_command(app: "Application") -> CommandNode:
    def run(node: CommandNode, args: list[str]) -> int:
        manager = app.config_manager
        print(f"# Config file: {manager.config_file}")
        data = manager.config.model_dump(mode="json", exclude_defaults="--all" not in args)
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")
        return 0

    return CommandNode(
        name="config",
        short="Show the loaded configuration",
        usage="config [--all]",
        handler=run,
    )
