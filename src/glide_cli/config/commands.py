"""
Declared command parsing.

Commands can be declared in a `commands:` mapping in any .glide.yml, either
as a plain shell string or as a mapping:

    commands:
      build: docker build .
      deploy:
        cmd: ./scripts/deploy.sh $1
        alias: d
        description: Deploy to an environment
        help: |
          Usage: glide deploy <env>
        category: developer
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from glide_cli.core.exceptions import CommandParseError


class DeclaredCommand(BaseModel):
    """A command declared in configuration."""

    model_config = {"extra": "ignore"}

    cmd: str = Field(description="Shell command template to execute")
    alias: Optional[str] = Field(default=None, description="Single alternative name")
    description: str = Field(default="", description="Short description for help")
    help: str = Field(default="", description="Longer help text")
    category: Optional[str] = Field(default=None, description="Help category")


def parse_command(name: str, value: Any) -> DeclaredCommand:
    """Parse a single command entry in string or mapping form."""
    if isinstance(value, str):
        return DeclaredCommand(cmd=value)

    if isinstance(value, dict):
        cmd = value.get("cmd")
        if not isinstance(cmd, str):
            raise CommandParseError(f"error parsing command {name}: command must have 'cmd' field")
        data = {str(k): v for k, v in value.items()}
        try:
            return DeclaredCommand.model_validate(data)
        except ValidationError as e:
            raise CommandParseError(f"error parsing command {name}: {e}") from e

    raise CommandParseError(f"invalid command format for {name}")


def parse_commands(raw: dict[str, Any] | None) -> dict[str, DeclaredCommand]:
    """Parse a raw `commands:` mapping, keeping its order."""
    return {str(name): parse_command(str(name), value) for name, value in (raw or {}).items()}


_POSITIONAL = re.compile(r"\$(\d+)")


def expand_command(template: str, args: list[str]) -> str:
    """Substitute $1..$n, $@ and $* with the given arguments.

    Positional placeholders without a matching argument are left as is so
    the shell can still expand them.
    """
    def _positional(match: re.Match) -> str:
        index = int(match.group(1))
        if 1 <= index <= len(args):
            return args[index - 1]
        return match.group(0)

    expanded = _POSITIONAL.sub(_positional, template)
    joined = " ".join(args)
    return expanded.replace("$@", joined).replace("$*", joined)


def validate_command(name: str, command: DeclaredCommand, program: str = "glide") -> None:
    """Reject empty commands and commands that call themselves."""
    if not command.cmd.strip():
        raise CommandParseError(f"command {name} cannot be empty")

    for token in filter(None, (name, command.alias)):
        pattern = rf"(^|[\s;&|]){re.escape(program)}\s+{re.escape(token)}(\s|$)"
        if re.search(pattern, command.cmd):
            raise CommandParseError(f"command {name} may contain circular reference")
