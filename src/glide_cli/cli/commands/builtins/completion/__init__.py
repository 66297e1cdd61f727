"""Completion command - print shell completion scripts.

Usage:
    # Enable bash completion for the current shell
    source <(glide completion bash)

    # zsh
    glide completion zsh > "${fpath[1]}/_glide"
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from glide_cli.core.datamodels import CommandNode

if TYPE_CHECKING:
    from glide_cli.cli.app import Application

logger = logging.getLogger(__name__)

BASH_COMPLETION = r'''
# glide bash completion
_glide_completions() {
    local cur
    COMPREPLY=()
    cur="${COMP_WORDS[COMP_CWORD]}"

    if [[ $COMP_CWORD -eq 1 ]]; then
        COMPREPLY=($(compgen -W "__WORDS__" -- "$cur"))
    fi
    return 0
}
complete -o default -F _glide_completions glide
'''

ZSH_COMPLETION = r'''#compdef glide
# glide zsh completion
_glide() {
    local -a commands
    commands=(__WORDS__)
    if (( CURRENT == 2 )); then
        _describe 'command' commands
    else
        _files
    fi
}
compdef _glide glide
'''

SCRIPTS = {"bash": BASH_COMPLETION, "zsh": ZSH_COMPLETION}


def completion_script(shell: str, words: list[str]) -> str:
    """Render the completion script for a shell."""
    return SCRIPTS[shell].replace("__WORDS__", " ".join(words))


def create_completion_command(app: "Application") -> CommandNode:
    def run(node: CommandNode, args: list[str]) -> int:
        if len(args) != 1 or args[0] not in SCRIPTS:
            logger.error(f"Usage: glide {node.usage}")
            return 1
        print(completion_script(args[0], app.registry.completion_words()), end="")
        return 0

    return CommandNode(
        name="completion",
        short="Generate shell completion scripts",
        long="Print a completion script for bash or zsh listing the available commands.",
        usage="completion [bash|zsh]",
        handler=run,
    )
