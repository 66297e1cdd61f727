"""
CLI module for the glide_cli package.

Builds the command tree for the detected project context and dispatches
command lines through it. The console entry point is glide_cli.cli.main:main.
"""

from glide_cli.cli.main import build_application, execute

__all__ = ["build_application", "execute"]
