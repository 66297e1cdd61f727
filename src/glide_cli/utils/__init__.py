"""Utility modules for glide_cli."""

from glide_cli.utils.logging import close_logging, configure_logging, debug_enabled

__all__ = ["close_logging", "configure_logging", "debug_enabled"]
