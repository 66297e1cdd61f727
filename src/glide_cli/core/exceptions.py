"""
Exception classes for glide.
"""


class GlideError(Exception):
    """Base exception for glide errors."""


class RegistryError(GlideError):
    """Invalid command registration."""


class CommandConflictError(RegistryError):
    """A command name or alias collides with an existing registration."""

    def __init__(self, message: str, token: str = ""):
        super().__init__(message)
        self.token = token


class ConfigError(GlideError):
    """Configuration could not be loaded or is invalid."""


class CommandParseError(ConfigError):
    """A declared command entry is malformed."""


class ModeError(GlideError):
    """Command used outside the development mode it requires."""

    def __init__(self, current_mode: str, required_mode: str, command: str):
        super().__init__(
            f"command '{command}' is only available in {required_mode} mode "
            f"(current mode: {current_mode or 'none'})"
        )
        self.current_mode = current_mode
        self.required_mode = required_mode
        self.command = command
