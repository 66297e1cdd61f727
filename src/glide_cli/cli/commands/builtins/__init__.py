"""
Built-in commands package.

Each subdirectory holds one command (or a family of closely related
commands) and exposes a ``create_<name>_command(app)`` builder. The builder
module registers them with ``functools.partial`` so every invocation of a
factory produces a fresh node bound to the current Application.
"""
