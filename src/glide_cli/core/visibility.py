"""
Context-aware visibility rules for commands and categories.

Both checks are pure functions of their arguments. A missing context and a
context whose development mode is empty both mean "not in a project".
Unrecognized visibility tags and categories are treated as visible so that
newer plugins keep working with older rule sets.
"""

from __future__ import annotations

from enum import Enum

from glide_cli.context.types import DevelopmentMode, Location, ProjectContext
from glide_cli.core.categories import Category


class Visibility(str, Enum):
    """Where a command should be offered."""

    ALWAYS = "always"
    PROJECT_ONLY = "project-only"
    WORKTREE_ONLY = "worktree-only"
    ROOT_ONLY = "root-only"
    NON_ROOT = "non-root"
    UNKNOWN = "unknown"  # Any tag this version does not know about

    @classmethod
    def parse(cls, value: Visibility | str | None) -> Visibility | None:
        """Map a raw tag to a member. Absent tags return None."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


def _in_project(ctx: ProjectContext | None) -> bool:
    return ctx is not None and ctx.development_mode != DevelopmentMode.UNKNOWN


def _at(ctx: ProjectContext | None, location: Location) -> bool:
    return (
        ctx is not None
        and ctx.development_mode == DevelopmentMode.MULTI_WORKTREE
        and ctx.location == location
    )


def should_show_command(
    tag: Visibility | str | None,
    ctx: ProjectContext | None,
) -> bool:
    """Decide whether a command with the given visibility tag is offered."""
    visibility = Visibility.parse(tag)

    if visibility is None or visibility == Visibility.ALWAYS:
        return True
    if visibility == Visibility.PROJECT_ONLY:
        return _in_project(ctx)
    if visibility == Visibility.WORKTREE_ONLY:
        return _at(ctx, Location.WORKTREE)
    if visibility == Visibility.ROOT_ONLY:
        return _at(ctx, Location.ROOT)
    if visibility == Visibility.NON_ROOT:
        return not _at(ctx, Location.ROOT)
    return True


def should_show_category(
    category: Category | str,
    ctx: ProjectContext | None,
) -> bool:
    """Decide whether a command category is shown for the given context."""
    known = Category.parse(category)

    if known in (Category.CORE, Category.SETUP, Category.HELP, Category.PLUGIN):
        return True
    if known == Category.GLOBAL:
        return ctx is not None and ctx.development_mode == DevelopmentMode.MULTI_WORKTREE
    if known in (Category.DOCKER, Category.TESTING, Category.DEVELOPER, Category.DATABASE):
        return _in_project(ctx)
    return True
