"""
Command categories and their display properties.

Categories group commands in help output. Lower priority values are listed
first; categories that are not known here (for example ones contributed by
plugins) sort after all built-in ones.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class Category(str, Enum):
    """Built-in command categories."""

    CORE = "core"
    GLOBAL = "global"
    SETUP = "setup"
    DOCKER = "docker"
    TESTING = "testing"
    DEVELOPER = "developer"
    DATABASE = "database"
    PLUGIN = "plugin"
    HELP = "help"
    YAML = "yaml"
    DEBUG = "debug"

    @classmethod
    def parse(cls, value: Category | str | None) -> Category | None:
        """Return the matching member, or None for unknown values."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def coerce(cls, value: Category | str | None) -> Category | str:
        """Known values become members; unknown keys pass through unchanged.

        An empty value means the default category, core.
        """
        if not value:
            return cls.CORE
        return cls.parse(value) or str(value)

    @property
    def info(self) -> CategoryInfo:
        return CATEGORY_INFO[self]


def category_key(category: Category | str) -> str:
    """Plain string key of a category member or raw category name."""
    return category.value if isinstance(category, Category) else category


class CategoryInfo(BaseModel):
    """Display properties of a category."""

    name: str
    description: str = ""
    priority: int = 1000

    model_config = {"frozen": True}


CATEGORY_INFO: dict[Category, CategoryInfo] = {
    Category.CORE: CategoryInfo(
        name="Core Commands",
        description="Essential development commands",
        priority=10,
    ),
    Category.GLOBAL: CategoryInfo(
        name="Global Commands",
        description="Multi-worktree management",
        priority=20,
    ),
    Category.SETUP: CategoryInfo(
        name="Setup & Configuration",
        description="Project setup and configuration",
        priority=30,
    ),
    Category.DOCKER: CategoryInfo(
        name="Docker Management",
        description="Container and service control",
        priority=40,
    ),
    Category.TESTING: CategoryInfo(
        name="Testing",
        description="Test execution and coverage",
        priority=50,
    ),
    Category.DEVELOPER: CategoryInfo(
        name="Development Tools",
        description="Code quality and utilities",
        priority=60,
    ),
    Category.DATABASE: CategoryInfo(
        name="Database",
        description="Database management and access",
        priority=70,
    ),
    Category.YAML: CategoryInfo(
        name="Project Commands",
        description="Commands declared in .glide.yml",
        priority=75,
    ),
    Category.PLUGIN: CategoryInfo(
        name="Plugin Commands",
        description="Commands from installed plugins",
        priority=80,
    ),
    Category.DEBUG: CategoryInfo(
        name="Debug",
        description="Debug and diagnostic utilities",
        priority=85,
    ),
    # Help is always last
    Category.HELP: CategoryInfo(
        name="Help & Documentation",
        description="Help topics and guides",
        priority=90,
    ),
}


def category_info(
    key: Category | str,
    extra: dict[str, CategoryInfo] | None = None,
) -> CategoryInfo:
    """Look up display info for a category key.

    Known categories come from CATEGORY_INFO, then ``extra`` (categories
    declared by plugins). Anything else gets a title-cased name and sorts last.
    """
    known = Category.parse(key)
    if known is not None:
        return CATEGORY_INFO[known]
    raw = category_key(key)
    if extra and raw in extra:
        return extra[raw]
    return CategoryInfo(name=raw.replace("-", " ").replace("_", " ").title())
