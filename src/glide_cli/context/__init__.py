"""Project context detection for glide."""

from glide_cli.context.detector import ContextDetector, detect_context
from glide_cli.context.types import DevelopmentMode, Location, ProjectContext

__all__ = [
    "ContextDetector",
    "detect_context",
    "DevelopmentMode",
    "Location",
    "ProjectContext",
]
