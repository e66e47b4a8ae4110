"""Lingobox - localized bundle generation for emitted build output."""

from importlib.metadata import distribution

from .i18n.models import EmittedArtifact, I18nOptions, TransformResult
from .i18n.service import I18nInlineService


__version__ = distribution(__package__ or "lingobox").version

__all__ = [
    "EmittedArtifact",
    "I18nInlineService",
    "I18nOptions",
    "TransformResult",
    "__version__",
]

# Import CLI after setting __version__ to avoid circular imports
from .cli import app, main


__all__ += ["app", "main"]
