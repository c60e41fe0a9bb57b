"""
Versioned wedding templates
"""

from wedding_builder.templates.registry import (
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateRegistry,
    TemplateResolutionError,
    VersionNotFoundError,
    get_template_registry,
    template_registry,
)
from wedding_builder.templates.types import SectionsBundle, TemplateProps, WeddingSummary

__all__ = [
    "TemplateLoadError",
    "TemplateNotFoundError",
    "TemplateRegistry",
    "TemplateResolutionError",
    "VersionNotFoundError",
    "get_template_registry",
    "template_registry",
    "SectionsBundle",
    "TemplateProps",
    "WeddingSummary",
]
