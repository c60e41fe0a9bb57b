"""
Content schema: section records and theme palettes
"""

from wedding_builder.content.sections import (
    MANDATORY_SECTIONS,
    MalformedSectionContent,
    SectionContentMap,
    SectionKey,
    parse_section,
    parse_section_content,
    validate_enabled_sections,
)
from wedding_builder.content.theme import (
    DisplayMode,
    ThemeColors,
    WeddingTheme,
    active_palette,
    merge_palette,
)

__all__ = [
    "MANDATORY_SECTIONS",
    "MalformedSectionContent",
    "SectionContentMap",
    "SectionKey",
    "parse_section",
    "parse_section_content",
    "validate_enabled_sections",
    "DisplayMode",
    "ThemeColors",
    "WeddingTheme",
    "active_palette",
    "merge_palette",
]
