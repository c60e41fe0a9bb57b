"""
Per-wedding theme colors and palette resolution

Templates ship compiled-in default palettes. A wedding stores sparse overrides
for light and dark mode; at render time the palette for the active mode is
merged onto the template defaults into a fresh read-only mapping that is passed
down the render call chain. Template defaults are never mutated, so renders of
different weddings in the same process cannot see each other's colors.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

THEME_TOKENS = (
    "background",
    "foreground",
    "card",
    "cardForeground",
    "popover",
    "popoverForeground",
    "primary",
    "primaryForeground",
    "secondary",
    "secondaryForeground",
    "muted",
    "mutedForeground",
    "accent",
    "accentForeground",
    "destructive",
    "border",
    "input",
    "ring",
)

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


class DisplayMode(str, Enum):
    """Viewer display mode"""
    LIGHT = "light"
    DARK = "dark"


class ThemeColors(BaseModel):
    """Sparse color-token overrides for one display mode"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    background: Optional[str] = None
    foreground: Optional[str] = None
    card: Optional[str] = None
    card_foreground: Optional[str] = None
    popover: Optional[str] = None
    popover_foreground: Optional[str] = None
    primary: Optional[str] = None
    primary_foreground: Optional[str] = None
    secondary: Optional[str] = None
    secondary_foreground: Optional[str] = None
    muted: Optional[str] = None
    muted_foreground: Optional[str] = None
    accent: Optional[str] = None
    accent_foreground: Optional[str] = None
    destructive: Optional[str] = None
    border: Optional[str] = None
    input: Optional[str] = None
    ring: Optional[str] = None

    def to_tokens(self) -> Dict[str, str]:
        """Present, non-empty tokens keyed by camelCase token name"""
        dumped = self.model_dump(by_alias=True, exclude_none=True)
        return {token: value for token, value in dumped.items() if value}


class WeddingTheme(BaseModel):
    """Light and dark overrides for a wedding"""
    light: ThemeColors = ThemeColors()
    dark: ThemeColors = ThemeColors()


def coerce_theme(theme: Union[WeddingTheme, Dict[str, Any], None]) -> WeddingTheme:
    """Accept a stored theme dict (or nothing) and return a WeddingTheme"""
    if isinstance(theme, WeddingTheme):
        return theme
    return WeddingTheme.model_validate(theme or {})


def coerce_mode(value: Any) -> DisplayMode:
    """Unknown or missing preferences fall back to light mode"""
    try:
        return DisplayMode(value)
    except ValueError:
        return DisplayMode.LIGHT


def active_palette(
    theme: Union[WeddingTheme, Dict[str, Any], None],
    mode: DisplayMode,
) -> Dict[str, str]:
    """
    Overrides for the given display mode.

    Only tokens present in the selected palette are returned; absent tokens
    inherit the template defaults. Pure: a new dict on every call.
    """
    resolved = coerce_theme(theme)
    colors = resolved.dark if coerce_mode(mode) == DisplayMode.DARK else resolved.light
    return colors.to_tokens()


def merge_palette(defaults: Mapping[str, str], overrides: Mapping[str, str]) -> Mapping[str, str]:
    """Overlay overrides on template defaults into a new read-only mapping"""
    merged = dict(defaults)
    merged.update({token: value for token, value in overrides.items() if value})
    return MappingProxyType(merged)


def css_variable_name(token: str) -> str:
    """`primaryForeground` -> `--primary-foreground`"""
    return "--" + _CAMEL_BOUNDARY.sub(r"\1-\2", token).lower()


def palette_to_css_variables(palette: Mapping[str, str]) -> Dict[str, str]:
    return {css_variable_name(token): value for token, value in palette.items() if value}


def inline_style(palette: Mapping[str, str]) -> str:
    """Render a palette as an inline `style` value for the scoped wrapper"""
    return "; ".join(f"{name}: {value}" for name, value in palette_to_css_variables(palette).items())
