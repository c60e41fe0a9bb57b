"""
Public wedding page rendering

Resolves the wedding's pinned template version, builds its props and wraps the
output in the site layout. Every failure path produces an HTML status page
instead of an exception.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError
import structlog

from wedding_builder.content.theme import DisplayMode, active_palette, coerce_mode
from wedding_builder.models import Wedding
from wedding_builder.rendering import pages
from wedding_builder.rendering.actions import SiteActions
from wedding_builder.rendering.dates import format_wedding_date
from wedding_builder.rendering.navigation import build_nav
from wedding_builder.templates.registry import (
    TemplateNotFoundError,
    TemplateRegistry,
    TemplateResolutionError,
    VersionNotFoundError,
    get_template_registry,
)
from wedding_builder.templates.types import SectionsBundle, TemplateProps, WeddingSummary

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RenderedPage:
    status_code: int
    html: str
    kind: str   # site, not_found, coming_soon, template_error


def summarize(wedding: Wedding) -> WeddingSummary:
    return WeddingSummary(
        id=str(wedding.id),
        name=wedding.name,
        slug=wedding.slug,
        date=format_wedding_date(wedding.wedding_date),
        wedding_date=wedding.wedding_date,
        navbar_logo_light_url=wedding.navbar_logo_light_url,
        navbar_logo_dark_url=wedding.navbar_logo_dark_url,
    )


def palette_for(wedding: Wedding, mode: DisplayMode) -> Dict[str, str]:
    """Theme overrides for the mode; an unreadable stored theme means template defaults"""
    try:
        return active_palette(wedding.theme, mode)
    except ValidationError as e:
        logger.warning("Invalid stored theme, using template defaults", slug=wedding.slug, error=str(e))
        return {}


def build_props(wedding: Wedding, mode: DisplayMode, is_preview: bool, actions: SiteActions) -> TemplateProps:
    """Props for one render; the palette is a fresh dict owned by this call"""
    return TemplateProps(
        wedding=summarize(wedding),
        palette=palette_for(wedding, mode),
        sections=SectionsBundle(
            enabled=list(wedding.enabled_sections or []),
            content=dict(wedding.section_content or {}),
        ),
        is_preview=is_preview,
        actions=actions,
    )


def navbar_logo(summary: WeddingSummary, mode: DisplayMode) -> Optional[str]:
    """Logo for the display mode; None means render the wedding name instead"""
    if mode == DisplayMode.DARK:
        return summary.navbar_logo_dark_url or None
    return summary.navbar_logo_light_url or None


def render_wedding_page(
    wedding: Optional[Wedding],
    actions: SiteActions,
    is_preview: bool = False,
    mode: Any = DisplayMode.LIGHT,
    registry: Optional[TemplateRegistry] = None,
) -> RenderedPage:
    if wedding is None:
        return RenderedPage(404, pages.not_found_page(), "not_found")

    if not is_preview and not wedding.is_publicly_visible():
        return RenderedPage(200, pages.coming_soon_page(), "coming_soon")

    registry = registry or get_template_registry()
    try:
        component = registry.resolve(wedding.template_id, wedding.template_version)
    except (TemplateNotFoundError, VersionNotFoundError):
        return RenderedPage(404, pages.template_error_page(), "template_error")
    except TemplateResolutionError:
        return RenderedPage(503, pages.template_error_page(), "template_error")

    mode = coerce_mode(mode)
    props = build_props(wedding, mode, is_preview, actions)

    try:
        body = component(props)
    except Exception as e:
        logger.error(
            "Template render failed",
            slug=wedding.slug,
            template_id=wedding.template_id,
            version=wedding.template_version,
            error=str(e),
            exc_info=True,
        )
        return RenderedPage(503, pages.template_error_page(), "template_error")

    html = pages.render_layout(
        title=wedding.name,
        wedding_name=wedding.name,
        body=body,
        nav=build_nav(props.sections.enabled, props.sections.content),
        mode=mode.value,
        logo_url=navbar_logo(props.wedding, mode),
        preview=is_preview,
    )
    return RenderedPage(200, html, "site")
