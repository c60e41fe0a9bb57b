"""
Shared section rendering for template versions

Versions declare their section markup as Jinja snippets and call
`render_sections` with an ordered list of section keys. Each section is parsed
and rendered on its own: malformed content renders the section's fallback
shell, and a section whose markup fails renders nothing, without affecting
its siblings.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from jinja2 import BaseLoader, Environment, Template
from markupsafe import Markup
import structlog

from wedding_builder.content.sections import (
    MalformedSectionContent,
    SectionKey,
    SectionModel,
    parse_section,
)
from wedding_builder.content.theme import inline_style, merge_palette
from wedding_builder.templates.types import TemplateProps

logger = structlog.get_logger(__name__)

env = Environment(loader=BaseLoader(), autoescape=True)

_wrapper = env.from_string('<div class="wedding-template {{ css_class }}" style="{{ style }}">\n{{ body }}\n</div>')


def compile_snippets(snippets: Mapping[SectionKey, str]) -> Dict[SectionKey, Template]:
    return {key: env.from_string(source) for key, source in snippets.items()}


def section_content(key: SectionKey, props: TemplateProps) -> Optional[SectionModel]:
    """Parsed content for one section; None when absent or malformed"""
    raw = props.sections.content.get(key.value)
    try:
        return parse_section(key, raw)
    except MalformedSectionContent as e:
        logger.warning(
            "Malformed section content, rendering fallback",
            slug=props.wedding.slug,
            section=e.key,
            errors=len(e.errors),
        )
        return None


def render_section(
    key: SectionKey,
    template: Template,
    props: TemplateProps,
    extra: Optional[Mapping[str, Any]] = None,
) -> str:
    context = {
        "key": key.value,
        "content": section_content(key, props),
        "wedding": props.wedding,
        "actions": props.actions,
        "is_preview": props.is_preview,
    }
    context.update(extra or {})
    try:
        return template.render(**context)
    except Exception as e:
        logger.error(
            "Section render failed",
            slug=props.wedding.slug,
            section=key.value,
            error=str(e),
            exc_info=True,
        )
        return ""


def render_sections(
    order: Iterable[SectionKey],
    templates: Mapping[SectionKey, Template],
    props: TemplateProps,
    extra: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render the given sections in order, each wrapped in an anchor target"""
    parts = []
    for key in order:
        template = templates.get(key)
        if template is None:
            continue
        body = render_section(key, template, props, extra)
        if body:
            parts.append(f'<div id="{key.value}" class="wedding-section">{body}</div>')
    return "\n".join(parts)


def scoped_wrapper(css_class: str, defaults: Mapping[str, str], props: TemplateProps, body: str) -> str:
    """
    Wrap template output in an element carrying the merged palette.

    CSS variables are scoped to this element, so they never touch the host page
    or any other render.
    """
    palette = merge_palette(defaults, props.palette)
    return _wrapper.render(css_class=css_class, style=inline_style(palette), body=Markup(body))


def enabled_keys(props: TemplateProps) -> list:
    """Enabled sections as SectionKeys, in stored order, unknown keys dropped"""
    keys = []
    for value in props.sections.enabled:
        try:
            keys.append(SectionKey(value))
        except ValueError:
            logger.warning("Ignoring unknown enabled section", slug=props.wedding.slug, section=value)
    return keys
