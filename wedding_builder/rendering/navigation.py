"""
Navbar items derived from enabled sections
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from wedding_builder.content.sections import (
    MalformedSectionContent,
    SectionKey,
    coerce_section_key,
    parse_section,
    section_title,
)

SECTION_LABEL_DEFAULTS: Dict[SectionKey, str] = {
    SectionKey.HERO: "Home",
    SectionKey.COUNTDOWN: "Countdown",
    SectionKey.ITINERARY: "Itinerary",
    SectionKey.PHOTOS: "Photos",
    SectionKey.LOCATION: "Location",
    SectionKey.LODGING: "Lodging",
    SectionKey.DRESS_CODE: "Dress Code",
    SectionKey.GIFTS: "Gifts",
    SectionKey.RSVP: "RSVP",
}

# Navbar order; hero, countdown and photos are never linked
NAVBAR_ORDER: List[SectionKey] = [
    SectionKey.ITINERARY,
    SectionKey.LOCATION,
    SectionKey.LODGING,
    SectionKey.DRESS_CODE,
    SectionKey.GIFTS,
    SectionKey.RSVP,
]


@dataclass(frozen=True)
class NavItem:
    key: str
    label: str
    href: str

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "label": self.label, "href": self.href}


def build_nav(enabled: Iterable[Any], content: Mapping[str, Any]) -> List[NavItem]:
    """
    Nav items for the enabled sections, in navbar order.

    The label is the section's own title when its content is valid and has
    one, else a fixed default.
    Stored order of `enabled` does not matter.
    """
    enabled_keys = {key for key in (coerce_section_key(value) for value in enabled) if key is not None}
    content = content or {}

    items = []
    for key in NAVBAR_ORDER:
        if key not in enabled_keys:
            continue
        try:
            parsed = parse_section(key, content.get(key.value))
        except MalformedSectionContent:
            parsed = None
        label = section_title(parsed) or SECTION_LABEL_DEFAULTS[key]
        items.append(NavItem(key=key.value, label=label, href=f"#{key.value}"))
    return items
