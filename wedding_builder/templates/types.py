"""
Shared props contract for wedding templates

Every template version exports exactly one `render(props: TemplateProps) -> str`
entry point and receives the same props shape.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from wedding_builder.rendering.actions import SiteActions


@dataclass(frozen=True)
class WeddingSummary:
    """Wedding fields a template may display"""
    id: str
    name: str
    slug: str
    date: Optional[str] = None              # Display form, e.g. "June 14, 2026"
    wedding_date: Optional[str] = None      # Canonical yyyy-MM-dd, for the countdown
    navbar_logo_light_url: Optional[str] = None
    navbar_logo_dark_url: Optional[str] = None


@dataclass(frozen=True)
class SectionsBundle:
    """Enabled section keys (stored order) and raw stored content"""
    enabled: List[str] = field(default_factory=list)
    content: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TemplateProps:
    wedding: WeddingSummary
    palette: Mapping[str, str]
    sections: SectionsBundle
    is_preview: bool
    actions: "SiteActions"


RenderComponent = Callable[[TemplateProps], str]


@dataclass(frozen=True)
class TemplateMetadata:
    id: str
    name: str
    description: str
    versions: List[str]
    thumbnail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "thumbnail": self.thumbnail,
            "versions": list(self.versions),
        }
