"""
Section content schema

Each section of a wedding page has its own content record. Stored content is a
loose JSON map keyed by section key (camelCase, as editors write it); this
module turns it into a closed set of typed records, one optional slot per
section.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
import structlog

logger = structlog.get_logger(__name__)


class SectionKey(str, Enum):
    """Section identifiers"""
    HERO = "hero"
    COUNTDOWN = "countdown"     # Pseudo-section, computed from the wedding date
    ITINERARY = "itinerary"
    PHOTOS = "photos"
    LOCATION = "location"
    LODGING = "lodging"
    DRESS_CODE = "dressCode"
    GIFTS = "gifts"
    RSVP = "rsvp"


# Sections every template must support; new weddings start with all of them
MANDATORY_SECTIONS: List[SectionKey] = [
    SectionKey.HERO,
    SectionKey.ITINERARY,
    SectionKey.PHOTOS,
    SectionKey.LOCATION,
    SectionKey.LODGING,
    SectionKey.DRESS_CODE,
    SectionKey.GIFTS,
    SectionKey.RSVP,
]


class MalformedSectionContent(ValueError):
    """Stored content for a section does not match its schema"""

    def __init__(self, key: str, errors: list):
        self.key = key
        self.errors = errors
        super().__init__(f"Malformed content for section '{key}': {len(errors)} error(s)")


class SectionModel(BaseModel):
    """Base for section content records (camelCase on the wire)"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class HeroContent(SectionModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    date: Optional[str] = None
    background_image: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None


class ItineraryItem(SectionModel):
    time: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None


class ItineraryContent(SectionModel):
    title: Optional[str] = None
    items: List[ItineraryItem] = Field(default_factory=list)


class PhotoImage(SectionModel):
    url: str
    alt: Optional[str] = None
    caption: Optional[str] = None


class PhotosContent(SectionModel):
    title: Optional[str] = None
    images: List[PhotoImage] = Field(default_factory=list)


class LocationContent(SectionModel):
    title: Optional[str] = None
    venue_name: str
    address: str
    map_url: Optional[str] = None
    directions: Optional[str] = None


class LodgingItem(SectionModel):
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None


class LodgingContent(SectionModel):
    title: Optional[str] = None
    items: List[LodgingItem] = Field(default_factory=list)


class DressCodeContent(SectionModel):
    title: Optional[str] = None
    description: str
    examples: List[str] = Field(default_factory=list)


class GiftItem(SectionModel):
    id: str
    name: str
    description: Optional[str] = None
    price_in_cents: int = Field(ge=0)
    image_url: Optional[str] = None
    external_url: Optional[str] = None

    @property
    def price_display(self) -> str:
        return f"${self.price_in_cents / 100:.2f}"


class GiftsContent(SectionModel):
    title: Optional[str] = None
    description: Optional[str] = None
    mode: Literal["wishlist", "gifts"] = "wishlist"
    wishlist_url: Optional[str] = None
    items: List[GiftItem] = Field(default_factory=list)

    def find_gift(self, gift_id: str) -> Optional[GiftItem]:
        for item in self.items:
            if item.id == gift_id:
                return item
        return None


class RsvpContent(SectionModel):
    title: Optional[str] = None
    description: Optional[str] = None
    deadline: Optional[str] = None


SECTION_MODELS: Dict[SectionKey, Type[SectionModel]] = {
    SectionKey.HERO: HeroContent,
    SectionKey.ITINERARY: ItineraryContent,
    SectionKey.PHOTOS: PhotosContent,
    SectionKey.LOCATION: LocationContent,
    SectionKey.LODGING: LodgingContent,
    SectionKey.DRESS_CODE: DressCodeContent,
    SectionKey.GIFTS: GiftsContent,
    SectionKey.RSVP: RsvpContent,
}


class SectionContentMap(BaseModel):
    """Parsed content, one explicit optional slot per section"""
    model_config = ConfigDict(frozen=True)

    hero: Optional[HeroContent] = None
    itinerary: Optional[ItineraryContent] = None
    photos: Optional[PhotosContent] = None
    location: Optional[LocationContent] = None
    lodging: Optional[LodgingContent] = None
    dress_code: Optional[DressCodeContent] = None
    gifts: Optional[GiftsContent] = None
    rsvp: Optional[RsvpContent] = None

    def get(self, key: SectionKey) -> Optional[SectionModel]:
        if key == SectionKey.DRESS_CODE:
            return self.dress_code
        if key == SectionKey.COUNTDOWN:
            return None
        return getattr(self, key.value)


def coerce_section_key(value: Any) -> Optional[SectionKey]:
    """Return the SectionKey for a stored value, or None when unknown"""
    if isinstance(value, SectionKey):
        return value
    try:
        return SectionKey(value)
    except ValueError:
        return None


def parse_section(key: SectionKey, raw: Any) -> Optional[SectionModel]:
    """
    Parse stored content for one section.

    Returns None when the content is absent or empty. Raises
    MalformedSectionContent when it is present but does not fit the schema.
    """
    model = SECTION_MODELS.get(key)
    if model is None or raw is None:
        return None
    if isinstance(raw, SectionModel):
        return raw
    if not isinstance(raw, dict):
        raise MalformedSectionContent(key.value, [{"msg": f"expected an object, got {type(raw).__name__}"}])
    if not raw:
        return None

    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedSectionContent(key.value, e.errors()) from e


def parse_section_content(raw_map: Optional[Dict[str, Any]]) -> SectionContentMap:
    """Parse every known section independently, dropping malformed ones"""
    parsed: Dict[str, SectionModel] = {}
    for raw_key, raw in (raw_map or {}).items():
        key = coerce_section_key(raw_key)
        if key is None or key not in SECTION_MODELS:
            logger.debug("Ignoring content for unknown section", section=raw_key)
            continue
        try:
            content = parse_section(key, raw)
        except MalformedSectionContent as e:
            logger.warning("Dropping malformed section content", section=e.key, errors=len(e.errors))
            continue
        if content is not None:
            field = "dress_code" if key == SectionKey.DRESS_CODE else key.value
            parsed[field] = content
    return SectionContentMap(**parsed)


def section_title(raw: Any) -> Optional[str]:
    """Non-empty `title` of stored or parsed content, if any"""
    if isinstance(raw, SectionModel):
        title = getattr(raw, "title", None)
    elif isinstance(raw, dict):
        title = raw.get("title")
    else:
        return None
    if isinstance(title, str) and title.strip():
        return title
    return None


def validate_enabled_sections(keys: Iterable[Any]) -> List[str]:
    """
    Validate an ordered list of enabled section keys.

    Raises ValueError for unknown keys or duplicates. Order is preserved.
    """
    seen = set()
    result = []
    for value in keys:
        key = coerce_section_key(value)
        if key is None:
            raise ValueError(f"Unknown section: {value}")
        if key in seen:
            raise ValueError(f"Duplicate section: {key.value}")
        seen.add(key)
        result.append(key.value)
    return result
