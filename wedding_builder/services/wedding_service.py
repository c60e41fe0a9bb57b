"""
Wedding provisioning and editing

Platform admins own every field; couples may only edit name, couple emails and
section content. Slug and template binding freeze once a wedding is live.
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from sqlmodel import Session, select
import structlog

from wedding_builder.content.sections import MANDATORY_SECTIONS, SectionKey, coerce_section_key
from wedding_builder.content.theme import WeddingTheme
from wedding_builder.core.config import get_settings
from wedding_builder.core.exceptions import (
    InvalidSectionsError,
    InvalidSlugError,
    InvalidTransitionError,
    SlugConflictError,
    TemplateLockedError,
    UnknownTemplateError,
    WeddingNotFoundError,
)
from wedding_builder.core.permissions import COUPLE_EDITABLE_FIELDS
from wedding_builder.models import GiftPayment, Guest, Wedding, WeddingStatus
from wedding_builder.schemas.wedding import CoupleWeddingUpdate, WeddingCreate, WeddingUpdate
from wedding_builder.templates.registry import TemplateRegistry

logger = structlog.get_logger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

# Admin-editable fields that may be cleared with an explicit null
NULLABLE_FIELDS = frozenset({"navbar_logo_light_url", "navbar_logo_dark_url", "wedding_date"})


def validate_slug(slug: str) -> str:
    """Slugs are stored canonical: lowercase letters, digits and hyphens"""
    if not SLUG_PATTERN.match(slug):
        raise InvalidSlugError("Slug must contain only lowercase letters, numbers, and hyphens")
    return slug


def _ensure_slug_available(session: Session, slug: str, exclude_id: Optional[uuid.UUID] = None) -> None:
    existing = session.exec(select(Wedding).where(Wedding.slug == slug)).first()
    if existing and existing.id != exclude_id:
        raise SlugConflictError("A wedding with this slug already exists")


def _ensure_template(registry: TemplateRegistry, template_id: str, version: str) -> None:
    if not registry.is_valid(template_id, version):
        raise UnknownTemplateError(f"Unknown template: {template_id}@{version}")


def get_wedding(session: Session, wedding_id: uuid.UUID) -> Wedding:
    wedding = session.get(Wedding, wedding_id)
    if not wedding:
        raise WeddingNotFoundError("Wedding not found")
    return wedding


def list_weddings(session: Session, skip: int = 0, limit: int = 100) -> List[Wedding]:
    return list(session.exec(
        select(Wedding).order_by(Wedding.created_at.desc()).offset(skip).limit(limit)
    ).all())


def list_weddings_for_email(session: Session, email: str) -> List[Wedding]:
    """Weddings whose couple emails include the given address"""
    # couple_emails is a JSON column, so the match happens in Python
    return [w for w in session.exec(select(Wedding)).all() if w.has_couple_email(email)]


def create_wedding(session: Session, data: WeddingCreate, registry: TemplateRegistry) -> Wedding:
    """Provision a draft wedding with all mandatory sections enabled"""
    settings = get_settings()
    slug = validate_slug(data.slug)
    _ensure_slug_available(session, slug)

    template_id = data.template_id or settings.DEFAULT_TEMPLATE_ID
    template_version = data.template_version or registry.latest_version(template_id) or settings.DEFAULT_TEMPLATE_VERSION
    _ensure_template(registry, template_id, template_version)

    wedding = Wedding(
        name=data.name,
        slug=slug,
        status=WeddingStatus.DRAFT,
        template_id=template_id,
        template_version=template_version,
        enabled_sections=[key.value for key in MANDATORY_SECTIONS],
        section_content={},
        theme={"light": {}, "dark": {}},
        couple_emails=[str(email).lower() for email in data.couple_emails],
        wedding_date=data.wedding_date,
    )
    session.add(wedding)
    session.commit()
    session.refresh(wedding)
    logger.info("Wedding created", wedding_id=str(wedding.id), slug=slug, template=f"{template_id}@{template_version}")
    return wedding


def update_wedding(session: Session, wedding: Wedding, data: WeddingUpdate, registry: TemplateRegistry) -> Wedding:
    """Apply an admin update; nulls are ignored except on clearable fields"""
    updates = {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }

    template_change = any(
        field in updates and updates[field] != getattr(wedding, field)
        for field in ("template_id", "template_version")
    )
    if template_change:
        if not wedding.can_change_template():
            raise TemplateLockedError("Cannot change template for a live wedding")
        _ensure_template(
            registry,
            updates.get("template_id", wedding.template_id),
            updates.get("template_version", wedding.template_version),
        )

    if "slug" in updates and updates["slug"] != wedding.slug:
        if not wedding.can_change_slug():
            raise TemplateLockedError("Cannot change slug for a live wedding")
        validate_slug(updates["slug"])
        _ensure_slug_available(session, updates["slug"], exclude_id=wedding.id)

    if "couple_emails" in updates:
        updates["couple_emails"] = [str(email).lower() for email in updates["couple_emails"]]

    for key, value in updates.items():
        setattr(wedding, key, value)

    return _save(session, wedding, "Wedding updated")


def update_couple_fields(session: Session, wedding: Wedding, data: CoupleWeddingUpdate) -> Wedding:
    """Apply the restricted subset couples may edit"""
    updates = data.model_dump(exclude_unset=True, include=set(COUPLE_EDITABLE_FIELDS))
    if updates.get("name") is not None:
        wedding.name = updates["name"]
    if updates.get("couple_emails") is not None:
        wedding.couple_emails = [str(email).lower() for email in updates["couple_emails"]]
    if updates.get("section_content") is not None:
        wedding.section_content = updates["section_content"]
    return _save(session, wedding, "Wedding updated by couple")


def update_theme(session: Session, wedding: Wedding, theme: WeddingTheme) -> Wedding:
    """Replace light and dark overrides"""
    wedding.theme = {
        "light": theme.light.to_tokens(),
        "dark": theme.dark.to_tokens(),
    }
    return _save(session, wedding, "Wedding theme updated")


def transition_status(session: Session, wedding: Wedding, status: WeddingStatus) -> WeddingStatus:
    """Move the wedding through its lifecycle; returns the previous status"""
    previous = WeddingStatus(wedding.status)
    try:
        wedding.transition_to(status)
    except ValueError as e:
        raise InvalidTransitionError(str(e)) from e
    _save(session, wedding, "Wedding status changed")
    logger.info("Wedding status transition", wedding_id=str(wedding.id), from_status=previous.value, to_status=status.value)
    return previous


def delete_wedding(session: Session, wedding: Wedding) -> None:
    """Delete a draft wedding together with its guests and gift payments"""
    if not wedding.can_delete():
        raise InvalidTransitionError("Can only delete draft weddings")

    for model in (Guest, GiftPayment):
        for row in session.exec(select(model).where(model.wedding_id == wedding.id)).all():
            session.delete(row)
    session.delete(wedding)
    session.commit()
    logger.info("Wedding deleted", wedding_id=str(wedding.id), slug=wedding.slug)


def toggle_section(enabled: List[str], section: Any) -> List[str]:
    """
    Enable or disable a section.

    Disabling removes it. Enabling appends it, except the countdown which goes
    right after the hero (or first when there is no hero).
    """
    key = coerce_section_key(section)
    if key is None:
        raise InvalidSectionsError(f"Unknown section: {section}")

    if key.value in enabled:
        return [s for s in enabled if s != key.value]

    if key == SectionKey.COUNTDOWN:
        if SectionKey.HERO.value in enabled:
            hero_index = enabled.index(SectionKey.HERO.value)
            return enabled[: hero_index + 1] + [key.value] + enabled[hero_index + 1:]
        return [key.value] + list(enabled)

    return list(enabled) + [key.value]


def move_section(enabled: List[str], index: int, direction: str) -> List[str]:
    """Swap a section with its neighbour; out-of-bounds moves are no-ops"""
    target = index - 1 if direction == "up" else index + 1
    if index < 0 or index >= len(enabled) or target < 0 or target >= len(enabled):
        return list(enabled)

    result = list(enabled)
    result[index], result[target] = result[target], result[index]
    return result


def set_enabled_sections(session: Session, wedding: Wedding, enabled: List[str]) -> Wedding:
    wedding.enabled_sections = enabled
    return _save(session, wedding, "Wedding sections updated")


def wedding_links(wedding: Wedding, scheme: str = "https") -> Dict[str, Any]:
    """Preview and live URLs for sharing"""
    settings = get_settings()
    return {
        "preview_url": f"{scheme}://{settings.BASE_DOMAIN}{settings.PREVIEW_PATH_PREFIX}/{wedding.slug}",
        "live_url": f"{scheme}://{wedding.slug}.{settings.BASE_DOMAIN}",
        "is_live": wedding.is_live(),
    }


def _save(session: Session, wedding: Wedding, message: str) -> Wedding:
    wedding.updated_at = datetime.utcnow()
    session.add(wedding)
    session.commit()
    session.refresh(wedding)
    logger.info(message, wedding_id=str(wedding.id))
    return wedding
