"""
Wedding administration endpoints (platform admins)
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status
from sqlmodel import Session
from typing import List
import structlog
import uuid

from wedding_builder.api.errors import http_error
from wedding_builder.core.database import get_session
from wedding_builder.core.dependencies import require_platform_admin
from wedding_builder.core.events import WeddingCreated, WeddingStatusChanged, event_bus
from wedding_builder.core.exceptions import WeddingError
from wedding_builder.models import Wedding
from wedding_builder.schemas.wedding import (
    GuestRead,
    GuestStats,
    SectionMove,
    SectionToggle,
    StatusUpdate,
    ThemeUpdate,
    WeddingCreate,
    WeddingLinks,
    WeddingRead,
    WeddingUpdate,
)
from wedding_builder.services import guests, wedding_service
from wedding_builder.services.qr import generate_qr_png
from wedding_builder.templates.registry import TemplateRegistry, get_template_registry

logger = structlog.get_logger(__name__)
router = APIRouter(dependencies=[Depends(require_platform_admin)])


def _get_or_404(session: Session, wedding_id: uuid.UUID) -> Wedding:
    try:
        return wedding_service.get_wedding(session, wedding_id)
    except WeddingError as e:
        raise http_error(e)


@router.post("/", response_model=WeddingRead, status_code=status.HTTP_201_CREATED)
def create_wedding(
    data: WeddingCreate,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    registry: TemplateRegistry = Depends(get_template_registry),
):
    """Provision a new draft wedding"""
    try:
        wedding = wedding_service.create_wedding(session, data, registry)
    except WeddingError as e:
        logger.warning("Failed to create wedding", slug=data.slug, error=str(e))
        raise http_error(e)

    background_tasks.add_task(event_bus.publish, WeddingCreated(
        wedding_id=wedding.id,
        slug=wedding.slug,
        template_id=wedding.template_id,
        template_version=wedding.template_version,
    ))
    return wedding


@router.get("/", response_model=List[WeddingRead])
def list_weddings(
    skip: int = 0,
    limit: int = 100,
    session: Session = Depends(get_session),
):
    return wedding_service.list_weddings(session, skip=skip, limit=limit)


@router.get("/{wedding_id}", response_model=WeddingRead)
def get_wedding(
    wedding_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return _get_or_404(session, wedding_id)


@router.patch("/{wedding_id}", response_model=WeddingRead)
def update_wedding(
    wedding_id: uuid.UUID,
    data: WeddingUpdate,
    session: Session = Depends(get_session),
    registry: TemplateRegistry = Depends(get_template_registry),
):
    """Update wedding fields; slug and template are locked once live"""
    wedding = _get_or_404(session, wedding_id)
    try:
        return wedding_service.update_wedding(session, wedding, data, registry)
    except WeddingError as e:
        raise http_error(e)


@router.put("/{wedding_id}/theme", response_model=WeddingRead)
def update_theme(
    wedding_id: uuid.UUID,
    theme: ThemeUpdate,
    session: Session = Depends(get_session),
):
    wedding = _get_or_404(session, wedding_id)
    return wedding_service.update_theme(session, wedding, theme)


@router.post("/{wedding_id}/status", response_model=WeddingRead)
def change_status(
    wedding_id: uuid.UUID,
    data: StatusUpdate,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
):
    """Move the wedding through draft, pending_payment and live"""
    wedding = _get_or_404(session, wedding_id)
    try:
        previous = wedding_service.transition_status(session, wedding, data.status)
    except WeddingError as e:
        raise http_error(e)

    background_tasks.add_task(event_bus.publish, WeddingStatusChanged(
        wedding_id=wedding.id,
        from_status=previous.value,
        to_status=data.status.value,
    ))
    return wedding


@router.delete("/{wedding_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_wedding(
    wedding_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """Delete a draft wedding"""
    wedding = _get_or_404(session, wedding_id)
    try:
        wedding_service.delete_wedding(session, wedding)
    except WeddingError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{wedding_id}/sections/toggle", response_model=WeddingRead)
def toggle_section(
    wedding_id: uuid.UUID,
    data: SectionToggle,
    session: Session = Depends(get_session),
):
    wedding = _get_or_404(session, wedding_id)
    try:
        enabled = wedding_service.toggle_section(list(wedding.enabled_sections), data.section)
    except WeddingError as e:
        raise http_error(e)
    return wedding_service.set_enabled_sections(session, wedding, enabled)


@router.post("/{wedding_id}/sections/move", response_model=WeddingRead)
def move_section(
    wedding_id: uuid.UUID,
    data: SectionMove,
    session: Session = Depends(get_session),
):
    wedding = _get_or_404(session, wedding_id)
    enabled = wedding_service.move_section(list(wedding.enabled_sections), data.index, data.direction)
    return wedding_service.set_enabled_sections(session, wedding, enabled)


@router.get("/{wedding_id}/links", response_model=WeddingLinks)
def get_links(
    wedding_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """Preview and live URLs"""
    wedding = _get_or_404(session, wedding_id)
    return wedding_service.wedding_links(wedding)


@router.get("/{wedding_id}/qr", response_class=Response)
def get_qr_code(
    wedding_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """PNG QR code of the live URL"""
    wedding = _get_or_404(session, wedding_id)
    if not wedding.is_live():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="QR codes are only available for live weddings",
        )
    png = generate_qr_png(wedding_service.wedding_links(wedding)["live_url"])
    return Response(content=png, media_type="image/png")


@router.get("/{wedding_id}/guests", response_model=List[GuestRead])
def list_guests(
    wedding_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    wedding = _get_or_404(session, wedding_id)
    return guests.list_guests(session, wedding.id)


@router.get("/{wedding_id}/guests/stats", response_model=GuestStats)
def get_guest_stats(
    wedding_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """RSVP counts for the wedding"""
    wedding = _get_or_404(session, wedding_id)
    return guests.guest_stats(session, wedding.id)
