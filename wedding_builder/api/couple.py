"""
Couple dashboard endpoints

Couples are pre-authorized by email on the wedding record. They can see their
weddings and guests and edit name, couple emails and section content only.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Any, Dict, List
import structlog

from wedding_builder.core.database import get_session
from wedding_builder.core.dependencies import (
    get_current_claims,
    is_platform_admin,
    require_permission,
    require_wedding_access,
)
from wedding_builder.core.permissions import Permission
from wedding_builder.models import Wedding
from wedding_builder.schemas.wedding import CoupleWeddingUpdate, GuestRead, GuestStats, WeddingLinks, WeddingRead
from wedding_builder.services import guests, wedding_service

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/weddings", response_model=List[WeddingRead])
def list_my_weddings(
    claims: Dict[str, Any] = Depends(get_current_claims),
    session: Session = Depends(get_session),
):
    """Weddings the caller can manage"""
    if is_platform_admin(claims):
        return wedding_service.list_weddings(session)
    return wedding_service.list_weddings_for_email(session, claims["email"])


@router.get("/weddings/{wedding_id}", response_model=WeddingRead)
def get_my_wedding(wedding: Wedding = Depends(require_wedding_access)):
    return wedding


@router.patch(
    "/weddings/{wedding_id}",
    response_model=WeddingRead,
    dependencies=[Depends(require_permission(Permission.WEDDING_EDIT_CONTENT))],
)
def update_my_wedding(
    data: CoupleWeddingUpdate,
    wedding: Wedding = Depends(require_wedding_access),
    session: Session = Depends(get_session),
):
    """Restricted update; other fields are rejected by the schema"""
    return wedding_service.update_couple_fields(session, wedding, data)


@router.get("/weddings/{wedding_id}/links", response_model=WeddingLinks)
def get_my_links(wedding: Wedding = Depends(require_wedding_access)):
    return wedding_service.wedding_links(wedding)


@router.get(
    "/weddings/{wedding_id}/guests",
    response_model=List[GuestRead],
    dependencies=[Depends(require_permission(Permission.GUESTS_VIEW))],
)
def list_my_guests(
    wedding: Wedding = Depends(require_wedding_access),
    session: Session = Depends(get_session),
):
    return guests.list_guests(session, wedding.id)


@router.get(
    "/weddings/{wedding_id}/guests/stats",
    response_model=GuestStats,
    dependencies=[Depends(require_permission(Permission.GUESTS_VIEW))],
)
def get_my_guest_stats(
    wedding: Wedding = Depends(require_wedding_access),
    session: Session = Depends(get_session),
):
    return guests.guest_stats(session, wedding.id)
