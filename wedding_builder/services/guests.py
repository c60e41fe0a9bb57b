"""
Guest RSVP persistence and stats
"""

from typing import Dict, List
import uuid

from sqlmodel import Session, select
import structlog

from wedding_builder.models import Guest, RsvpStatus, Wedding
from wedding_builder.schemas.site import RsvpSubmission

logger = structlog.get_logger(__name__)


def list_guests(session: Session, wedding_id: uuid.UUID) -> List[Guest]:
    return list(session.exec(
        select(Guest).where(Guest.wedding_id == wedding_id).order_by(Guest.created_at)
    ).all())


def record_rsvp(session: Session, wedding: Wedding, submission: RsvpSubmission) -> Guest:
    """Create or update the guest identified by phone and store the answer"""
    guest = session.exec(
        select(Guest).where(
            Guest.wedding_id == wedding.id,
            Guest.phone == submission.phone,
        )
    ).first()

    if guest is None:
        guest = Guest(
            wedding_id=wedding.id,
            name=submission.name,
            phone=submission.phone,
        )
    else:
        guest.name = submission.name

    if submission.email:
        guest.email = str(submission.email)
    guest.record_rsvp(
        attending=submission.attending,
        party_size=submission.party_size,
        dietary_notes=submission.dietary_notes,
    )

    session.add(guest)
    session.commit()
    session.refresh(guest)
    logger.info("RSVP recorded", wedding_id=str(wedding.id), guest_id=str(guest.id), rsvp_status=guest.rsvp_status)
    return guest


def guest_stats(session: Session, wedding_id: uuid.UUID) -> Dict[str, int]:
    """Guest counts per RSVP status"""
    guests = list_guests(session, wedding_id)
    confirmed = [g for g in guests if g.rsvp_status == RsvpStatus.CONFIRMED]
    return {
        "total": len(guests),
        "confirmed": len(confirmed),
        "declined": sum(1 for g in guests if g.rsvp_status == RsvpStatus.DECLINED),
        "pending": sum(1 for g in guests if g.rsvp_status == RsvpStatus.PENDING),
        "attending_headcount": sum(g.party_size for g in confirmed),
    }
