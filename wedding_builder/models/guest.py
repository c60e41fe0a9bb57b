"""
Guest model - invited guests and their RSVP state
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid


class RsvpStatus(str, Enum):
    """Guest RSVP status"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"


class Guest(SQLModel, table=True):
    """Guest of a wedding"""

    __tablename__ = "guests"
    __table_args__ = (
        UniqueConstraint("wedding_id", "phone", name="uq_guest_wedding_phone"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    wedding_id: uuid.UUID = Field(
        foreign_key="weddings.id",
        index=True,
        description="Wedding this guest belongs to"
    )
    name: str = Field(max_length=200)
    phone: str = Field(index=True, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)

    rsvp_status: RsvpStatus = Field(default=RsvpStatus.PENDING, index=True)
    party_size: int = Field(default=1, ge=1, description="Guest plus companions")
    dietary_notes: Optional[str] = Field(default=None, max_length=1000)
    whatsapp_consent: bool = Field(default=False)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    def record_rsvp(self, attending: bool, party_size: int = 1, dietary_notes: Optional[str] = None) -> None:
        """Apply an RSVP answer"""
        self.rsvp_status = RsvpStatus.CONFIRMED if attending else RsvpStatus.DECLINED
        self.party_size = party_size if attending else 1
        self.dietary_notes = dietary_notes if attending else None
        self.updated_at = datetime.utcnow()
