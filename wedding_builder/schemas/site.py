"""
Schemas for guest interactions on the public wedding site
"""

from pydantic import BaseModel, Field, EmailStr
from typing import Optional


class RsvpSubmission(BaseModel):
    """RSVP form as submitted by a guest"""
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=5, max_length=50)
    email: Optional[EmailStr] = None
    attending: bool
    plus_ones: int = Field(default=0, ge=0, le=3, description="Companions besides the guest")
    dietary_notes: Optional[str] = Field(default=None, max_length=1000)

    @property
    def party_size(self) -> int:
        return 1 + self.plus_ones if self.attending else 1


class GiftContribution(BaseModel):
    """Gift contribution request"""
    guest_name: str = Field(..., min_length=1, max_length=200)
    amount_cents: Optional[int] = Field(
        default=None,
        gt=0,
        description="Contribution amount; defaults to the full gift price"
    )


class InteractionResponse(BaseModel):
    """Outcome of an RSVP or gift action"""
    ok: bool
    simulated: bool = False
    message: str
    reference: Optional[str] = None
    redirect_url: Optional[str] = None
