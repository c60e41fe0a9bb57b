"""
Schemas for the admin and couple wedding APIs
"""

from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Any, Dict, List, Literal, Optional
from datetime import date, datetime
import uuid

from wedding_builder.content.sections import validate_enabled_sections
from wedding_builder.content.theme import WeddingTheme
from wedding_builder.models.wedding import GiftMode, PlatformPaymentStatus, WeddingStatus


def _check_wedding_date(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError("wedding_date must be a yyyy-MM-dd date")
    if len(value) != 10:
        raise ValueError("wedding_date must be a yyyy-MM-dd date")
    return value


class WeddingCreate(BaseModel):
    """Admin wedding provisioning"""
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=63)
    template_id: Optional[str] = None
    template_version: Optional[str] = None
    couple_emails: List[EmailStr] = Field(default_factory=list)
    wedding_date: Optional[str] = None

    @field_validator("wedding_date")
    @classmethod
    def check_wedding_date(cls, value: Optional[str]) -> Optional[str]:
        return _check_wedding_date(value)


class WeddingUpdate(BaseModel):
    """Admin wedding update; omitted fields are left unchanged"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=63)
    template_id: Optional[str] = None
    template_version: Optional[str] = None
    enabled_sections: Optional[List[str]] = None
    section_content: Optional[Dict[str, Any]] = None
    couple_emails: Optional[List[EmailStr]] = None
    navbar_logo_light_url: Optional[str] = None
    navbar_logo_dark_url: Optional[str] = None
    wedding_date: Optional[str] = None
    gift_mode: Optional[GiftMode] = None
    payment_status: Optional[PlatformPaymentStatus] = None

    @field_validator("wedding_date")
    @classmethod
    def check_wedding_date(cls, value: Optional[str]) -> Optional[str]:
        return _check_wedding_date(value)

    @field_validator("enabled_sections")
    @classmethod
    def check_enabled_sections(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        return validate_enabled_sections(value)


class CoupleWeddingUpdate(BaseModel):
    """Fields a couple may edit from their dashboard"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    couple_emails: Optional[List[EmailStr]] = None
    section_content: Optional[Dict[str, Any]] = None

    model_config = {"extra": "forbid"}


class StatusUpdate(BaseModel):
    status: WeddingStatus


class SectionToggle(BaseModel):
    section: str


class SectionMove(BaseModel):
    index: int = Field(..., ge=0)
    direction: Literal["up", "down"]


class ThemeUpdate(WeddingTheme):
    """Full replacement of light and dark overrides"""


class WeddingRead(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    status: WeddingStatus
    template_id: str
    template_version: str
    enabled_sections: List[str]
    section_content: Dict[str, Any]
    theme: Dict[str, Any]
    couple_emails: List[str]
    navbar_logo_light_url: Optional[str] = None
    navbar_logo_dark_url: Optional[str] = None
    wedding_date: Optional[str] = None
    gift_mode: GiftMode
    payment_status: PlatformPaymentStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WeddingLinks(BaseModel):
    preview_url: str
    live_url: str
    is_live: bool


class GuestRead(BaseModel):
    id: uuid.UUID
    name: str
    phone: str
    email: Optional[str] = None
    rsvp_status: str
    party_size: int
    dietary_notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class GuestStats(BaseModel):
    total: int
    confirmed: int
    declined: int
    pending: int
    attending_headcount: int
