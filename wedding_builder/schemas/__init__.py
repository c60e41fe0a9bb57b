"""
Schemas module
"""

from wedding_builder.schemas.site import GiftContribution, InteractionResponse, RsvpSubmission
from wedding_builder.schemas.wedding import (
    CoupleWeddingUpdate,
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

__all__ = [
    "GiftContribution",
    "InteractionResponse",
    "RsvpSubmission",
    "CoupleWeddingUpdate",
    "GuestRead",
    "GuestStats",
    "SectionMove",
    "SectionToggle",
    "StatusUpdate",
    "ThemeUpdate",
    "WeddingCreate",
    "WeddingLinks",
    "WeddingRead",
    "WeddingUpdate",
]
