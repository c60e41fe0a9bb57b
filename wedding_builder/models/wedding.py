"""
Wedding model - one tenant of the platform, with its lifecycle state machine
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON
from datetime import datetime
from typing import Any, Dict, List, Optional
from enum import Enum
import uuid


class WeddingStatus(str, Enum):
    """Lifecycle status of a wedding site"""
    DRAFT = "draft"                         # Being configured, hidden from the public
    PENDING_PAYMENT = "pending_payment"     # Waiting for the platform invoice
    LIVE = "live"                           # Published on its subdomain


class GiftMode(str, Enum):
    """How guests give gifts"""
    WISHLIST = "wishlist"
    GIFTS = "gifts"


class PlatformPaymentStatus(str, Enum):
    """Status of the platform invoice for this wedding"""
    UNPAID = "unpaid"
    PAID = "paid"
    NOT_APPLICABLE = "na"


# Allowed status transitions; live is terminal
STATUS_TRANSITIONS: Dict[WeddingStatus, List[WeddingStatus]] = {
    WeddingStatus.DRAFT: [WeddingStatus.PENDING_PAYMENT, WeddingStatus.LIVE],
    WeddingStatus.PENDING_PAYMENT: [WeddingStatus.LIVE, WeddingStatus.DRAFT],
    WeddingStatus.LIVE: [],
}


class Wedding(SQLModel, table=True):
    """Wedding tenant record"""

    __tablename__ = "weddings"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True)
    slug: str = Field(
        unique=True,
        index=True,
        description="Subdomain label, immutable once live"
    )
    status: WeddingStatus = Field(
        default=WeddingStatus.DRAFT,
        index=True,
        description="Current lifecycle status"
    )

    # Template binding (immutable once live)
    template_id: str = Field(description="Registered template identifier")
    template_version: str = Field(description="Registered template version")

    # Sections
    enabled_sections: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Ordered section keys"
    )
    section_content: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="Content keyed by section key"
    )

    # Theme overrides {"light": {...}, "dark": {...}}
    theme: Dict[str, Any] = Field(
        default_factory=lambda: {"light": {}, "dark": {}},
        sa_column=Column(JSON, nullable=False),
    )

    # Couple emails for pre-assigned dashboard access
    couple_emails: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    # Branding
    navbar_logo_light_url: Optional[str] = None
    navbar_logo_dark_url: Optional[str] = None

    # Wedding date, yyyy-MM-dd
    wedding_date: Optional[str] = Field(default=None, max_length=10)

    # Gifts and platform billing
    gift_mode: GiftMode = Field(default=GiftMode.WISHLIST)
    payment_status: PlatformPaymentStatus = Field(default=PlatformPaymentStatus.UNPAID)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    # State machine methods
    def can_transition_to(self, status: WeddingStatus) -> bool:
        """Check if the wedding can move to the given status"""
        return status in STATUS_TRANSITIONS.get(WeddingStatus(self.status), [])

    def transition_to(self, status: WeddingStatus) -> None:
        """Move to a new status"""
        if not self.can_transition_to(status):
            raise ValueError(f"Cannot transition from {WeddingStatus(self.status).value} to {WeddingStatus(status).value}")

        self.status = status
        self.updated_at = datetime.utcnow()

    def is_live(self) -> bool:
        return self.status == WeddingStatus.LIVE

    def can_change_template(self) -> bool:
        """Template binding is frozen once live"""
        return not self.is_live()

    def can_change_slug(self) -> bool:
        """Slug is frozen once live"""
        return not self.is_live()

    def can_delete(self) -> bool:
        """Only drafts can be deleted"""
        return self.status == WeddingStatus.DRAFT

    def is_publicly_visible(self) -> bool:
        """Drafts are hidden from public, non-preview visitors"""
        return self.status != WeddingStatus.DRAFT

    def has_couple_email(self, email: Optional[str]) -> bool:
        if not email:
            return False
        return email.lower() in {e.lower() for e in self.couple_emails}
