"""
Gift payment model - a guest contribution towards a gift
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid


class GiftPaymentStatus(str, Enum):
    """Status of a gift contribution"""
    PENDING = "pending"         # Checkout created, waiting for the provider
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class GiftPayment(SQLModel, table=True):
    """Gift contribution started through the payment provider"""

    __tablename__ = "gift_payments"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    wedding_id: uuid.UUID = Field(foreign_key="weddings.id", index=True)
    gift_id: str = Field(index=True, max_length=100, description="Gift id inside the gifts section")
    guest_name: str = Field(max_length=200)

    amount_cents: int = Field(gt=0)
    currency: str = Field(default="USD", max_length=3)

    provider: str = Field(default="mercadopago", max_length=50)
    provider_reference: Optional[str] = Field(default=None, index=True, max_length=255)
    checkout_url: Optional[str] = None

    status: GiftPaymentStatus = Field(default=GiftPaymentStatus.PENDING, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
