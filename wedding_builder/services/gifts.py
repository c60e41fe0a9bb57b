"""
Gift contributions: checkout creation and provider status updates
"""

from datetime import datetime
from typing import Any, Dict, Optional
import uuid

from sqlmodel import Session
import structlog

from wedding_builder.content.sections import GiftItem
from wedding_builder.core.config import get_settings
from wedding_builder.core.exceptions import PaymentProviderError
from wedding_builder.models import GiftPayment, GiftPaymentStatus, Wedding
from wedding_builder.schemas.site import GiftContribution
from wedding_builder.services.payments import PROVIDER_STATUS_MAP, MercadoPagoGateway

logger = structlog.get_logger(__name__)


def start_contribution(
    session: Session,
    wedding: Wedding,
    gift: GiftItem,
    contribution: GiftContribution,
    gateway: MercadoPagoGateway,
    back_url: Optional[str] = None,
) -> GiftPayment:
    """Record a pending gift payment and open a provider checkout for it"""
    settings = get_settings()
    amount_cents = contribution.amount_cents or gift.price_in_cents
    if amount_cents <= 0:
        raise PaymentProviderError("Contribution amount must be positive")

    payment = GiftPayment(
        wedding_id=wedding.id,
        gift_id=gift.id,
        guest_name=contribution.guest_name,
        amount_cents=amount_cents,
        currency=settings.GIFT_CURRENCY,
    )
    session.add(payment)
    session.commit()
    session.refresh(payment)

    try:
        checkout = gateway.create_checkout(
            external_reference=str(payment.id),
            title=f"{gift.name} - {wedding.name}",
            amount_cents=amount_cents,
            currency=payment.currency,
            payer_name=contribution.guest_name,
            item_id=gift.id,
            back_url=back_url,
        )
    except PaymentProviderError:
        payment.status = GiftPaymentStatus.FAILED
        payment.updated_at = datetime.utcnow()
        session.add(payment)
        session.commit()
        raise

    payment.provider_reference = checkout.provider_reference
    payment.checkout_url = checkout.checkout_url
    payment.updated_at = datetime.utcnow()
    session.add(payment)
    session.commit()
    session.refresh(payment)
    logger.info("Gift contribution started", wedding_id=str(wedding.id), gift_id=gift.id, gift_payment_id=str(payment.id))
    return payment


def apply_provider_payment(session: Session, provider_payment: Dict[str, Any]) -> Optional[GiftPayment]:
    """
    Update a gift payment from a provider payment record.

    Returns None when the payment does not reference one of ours. Payments
    already in a final state are left untouched.
    """
    reference = provider_payment.get("external_reference")
    if not reference:
        return None

    payment_id = _as_uuid(reference)
    payment = session.get(GiftPayment, payment_id) if payment_id else None
    if payment is None:
        logger.warning("Provider payment for unknown gift payment", external_reference=reference)
        return None

    if payment.status != GiftPaymentStatus.PENDING:
        logger.info("Gift payment already settled", gift_payment_id=str(payment.id), status=payment.status)
        return payment

    outcome = PROVIDER_STATUS_MAP.get(provider_payment.get("status", ""))
    if outcome is None:
        return payment

    payment.status = GiftPaymentStatus(outcome)
    payment.updated_at = datetime.utcnow()
    session.add(payment)
    session.commit()
    session.refresh(payment)
    logger.info("Gift payment settled", gift_payment_id=str(payment.id), status=payment.status)
    return payment


def _as_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
