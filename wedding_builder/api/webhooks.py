"""
Webhook handlers for payment providers (Mercado Pago)

Gift contribution checkouts report back through Mercado Pago payment
notifications. The notification only carries a payment id; the payment itself
is fetched from the provider API before anything is updated.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session
from typing import Any, Dict, Optional
import structlog

from wedding_builder.core.database import get_session
from wedding_builder.core.exceptions import PaymentProviderError
from wedding_builder.services.gifts import apply_provider_payment
from wedding_builder.services.payments import MercadoPagoGateway, get_payment_gateway

logger = structlog.get_logger(__name__)
router = APIRouter()


def _payment_id(request: Request, notification: Dict[str, Any]) -> Optional[str]:
    """
    Payment id from either notification style.

    Webhooks send `{"type": "payment", "data": {"id": ...}}`; legacy IPN sends
    `?topic=payment&id=...`.
    """
    kind = notification.get("type") or notification.get("topic") or request.query_params.get("topic")
    if kind != "payment":
        return None
    data = notification.get("data") or {}
    payment_id = data.get("id") or request.query_params.get("id") or request.query_params.get("data.id")
    return str(payment_id) if payment_id else None


async def read_notification(request: Request) -> Dict[str, Any]:
    """Notification body; IPN posts may carry none"""
    try:
        notification = await request.json()
    except ValueError:
        return {}
    return notification if isinstance(notification, dict) else {}


@router.post("/mercadopago")
def mercadopago_webhook(
    request: Request,
    notification: Dict[str, Any] = Depends(read_notification),
    session: Session = Depends(get_session),
    gateway: Optional[MercadoPagoGateway] = Depends(get_payment_gateway),
):
    """Handle Mercado Pago payment notifications for gift contributions"""
    payment_id = _payment_id(request, notification)
    if payment_id is None:
        logger.info("Ignoring Mercado Pago notification", type=notification.get("type"))
        return {"status": "ignored"}

    if gateway is None:
        logger.error("Mercado Pago notification received but payments are not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment service not configured",
        )

    try:
        provider_payment = gateway.get_payment(payment_id)
    except PaymentProviderError as e:
        logger.error("Could not verify Mercado Pago payment", payment_id=payment_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not verify payment",
        )

    gift_payment = apply_provider_payment(session, provider_payment)
    if gift_payment is None:
        return {"status": "ignored"}

    logger.info("Processed Mercado Pago notification", payment_id=payment_id, gift_payment_id=str(gift_payment.id))
    return {"status": "processed", "gift_payment_status": gift_payment.status}
