"""
Mercado Pago gift checkout service
Creates hosted checkouts (preferences) for guest gift contributions and reads
payment status back for webhook processing
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

import mercadopago
import structlog

from wedding_builder.core.config import get_settings
from wedding_builder.core.exceptions import PaymentProviderError

logger = structlog.get_logger(__name__)

# Mercado Pago payment status -> gift payment outcome
PROVIDER_STATUS_MAP = {
    "approved": "succeeded",
    "authorized": "succeeded",
    "rejected": "failed",
    "cancelled": "failed",
    "refunded": "failed",
    "charged_back": "failed",
}


@dataclass(frozen=True)
class CheckoutSession:
    provider_reference: str
    checkout_url: Optional[str]


class MercadoPagoGateway:
    """Mercado Pago checkout gateway"""

    def __init__(self, access_token: Optional[str] = None, sdk: Any = None):
        """
        Initialize the gateway

        Args:
            access_token: Mercado Pago access token (defaults to settings)
            sdk: Pre-built SDK client, used instead of creating one
        """
        self.access_token = access_token or get_settings().MERCADOPAGO_ACCESS_TOKEN

        if sdk is not None:
            self.sdk = sdk
        elif not self.access_token:
            raise ValueError("MERCADOPAGO_ACCESS_TOKEN is required")
        else:
            self.sdk = mercadopago.SDK(self.access_token)

    def create_checkout(
        self,
        external_reference: str,
        title: str,
        amount_cents: int,
        currency: str,
        payer_name: str,
        item_id: Optional[str] = None,
        back_url: Optional[str] = None,
    ) -> CheckoutSession:
        """
        Create a hosted checkout for a single contribution

        Args:
            external_reference: Our gift payment id, echoed back by webhooks
            title: Line item title shown to the payer
            amount_cents: Contribution amount in cents
            currency: ISO currency code
            payer_name: Name entered by the guest
            item_id: Gift id inside the wedding's gift list
            back_url: Page the payer returns to after checkout

        Returns:
            CheckoutSession with the provider preference id and checkout URL
        """
        preference_data: Dict[str, Any] = {
            "items": [
                {
                    "id": item_id or external_reference,
                    "title": title,
                    "quantity": 1,
                    "currency_id": currency,
                    "unit_price": round(amount_cents / 100, 2),
                }
            ],
            "payer": {"name": payer_name},
            "external_reference": external_reference,
        }
        if back_url:
            preference_data["back_urls"] = {
                "success": back_url,
                "failure": back_url,
                "pending": back_url,
            }
            preference_data["auto_return"] = "approved"

        result = self.sdk.preference().create(preference_data)

        if result.get("status") not in (200, 201):
            error = result.get("response", {})
            logger.error("Mercado Pago checkout creation failed", external_reference=external_reference, error=error)
            raise PaymentProviderError(f"Checkout creation failed: {error}")

        preference = result["response"]
        logger.info("Gift checkout created", external_reference=external_reference, preference_id=preference.get("id"))
        return CheckoutSession(
            provider_reference=str(preference["id"]),
            checkout_url=preference.get("init_point"),
        )

    def get_payment(self, payment_id: str) -> Dict[str, Any]:
        """Fetch a payment from Mercado Pago"""
        result = self.sdk.payment().get(payment_id)
        if result.get("status") != 200:
            logger.error("Mercado Pago payment lookup failed", payment_id=payment_id, error=result.get("response"))
            raise PaymentProviderError(f"Payment lookup failed: {payment_id}")
        return result["response"]


@lru_cache()
def _default_gateway() -> MercadoPagoGateway:
    return MercadoPagoGateway()


def get_payment_gateway() -> Optional[MercadoPagoGateway]:
    """Dependency returning the configured gateway, or None when payments are not set up"""
    if not get_settings().MERCADOPAGO_ACCESS_TOKEN:
        return None
    return _default_gateway()
