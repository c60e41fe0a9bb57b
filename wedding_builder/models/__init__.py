from wedding_builder.models.wedding import (
    Wedding, WeddingStatus, GiftMode, PlatformPaymentStatus, STATUS_TRANSITIONS
)
from wedding_builder.models.guest import Guest, RsvpStatus
from wedding_builder.models.gift_payment import GiftPayment, GiftPaymentStatus
