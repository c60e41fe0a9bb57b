"""
Domain events system

Domain events represent important business events that can be published
and subscribed to by multiple parts of the system.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List
import uuid
import structlog

logger = structlog.get_logger(__name__)


class DomainEvent:
    """Base class for domain events"""

    def __init__(self, event_id: uuid.UUID = None):
        self.event_id = event_id or uuid.uuid4()
        self.occurred_at = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary"""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "event_type": self.__class__.__name__
        }


class WeddingCreated(DomainEvent):
    """Event fired when a platform admin provisions a wedding"""

    def __init__(
        self,
        wedding_id: uuid.UUID,
        slug: str,
        template_id: str,
        template_version: str,
        event_id: uuid.UUID = None
    ):
        super().__init__(event_id)
        self.wedding_id = wedding_id
        self.slug = slug
        self.template_id = template_id
        self.template_version = template_version

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "wedding_id": str(self.wedding_id),
            "slug": self.slug,
            "template_id": self.template_id,
            "template_version": self.template_version
        })
        return data


class WeddingStatusChanged(DomainEvent):
    """Event fired when a wedding moves through its lifecycle"""

    def __init__(
        self,
        wedding_id: uuid.UUID,
        from_status: str,
        to_status: str,
        event_id: uuid.UUID = None
    ):
        super().__init__(event_id)
        self.wedding_id = wedding_id
        self.from_status = from_status
        self.to_status = to_status

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "wedding_id": str(self.wedding_id),
            "from_status": self.from_status,
            "to_status": self.to_status
        })
        return data


class RsvpRecorded(DomainEvent):
    """Event fired when a guest RSVP is persisted"""

    def __init__(
        self,
        wedding_id: uuid.UUID,
        guest_id: uuid.UUID,
        rsvp_status: str,
        event_id: uuid.UUID = None
    ):
        super().__init__(event_id)
        self.wedding_id = wedding_id
        self.guest_id = guest_id
        self.rsvp_status = rsvp_status

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "wedding_id": str(self.wedding_id),
            "guest_id": str(self.guest_id),
            "rsvp_status": self.rsvp_status
        })
        return data


class GiftContributionStarted(DomainEvent):
    """Event fired when a guest starts a gift checkout"""

    def __init__(
        self,
        wedding_id: uuid.UUID,
        gift_payment_id: uuid.UUID,
        gift_id: str,
        amount_cents: int,
        event_id: uuid.UUID = None
    ):
        super().__init__(event_id)
        self.wedding_id = wedding_id
        self.gift_payment_id = gift_payment_id
        self.gift_id = gift_id
        self.amount_cents = amount_cents

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "wedding_id": str(self.wedding_id),
            "gift_payment_id": str(self.gift_payment_id),
            "gift_id": self.gift_id,
            "amount_cents": self.amount_cents
        })
        return data


class EventBus:
    """Simple in-memory event bus for publishing domain events"""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, handler: Callable):
        """Subscribe to a specific event type"""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)
        logger.debug("Subscribed handler to event type", event_type=event_type)

    def unsubscribe(self, event_type: str, handler: Callable):
        """Unsubscribe from an event type"""
        if event_type in self._subscribers:
            self._subscribers[event_type].remove(handler)
            logger.debug("Unsubscribed handler from event type", event_type=event_type)

    async def publish(self, event: DomainEvent):
        """Publish an event to all subscribers"""
        event_type = event.__class__.__name__
        handlers = self._subscribers.get(event_type, [])

        if not handlers:
            logger.debug("No subscribers for event type", event_type=event_type)
            return

        logger.info("Publishing event", event_type=event_type, event_id=str(event.event_id))

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error("Error in event handler", event_type=event_type, error=str(e), exc_info=True)

    def clear_subscribers(self):
        """Clear all subscribers (useful for testing)"""
        self._subscribers.clear()
        logger.debug("Cleared all event subscribers")


async def log_domain_event(event: DomainEvent):
    """Audit trail of domain events in the application log"""
    logger.info("Domain event", **event.to_dict())


AUDITED_EVENTS = (WeddingCreated, WeddingStatusChanged, RsvpRecorded, GiftContributionStarted)


def subscribe_audit_log(bus: EventBus) -> None:
    for event_type in AUDITED_EVENTS:
        bus.subscribe(event_type.__name__, log_domain_event)


# Global event bus instance
event_bus = EventBus()
