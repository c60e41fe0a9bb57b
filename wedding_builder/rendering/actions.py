"""
Side-effecting guest interactions, injected per request

Templates and site routes never call the guest store or the payment gateway
directly. They receive a `SiteActions` object: live requests get
`LiveActions`, preview requests get `PreviewActions`, which simulates every
action without touching any collaborator. Preview safety therefore does not
depend on each template version remembering to disable its forms.
"""

from dataclasses import dataclass
from typing import Optional

from sqlmodel import Session
import structlog

from wedding_builder.content.sections import GiftItem
from wedding_builder.core.exceptions import PaymentProviderError
from wedding_builder.models import Wedding
from wedding_builder.schemas.site import GiftContribution, RsvpSubmission
from wedding_builder.services import gifts, guests
from wedding_builder.services.payments import MercadoPagoGateway

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    message: str
    simulated: bool = False
    reference: Optional[str] = None
    redirect_url: Optional[str] = None


class SiteActions:
    """Interaction capabilities available to a rendered page"""

    #: Whether templates should render enabled, submittable controls
    interactive: bool = False

    def __init__(self, base_path: str = ""):
        self.base_path = base_path.rstrip("/")

    @property
    def rsvp_url(self) -> str:
        return f"{self.base_path}/rsvp"

    def gift_url(self, gift_id: str) -> str:
        return f"{self.base_path}/gifts/{gift_id}/contribute"

    def submit_rsvp(self, wedding: Wedding, submission: RsvpSubmission) -> ActionResult:
        raise NotImplementedError

    def start_gift_contribution(
        self,
        wedding: Wedding,
        gift: GiftItem,
        contribution: GiftContribution,
    ) -> ActionResult:
        raise NotImplementedError


class PreviewActions(SiteActions):
    """Simulated actions: no database writes, no payments, no messages"""

    interactive = False

    def submit_rsvp(self, wedding: Wedding, submission: RsvpSubmission) -> ActionResult:
        logger.info("Preview RSVP simulated", slug=wedding.slug)
        return ActionResult(
            ok=True,
            simulated=True,
            message="RSVP submitted (preview mode - no database write)",
        )

    def start_gift_contribution(
        self,
        wedding: Wedding,
        gift: GiftItem,
        contribution: GiftContribution,
    ) -> ActionResult:
        logger.info("Preview gift contribution simulated", slug=wedding.slug, gift_id=gift.id)
        return ActionResult(
            ok=True,
            simulated=True,
            message="Gift contribution (preview mode - no charges)",
        )


class LiveActions(SiteActions):
    """Real actions backed by the guest store and the payment gateway"""

    interactive = True

    def __init__(
        self,
        session: Session,
        gateway: Optional[MercadoPagoGateway] = None,
        base_path: str = "",
        return_url: Optional[str] = None,
    ):
        super().__init__(base_path)
        self.session = session
        self.gateway = gateway
        self.return_url = return_url

    def submit_rsvp(self, wedding: Wedding, submission: RsvpSubmission) -> ActionResult:
        guest = guests.record_rsvp(self.session, wedding, submission)
        message = "Thank you! Your RSVP has been recorded." if submission.attending else "Sorry you can't make it. Your RSVP has been recorded."
        return ActionResult(ok=True, message=message, reference=str(guest.id))

    def start_gift_contribution(
        self,
        wedding: Wedding,
        gift: GiftItem,
        contribution: GiftContribution,
    ) -> ActionResult:
        if self.gateway is None:
            logger.warning("Gift contribution attempted without a payment gateway", slug=wedding.slug)
            return ActionResult(ok=False, message="Gift payments are not available right now")

        try:
            payment = gifts.start_contribution(
                self.session,
                wedding,
                gift,
                contribution,
                self.gateway,
                back_url=self.return_url,
            )
        except PaymentProviderError as e:
            logger.error("Gift checkout failed", slug=wedding.slug, gift_id=gift.id, error=str(e))
            return ActionResult(ok=False, message="We could not start the payment. Please try again.")

        return ActionResult(
            ok=True,
            message="Redirecting to checkout",
            reference=str(payment.id),
            redirect_url=payment.checkout_url,
        )


def actions_for(
    is_preview: bool,
    session: Optional[Session] = None,
    gateway: Optional[MercadoPagoGateway] = None,
    base_path: str = "",
    return_url: Optional[str] = None,
) -> SiteActions:
    """Pick the capability set for a request"""
    if is_preview:
        return PreviewActions(base_path)
    if session is None:
        raise ValueError("Live actions need a database session")
    return LiveActions(session, gateway, base_path=base_path, return_url=return_url)
