"""
Integration tests for public wedding sites, previews and guest actions
"""

from unittest.mock import MagicMock

import pytest
from sqlmodel import select

from wedding_builder.core.events import event_bus
from wedding_builder.core.exceptions import PaymentProviderError
from wedding_builder.main import app
from wedding_builder.models import GiftPayment, GiftPaymentStatus, Guest, RsvpStatus, WeddingStatus
from wedding_builder.services.payments import CheckoutSession, get_payment_gateway

from conftest import GIFTS_CONTENT

TENANT = "http://sarah-and-john.braunstud.io"
SITE_CONTENT = {
    "hero": {"title": "Sarah & John"},
    "gifts": GIFTS_CONTENT,
    "rsvp": {"title": "Kindly RSVP"},
}
RSVP = {"name": "Ana Diaz", "phone": "555-0100", "attending": True, "plus_ones": 1}


@pytest.fixture
def wedding(make_wedding):
    return make_wedding(
        status=WeddingStatus.LIVE,
        enabled_sections=["hero", "gifts", "rsvp"],
        section_content=SITE_CONTENT,
    )


@pytest.fixture
def gateway():
    gateway = MagicMock()
    gateway.create_checkout.return_value = CheckoutSession(
        provider_reference="pref-123",
        checkout_url="https://www.mercadopago.com/checkout/pref-123",
    )
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    return gateway


class TestSitePages:

    def test_tenant_host_renders_site(self, client, wedding):
        response = client.get(f"{TENANT}/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Kindly RSVP" in response.text
        assert "X-Robots-Tag" not in response.headers

    def test_tenant_sub_paths_render_same_page(self, client, wedding):
        response = client.get(f"{TENANT}/anything/here")
        assert response.status_code == 200
        assert "Kindly RSVP" in response.text

    def test_local_path_renders_site(self, client, wedding):
        response = client.get("/w/sarah-and-john")
        assert response.status_code == 200
        assert 'action="/w/sarah-and-john/rsvp"' in response.text

    def test_unknown_slug_is_not_found(self, client, wedding):
        response = client.get("http://nobody.braunstud.io/")
        assert response.status_code == 404
        assert "Wedding Not Found" in response.text

    def test_draft_shows_coming_soon(self, client, make_wedding):
        make_wedding(status=WeddingStatus.DRAFT, section_content=SITE_CONTENT)
        response = client.get(f"{TENANT}/")
        assert response.status_code == 200
        assert "Coming Soon" in response.text
        assert "Kindly RSVP" not in response.text

    def test_preview_renders_draft_without_login(self, client, make_wedding):
        make_wedding(status=WeddingStatus.DRAFT, section_content=SITE_CONTENT, enabled_sections=["rsvp"])

        response = client.get("/preview/sarah-and-john")

        assert response.status_code == 200
        assert response.headers["X-Robots-Tag"] == "noindex, nofollow"
        assert "Preview Mode" in response.text
        assert "<fieldset disabled>" in response.text

    def test_display_mode_from_query_and_cookie(self, client, make_wedding):
        make_wedding(theme={"light": {}, "dark": {"primary": "#ff0000"}})

        by_query = client.get("/w/sarah-and-john?mode=dark")
        client.cookies.set("wedding_theme", "dark")
        by_cookie = client.get("/w/sarah-and-john")

        assert "--primary: #ff0000" in by_query.text
        assert "--primary: #ff0000" in by_cookie.text


class TestPreviewActions:

    def test_preview_rsvp_is_simulated(self, client, wedding, db):
        response = client.post("/preview/sarah-and-john/rsvp", json=RSVP)

        assert response.status_code == 200
        assert response.json()["simulated"] is True
        assert response.json()["message"] == "RSVP submitted (preview mode - no database write)"
        assert db.exec(select(Guest)).all() == []

    def test_preview_gift_is_simulated(self, client, wedding, gateway, db):
        response = client.post(
            "/preview/sarah-and-john/gifts/honeymoon/contribute", json={"guest_name": "Ana"}
        )

        assert response.json()["simulated"] is True
        assert response.json()["message"] == "Gift contribution (preview mode - no charges)"
        gateway.create_checkout.assert_not_called()
        assert db.exec(select(GiftPayment)).all() == []

    def test_preview_still_validates_input(self, client, wedding):
        response = client.post("/preview/sarah-and-john/rsvp", json={"name": "Ana"})
        assert response.status_code == 422


class TestLiveRsvp:

    def test_json_rsvp_creates_guest(self, client, wedding, db):
        received = []

        async def handler(event):
            received.append(event)

        event_bus.subscribe("RsvpRecorded", handler)

        response = client.post(f"{TENANT}/rsvp", json=RSVP)

        assert response.status_code == 200
        assert response.json()["simulated"] is False
        guest = db.exec(select(Guest)).one()
        assert guest.rsvp_status == RsvpStatus.CONFIRMED
        assert guest.party_size == 2
        assert response.json()["reference"] == str(guest.id)
        assert received[0].rsvp_status == "confirmed"

    def test_form_rsvp(self, client, wedding, db):
        response = client.post(
            "/w/sarah-and-john/rsvp",
            data={"name": "Ben", "phone": "555-0101", "attending": "false", "email": ""},
        )

        assert response.status_code == 200
        guest = db.exec(select(Guest)).one()
        assert guest.rsvp_status == RsvpStatus.DECLINED
        assert guest.email is None

    def test_rsvp_upserts_by_phone(self, client, wedding, db):
        client.post(f"{TENANT}/rsvp", json=RSVP)
        client.post(f"{TENANT}/rsvp", json={**RSVP, "attending": False})

        guests = db.exec(select(Guest)).all()
        assert len(guests) == 1
        assert guests[0].rsvp_status == RsvpStatus.DECLINED

    def test_invalid_rsvp(self, client, wedding):
        response = client.post(f"{TENANT}/rsvp", json={**RSVP, "plus_ones": 9})
        assert response.status_code == 422

    def test_draft_rejects_live_rsvp(self, client, make_wedding):
        make_wedding(status=WeddingStatus.DRAFT)
        response = client.post("/w/sarah-and-john/rsvp", json=RSVP)
        assert response.status_code == 404

    def test_rsvp_section_disabled(self, client, make_wedding, db):
        make_wedding(enabled_sections=["hero", "gifts"], section_content=SITE_CONTENT)

        response = client.post(f"{TENANT}/rsvp", json=RSVP)

        assert response.status_code == 404
        assert response.json()["detail"] == "Section not enabled"
        assert db.exec(select(Guest)).all() == []


class TestLiveGifts:

    def test_contribution_without_gateway(self, client, wedding):
        response = client.post(f"{TENANT}/gifts/honeymoon/contribute", json={"guest_name": "Ana"})
        assert response.status_code == 502
        assert response.json()["ok"] is False

    def test_contribution_opens_checkout(self, client, wedding, gateway, db):
        response = client.post(f"{TENANT}/gifts/espresso/contribute", json={"guest_name": "Ana"})

        assert response.status_code == 200
        assert response.json()["redirect_url"] == "https://www.mercadopago.com/checkout/pref-123"
        payment = db.exec(select(GiftPayment)).one()
        assert payment.status == GiftPaymentStatus.PENDING
        assert payment.amount_cents == 42050
        assert payment.provider_reference == "pref-123"
        assert gateway.create_checkout.call_args.kwargs["external_reference"] == str(payment.id)

    def test_html_form_redirects_to_checkout(self, client, wedding, gateway):
        response = client.post(
            f"{TENANT}/gifts/honeymoon/contribute",
            data={"guest_name": "Ana"},
            headers={"Accept": "text/html"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "https://www.mercadopago.com/checkout/pref-123"

    def test_provider_failure(self, client, wedding, gateway, db):
        gateway.create_checkout.side_effect = PaymentProviderError("boom")

        response = client.post(f"{TENANT}/gifts/honeymoon/contribute", json={"guest_name": "Ana"})

        assert response.status_code == 502
        assert db.exec(select(GiftPayment)).one().status == GiftPaymentStatus.FAILED

    def test_unknown_gift(self, client, wedding, gateway):
        response = client.post(f"{TENANT}/gifts/yacht/contribute", json={"guest_name": "Ana"})
        assert response.status_code == 404

    def test_wishlist_mode_has_no_contributions(self, client, make_wedding, gateway):
        make_wedding(
            enabled_sections=["hero", "gifts"],
            section_content={"gifts": {**GIFTS_CONTENT, "mode": "wishlist"}},
        )
        response = client.post(f"{TENANT}/gifts/honeymoon/contribute", json={"guest_name": "Ana"})
        assert response.status_code == 404

    def test_gifts_section_disabled(self, client, make_wedding, gateway, db):
        make_wedding(enabled_sections=["hero", "rsvp"], section_content=SITE_CONTENT)

        response = client.post(f"{TENANT}/gifts/honeymoon/contribute", json={"guest_name": "Ana"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Section not enabled"
        gateway.create_checkout.assert_not_called()
        assert db.exec(select(GiftPayment)).all() == []

    def test_preview_gifts_section_disabled(self, client, make_wedding, gateway):
        make_wedding(enabled_sections=["hero"], section_content=SITE_CONTENT)
        response = client.post("/preview/sarah-and-john/gifts/honeymoon/contribute", json={"guest_name": "Ana"})
        assert response.status_code == 404
