"""
Tests for page rendering, template versions and preview safety
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

from wedding_builder.content.sections import GiftItem
from wedding_builder.content.theme import DisplayMode
from wedding_builder.models import WeddingStatus
from wedding_builder.rendering.actions import LiveActions, PreviewActions, actions_for
from wedding_builder.rendering.pages import PREVIEW_BANNER_TEXT
from wedding_builder.rendering.renderer import build_props, render_wedding_page
from wedding_builder.schemas.site import GiftContribution, RsvpSubmission
from wedding_builder.templates.registry import TemplateRegistry, build_default_registry

from conftest import GIFTS_CONTENT, build_wedding

FULL_CONTENT = {
    "hero": {"title": "Sarah & John", "subtitle": "Are getting married"},
    "itinerary": {"items": [{"time": "16:00", "title": "Ceremony"}]},
    "location": {"venueName": "Rosewood Manor", "address": "1 Garden Lane"},
    "gifts": GIFTS_CONTENT,
    "rsvp": {"title": "Kindly RSVP", "deadline": "May 1"},
}


@pytest.fixture
def registry() -> TemplateRegistry:
    return build_default_registry()


def test_unknown_wedding_renders_not_found():
    page = render_wedding_page(None, PreviewActions())
    assert page.status_code == 404
    assert page.kind == "not_found"
    assert "Wedding Not Found" in page.html


def test_empty_sections_render_without_content():
    wedding = build_wedding(enabled_sections=[], section_content=FULL_CONTENT)

    page = render_wedding_page(wedding, PreviewActions())

    assert page.status_code == 200
    assert page.kind == "site"
    assert "wedding-section" not in page.html
    assert "Rosewood Manor" not in page.html
    assert '<a href="#' not in page.html


def test_draft_shows_coming_soon_to_public_visitors():
    wedding = build_wedding(status=WeddingStatus.DRAFT, section_content=FULL_CONTENT)

    page = render_wedding_page(wedding, PreviewActions(), is_preview=False)

    assert page.status_code == 200
    assert page.kind == "coming_soon"
    assert "Coming Soon" in page.html
    assert "Sarah" not in page.html


def test_draft_renders_in_preview():
    wedding = build_wedding(status=WeddingStatus.DRAFT, section_content=FULL_CONTENT)
    page = render_wedding_page(wedding, PreviewActions(), is_preview=True)
    assert page.kind == "site"
    assert "Kindly RSVP" in page.html


@pytest.mark.parametrize("status", [WeddingStatus.PENDING_PAYMENT, WeddingStatus.LIVE])
def test_non_draft_weddings_are_public(status):
    page = render_wedding_page(build_wedding(status=status), PreviewActions())
    assert page.kind == "site"


def test_preview_has_banner_and_noindex():
    wedding = build_wedding(section_content=FULL_CONTENT)

    preview = render_wedding_page(wedding, PreviewActions("/preview/sarah-and-john"), is_preview=True)
    live = render_wedding_page(wedding, LiveActions(MagicMock(), base_path="/w/sarah-and-john"))

    assert PREVIEW_BANNER_TEXT in preview.html
    assert 'name="robots" content="noindex, nofollow"' in preview.html
    assert PREVIEW_BANNER_TEXT not in live.html
    assert "noindex" not in live.html


def test_preview_disables_controls_and_live_enables_them():
    wedding = build_wedding(enabled_sections=["gifts", "rsvp"], section_content=FULL_CONTENT)

    preview = render_wedding_page(wedding, PreviewActions("/preview/sarah-and-john"), is_preview=True)
    live = render_wedding_page(wedding, LiveActions(MagicMock(), base_path="/w/sarah-and-john"))

    assert "<fieldset disabled>" in preview.html
    assert "<fieldset>" in live.html
    assert 'action="/w/sarah-and-john/gifts/honeymoon/contribute"' in live.html
    assert "$150.00" in live.html


def test_preview_never_touches_collaborators():
    wedding = build_wedding(enabled_sections=["gifts", "rsvp"], section_content=FULL_CONTENT)
    session = MagicMock()
    gateway = MagicMock()

    with patch("wedding_builder.rendering.actions.guests.record_rsvp") as record_rsvp, \
         patch("wedding_builder.rendering.actions.gifts.start_contribution") as start_contribution:
        actions = actions_for(True, session=session, gateway=gateway, base_path="/preview/sarah-and-john")
        page = render_wedding_page(wedding, actions, is_preview=True)

        props = build_props(wedding, DisplayMode.LIGHT, True, actions)
        gift = props.sections.content["gifts"]["items"][0]
        rsvp_result = actions.submit_rsvp(wedding, RsvpSubmission(name="Ana", phone="555-0100", attending=True))
        gift_result = actions.start_gift_contribution(
            wedding, GiftItem.model_validate(gift), GiftContribution(guest_name="Ana")
        )

    assert page.status_code == 200
    assert rsvp_result.simulated and gift_result.simulated
    assert rsvp_result.message == "RSVP submitted (preview mode - no database write)"
    assert gift_result.message == "Gift contribution (preview mode - no charges)"
    record_rsvp.assert_not_called()
    start_contribution.assert_not_called()
    assert session.method_calls == []
    assert gateway.method_calls == []


def test_live_actions_require_a_session():
    with pytest.raises(ValueError):
        actions_for(False)


def test_malformed_section_degrades_alone():
    wedding = build_wedding(
        enabled_sections=["hero", "itinerary", "location", "rsvp"],
        section_content={
            "hero": {"title": "Welcome"},
            "itinerary": "not an object",
            "location": {"title": "Where"},
            "rsvp": {"title": "Kindly RSVP"},
        },
    )

    page = render_wedding_page(wedding, PreviewActions())

    assert page.status_code == 200
    assert "Welcome" in page.html
    assert "Kindly RSVP" in page.html
    assert "Venue details will be shared soon." in page.html
    assert "The schedule will be shared soon." in page.html


def test_absent_content_renders_fallback_shell():
    wedding = build_wedding(enabled_sections=["hero", "dressCode"], section_content={})

    page = render_wedding_page(wedding, PreviewActions())

    assert "<h1>Sarah &amp; John</h1>" in page.html
    assert "Dress code details will be shared soon." in page.html


def test_unknown_template_renders_template_error():
    page = render_wedding_page(build_wedding(template_id="modern"), PreviewActions())
    assert page.status_code == 404
    assert page.kind == "template_error"
    assert "Template Error" in page.html


def test_unknown_version_renders_template_error():
    page = render_wedding_page(build_wedding(template_version="v9"), PreviewActions())
    assert page.status_code == 404
    assert page.kind == "template_error"


def test_load_failure_renders_template_error():
    registry = TemplateRegistry()
    registry.add_template("classic", name="Classic", description="Broken build")
    registry.register("classic", "v1", "wedding_builder.templates.classic.missing")

    page = render_wedding_page(build_wedding(), PreviewActions(), registry=registry)

    assert page.status_code == 503
    assert page.kind == "template_error"


def test_v1_output_is_deterministic(registry):
    wedding = build_wedding(section_content=FULL_CONTENT, enabled_sections=list(FULL_CONTENT))
    actions = PreviewActions()
    props = build_props(wedding, DisplayMode.LIGHT, True, actions)

    first = registry.resolve("classic", "v1")(props)
    second = registry.resolve("classic", "v1")(props)

    assert first == second


def test_v1_uses_canonical_order_and_ignores_countdown(registry):
    wedding = build_wedding(
        enabled_sections=["rsvp", "countdown", "hero"],
        wedding_date="2099-01-01",
    )
    props = build_props(wedding, DisplayMode.LIGHT, False, PreviewActions())

    html = registry.resolve("classic", "v1")(props)

    assert html.index('id="hero"') < html.index('id="rsvp"')
    assert "section-countdown" not in html


def test_v2_uses_stored_order(registry):
    wedding = build_wedding(enabled_sections=["rsvp", "hero"])
    props = build_props(wedding, DisplayMode.LIGHT, False, PreviewActions())

    html = registry.resolve("classic", "v2")(props)

    assert html.index('id="rsvp"') < html.index('id="hero"')


def test_v2_countdown(registry):
    wedding = build_wedding(enabled_sections=["hero", "countdown"], wedding_date="2026-06-14")
    props = build_props(wedding, DisplayMode.LIGHT, False, PreviewActions())
    render = registry.resolve("classic", "v2")

    upcoming = render(props, now=datetime(2026, 6, 13, 0, 0, 0))
    today = render(props, now=datetime(2026, 6, 14, 12, 0, 0))
    past = render(props, now=datetime(2026, 6, 20, 12, 0, 0))

    assert "<strong>1</strong> days" in upcoming
    assert "Today is the day!" in today
    assert "section-countdown" not in past


def test_wedding_date_is_formatted_in_hero():
    wedding = build_wedding(enabled_sections=["hero"], wedding_date="2026-06-14")
    page = render_wedding_page(wedding, PreviewActions())
    assert "June 14, 2026" in page.html


def test_navbar_logo_follows_display_mode():
    wedding = build_wedding(
        navbar_logo_light_url="https://cdn.example.com/light.png",
        navbar_logo_dark_url="https://cdn.example.com/dark.png",
    )

    light = render_wedding_page(wedding, PreviewActions(), mode="light")
    dark = render_wedding_page(wedding, PreviewActions(), mode="dark")

    assert "light.png" in light.html and "dark.png" not in light.html
    assert "dark.png" in dark.html


def test_navbar_falls_back_to_wedding_name():
    wedding = build_wedding(navbar_logo_light_url=None)
    page = render_wedding_page(wedding, PreviewActions())
    assert '<a class="brand" href="#hero">Sarah &amp; John</a>' in page.html


def test_nav_rendered_from_enabled_sections():
    wedding = build_wedding(enabled_sections=["hero", "rsvp"], section_content={"rsvp": {"title": "Kindly RSVP"}})
    page = render_wedding_page(wedding, PreviewActions())
    assert '<a href="#rsvp">Kindly RSVP</a>' in page.html
