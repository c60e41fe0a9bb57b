"""
Public wedding site and preview endpoints

Tenant hosts (`{slug}.braunstud.io`) are rewritten to `/w/{slug}` by the host
routing middleware. `/preview/{slug}` renders the same site for the couple and
admins with every guest action simulated.
"""

from dataclasses import asdict

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import BaseModel, ValidationError
from sqlmodel import Session
from typing import Any, Dict, Optional, Type
import structlog
import uuid

from wedding_builder.content.sections import GiftItem, MalformedSectionContent, SectionKey, parse_section
from wedding_builder.core.config import get_settings
from wedding_builder.core.database import get_session
from wedding_builder.core.events import GiftContributionStarted, RsvpRecorded, event_bus
from wedding_builder.core.host_routing import HostKind
from wedding_builder.models import Wedding
from wedding_builder.rendering.actions import ActionResult, SiteActions, actions_for
from wedding_builder.rendering.renderer import render_wedding_page
from wedding_builder.schemas.site import GiftContribution, InteractionResponse, RsvpSubmission
from wedding_builder.services.payments import MercadoPagoGateway, get_payment_gateway
from wedding_builder.services.tenant_store import TenantStore
from wedding_builder.templates.registry import TemplateRegistry, get_template_registry

logger = structlog.get_logger(__name__)
router = APIRouter()

NOINDEX_HEADERS = {"X-Robots-Tag": "noindex, nofollow"}


def _base_path(request: Request, slug: str, is_preview: bool) -> str:
    """Path prefix the visitor's browser sees for this site"""
    settings = get_settings()
    if is_preview:
        return f"{settings.PREVIEW_PATH_PREFIX}/{slug}"
    route = getattr(request.state, "host_route", None)
    if route is not None and route.kind == HostKind.TENANT:
        return ""
    return f"{settings.TENANT_PATH_PREFIX}/{slug}"


def _display_mode(request: Request) -> Optional[str]:
    return request.query_params.get("mode") or request.cookies.get(get_settings().THEME_COOKIE_NAME)


def _actions(
    request: Request,
    slug: str,
    is_preview: bool,
    session: Session,
    gateway: Optional[MercadoPagoGateway],
) -> SiteActions:
    base_path = _base_path(request, slug, is_preview)
    return actions_for(
        is_preview,
        session=session,
        gateway=gateway,
        base_path=base_path,
        return_url=str(request.base_url).rstrip("/") + (base_path or "/"),
    )


def _render(
    request: Request,
    slug: str,
    is_preview: bool,
    session: Session,
    registry: TemplateRegistry,
    gateway: Optional[MercadoPagoGateway],
) -> HTMLResponse:
    wedding = TenantStore(session).get_by_slug(slug)
    page = render_wedding_page(
        wedding,
        actions=_actions(request, slug, is_preview, session, gateway),
        is_preview=is_preview,
        mode=_display_mode(request),
        registry=registry,
    )
    if page.kind != "site":
        logger.info("Wedding page not rendered", slug=slug, kind=page.kind, status_code=page.status_code)
    headers = NOINDEX_HEADERS if is_preview else None
    return HTMLResponse(content=page.html, status_code=page.status_code, headers=headers)


async def read_payload(request: Request) -> Dict[str, Any]:
    """Accept JSON bodies and HTML form posts; empty form fields are dropped"""
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Expected a JSON object",
            )
        return body
    form = await request.form()
    return {key: value for key, value in form.items() if value != ""}


def _validate(schema: Type[BaseModel], payload: Dict[str, Any]):
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        )


def _find_wedding(session: Session, slug: str, is_preview: bool, section: SectionKey) -> Wedding:
    """The wedding behind a guest action; the action's section must be enabled"""
    wedding = TenantStore(session).get_by_slug(slug)
    if wedding is None or (not is_preview and not wedding.is_publicly_visible()):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Wedding not found",
        )
    if section.value not in (wedding.enabled_sections or []):
        logger.info("Guest action on disabled section", slug=slug, section=section.value)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Section not enabled",
        )
    return wedding


def _find_gift(wedding: Wedding, gift_id: str) -> GiftItem:
    try:
        gifts_content = parse_section(SectionKey.GIFTS, (wedding.section_content or {}).get(SectionKey.GIFTS.value))
    except MalformedSectionContent:
        gifts_content = None
    gift = gifts_content.find_gift(gift_id) if gifts_content and gifts_content.mode == "gifts" else None
    if gift is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Gift not found",
        )
    return gift


def _respond(request: Request, result: ActionResult, is_preview: bool):
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=InteractionResponse(**asdict(result)).model_dump(),
        )
    if result.redirect_url and "text/html" in request.headers.get("accept", ""):
        return RedirectResponse(result.redirect_url, status_code=status.HTTP_303_SEE_OTHER)
    headers = NOINDEX_HEADERS if is_preview else None
    return JSONResponse(content=InteractionResponse(**asdict(result)).model_dump(), headers=headers)


def _submit_rsvp(
    request: Request,
    slug: str,
    payload: Dict[str, Any],
    is_preview: bool,
    session: Session,
    background_tasks: Optional[BackgroundTasks] = None,
):
    wedding = _find_wedding(session, slug, is_preview, SectionKey.RSVP)
    submission = _validate(RsvpSubmission, payload)

    actions = _actions(request, slug, is_preview, session, None)
    result = actions.submit_rsvp(wedding, submission)
    if result.ok and not result.simulated and background_tasks is not None:
        background_tasks.add_task(event_bus.publish, RsvpRecorded(
            wedding_id=wedding.id,
            guest_id=uuid.UUID(result.reference),
            rsvp_status="confirmed" if submission.attending else "declined",
        ))
    return _respond(request, result, is_preview)


def _contribute(
    request: Request,
    slug: str,
    gift_id: str,
    payload: Dict[str, Any],
    is_preview: bool,
    session: Session,
    gateway: Optional[MercadoPagoGateway],
    background_tasks: Optional[BackgroundTasks] = None,
):
    wedding = _find_wedding(session, slug, is_preview, SectionKey.GIFTS)
    gift = _find_gift(wedding, gift_id)
    contribution = _validate(GiftContribution, payload)

    actions = _actions(request, slug, is_preview, session, gateway)
    result = actions.start_gift_contribution(wedding, gift, contribution)
    if result.ok and not result.simulated and background_tasks is not None:
        background_tasks.add_task(event_bus.publish, GiftContributionStarted(
            wedding_id=wedding.id,
            gift_payment_id=uuid.UUID(result.reference),
            gift_id=gift.id,
            amount_cents=contribution.amount_cents or gift.price_in_cents,
        ))
    return _respond(request, result, is_preview)


@router.get("/preview/{slug}", response_class=HTMLResponse)
def preview_site(
    slug: str,
    request: Request,
    session: Session = Depends(get_session),
    registry: TemplateRegistry = Depends(get_template_registry),
):
    """Render any wedding, draft included, with guest actions simulated"""
    return _render(request, slug, True, session, registry, None)


@router.post("/preview/{slug}/rsvp")
def preview_rsvp(
    slug: str,
    request: Request,
    payload: Dict[str, Any] = Depends(read_payload),
    session: Session = Depends(get_session),
):
    return _submit_rsvp(request, slug, payload, True, session)


@router.post("/preview/{slug}/gifts/{gift_id}/contribute")
def preview_contribute(
    slug: str,
    gift_id: str,
    request: Request,
    payload: Dict[str, Any] = Depends(read_payload),
    session: Session = Depends(get_session),
):
    return _contribute(request, slug, gift_id, payload, True, session, None)


@router.post("/w/{slug}/rsvp")
def submit_rsvp(
    slug: str,
    request: Request,
    background_tasks: BackgroundTasks,
    payload: Dict[str, Any] = Depends(read_payload),
    session: Session = Depends(get_session),
):
    """Record a guest's RSVP"""
    return _submit_rsvp(request, slug, payload, False, session, background_tasks)


@router.post("/w/{slug}/gifts/{gift_id}/contribute")
def contribute_to_gift(
    slug: str,
    gift_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    payload: Dict[str, Any] = Depends(read_payload),
    session: Session = Depends(get_session),
    gateway: Optional[MercadoPagoGateway] = Depends(get_payment_gateway),
):
    """Start a gift contribution checkout"""
    return _contribute(request, slug, gift_id, payload, False, session, gateway, background_tasks)


@router.get("/w/{slug}", response_class=HTMLResponse)
@router.get("/w/{slug}/{rest:path}", response_class=HTMLResponse)
def wedding_site(
    slug: str,
    request: Request,
    rest: str = "",
    session: Session = Depends(get_session),
    registry: TemplateRegistry = Depends(get_template_registry),
    gateway: Optional[MercadoPagoGateway] = Depends(get_payment_gateway),
):
    """Public wedding site; sub-paths render the same single page"""
    return _render(request, slug, False, session, registry, gateway)
