"""
Host-based routing for multi-tenant wedding sites

Every inbound request is classified by its Host header:

    braunstud.io, www.braunstud.io  -> ROOT
    app.braunstud.io                -> ADMIN_APP
    {slug}.braunstud.io             -> TENANT(slug), path rewritten to /w/{slug}/...
    localhost, unknown domains      -> LOCAL_DEV

Slugs are matched exactly as they appear in the host; no case folding.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from urllib.parse import quote

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

from wedding_builder.core.auth import decode_access_token
from wedding_builder.core.config import Settings, get_settings

logger = structlog.get_logger(__name__)


class HostKind(str, Enum):
    """Routing context derived from the Host header"""
    ROOT = "root"
    ADMIN_APP = "app"
    TENANT = "tenant"
    LOCAL_DEV = "local"


@dataclass(frozen=True)
class HostRoute:
    kind: HostKind
    slug: Optional[str] = None


def strip_port(host: str) -> str:
    """Remove a trailing :port (IPv6 literals keep their brackets)"""
    if host.startswith("["):
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    return host.split(":", 1)[0]


def classify_host(host: Optional[str], settings: Optional[Settings] = None) -> HostRoute:
    """Classify a Host header value"""
    settings = settings or get_settings()
    hostname = strip_port(host or "")
    base_domain = settings.BASE_DOMAIN

    if hostname in settings.LOCAL_DEV_HOSTS:
        return HostRoute(HostKind.LOCAL_DEV)

    # Custom domains are not supported; anything off-platform is treated as local
    if not hostname.endswith(base_domain):
        return HostRoute(HostKind.LOCAL_DEV)

    if hostname == base_domain:
        return HostRoute(HostKind.ROOT)

    suffix = "." + base_domain
    if not hostname.endswith(suffix):
        # e.g. "notbraunstud.io"
        return HostRoute(HostKind.LOCAL_DEV)

    subdomain = hostname[: -len(suffix)]
    if subdomain in ("", "www"):
        return HostRoute(HostKind.ROOT)
    if subdomain == settings.APP_SUBDOMAIN:
        return HostRoute(HostKind.ADMIN_APP)

    return HostRoute(HostKind.TENANT, slug=subdomain)


def rewrite_tenant_path(slug: str, path: str, settings: Optional[Settings] = None) -> str:
    """Map a path on a tenant host to the internal tenant page path"""
    settings = settings or get_settings()
    base = f"{settings.TENANT_PATH_PREFIX}/{slug}"
    if not path or path == "/":
        return base
    if not path.startswith("/"):
        path = "/" + path
    return base + path


def _path_matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def requires_authentication(route: HostRoute, path: str, settings: Optional[Settings] = None) -> bool:
    """Admin app and couple dashboard paths need a session; tenant and root pages never do"""
    settings = settings or get_settings()
    if route.kind == HostKind.TENANT:
        return False
    if any(_path_matches(path, public) for public in settings.PUBLIC_PATHS):
        return False
    if route.kind == HostKind.ADMIN_APP:
        return True
    return any(_path_matches(path, prefix) for prefix in settings.PROTECTED_PATH_PREFIXES)


def request_token(request: Request, settings: Optional[Settings] = None) -> Optional[str]:
    """Bearer token from the Authorization header, falling back to the session cookie"""
    settings = settings or get_settings()
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


def is_authenticated(request: Request, settings: Optional[Settings] = None) -> bool:
    token = request_token(request, settings)
    return bool(token) and decode_access_token(token) is not None


class HostRoutingMiddleware(BaseHTTPMiddleware):
    """Classify the host, rewrite tenant paths and gate protected paths"""

    async def dispatch(self, request: Request, call_next: Callable):
        settings = get_settings()
        route = classify_host(request.headers.get("host"), settings)
        request.state.host_route = route

        if route.kind == HostKind.TENANT:
            original_path = request.scope["path"]
            rewritten = rewrite_tenant_path(route.slug, original_path, settings)
            request.scope["path"] = rewritten
            request.scope["raw_path"] = quote(rewritten).encode("ascii")
            logger.debug("Tenant request rewritten", slug=route.slug, path=original_path, rewritten=rewritten)
            return await call_next(request)

        path = request.url.path
        if requires_authentication(route, path, settings) and not is_authenticated(request, settings):
            target = path
            if request.url.query:
                target = f"{path}?{request.url.query}"
            logger.info("Redirecting unauthenticated request to login", host_kind=route.kind.value, path=path)
            return RedirectResponse(
                url=f"{settings.LOGIN_PATH}?next={quote(target, safe='')}",
                status_code=307,
            )

        return await call_next(request)
