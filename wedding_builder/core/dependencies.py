"""
Authentication and authorization dependencies for FastAPI
"""

from typing import Any, Dict, Optional
import uuid

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session
import structlog

from wedding_builder.core.auth import decode_access_token
from wedding_builder.core.config import get_settings
from wedding_builder.core.database import get_session
from wedding_builder.core.permissions import (
    COUPLE,
    PLATFORM_ADMIN,
    Permission,
    get_permissions_for_role,
    has_permission,
)
from wedding_builder.models import Wedding

logger = structlog.get_logger(__name__)
security = HTTPBearer(auto_error=False)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Decode the JWT from the Authorization header or the auth cookie"""
    settings = get_settings()
    token = credentials.credentials if credentials else request.cookies.get(settings.AUTH_COOKIE_NAME)

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception

    payload = decode_access_token(token)
    if payload is None or not payload.get("sub") or not payload.get("email"):
        raise credentials_exception

    logger.debug("User authenticated", user_id=payload["sub"])
    return payload


def effective_role(claims: Dict[str, Any]) -> str:
    """Platform admins come from the email allowlist; everyone else is a couple"""
    email = (claims.get("email") or "").lower()
    if email in get_settings().platform_admin_emails:
        return PLATFORM_ADMIN
    return COUPLE


def is_platform_admin(claims: Dict[str, Any]) -> bool:
    return effective_role(claims) == PLATFORM_ADMIN


async def require_platform_admin(
    claims: Dict[str, Any] = Depends(get_current_claims),
) -> Dict[str, Any]:
    if not is_platform_admin(claims):
        logger.warning("Platform admin access denied", email=claims.get("email"))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Platform admin access required",
        )
    return claims


def require_wedding_access(
    wedding_id: uuid.UUID,
    claims: Dict[str, Any] = Depends(get_current_claims),
    session: Session = Depends(get_session),
) -> Wedding:
    """The wedding, if the caller is a platform admin or one of its couple"""
    wedding = session.get(Wedding, wedding_id)
    if not wedding:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Wedding not found",
        )

    if is_platform_admin(claims) or wedding.has_couple_email(claims.get("email")):
        return wedding

    logger.warning("Wedding access denied", wedding_id=str(wedding_id), email=claims.get("email"))
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You do not have access to this wedding",
    )


def require_permission(required_permission: Permission):
    """Dependency factory to check permissions"""
    async def check_permission(
        claims: Dict[str, Any] = Depends(get_current_claims),
    ) -> Dict[str, Any]:
        permissions = get_permissions_for_role(effective_role(claims))
        if not has_permission(required_permission, permissions):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission required: {required_permission.value}",
            )
        return claims
    return check_permission
