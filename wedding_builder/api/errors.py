"""
Translate wedding domain errors into HTTP errors
"""

from fastapi import HTTPException, status

from wedding_builder.core.exceptions import (
    GiftNotFoundError,
    GuestNotFoundError,
    InvalidSectionsError,
    InvalidSlugError,
    InvalidTransitionError,
    PaymentProviderError,
    SlugConflictError,
    TemplateLockedError,
    UnknownTemplateError,
    WeddingError,
    WeddingNotFoundError,
)

STATUS_BY_ERROR = (
    (WeddingNotFoundError, status.HTTP_404_NOT_FOUND),
    (GuestNotFoundError, status.HTTP_404_NOT_FOUND),
    (GiftNotFoundError, status.HTTP_404_NOT_FOUND),
    (SlugConflictError, status.HTTP_409_CONFLICT),
    (TemplateLockedError, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_400_BAD_REQUEST),
    (InvalidSlugError, status.HTTP_400_BAD_REQUEST),
    (InvalidSectionsError, status.HTTP_400_BAD_REQUEST),
    (UnknownTemplateError, status.HTTP_400_BAD_REQUEST),
    (PaymentProviderError, status.HTTP_502_BAD_GATEWAY),
)


def http_error(error: WeddingError) -> HTTPException:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
