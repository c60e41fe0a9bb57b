"""
Domain exceptions raised by wedding services and translated to HTTP in routers
"""


class WeddingError(Exception):
    """Base class for wedding domain errors"""


class WeddingNotFoundError(WeddingError):
    """No wedding matches the given identifier"""


class InvalidSlugError(WeddingError):
    """Slug does not match the allowed format"""


class SlugConflictError(WeddingError):
    """Another wedding already uses this slug"""


class InvalidTransitionError(WeddingError):
    """Requested status transition is not allowed"""


class TemplateLockedError(WeddingError):
    """Template binding cannot change once a wedding is live"""


class InvalidSectionsError(WeddingError):
    """Enabled sections contain unknown or duplicate keys"""


class GuestNotFoundError(WeddingError):
    """No guest matches the given identifier"""


class GiftNotFoundError(WeddingError):
    """Gift id is not part of the wedding's gift list"""


class PaymentProviderError(WeddingError):
    """Payment provider rejected or failed a checkout request"""


class UnknownTemplateError(WeddingError):
    """Template id/version pair is not registered"""
