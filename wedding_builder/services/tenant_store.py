"""
Tenant lookups used by the public site
"""

from typing import Optional

from sqlmodel import Session, select

from wedding_builder.models import Wedding


class TenantStore:
    """Read access to wedding tenants"""

    def __init__(self, session: Session):
        self.session = session

    def get_by_slug(self, slug: str) -> Optional[Wedding]:
        """Point lookup on the unique slug index; None for unknown slugs"""
        return self.session.exec(select(Wedding).where(Wedding.slug == slug)).first()
