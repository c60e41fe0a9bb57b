"""
Role-based permissions for the admin and couple surfaces
"""

from enum import Enum
from typing import Set


class Permission(str, Enum):
    """Permission definitions"""
    # Wedding permissions
    WEDDING_CREATE = "wedding:create"
    WEDDING_VIEW = "wedding:view"
    WEDDING_EDIT = "wedding:edit"
    WEDDING_EDIT_CONTENT = "wedding:edit_content"
    WEDDING_DELETE = "wedding:delete"
    WEDDING_PUBLISH = "wedding:publish"

    # Design permissions
    THEME_EDIT = "theme:edit"
    SECTIONS_EDIT = "sections:edit"
    TEMPLATE_CHANGE = "template:change"

    # Guest permissions
    GUESTS_VIEW = "guests:view"


PLATFORM_ADMIN = "platform_admin"
COUPLE = "couple"

# Role permission mapping
ROLE_PERMISSIONS = {
    PLATFORM_ADMIN: set(Permission),
    COUPLE: {
        # Couples edit their own names, emails and section content only
        Permission.WEDDING_VIEW,
        Permission.WEDDING_EDIT_CONTENT,
        Permission.GUESTS_VIEW,
    },
}

# Fields a couple may change through the couple surface
COUPLE_EDITABLE_FIELDS = frozenset({"name", "couple_emails", "section_content"})


def get_permissions_for_role(role: str) -> Set[Permission]:
    """Get permissions for a given role"""
    return set(ROLE_PERMISSIONS.get((role or "").lower(), set()))


def has_permission(required_permission: Permission, user_permissions: Set[Permission]) -> bool:
    """Check if user has required permission"""
    return required_permission in user_permissions
