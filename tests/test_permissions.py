"""
Unit tests for RBAC permission system
"""

from wedding_builder.core.permissions import (
    COUPLE,
    COUPLE_EDITABLE_FIELDS,
    PLATFORM_ADMIN,
    Permission,
    get_permissions_for_role,
    has_permission,
)
from wedding_builder.models import WeddingStatus
from wedding_builder.schemas.wedding import CoupleWeddingUpdate

from conftest import auth_headers


def test_get_permissions_for_role():
    """Test permission retrieval for all roles"""
    # Platform admin has all permissions
    admin_perms = get_permissions_for_role(PLATFORM_ADMIN)
    assert admin_perms == set(Permission)

    # Couples see their wedding and edit content only
    couple_perms = get_permissions_for_role(COUPLE)
    assert Permission.WEDDING_VIEW in couple_perms
    assert Permission.WEDDING_EDIT_CONTENT in couple_perms
    assert Permission.GUESTS_VIEW in couple_perms
    assert Permission.TEMPLATE_CHANGE not in couple_perms
    assert Permission.THEME_EDIT not in couple_perms
    assert Permission.WEDDING_PUBLISH not in couple_perms


def test_has_permission():
    """Test permission checking logic"""
    couple_perms = get_permissions_for_role(COUPLE)
    assert has_permission(Permission.WEDDING_EDIT_CONTENT, couple_perms)
    assert not has_permission(Permission.SECTIONS_EDIT, couple_perms)


def test_unknown_role_has_no_permissions():
    """Test invalid role handling"""
    assert get_permissions_for_role("waiter") == set()
    assert get_permissions_for_role(None) == set()


def test_role_lookup_is_case_insensitive():
    assert get_permissions_for_role("PLATFORM_ADMIN") == set(Permission)


def test_permissions_are_copies():
    perms = get_permissions_for_role(COUPLE)
    perms.add(Permission.WEDDING_DELETE)
    assert Permission.WEDDING_DELETE not in get_permissions_for_role(COUPLE)


def test_couple_schema_matches_editable_fields():
    assert set(CoupleWeddingUpdate.model_fields) == COUPLE_EDITABLE_FIELDS


def test_admin_may_use_couple_surface(client, make_wedding):
    wedding = make_wedding(status=WeddingStatus.DRAFT)
    response = client.patch(
        f"/app/couple/weddings/{wedding.id}",
        json={"name": "Updated"},
        headers=auth_headers("admin@braunstud.io"),
    )
    assert response.status_code == 200
