import itertools

import pytest

from app.models.enums import Permission
from app.rbac.deps import require_perm
from app.rbac.perms import (
    PERMISSION_ORDER,
    PERMS,
    can_assign_permission,
    coerce_permission,
    is_at_least,
)

def test_is_at_least_agrees_with_fixed_order():
    for actual, threshold in itertools.product(PERMISSION_ORDER, repeat=2):
        expected = PERMISSION_ORDER.index(actual) >= PERMISSION_ORDER.index(threshold)
        assert is_at_least(actual, threshold) is expected, (actual, threshold)

def test_is_at_least_examples():
    assert is_at_least(Permission.SUPER_ADMIN, Permission.ADMIN) is True
    assert is_at_least(Permission.USER, Permission.ADMIN) is False
    assert is_at_least(Permission.ADMIN, Permission.ADMIN) is True

def test_is_at_least_accepts_stored_strings():
    assert is_at_least("SUPER_ADMIN", Permission.SUPER_ADMIN) is True
    assert is_at_least("ADMIN", Permission.USER) is True
    assert is_at_least("USER", Permission.ADMIN) is False

@pytest.mark.parametrize("value", [None, "", "admin", "OWNER", "VIEWER", 2, object()])
def test_unknown_permission_fails_closed(value):
    assert coerce_permission(value) is None
    for threshold in PERMISSION_ORDER:
        assert is_at_least(value, threshold) is False

def test_can_assign_permission():
    assert can_assign_permission(Permission.SUPER_ADMIN, Permission.SUPER_ADMIN)
    assert can_assign_permission(Permission.ADMIN, Permission.ADMIN)
    assert can_assign_permission(Permission.ADMIN, Permission.USER)

    # no granting above yourself
    assert not can_assign_permission(Permission.ADMIN, Permission.SUPER_ADMIN)
    # plain users grant nothing, not even USER
    assert not can_assign_permission(Permission.USER, Permission.USER)
    assert not can_assign_permission("bogus", Permission.USER)

def test_settings_are_super_admin_only():
    assert PERMS["settings:manage"] is Permission.SUPER_ADMIN
    assert PERMS["users:read"] is Permission.ADMIN

def test_require_perm_rejects_unknown_action():
    with pytest.raises(RuntimeError):
        require_perm("settings:nope")
