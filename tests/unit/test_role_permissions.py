import pytest

from collab.utils.role_permissions import (
    ALLOWED_ROLES,
    RoleEnum,
    get_role_permissions,
    resolve_permissions,
    role_allows_manage,
    role_allows_write,
)


class TestRolePermissions:
    """Unit tests for teamspace role defaults."""

    @pytest.mark.parametrize("role", ["owner", "admin", "editor"])
    def test_writer_roles(self, role):
        assert get_role_permissions(role) == {"can_read": True, "can_write": True}

    def test_viewer_is_read_only(self):
        assert get_role_permissions("viewer") == {"can_read": True, "can_write": False}

    def test_invalid_role_raises(self):
        with pytest.raises(ValueError, match="Unknown role: invalid"):
            get_role_permissions("invalid")

    def test_returned_dict_is_a_copy(self):
        perms = get_role_permissions("viewer")
        perms["can_write"] = True
        assert get_role_permissions("viewer")["can_write"] is False

    def test_resolve_permissions_applies_overrides(self):
        assert resolve_permissions("viewer", can_write=True) == {"can_read": True, "can_write": True}
        assert resolve_permissions("editor", can_read=False) == {"can_read": False, "can_write": True}
        assert resolve_permissions("admin") == {"can_read": True, "can_write": True}

    def test_write_and_manage_roles(self):
        assert role_allows_write("editor") and not role_allows_write("viewer")
        assert role_allows_manage("owner") and role_allows_manage("admin")
        assert not role_allows_manage("editor")
        assert not role_allows_manage(None)

    def test_role_enum_matches_allowed_roles(self):
        assert {r.value for r in RoleEnum} == set(ALLOWED_ROLES)
