from types import SimpleNamespace

from collab.api.permissions import (
    can_manage_project,
    can_manage_teamspace,
    can_read_teamspace,
    can_write_teamspace,
    get_teamspace_membership,
)


def _ctx(memberships, is_superadmin=False, user_id=1):
    return {
        "id": user_id,
        "is_superadmin": is_superadmin,
        "memberships_by_teamspace": {m["teamspace_id"]: m for m in memberships},
    }


def _m(teamspace_id, role, can_read=True, can_write=False):
    return {"teamspace_id": teamspace_id, "role": role, "can_read": can_read, "can_write": can_write}


def test_membership_lookup_accepts_string_ids():
    ctx = _ctx([_m(3, "viewer")])
    assert get_teamspace_membership("3", ctx)["role"] == "viewer"
    assert get_teamspace_membership("nope", ctx) is None
    assert get_teamspace_membership(3, None) is None


def test_viewer_reads_but_cannot_write_or_manage():
    ctx = _ctx([_m(3, "viewer")])
    assert can_read_teamspace(3, ctx)
    assert not can_write_teamspace(3, ctx)
    assert not can_manage_teamspace(3, ctx)


def test_editor_writes_but_cannot_manage():
    ctx = _ctx([_m(3, "editor", can_write=True)])
    assert can_write_teamspace(3, ctx)
    assert not can_manage_teamspace(3, ctx)


def test_admin_manages():
    ctx = _ctx([_m(3, "admin", can_write=True)])
    assert can_manage_teamspace(3, ctx)


def test_write_flag_override_is_honored():
    ctx = _ctx([_m(3, "editor", can_write=False)])
    assert not can_write_teamspace(3, ctx)


def test_outsider_has_no_access():
    ctx = _ctx([_m(3, "owner", can_write=True)])
    assert not can_read_teamspace(4, ctx)
    assert not can_write_teamspace(4, ctx)
    assert not can_manage_teamspace(4, ctx)
    assert not can_read_teamspace(3, None)


def test_superadmin_bypasses_membership():
    ctx = _ctx([], is_superadmin=True)
    assert can_read_teamspace(4, ctx)
    assert can_write_teamspace(4, ctx)
    assert can_manage_teamspace(4, ctx)


def test_project_management_is_owner_only():
    project = SimpleNamespace(owner_id=1)
    assert can_manage_project(project, _ctx([], user_id=1))
    assert not can_manage_project(project, _ctx([], user_id=2))
    assert can_manage_project(project, _ctx([], is_superadmin=True, user_id=2))
    assert not can_manage_project(None, _ctx([], user_id=1))
