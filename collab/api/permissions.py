"""
Permission checks for teamspace and project access.

Key helpers:
- can_read_teamspace(teamspace_id, current_user)
- can_write_teamspace(teamspace_id, current_user)
- can_manage_teamspace(teamspace_id, current_user)
- can_manage_project(project, current_user)
"""
from typing import Any, Dict, Optional

from collab.utils.role_permissions import role_allows_manage, role_allows_write


def get_teamspace_membership(teamspace_id, current_user: Optional[Dict[str, Any]]):
    if not current_user or teamspace_id is None:
        return None
    by_teamspace = current_user.get("memberships_by_teamspace") or {}
    try:
        return by_teamspace.get(int(teamspace_id))
    except (TypeError, ValueError):
        return None


def can_read_teamspace(teamspace_id, current_user: Optional[Dict[str, Any]]) -> bool:
    if current_user is None:
        return False
    if current_user.get("is_superadmin"):
        return True
    membership = get_teamspace_membership(teamspace_id, current_user)
    return bool(membership and (membership.get("can_read") or role_allows_write(membership.get("role"))))


def can_write_teamspace(teamspace_id, current_user: Optional[Dict[str, Any]]) -> bool:
    if current_user is None:
        return False
    if current_user.get("is_superadmin"):
        return True
    membership = get_teamspace_membership(teamspace_id, current_user)
    return bool(membership and membership.get("can_write"))


def can_manage_teamspace(teamspace_id, current_user: Optional[Dict[str, Any]]) -> bool:
    if current_user is None:
        return False
    if current_user.get("is_superadmin"):
        return True
    membership = get_teamspace_membership(teamspace_id, current_user)
    return bool(membership and role_allows_manage(membership.get("role")))


def can_manage_project(project, current_user: Optional[Dict[str, Any]]) -> bool:
    if project is None or current_user is None:
        return False
    if current_user.get("is_superadmin"):
        return True
    return project.owner_id == current_user.get("id")
