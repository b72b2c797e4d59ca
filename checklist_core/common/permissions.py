# backend/checklist_core/common/permissions.py

from __future__ import annotations

from typing import Set

from rest_framework.permissions import BasePermission, SAFE_METHODS

# Group/role names (Django auth Group names, mirrored on UserProfile.role)
ROLE_ADMIN = "ADMIN"
ROLE_STAFF = "STAFF"

ALL_ROLES = {ROLE_ADMIN, ROLE_STAFF}


def _user_roles(user) -> Set[str]:
    """
    Resolve roles from:
    1) superuser flag (treated as ADMIN)
    2) Django groups
    3) checklist profile role

    Authenticated users without any explicit role are STAFF.
    """
    roles: Set[str] = set()

    if not user or not getattr(user, "is_authenticated", False):
        return roles

    if getattr(user, "is_superuser", False):
        roles.add(ROLE_ADMIN)
        return roles

    if hasattr(user, "groups"):
        roles.update(user.groups.values_list("name", flat=True))

    profile = getattr(user, "checklist_profile", None)
    if profile is not None and profile.role:
        roles.add(str(profile.role))

    if not roles & ALL_ROLES:
        roles.add(ROLE_STAFF)

    return roles


def is_admin_user(user) -> bool:
    return ROLE_ADMIN in _user_roles(user)


class BaseRolePermission(BasePermission):
    """
    Role-based access per view action.

    - ADMIN bypass.
    - Unknown SAFE actions fall back to list/retrieve.
    - Unknown unsafe actions are denied.
    """
    message = "You do not have permission to perform this action."

    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_ADMIN},
        "update": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        roles = _user_roles(user)
        if ROLE_ADMIN in roles:
            return True

        action = self._infer_action(request, view)
        allowed = self.allowed_roles_per_action.get(action)

        if allowed is None and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            is_detail = "pk" in kwargs or "id" in kwargs
            allowed = self.allowed_roles_per_action.get("retrieve" if is_detail else "list")

        if allowed is not None:
            return bool(roles & allowed)

        return False


class CatalogPermission(BaseRolePermission):
    """Hospitals, areas and tasks: everyone reads, ADMIN writes."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "active": ALL_ROLES,
        "default": ALL_ROLES,
        "branding": ALL_ROLES,
        "create": {ROLE_ADMIN},
        "update": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
        "toggle_status": {ROLE_ADMIN},
        "set_default": {ROLE_ADMIN},
        "logo": {ROLE_ADMIN},
    }


class ChecklistPermission(BaseRolePermission):
    """Checklist reads and entry writes are open to every role."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "entry": ALL_ROLES,
        "save": ALL_ROLES,
        "statistics": ALL_ROLES,
        "reports": ALL_ROLES,
        "export": ALL_ROLES,
    }


class UserAdminPermission(BaseRolePermission):
    allowed_roles_per_action = {
        "list": {ROLE_ADMIN},
        "retrieve": {ROLE_ADMIN},
        "create": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
        "toggle_status": {ROLE_ADMIN},
    }


class StaffRecordPermission(BaseRolePermission):
    """Ownership is enforced by the service; every role may reach the endpoints."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "stats": ALL_ROLES,
        "create": ALL_ROLES,
        "partial_update": ALL_ROLES,
        "destroy": ALL_ROLES,
    }
