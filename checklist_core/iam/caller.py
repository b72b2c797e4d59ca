# backend/checklist_core/iam/caller.py
"""
Request identity: who is calling, whether they are ADMIN, and which hospital
they are assigned to.

Loaded by the authentication class, so this module must stay free of service
and view imports (DRF resolves DEFAULT_AUTHENTICATION_CLASSES while
rest_framework.views is still importing).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from checklist_core.common.permissions import is_admin_user


@dataclass(frozen=True)
class Caller:
    user_id: Optional[int]
    is_admin: bool
    hospital_id: Optional[UUID]


def caller_for_user(user) -> Caller:
    profile = getattr(user, "checklist_profile", None)
    return Caller(
        user_id=getattr(user, "id", None),
        is_admin=is_admin_user(user),
        hospital_id=getattr(profile, "hospital_id", None) if profile is not None else None,
    )


def attach_caller(request, *, user) -> Caller:
    caller = caller_for_user(user)
    setattr(request, "caller", caller)
    return caller


def get_caller(request) -> Caller:
    """
    Prefer request.caller set by authentication; compute it otherwise
    (force_authenticate in tests bypasses authentication classes).
    """
    caller = getattr(request, "caller", None)
    if isinstance(caller, Caller):
        return caller
    return attach_caller(request, user=request.user)
