# backend/checklist_core/iam/scope.py
"""
Tenant resolver.

Turns (caller, optional requested hospital) into the hospital scope a request
may read, or the concrete hospital a write lands in. Priority order:

1. requested + admin            -> requested (admins cross hospitals freely)
2. requested + non-admin        -> AccessDenied unless it is the caller's own hospital
3. caller has a hospital        -> that hospital
4. otherwise                    -> the default hospital (created lazily)

Reads and writes differ in one place: an admin with no request and no
assignment reads across all hospitals, but writes into the default hospital.
Staff without an assignment count as assigned to the default hospital.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from rest_framework.exceptions import NotFound, PermissionDenied

from checklist_core.common.api.listing import parse_uuid
from checklist_core.hospitals.models import Hospital
from checklist_core.hospitals.services import HospitalService
from checklist_core.iam.caller import Caller, get_caller

logger = logging.getLogger(__name__)

ACCESS_DENIED_MSG = "You do not have access to the requested hospital."
HOSPITAL_PARAM = "hospital_id"


@dataclass(frozen=True)
class HospitalScope:
    """
    hospital_id=None is the all-hospitals scope; anything else is a single tenant.
    Selectors take this value instead of branching on roles.
    """
    hospital_id: Optional[UUID] = None

    @classmethod
    def all(cls) -> "HospitalScope":
        return cls(hospital_id=None)

    @classmethod
    def single(cls, hospital_id: UUID) -> "HospitalScope":
        return cls(hospital_id=hospital_id)

    @property
    def is_all(self) -> bool:
        return self.hospital_id is None


def requested_hospital_id(request) -> UUID | None:
    raw = None
    params = getattr(request, "query_params", None)
    if params is not None:
        raw = params.get(HOSPITAL_PARAM)
    if not raw and request.method not in ("GET", "HEAD", "OPTIONS"):
        data = getattr(request, "data", None)
        if isinstance(data, dict):
            raw = data.get(HOSPITAL_PARAM)
    if raw is None or raw == "":
        return None
    return parse_uuid(raw, HOSPITAL_PARAM)


def _own_hospital_id(caller: Caller) -> UUID:
    if caller.hospital_id is not None:
        return caller.hospital_id
    return HospitalService.get_default().id


def _deny(caller: Caller, requested: UUID) -> PermissionDenied:
    logger.info(
        "Hospital scope denied user_id=%s requested=%s assigned=%s",
        caller.user_id,
        requested,
        caller.hospital_id,
    )
    return PermissionDenied(ACCESS_DENIED_MSG)


def resolve_read_scope(caller: Caller, requested: UUID | None = None) -> HospitalScope:
    if requested is not None:
        if caller.is_admin:
            return HospitalScope.single(requested)
        own = _own_hospital_id(caller)
        if own != requested:
            raise _deny(caller, requested)
        return HospitalScope.single(own)

    if caller.hospital_id is not None:
        return HospitalScope.single(caller.hospital_id)

    if caller.is_admin:
        return HospitalScope.all()

    return HospitalScope.single(HospitalService.get_default().id)


def resolve_write_hospital_id(caller: Caller, requested: UUID | None = None) -> UUID:
    if requested is not None:
        if caller.is_admin:
            if not Hospital.objects.filter(id=requested).exists():
                raise NotFound("Hospital not found")
            return requested
        own = _own_hospital_id(caller)
        if own != requested:
            raise _deny(caller, requested)
        return own

    return _own_hospital_id(caller)


def resolve_entry_hospital_id(caller: Caller, requested: UUID | None = None) -> UUID | None:
    """
    Hospital restriction for checklist entry writes.

    An unassigned admin without an explicit request reads every hospital, so
    its entry writes are not restricted: None tells the entry service to
    store the task's own hospital (or the default one for global tasks).
    Everyone else goes through the normal write rule.
    """
    if caller.is_admin and requested is None and caller.hospital_id is None:
        return None
    return resolve_write_hospital_id(caller, requested)


def read_scope_for_request(request) -> HospitalScope:
    return resolve_read_scope(get_caller(request), requested_hospital_id(request))


def write_hospital_for_request(request) -> UUID:
    return resolve_write_hospital_id(get_caller(request), requested_hospital_id(request))


def entry_hospital_for_request(request) -> UUID | None:
    return resolve_entry_hospital_id(get_caller(request), requested_hospital_id(request))
