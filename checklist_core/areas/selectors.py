# backend/checklist_core/areas/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet
from rest_framework.exceptions import NotFound

from checklist_core.areas.models import Area
from checklist_core.iam.scope import HospitalScope


def _scoped(scope: HospitalScope) -> QuerySet[Area]:
    qs = Area.objects.select_related("hospital")
    if not scope.is_all:
        qs = qs.filter(hospital_id=scope.hospital_id)
    return qs


def area_list(*, scope: HospitalScope, search: str | None = None, include_inactive: bool = True) -> QuerySet[Area]:
    qs = _scoped(scope)
    if not include_inactive:
        qs = qs.filter(is_active=True)
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(code__icontains=search))
    return qs.order_by("name")


def active_areas(*, scope: HospitalScope) -> QuerySet[Area]:
    return _scoped(scope).filter(is_active=True).order_by("name")


def area_by_id(*, area_id: UUID, scope: HospitalScope) -> Area:
    try:
        return _scoped(scope).get(id=area_id)
    except Area.DoesNotExist:
        raise NotFound("Area not found")


def area_ids_for_hospital(*, hospital_id: UUID) -> list[UUID]:
    """Allowlist of area ids owned by a hospital (empty list if it has none)."""
    return list(Area.objects.filter(hospital_id=hospital_id).values_list("id", flat=True))
