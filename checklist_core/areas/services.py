# backend/checklist_core/areas/services.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import NotFound, ValidationError

from checklist_core.areas.models import Area
from checklist_core.common.api.exceptions import ConflictError
from checklist_core.hospitals.models import Hospital
from checklist_core.tasks.services import TaskService


@dataclass(frozen=True)
class AreaUpdate:
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    hospital_id: Optional[UUID] = None


class AreaService:
    @staticmethod
    def _get_locked(area_id: UUID) -> Area:
        try:
            return Area.objects.select_for_update().get(id=area_id)
        except Area.DoesNotExist:
            raise NotFound("Area not found")

    @staticmethod
    def _assert_code_free(*, code: str, hospital_id: UUID | None, exclude_id: UUID | None = None) -> None:
        qs = Area.objects.filter(code=code)
        qs = qs.filter(hospital__isnull=True) if hospital_id is None else qs.filter(hospital_id=hospital_id)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if qs.exists():
            raise ConflictError("Area with this code already exists in this hospital")

    @staticmethod
    def _require_hospital(hospital_id: UUID) -> Hospital:
        hospital = Hospital.objects.filter(id=hospital_id).first()
        if hospital is None:
            raise NotFound("Hospital not found")
        return hospital

    @staticmethod
    @transaction.atomic
    def create(
        *,
        name: str,
        code: str,
        hospital_id: UUID | None,
        description: str = "",
        is_active: bool = True,
        created_by_id: int | None = None,
    ) -> Area:
        code = (code or "").strip().upper()
        if not code:
            raise ValidationError({"code": "This field is required."})

        if hospital_id is not None:
            AreaService._require_hospital(hospital_id)
        AreaService._assert_code_free(code=code, hospital_id=hospital_id)

        return Area.objects.create(
            hospital_id=hospital_id,
            name=name,
            code=code,
            description=description or "",
            is_active=is_active,
            created_by_id=created_by_id,
        )

    @staticmethod
    @transaction.atomic
    def update(*, area_id: UUID, patch: AreaUpdate) -> Area:
        area = AreaService._get_locked(area_id)

        new_code = area.code
        if patch.code is not None:
            new_code = patch.code.strip().upper()
            if not new_code:
                raise ValidationError({"code": "This field may not be blank."})

        new_hospital_id = area.hospital_id
        if patch.hospital_id is not None and patch.hospital_id != area.hospital_id:
            AreaService._require_hospital(patch.hospital_id)
            new_hospital_id = patch.hospital_id

        moved = new_hospital_id != area.hospital_id
        if new_code != area.code or moved:
            AreaService._assert_code_free(code=new_code, hospital_id=new_hospital_id, exclude_id=area.id)

        area.code = new_code
        area.hospital_id = new_hospital_id
        if patch.name is not None:
            area.name = patch.name
        if patch.description is not None:
            area.description = patch.description
        if patch.is_active is not None:
            area.is_active = patch.is_active
        area.save()

        if moved:
            TaskService.sync_hospital_for_area(area=area)
        return area

    @staticmethod
    @transaction.atomic
    def toggle_status(*, area_id: UUID) -> Area:
        area = AreaService._get_locked(area_id)
        area.is_active = not area.is_active
        area.save(update_fields=["is_active", "updated_at"])
        return area

    @staticmethod
    @transaction.atomic
    def delete(*, area_id: UUID) -> None:
        area = AreaService._get_locked(area_id)
        try:
            area.delete()
        except ProtectedError:
            raise ConflictError("Area still has tasks. Deactivate it instead.")
