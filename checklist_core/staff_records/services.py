# backend/checklist_core/staff_records/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from checklist_core.areas.models import Area
from checklist_core.iam.caller import Caller
from checklist_core.iam.scope import HospitalScope
from checklist_core.staff_records.models import RecordStatus, StaffRecord

logger = logging.getLogger(__name__)

OWNERSHIP_MSG = "You can only edit your own records"


@dataclass(frozen=True)
class StaffRecordUpdate:
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    area_id: Optional[UUID] = None


class StaffRecordService:
    @staticmethod
    def _get_locked(record_id: UUID, scope: HospitalScope) -> StaffRecord:
        qs = StaffRecord.objects.select_for_update()
        if not scope.is_all:
            qs = qs.filter(hospital_id=scope.hospital_id)
        try:
            return qs.get(id=record_id)
        except StaffRecord.DoesNotExist:
            raise NotFound("Record not found")

    @staticmethod
    def _assert_owner(record: StaffRecord, caller: Caller) -> None:
        if caller.is_admin:
            return
        if record.created_by_id is None or record.created_by_id != caller.user_id:
            raise PermissionDenied(OWNERSHIP_MSG)

    @staticmethod
    def _area_for(area_id: UUID | None, hospital_id: UUID | None) -> Area | None:
        if area_id is None:
            return None
        area = Area.objects.filter(id=area_id).first()
        if area is None:
            raise NotFound("Area not found")
        if area.hospital_id is not None and hospital_id is not None and area.hospital_id != hospital_id:
            raise ValidationError({"area_id": "Area does not belong to this hospital."})
        return area

    @staticmethod
    @transaction.atomic
    def create(
        *,
        title: str,
        description: str,
        hospital_id: UUID | None,
        category: str = "general",
        priority: str = "medium",
        notes: str = "",
        area_id: UUID | None = None,
        created_by_id: int | None = None,
    ) -> StaffRecord:
        area = StaffRecordService._area_for(area_id, hospital_id)
        obj = StaffRecord.objects.create(
            title=title.strip(),
            description=description.strip(),
            category=category,
            priority=priority,
            notes=(notes or "").strip(),
            area=area,
            hospital_id=hospital_id,
            created_by_id=created_by_id,
        )
        logger.info("Staff record created id=%s category=%s hospital_id=%s", obj.id, obj.category, hospital_id)
        return obj

    @staticmethod
    @transaction.atomic
    def update(*, record_id: UUID, patch: StaffRecordUpdate, caller: Caller, scope: HospitalScope) -> StaffRecord:
        obj = StaffRecordService._get_locked(record_id, scope)
        StaffRecordService._assert_owner(obj, caller)

        if patch.title is not None:
            obj.title = patch.title.strip()
        if patch.description is not None:
            obj.description = patch.description.strip()
        if patch.category is not None:
            obj.category = patch.category
        if patch.priority is not None:
            obj.priority = patch.priority
        if patch.notes is not None:
            obj.notes = patch.notes.strip()
        if patch.area_id is not None:
            obj.area = StaffRecordService._area_for(patch.area_id, obj.hospital_id)

        if patch.status is not None and patch.status != obj.status:
            if patch.status == RecordStatus.RESOLVED:
                obj.resolved_by_id = caller.user_id
                obj.resolved_at = timezone.now()
            obj.status = patch.status

        obj.save()
        return obj

    @staticmethod
    @transaction.atomic
    def delete(*, record_id: UUID, caller: Caller, scope: HospitalScope) -> None:
        obj = StaffRecordService._get_locked(record_id, scope)
        StaffRecordService._assert_owner(obj, caller)
        obj.delete()
