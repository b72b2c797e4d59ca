# backend/checklist_core/tasks/services.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import NotFound, ValidationError

from checklist_core.areas.models import Area
from checklist_core.common.api.exceptions import ConflictError
from checklist_core.tasks.models import Task


@dataclass(frozen=True)
class TaskUpdate:
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    area_id: Optional[UUID] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class TaskService:
    """
    Catalog task write-model.

    Notes:
    - Task.hospital always mirrors Task.area.hospital; this class is its only writer.
    - Codes are unique per hospital. A missing code is generated as <AREA_CODE><n>.
    - Tasks referenced by checklist entries can't be deleted, only deactivated.
    """

    # -------------------------
    # Internal helpers
    # -------------------------
    @staticmethod
    def _get_locked(task_id: UUID) -> Task:
        try:
            return Task.objects.select_for_update().get(id=task_id)
        except Task.DoesNotExist:
            raise NotFound("Task not found")

    @staticmethod
    def _get_area(area_id: UUID) -> Area:
        try:
            return Area.objects.get(id=area_id)
        except Area.DoesNotExist:
            raise NotFound("Area not found")

    @staticmethod
    def _assert_code_free(*, code: str, hospital_id: UUID | None, exclude_id: UUID | None = None) -> None:
        qs = Task.objects.filter(code=code, hospital_id=hospital_id)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if qs.exists():
            raise ConflictError("Task with this ID already exists in this hospital")

    @staticmethod
    def _generate_code(area: Area) -> str:
        n = Task.objects.filter(area=area).count() + 1
        code = f"{area.code}{n}"
        while Task.objects.filter(code=code, hospital_id=area.hospital_id).exists():
            n += 1
            code = f"{area.code}{n}"
        return code

    # -------------------------
    # Commands
    # -------------------------
    @staticmethod
    @transaction.atomic
    def create(
        *,
        area_id: UUID,
        name: str,
        description: str,
        code: str | None = None,
        order: int = 0,
        is_active: bool = True,
        created_by_id: int | None = None,
    ) -> Task:
        if not (description or "").strip():
            raise ValidationError({"description": "This field is required."})

        area = TaskService._get_area(area_id)

        code = (code or "").strip().upper()
        if code:
            TaskService._assert_code_free(code=code, hospital_id=area.hospital_id)
        else:
            code = TaskService._generate_code(area)

        return Task.objects.create(
            area=area,
            hospital_id=area.hospital_id,
            code=code,
            name=name,
            description=description,
            order=order or 0,
            is_active=is_active,
            created_by_id=created_by_id,
        )

    @staticmethod
    @transaction.atomic
    def update(*, task_id: UUID, patch: TaskUpdate) -> Task:
        task = TaskService._get_locked(task_id)

        if patch.area_id is not None and patch.area_id != task.area_id:
            area = TaskService._get_area(patch.area_id)
            task.area = area
            task.hospital_id = area.hospital_id

        new_code = task.code
        if patch.code is not None:
            new_code = patch.code.strip().upper()
            if not new_code:
                raise ValidationError({"code": "This field may not be blank."})

        TaskService._assert_code_free(code=new_code, hospital_id=task.hospital_id, exclude_id=task.id)
        task.code = new_code

        if patch.description is not None and not patch.description.strip():
            raise ValidationError({"description": "This field may not be blank."})

        mapping = {
            "name": patch.name,
            "description": patch.description,
            "order": patch.order,
            "is_active": patch.is_active,
        }
        for field, value in mapping.items():
            if value is not None:
                setattr(task, field, value)

        task.save()
        return task

    @staticmethod
    @transaction.atomic
    def toggle_status(*, task_id: UUID) -> Task:
        task = TaskService._get_locked(task_id)
        task.is_active = not task.is_active
        task.save(update_fields=["is_active", "updated_at"])
        return task

    @staticmethod
    @transaction.atomic
    def delete(*, task_id: UUID) -> None:
        task = TaskService._get_locked(task_id)
        try:
            task.delete()
        except ProtectedError:
            raise ConflictError("Task has checklist entries. Deactivate it instead.")

    @staticmethod
    @transaction.atomic
    def sync_hospital_for_area(*, area: Area) -> int:
        """
        Re-derive Task.hospital for every task in `area` after the area moved.
        Returns the number of tasks updated.
        """
        codes = list(Task.objects.filter(area=area).values_list("code", flat=True))
        if not codes:
            return 0

        clash = (
            Task.objects.filter(hospital_id=area.hospital_id, code__in=codes)
            .exclude(area=area)
            .exists()
        )
        if clash:
            raise ConflictError("Task IDs in this area already exist in the target hospital")

        return Task.objects.filter(area=area).exclude(hospital_id=area.hospital_id).update(
            hospital_id=area.hospital_id
        )
