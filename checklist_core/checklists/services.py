# backend/checklist_core/checklists/services.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from checklist_core.checklists.models import ChecklistEntry
from checklist_core.common.api.exceptions import error_payload
from checklist_core.common.api.listing import parse_uuid
from checklist_core.common.dates import parse_day
from checklist_core.hospitals.services import HospitalService
from checklist_core.tasks.models import Task

logger = logging.getLogger(__name__)

STAFF_NAME_MAX = 100
NOTES_MAX = 500


@dataclass(frozen=True)
class EntryInput:
    task_id: UUID
    status: bool
    staff_name: str = ""
    notes: Optional[str] = None


def _coerce_bool(value, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "1", "yes"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "0", "no"}:
        return False
    raise ValidationError({field_name: "Must be a boolean."})


def coerce_entry_input(raw: Any) -> EntryInput:
    """Validate one bulk item; raises ValidationError for that item only."""
    if not isinstance(raw, dict):
        raise ValidationError({"detail": "Each entry must be an object."})
    if raw.get("task_id") in (None, ""):
        raise ValidationError({"task_id": "This field is required."})
    if "status" not in raw:
        raise ValidationError({"status": "This field is required."})

    staff_name = str(raw.get("staff_name") or "").strip()
    if len(staff_name) > STAFF_NAME_MAX:
        raise ValidationError({"staff_name": f"Ensure this field has no more than {STAFF_NAME_MAX} characters."})

    notes = raw.get("notes")
    if notes is not None:
        notes = str(notes).strip()
        if len(notes) > NOTES_MAX:
            raise ValidationError({"notes": f"Ensure this field has no more than {NOTES_MAX} characters."})

    return EntryInput(
        task_id=parse_uuid(raw.get("task_id"), "task_id"),
        status=_coerce_bool(raw.get("status"), "status"),
        staff_name=staff_name,
        notes=notes,
    )


class ChecklistEntryService:
    """
    Entry write-model.

    Notes:
    - Entries are only ever created through the upsert path, keyed on (task, date).
    - Concurrent saves of the same (task, date) are serialized by the row lock
      and the unique constraint; the last write wins.
    - completed_at follows status: set on false->true, kept on true->true,
      cleared when status is false.
    """

    @staticmethod
    def _task_for_write(*, task_id: UUID, hospital_id: UUID | None) -> Task:
        task = Task.objects.select_related("area").filter(id=task_id).first()
        if task is None:
            raise NotFound("Task not found")

        # area.hospital is authoritative; Task.hospital is only a query copy
        owner = task.area.hospital_id
        if hospital_id is not None and owner is not None and owner != hospital_id:
            raise NotFound("Task not found in this hospital")
        return task

    @staticmethod
    @transaction.atomic
    def upsert_entry(
        *,
        task_id: UUID,
        day: date | str,
        status: bool,
        staff_name: str = "",
        notes: str | None = None,
        completed_by_id: int | None = None,
        hospital_id: UUID | None = None,
    ) -> ChecklistEntry:
        day = parse_day(day)
        task = ChecklistEntryService._task_for_write(task_id=task_id, hospital_id=hospital_id)
        now = timezone.now()

        insert_hospital_id = task.area.hospital_id or hospital_id
        if insert_hospital_id is None:
            insert_hospital_id = HospitalService.get_default().id

        entry, created = ChecklistEntry.objects.select_for_update().get_or_create(
            task=task,
            date=day,
            defaults={
                "status": status,
                "staff_name": staff_name or "",
                "notes": notes or "",
                "completed_by_id": completed_by_id if status else None,
                "completed_at": now if status else None,
                "hospital_id": insert_hospital_id,
            },
        )
        if created:
            return entry

        was_complete = entry.status and entry.completed_at is not None

        entry.status = status
        entry.staff_name = staff_name or ""
        if notes is not None:
            entry.notes = notes

        if status:
            if not was_complete:
                entry.completed_at = now
            entry.completed_by_id = completed_by_id
        else:
            entry.completed_at = None
            entry.completed_by_id = None

        entry.save(
            update_fields=["status", "staff_name", "notes", "completed_at", "completed_by", "updated_at"]
        )
        return entry

    @staticmethod
    def bulk_upsert_entries(
        *,
        day: date | str,
        items: list[Any],
        completed_by_id: int | None = None,
        hospital_id: UUID | None = None,
    ) -> dict[str, Any]:
        """
        Best-effort batch. Each item is upserted in its own savepoint; a failing
        item is reported in `results` and never rolls back its siblings.

        Returns {"date", "saved", "failed", "results": [...]} with one result per
        input item, in input order.
        """
        day = parse_day(day)
        if not isinstance(items, list):
            raise ValidationError({"entries": "Expected a list of entries."})

        results: list[dict[str, Any]] = []
        saved = 0
        failed = 0

        for index, raw in enumerate(items):
            raw_task_id = raw.get("task_id") if isinstance(raw, dict) else None
            try:
                item = coerce_entry_input(raw)
                entry = ChecklistEntryService.upsert_entry(
                    task_id=item.task_id,
                    day=day,
                    status=item.status,
                    staff_name=item.staff_name,
                    notes=item.notes,
                    completed_by_id=completed_by_id,
                    hospital_id=hospital_id,
                )
            except (ValidationError, NotFound, PermissionDenied) as exc:
                failed += 1
                logger.warning(
                    "Checklist bulk item %d failed date=%s task_id=%s: %s",
                    index,
                    day,
                    raw_task_id,
                    exc.detail,
                )
                results.append(
                    {
                        "task_id": str(raw_task_id) if raw_task_id else None,
                        "ok": False,
                        "entry_id": None,
                        "error": error_payload(exc),
                    }
                )
                continue

            saved += 1
            results.append(
                {
                    "task_id": str(item.task_id),
                    "ok": True,
                    "entry_id": str(entry.id),
                    "error": None,
                }
            )

        logger.info("Checklist bulk save date=%s saved=%d failed=%d", day, saved, failed)
        return {
            "date": day.isoformat(),
            "saved": saved,
            "failed": failed,
            "results": results,
        }
