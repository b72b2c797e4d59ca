# backend/checklist_core/staff_records/models.py
from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models

from checklist_core.areas.models import Area
from checklist_core.common.models import TimeStampedModel
from checklist_core.hospitals.models import Hospital


class RecordCategory(models.TextChoices):
    OBSERVATION = "observation", "Observation"
    INCIDENT = "incident", "Incident"
    MAINTENANCE = "maintenance", "Maintenance"
    GENERAL = "general", "General"
    PATIENT_FEEDBACK = "patient_feedback", "Patient feedback"
    SUPPLY_REQUEST = "supply_request", "Supply request"


class RecordPriority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    URGENT = "urgent", "Urgent"


class RecordStatus(models.TextChoices):
    OPEN = "open", "Open"
    IN_PROGRESS = "in_progress", "In progress"
    RESOLVED = "resolved", "Resolved"
    CLOSED = "closed", "Closed"


class StaffRecord(TimeStampedModel):
    """
    Free-form note raised by staff (incident, supply request, ...).
    Only the creator or an ADMIN may edit or delete it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    hospital = models.ForeignKey(
        Hospital,
        on_delete=models.PROTECT,
        related_name="staff_records",
        null=True,
        blank=True,
    )
    area = models.ForeignKey(
        Area,
        on_delete=models.SET_NULL,
        related_name="staff_records",
        null=True,
        blank=True,
    )

    title = models.CharField(max_length=200)
    category = models.CharField(
        max_length=32, choices=RecordCategory.choices, default=RecordCategory.GENERAL, db_index=True
    )
    description = models.TextField(max_length=2000)
    priority = models.CharField(max_length=16, choices=RecordPriority.choices, default=RecordPriority.MEDIUM)
    status = models.CharField(
        max_length=16, choices=RecordStatus.choices, default=RecordStatus.OPEN, db_index=True
    )
    notes = models.TextField(max_length=1000, blank=True, default="")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="staff_records",
        null=True,
        blank=True,
    )
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="resolved_staff_records",
        null=True,
        blank=True,
    )
    resolved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "staff_records_record"
        indexes = [
            models.Index(fields=["hospital", "status"]),
            models.Index(fields=["hospital", "created_at"]),
            models.Index(fields=["created_by", "created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.title} [{self.category}/{self.status}]"
