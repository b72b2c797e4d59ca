# backend/checklist_core/tasks/models.py
import uuid

from django.conf import settings
from django.db import models

from checklist_core.areas.models import Area
from checklist_core.common.models import TimeStampedModel
from checklist_core.hospitals.models import Hospital


class Task(TimeStampedModel):
    """
    Recurring checklist item, curated by administrators.

    `hospital` is a copy of `area.hospital` kept for hospital-filterable queries.
    Only TaskService writes it (on create and whenever the area or the area's
    hospital changes); never treat it as independent data.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    area = models.ForeignKey(Area, on_delete=models.PROTECT, related_name="tasks")
    hospital = models.ForeignKey(
        Hospital,
        on_delete=models.PROTECT,
        related_name="tasks",
        null=True,
        blank=True,
    )

    code = models.CharField(max_length=20)  # short human id, e.g. "ICU1"
    name = models.CharField(max_length=200)
    description = models.CharField(max_length=1000)

    is_active = models.BooleanField(default=True, db_index=True)
    order = models.IntegerField(default=0)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="created_checklist_tasks",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "tasks_task"
        constraints = [
            models.UniqueConstraint(fields=["hospital", "code"], name="uq_task_hospital_code"),
        ]
        indexes = [
            models.Index(fields=["area", "order", "code"]),
            models.Index(fields=["hospital", "is_active"]),
        ]

    def __str__(self) -> str:
        return f"{self.code} {self.name}"
