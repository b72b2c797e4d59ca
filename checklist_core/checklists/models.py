# backend/checklist_core/checklists/models.py
import uuid

from django.conf import settings
from django.db import models

from checklist_core.common.models import TimeStampedModel
from checklist_core.hospitals.models import Hospital
from checklist_core.tasks.models import Task


class ChecklistEntry(TimeStampedModel):
    """
    Sparse completion record for one task on one day.

    Two independent date axes:
    - date:        which day's checklist the entry belongs to
    - created_at:  when the record was first saved (report filter axis)

    At most one entry per (task, date). Rows are only written through
    ChecklistEntryService's upsert path.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    task = models.ForeignKey(Task, on_delete=models.PROTECT, related_name="entries")
    date = models.DateField(db_index=True)

    status = models.BooleanField(default=False)
    staff_name = models.CharField(max_length=100, blank=True, default="")
    completed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="completed_checklist_entries",
        null=True,
        blank=True,
    )
    completed_at = models.DateTimeField(null=True, blank=True)
    notes = models.CharField(max_length=500, blank=True, default="")

    # set on insert only
    hospital = models.ForeignKey(
        Hospital,
        on_delete=models.PROTECT,
        related_name="checklist_entries",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "checklists_entry"
        verbose_name_plural = "checklist entries"
        constraints = [
            models.UniqueConstraint(fields=["task", "date"], name="uq_checklist_entry_task_date"),
        ]
        indexes = [
            models.Index(fields=["hospital", "date"]),
            models.Index(fields=["hospital", "created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.task_id} @ {self.date} ({'done' if self.status else 'pending'})"
