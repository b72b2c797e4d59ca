# backend/checklist_core/areas/models.py
from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models

from checklist_core.common.models import TimeStampedModel
from checklist_core.hospitals.models import Hospital


class Area(TimeStampedModel):
    """
    A ward/unit inside a hospital (ICU, OPD, ...). Codes are unique per hospital,
    so two hospitals may both have an "ICU". hospital=NULL is a legacy/global area.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    hospital = models.ForeignKey(
        Hospital,
        on_delete=models.PROTECT,
        related_name="areas",
        null=True,
        blank=True,
    )

    name = models.CharField(max_length=100)
    code = models.CharField(max_length=10)  # stored uppercase
    description = models.CharField(max_length=500, blank=True, default="")

    is_active = models.BooleanField(default=True, db_index=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="created_areas",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "areas_area"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["hospital", "code"], name="uq_area_hospital_code"),
        ]
        indexes = [
            models.Index(fields=["hospital", "is_active"]),
        ]

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
