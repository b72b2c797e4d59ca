# backend/checklist_core/hospitals/models.py
from __future__ import annotations

import uuid

from django.db import models
from django.db.models import Q

from checklist_core.common.models import TimeStampedModel


class Hospital(TimeStampedModel):
    """
    The tenant: unit of data isolation for areas, tasks and checklist entries.

    Exactly one hospital carries is_default once any exists. The flag is only
    moved by HospitalService, which unsets the others in the same transaction.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    code = models.CharField(max_length=20, unique=True)  # stored uppercase

    logo_url = models.CharField(max_length=500, blank=True, default="")

    # Contact (optional, shown on exports)
    address = models.CharField(max_length=500, blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(blank=True, default="")

    is_active = models.BooleanField(default=True, db_index=True)
    is_default = models.BooleanField(default=False, db_index=True)

    class Meta:
        db_table = "hospitals_hospital"
        ordering = ["-is_default", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_default"],
                condition=Q(is_default=True),
                name="uq_hospital_single_default",
            ),
        ]
        indexes = [
            models.Index(fields=["is_active", "name"]),
        ]

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        self.email = (self.email or "").strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
