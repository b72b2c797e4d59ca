# backend/checklist_core/iam/models.py
import uuid

from django.conf import settings
from django.db import models

from checklist_core.common.models import TimeStampedModel
from checklist_core.hospitals.models import Hospital


class UserRole(models.TextChoices):
    ADMIN = "ADMIN", "Admin"
    STAFF = "STAFF", "Staff"


class UserProfile(TimeStampedModel):
    """
    Checklist identity wrapper anchored to Django's AUTH_USER_MODEL.

    hospital is the caller's assigned tenant; NULL means "not assigned"
    (admins then read across hospitals, staff fall back to the default).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="checklist_profile")
    role = models.CharField(max_length=16, choices=UserRole.choices, default=UserRole.STAFF, db_index=True)
    hospital = models.ForeignKey(
        Hospital,
        on_delete=models.PROTECT,
        related_name="user_profiles",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "iam_user_profile"
        indexes = [
            models.Index(fields=["hospital", "role"]),
        ]

    def __str__(self) -> str:
        return f"{self.user.get_username()} ({self.role})"
