from __future__ import annotations

from uuid import UUID

from django.contrib.auth import get_user_model
from django.db.models import Q, QuerySet
from rest_framework.exceptions import NotFound


def user_list(*, search: str | None = None, role: str | None = None, hospital_id: UUID | None = None) -> QuerySet:
    User = get_user_model()
    qs = User.objects.select_related("checklist_profile", "checklist_profile__hospital")
    if role:
        qs = qs.filter(checklist_profile__role=role.upper())
    if hospital_id is not None:
        qs = qs.filter(checklist_profile__hospital_id=hospital_id)
    if search:
        qs = qs.filter(
            Q(email__icontains=search) | Q(first_name__icontains=search) | Q(last_name__icontains=search)
        )
    return qs.order_by("email", "id")


def user_by_id(*, user_id) -> object:
    User = get_user_model()
    try:
        return User.objects.select_related("checklist_profile", "checklist_profile__hospital").get(id=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFound("User not found")
