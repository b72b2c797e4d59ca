# backend/checklist_core/iam/services/users.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from checklist_core.common.api.exceptions import ConflictError
from checklist_core.common.permissions import ALL_ROLES
from checklist_core.hospitals.models import Hospital
from checklist_core.hospitals.services import HospitalService
from checklist_core.iam.models import UserProfile, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserUpdate:
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    hospital_id: Optional[UUID] = None
    is_active: Optional[bool] = None
    password: Optional[str] = None


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def normalize_role(role: str | None) -> str:
    """Upper-case role name, validated against the known roles."""
    value = str(role or "").strip().upper()
    if value not in ALL_ROLES:
        raise ValidationError({"role": f"Role must be one of: {', '.join(sorted(ALL_ROLES))}."})
    return value


def profile_for(user) -> UserProfile:
    """Users created outside UserService (createsuperuser) get a profile lazily."""
    profile = UserProfile.objects.filter(user=user).select_related("hospital").first()
    if profile is not None:
        return profile
    role = UserRole.ADMIN if user.is_superuser else UserRole.STAFF
    return UserProfile.objects.create(user=user, role=role)


class UserService:
    """
    Administrator-managed accounts.

    The Django username is the normalized email. The profile role is mirrored
    to the ADMIN / STAFF group so role checks keep working off groups.
    """

    @staticmethod
    def _get(user_id: int):
        User = get_user_model()
        try:
            return User.objects.select_for_update().get(id=user_id)
        except (User.DoesNotExist, ValueError, TypeError):
            raise NotFound("User not found")

    @staticmethod
    def _assert_email_free(email: str, *, exclude_id: int | None = None) -> None:
        User = get_user_model()
        qs = User.objects.filter(email__iexact=email)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if qs.exists():
            raise ConflictError("User with this email already exists")

    @staticmethod
    def _hospital(hospital_id: UUID | None) -> Hospital:
        if hospital_id is None:
            return HospitalService.get_default()
        hospital = Hospital.objects.filter(id=hospital_id).first()
        if hospital is None:
            raise NotFound("Hospital not found")
        return hospital

    @staticmethod
    def _sync_role_group(user, role: str) -> None:
        groups = {name: Group.objects.get_or_create(name=name)[0] for name in ALL_ROLES}
        user.groups.remove(*groups.values())
        user.groups.add(groups[role])

    @staticmethod
    @transaction.atomic
    def create(
        *,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        role: str = UserRole.STAFF,
        hospital_id: UUID | None = None,
        is_active: bool = True,
    ):
        email = normalize_email(email)
        role = normalize_role(role)
        if not email:
            raise ValidationError({"email": "This field is required."})
        UserService._assert_email_free(email)

        hospital = UserService._hospital(hospital_id)

        User = get_user_model()
        user = User.objects.create_user(
            username=email,
            email=email,
            password=password,
            first_name=(first_name or "").strip(),
            last_name=(last_name or "").strip(),
            is_active=is_active,
        )
        UserProfile.objects.create(user=user, role=role, hospital=hospital)
        UserService._sync_role_group(user, role)

        logger.info("User created id=%s role=%s hospital_id=%s", user.id, role, hospital.id)
        return user

    @staticmethod
    @transaction.atomic
    def update(*, user_id: int, patch: UserUpdate):
        user = UserService._get(user_id)
        profile = profile_for(user)

        if patch.email is not None:
            email = normalize_email(patch.email)
            if email != normalize_email(user.email):
                UserService._assert_email_free(email, exclude_id=user.id)
                user.email = email
                user.username = email
        if patch.first_name is not None:
            user.first_name = patch.first_name.strip()
        if patch.last_name is not None:
            user.last_name = patch.last_name.strip()
        if patch.is_active is not None:
            user.is_active = patch.is_active
        if patch.password:
            user.set_password(patch.password)
        user.save()

        if patch.role is not None:
            role = normalize_role(patch.role)
            UserService._sync_role_group(user, role)
            profile.role = role
        if patch.hospital_id is not None:
            profile.hospital = UserService._hospital(patch.hospital_id)
        profile.save()

        return user

    @staticmethod
    @transaction.atomic
    def update_profile(*, user, first_name: str | None = None, last_name: str | None = None, email: str | None = None):
        """Self-service edit; role and hospital stay administrator-only."""
        return UserService.update(
            user_id=user.id,
            patch=UserUpdate(email=email, first_name=first_name, last_name=last_name),
        )

    @staticmethod
    @transaction.atomic
    def change_password(*, user, current_password: str, new_password: str) -> None:
        if not user.check_password(current_password or ""):
            raise ValidationError({"current_password": "Current password is incorrect."})
        user.set_password(new_password)
        user.save(update_fields=["password"])
        logger.info("Password changed user_id=%s", user.id)

    @staticmethod
    @transaction.atomic
    def toggle_status(*, user_id: int, actor_id: int | None):
        user = UserService._get(user_id)
        if actor_id is not None and user.id == actor_id:
            raise ValidationError({"detail": "You cannot deactivate your own account."})
        user.is_active = not user.is_active
        user.save(update_fields=["is_active"])
        return user

    @staticmethod
    @transaction.atomic
    def delete(*, user_id: int, actor_id: int | None) -> None:
        user = UserService._get(user_id)
        if actor_id is not None and user.id == actor_id:
            raise ValidationError({"detail": "You cannot delete your own account."})
        user.delete()
        logger.info("User deleted id=%s by=%s", user_id, actor_id)
