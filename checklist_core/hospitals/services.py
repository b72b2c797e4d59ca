# backend/checklist_core/hospitals/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import NotFound, ValidationError

from checklist_core.common.api.exceptions import ConflictError, InvariantViolation
from checklist_core.hospitals.models import Hospital

logger = logging.getLogger(__name__)

DEFAULT_HOSPITAL_NAME = "Sugar & Heart Clinic"
DEFAULT_HOSPITAL_CODE = "DEFAULT"


def _default_settings() -> tuple[str, str]:
    cfg = getattr(settings, "CHECKLIST", {}) or {}
    name = cfg.get("DEFAULT_HOSPITAL_NAME") or DEFAULT_HOSPITAL_NAME
    code = (cfg.get("DEFAULT_HOSPITAL_CODE") or DEFAULT_HOSPITAL_CODE).strip().upper()
    return name, code


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


@dataclass(frozen=True)
class HospitalUpdate:
    name: Optional[str] = None
    code: Optional[str] = None
    logo_url: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None


class HospitalService:
    """
    Hospital write-model operations.

    Default-hospital invariant:
    - at most one row has is_default (partial unique constraint)
    - once any hospital exists, one of them is the default
    - the default can't be deleted, deactivated or un-defaulted directly;
      another hospital has to be made default first
    """

    @staticmethod
    def _get_locked(hospital_id: UUID) -> Hospital:
        try:
            return Hospital.objects.select_for_update().get(id=hospital_id)
        except Hospital.DoesNotExist:
            raise NotFound("Hospital not found")

    @staticmethod
    def _assert_code_free(code: str, *, exclude_id: UUID | None = None) -> None:
        qs = Hospital.objects.filter(code=code)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if qs.exists():
            raise ConflictError("Hospital with this code already exists")

    @staticmethod
    def _unset_other_defaults(*, keep_id: UUID | None = None) -> None:
        qs = Hospital.objects.select_for_update().filter(is_default=True)
        if keep_id is not None:
            qs = qs.exclude(id=keep_id)
        # evaluate the lock before the bulk update
        ids = list(qs.values_list("id", flat=True))
        if ids:
            Hospital.objects.filter(id__in=ids).update(is_default=False)

    @staticmethod
    def get_default() -> Hospital:
        """
        Return the default hospital, creating it lazily.

        Lookup order: the flagged default, then a hospital whose code is the
        configured default code (promoted to default), then a fresh row.
        """
        hospital = Hospital.objects.filter(is_default=True).first()
        if hospital is not None:
            return hospital

        name, code = _default_settings()
        try:
            with transaction.atomic():
                hospital = Hospital.objects.select_for_update().filter(code=code).first()
                if hospital is not None:
                    hospital.is_default = True
                    hospital.is_active = True
                    hospital.save(update_fields=["is_default", "is_active", "updated_at"])
                    logger.info("Promoted hospital %s (%s) to default", hospital.id, hospital.code)
                    return hospital

                hospital = Hospital.objects.create(
                    name=name,
                    code=code,
                    is_active=True,
                    is_default=True,
                )
                logger.info("Created default hospital %s (%s)", hospital.id, hospital.code)
                return hospital
        except IntegrityError:
            # another request created/promoted the default concurrently
            return Hospital.objects.get(is_default=True)

    @staticmethod
    @transaction.atomic
    def create(
        *,
        name: str,
        code: str,
        logo_url: str = "",
        address: str = "",
        phone: str = "",
        email: str = "",
        is_active: bool = True,
        is_default: bool = False,
    ) -> Hospital:
        code = normalize_code(code)
        if not code:
            raise ValidationError({"code": "This field is required."})
        HospitalService._assert_code_free(code)

        make_default = bool(is_default) or not Hospital.objects.filter(is_default=True).exists()
        if make_default and not is_active:
            raise InvariantViolation("Cannot set inactive hospital as default")

        if make_default:
            HospitalService._unset_other_defaults()

        hospital = Hospital.objects.create(
            name=name,
            code=code,
            logo_url=logo_url or "",
            address=address or "",
            phone=phone or "",
            email=email or "",
            is_active=is_active,
            is_default=make_default,
        )
        if make_default:
            logger.info("Hospital %s (%s) is now the default", hospital.id, hospital.code)
        return hospital

    @staticmethod
    @transaction.atomic
    def update(*, hospital_id: UUID, patch: HospitalUpdate) -> Hospital:
        h = HospitalService._get_locked(hospital_id)

        if patch.code is not None:
            code = normalize_code(patch.code)
            if not code:
                raise ValidationError({"code": "This field may not be blank."})
            if code != h.code:
                HospitalService._assert_code_free(code, exclude_id=h.id)
            h.code = code

        if patch.is_default is False and h.is_default:
            raise InvariantViolation("Cannot unset default hospital. Set another hospital as default first.")

        becomes_default = bool(patch.is_default) and not h.is_default
        will_be_active = h.is_active if patch.is_active is None else patch.is_active

        if not will_be_active and (h.is_default or becomes_default):
            raise InvariantViolation("Cannot deactivate default hospital")

        mapping = {
            "name": patch.name,
            "logo_url": patch.logo_url,
            "address": patch.address,
            "phone": patch.phone,
            "email": patch.email,
            "is_active": patch.is_active,
        }
        for field, value in mapping.items():
            if value is not None:
                setattr(h, field, value)

        if becomes_default:
            HospitalService._unset_other_defaults(keep_id=h.id)
            h.is_default = True

        h.save()
        if becomes_default:
            logger.info("Hospital %s (%s) is now the default", h.id, h.code)
        return h

    @staticmethod
    @transaction.atomic
    def set_default(*, hospital_id: UUID) -> Hospital:
        h = HospitalService._get_locked(hospital_id)
        if not h.is_active:
            raise InvariantViolation("Cannot set inactive hospital as default")
        if h.is_default:
            return h

        # unset all, then set one; both inside the same transaction
        HospitalService._unset_other_defaults(keep_id=h.id)
        h.is_default = True
        h.save(update_fields=["is_default", "updated_at"])
        logger.info("Hospital %s (%s) is now the default", h.id, h.code)
        return h

    @staticmethod
    @transaction.atomic
    def toggle_status(*, hospital_id: UUID) -> Hospital:
        h = HospitalService._get_locked(hospital_id)
        if h.is_active and h.is_default:
            raise InvariantViolation("Cannot deactivate default hospital")
        h.is_active = not h.is_active
        h.save(update_fields=["is_active", "updated_at"])
        return h

    @staticmethod
    @transaction.atomic
    def update_logo(*, hospital_id: UUID, logo_url: str) -> Hospital:
        h = HospitalService._get_locked(hospital_id)
        h.logo_url = (logo_url or "").strip()
        h.save(update_fields=["logo_url", "updated_at"])
        return h

    @staticmethod
    @transaction.atomic
    def delete(*, hospital_id: UUID) -> None:
        h = HospitalService._get_locked(hospital_id)
        if h.is_default:
            raise InvariantViolation("Cannot delete default hospital")
        try:
            h.delete()
        except ProtectedError:
            raise ConflictError(
                "Hospital is still referenced by areas, tasks, checklist entries or users. Deactivate it instead."
            )

    @staticmethod
    def branding(*, hospital_id: UUID | None = None) -> dict[str, Any]:
        """
        Export/header branding for a hospital, falling back to the default
        hospital when no id is given or the id is unknown.
        """
        hospital = None
        if hospital_id:
            hospital = Hospital.objects.filter(id=hospital_id).first()
        if hospital is None:
            hospital = HospitalService.get_default()

        return {
            "id": hospital.id,
            "name": hospital.name,
            "code": hospital.code,
            "logo_url": hospital.logo_url,
            "address": hospital.address,
            "phone": hospital.phone,
            "email": hospital.email,
        }
