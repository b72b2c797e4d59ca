# backend/checklist_core/common/management/commands/ensure_defaults.py

from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand

from checklist_core.common.permissions import ROLE_ADMIN, ROLE_STAFF
from checklist_core.hospitals.services import HospitalService


ROLE_GROUPS = [ROLE_ADMIN, ROLE_STAFF]


class Command(BaseCommand):
    help = "Ensure role groups and the default hospital exist (idempotent)."

    def handle(self, *args, **options):
        created = 0
        for name in ROLE_GROUPS:
            _, was_created = Group.objects.get_or_create(name=name)
            created += 1 if was_created else 0

        hospital = HospitalService.get_default()

        self.stdout.write(self.style.SUCCESS(f"Roles ensured. Newly created: {created}"))
        self.stdout.write(self.style.SUCCESS(f"Default hospital: {hospital.name} ({hospital.code})"))
