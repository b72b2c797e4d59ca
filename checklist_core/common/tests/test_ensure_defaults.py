import pytest
from django.contrib.auth.models import Group
from django.core.management import call_command

from checklist_core.hospitals.models import Hospital

pytestmark = pytest.mark.django_db


def test_ensure_defaults_is_idempotent():
    call_command("ensure_defaults")
    call_command("ensure_defaults")

    assert set(Group.objects.values_list("name", flat=True)) == {"ADMIN", "STAFF"}
    assert Hospital.objects.filter(is_default=True).count() == 1
