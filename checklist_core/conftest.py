# backend/checklist_core/conftest.py
import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from rest_framework.test import APIClient

from checklist_core.areas.models import Area
from checklist_core.hospitals.models import Hospital
from checklist_core.iam.models import UserProfile, UserRole
from checklist_core.tasks.models import Task


def make_user(username: str, role: str, hospital=None, **extra):
    """
    Django user + checklist profile + role group, the same graph UserService builds.
    hospital=None leaves the user unassigned.
    """
    group, _ = Group.objects.get_or_create(name=role)
    User = get_user_model()
    user = User.objects.create_user(
        username=username,
        email=extra.pop("email", f"{username}@example.com"),
        password=extra.pop("password", "pass12345"),
        **extra,
    )
    user.groups.add(group)
    UserProfile.objects.create(user=user, role=role, hospital=hospital)
    return user


def client_for(user) -> APIClient:
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def hospital(db):
    return Hospital.objects.create(name="Main Hospital", code="MAIN", is_default=True, is_active=True)


@pytest.fixture
def other_hospital(db):
    return Hospital.objects.create(
        name="City Hospital",
        code="CITY-01",
        address="12 Park Road",
        phone="555-0101",
        email="Front@City.example",
    )


@pytest.fixture
def area(hospital):
    return Area.objects.create(hospital=hospital, name="Intensive Care", code="ICU")


@pytest.fixture
def other_area(other_hospital):
    return Area.objects.create(hospital=other_hospital, name="Outpatients", code="OPD")


@pytest.fixture
def task(area):
    return Task.objects.create(
        area=area,
        hospital=area.hospital,
        code="ICU1",
        name="Check oxygen supply",
        description="Verify cylinder pressure and backup",
        order=1,
    )


@pytest.fixture
def task2(area):
    return Task.objects.create(
        area=area,
        hospital=area.hospital,
        code="ICU2",
        name="Clean monitors",
        description="Wipe all bedside monitors",
        order=2,
    )


@pytest.fixture
def other_task(other_area):
    return Task.objects.create(
        area=other_area,
        hospital=other_area.hospital,
        code="OPD1",
        name="Restock forms",
        description="Registration forms at the front desk",
        order=1,
    )


@pytest.fixture
def admin_user(db):
    return make_user("admin", UserRole.ADMIN)


@pytest.fixture
def staff_user(hospital):
    return make_user("staff", UserRole.STAFF, hospital=hospital)


@pytest.fixture
def other_staff_user(other_hospital):
    return make_user("other_staff", UserRole.STAFF, hospital=other_hospital)


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def staff_client(staff_user):
    return client_for(staff_user)


@pytest.fixture
def other_staff_client(other_staff_user):
    return client_for(other_staff_user)
