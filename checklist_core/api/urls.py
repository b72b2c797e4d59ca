# backend/checklist_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from checklist_core.areas.api.views import AreaViewSet
from checklist_core.checklists.api.views import ChecklistViewSet
from checklist_core.hospitals.api.views import HospitalViewSet
from checklist_core.iam.api.auth import LoginView, LogoutView, RefreshView
from checklist_core.iam.api.me import ChangePasswordView, MeView
from checklist_core.iam.api.users import UserViewSet
from checklist_core.staff_records.api.views import StaffRecordViewSet
from checklist_core.tasks.api.views import TaskViewSet

router = DefaultRouter()

router.register(r"hospitals", HospitalViewSet, basename="hospitals")
router.register(r"areas", AreaViewSet, basename="areas")
router.register(r"tasks", TaskViewSet, basename="tasks")
router.register(r"checklist", ChecklistViewSet, basename="checklist")
router.register(r"users", UserViewSet, basename="users")
router.register(r"staff-records", StaffRecordViewSet, basename="staff-records")

urlpatterns = [
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    path("me/change-password/", ChangePasswordView.as_view(), name="me-change-password"),

    # router last so the explicit paths above win
    *router.urls,
]
