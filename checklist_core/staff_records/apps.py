from django.apps import AppConfig


class StaffRecordsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "checklist_core.staff_records"
