from django.contrib import admin

from checklist_core.iam.models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "hospital", "updated_at")
    list_filter = ("role", "hospital")
    search_fields = ("user__username", "user__email", "user__first_name", "user__last_name")
    readonly_fields = ("id", "created_at", "updated_at")
