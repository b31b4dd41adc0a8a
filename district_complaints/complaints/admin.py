from django.contrib import admin

from .models import AdmissionWindow, Complaint, StaffMember


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = (
        "tracking_number",
        "title",
        "district",
        "category",
        "urgency",
        "status",
        "assigned_role",
        "assignee_name",
        "created_at",
    )
    list_filter = ("status", "urgency", "assigned_role", "district", "category")
    search_fields = ("tracking_number", "title", "submitter_contact", "assignee_name")

    # Complaints change only through the lifecycle engine.
    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False


@admin.register(StaffMember)
class StaffMemberAdmin(admin.ModelAdmin):
    list_display = ("name", "role", "district", "is_active", "user", "created_at")
    list_filter = ("role", "district", "is_active")
    search_fields = ("name", "user__username")
    readonly_fields = ("created_at",)


@admin.register(AdmissionWindow)
class AdmissionWindowAdmin(admin.ModelAdmin):
    list_display = ("contact", "last_submission_at")
    search_fields = ("contact",)
    readonly_fields = ("contact", "last_submission_at")
