from django.contrib import admin

from payroll_desk.audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "username", "action", "entity_type", "entity_name")
    list_filter = ("action", "entity_type")
    search_fields = ("entity_id", "entity_name", "username")
    readonly_fields = [field.name for field in AuditLog._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
