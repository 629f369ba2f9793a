from django.contrib import admin
from django.contrib.auth import get_user_model
from rolepermissions.roles import get_user_roles

User = get_user_model()


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("username", "role", "get_roles", "is_active", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("username",)
    fields = ("username", "role", "is_active", "is_staff", "is_superuser", "last_login", "created_at")
    readonly_fields = ("last_login", "created_at")

    def get_roles(self, obj):
        return ", ".join(role.get_name() for role in get_user_roles(obj))

    get_roles.short_description = "Permission roles"
