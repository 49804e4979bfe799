"""Admin for platform accounts and organizations."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Email login; organization details get their own fieldset."""

    list_display = (
        "email",
        "name",
        "role",
        "organization_type",
        "is_active",
        "date_joined",
    )
    list_filter = (
        "role",
        "organization_type",
        "is_active",
        "is_staff",
    )
    search_fields = ("email", "name", "phone")
    ordering = ("-date_joined",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            "Organization",
            {"fields": ("role", "name", "organization_type", "phone", "address", "created_by")},
        ),
        (
            "Status",
            {"fields": ("is_active", "is_staff", "is_superuser")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("date_joined", "last_login")},
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "role", "name", "organization_type", "password1", "password2"),
            },
        ),
    )

    readonly_fields = ("date_joined", "last_login")
    raw_id_fields = ("created_by",)
