from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    model = User

    # --------------------------------------------------
    # LIST PAGE
    # --------------------------------------------------
    list_display = ("id", "email", "full_name", "phone", "role", "is_active", "created_at")
    list_filter = ("is_active", "role")
    search_fields = ("email", "full_name", "phone")
    ordering = ("-created_at",)

    # --------------------------------------------------
    # EDIT PAGE
    # --------------------------------------------------
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (_("Personal info"), {
            "fields": (
                "full_name",
                "phone",
                "address",
                "aadhaar_number",
                "pan_number",
                "date_of_birth",
                "father_name",
            )
        }),
        (_("Access"), {"fields": ("role", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        (_("Important dates"), {"fields": ("last_login", "created_at", "updated_at")}),
    )
    readonly_fields = ("last_login", "created_at", "updated_at")

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "full_name", "phone", "role", "password1", "password2"),
        }),
    )
