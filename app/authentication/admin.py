"""Admin for marketplace accounts."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from authentication.models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    # Revocation is driven by credentials_changed_at, never edited by hand
    readonly_fields = ("credentials_changed_at", "last_login", "date_joined")

    list_display = ("email", "full_name", "role", "is_confirmed", "is_active")
    list_filter = ("role", "is_confirmed", "is_active")
    search_fields = ("email", "first_name", "last_name")
    ordering = ("email",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Public profile", {"fields": ("first_name", "last_name", "profile_pic")}),
        ("Access", {"fields": ("role", "is_confirmed", "is_active", "is_staff")}),
        ("Credentials", {"fields": readonly_fields}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "role", "password1", "password2")}),
    )

    @admin.display(description="Name")
    def full_name(self, obj):
        return obj.full_name
