"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from unfold.admin import ModelAdmin, StackedInline

from accounts.models import MaisonUser
from participants.models import PrivacyPreferences


class PrivacyPreferencesInline(StackedInline):  # type: ignore[misc]
    """Inline for the global privacy defaults."""

    model = PrivacyPreferences
    extra = 0
    can_delete = False
    fields = ["default_privacy_level", "allow_contact_requests", "show_in_participant_lists"]


@admin.register(MaisonUser)
class MaisonUserAdmin(UserAdmin, ModelAdmin):  # type: ignore[type-arg,misc]
    list_display = ["username", "email", "first_name", "last_name", "membership_tier", "is_staff", "is_active"]
    list_filter = ["membership_tier", "is_staff", "is_active"]
    search_fields = ["username", "email", "first_name", "last_name", "company"]
    ordering = ["username"]
    inlines = [PrivacyPreferencesInline]
    fieldsets = (
        *UserAdmin.fieldsets,  # type: ignore[misc]
        (
            "Member profile",
            {
                "fields": (
                    "membership_tier",
                    "phone_number",
                    "age",
                    "profession",
                    "company",
                    "city",
                    "bio",
                    "interests",
                    "profile_picture",
                )
            },
        ),
    )
