"""Admin classes for participant access, privacy and audit models."""

from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from participants import models


class ParticipantAccessInline(TabularInline):  # type: ignore[misc]
    model = models.ParticipantAccess
    extra = 0
    fields = ["user", "payment_status", "access_level", "has_access", "access_granted_at"]
    readonly_fields = ["access_granted_at"]
    autocomplete_fields = ["user"]


@admin.register(models.PrivacyPreferences)
class PrivacyPreferencesAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["user", "default_privacy_level", "allow_contact_requests", "show_in_participant_lists"]
    list_filter = ["default_privacy_level", "allow_contact_requests", "show_in_participant_lists"]
    search_fields = ["user__username", "user__email"]
    autocomplete_fields = ["user"]


@admin.register(models.ParticipantAccess)
class ParticipantAccessAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["user", "event", "payment_status", "access_level", "has_access", "access_granted_at"]
    list_filter = ["payment_status", "access_level", "has_access"]
    search_fields = ["user__username", "user__email", "event__name"]
    autocomplete_fields = ["user", "event"]


@admin.register(models.EventPrivacyOverride)
class EventPrivacyOverrideAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["user", "event", "privacy_level", "allow_contact", "show_in_list"]
    list_filter = ["privacy_level", "allow_contact", "show_in_list"]
    search_fields = ["user__username", "event__name"]
    autocomplete_fields = ["user", "event"]


@admin.register(models.ParticipantViewLog)
class ParticipantViewLogAdmin(ModelAdmin):  # type: ignore[misc]
    """Read-only: the audit trail is append-only."""

    list_display = ["viewed_at", "viewer", "participant", "event", "view_type", "access_level", "ip_address"]
    list_filter = ["view_type", "access_level"]
    search_fields = ["viewer__username", "participant__username", "event__name"]
    date_hierarchy = "viewed_at"

    def has_add_permission(self, request) -> bool:  # type: ignore[no-untyped-def]
        return False

    def has_change_permission(self, request, obj=None) -> bool:  # type: ignore[no-untyped-def]
        return False

    def has_delete_permission(self, request, obj=None) -> bool:  # type: ignore[no-untyped-def]
        return False


@admin.register(models.ContactRequest)
class ContactRequestAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["created_at", "sender", "recipient", "event", "status"]
    list_filter = ["status"]
    search_fields = ["sender__username", "recipient__username", "event__name"]
