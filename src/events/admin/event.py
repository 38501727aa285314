"""Admin classes for Event."""

from django.contrib import admin
from unfold.admin import ModelAdmin

from events import models
from participants.admin import ParticipantAccessInline


@admin.register(models.Event)
class EventAdmin(ModelAdmin):  # type: ignore[misc]
    """Admin model for Events."""

    list_display = ["name", "status", "start", "end", "capacity"]
    list_filter = ["status", "start"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    date_hierarchy = "start"
    inlines = [ParticipantAccessInline]
