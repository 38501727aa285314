from django.core.exceptions import ValidationError
from django.db import models

from common.models import TimeStampedModel


class Event(TimeStampedModel):
    class EventStatus(models.TextChoices):
        OPEN = "open"
        CLOSED = "closed"
        DRAFT = "draft"
        CANCELLED = "cancelled"

    status = models.CharField(choices=EventStatus.choices, max_length=10, default=EventStatus.DRAFT)
    name = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField(blank=True)
    start = models.DateTimeField(db_index=True)
    end = models.DateTimeField(null=True, blank=True, db_index=True)
    capacity = models.PositiveIntegerField(null=True, blank=True, help_text="Leave empty for no limit.")

    class Meta:
        ordering = ["start"]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        """Ensure the event does not end before it starts."""
        if self.end and self.start and self.end < self.start:
            raise ValidationError({"end": ["The event cannot end before it starts."]})
