"""Participant access, privacy and audit models."""

import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from common.models import TimeStampedModel
from events.models import Event

MIN_PRIVACY_LEVEL = 1
MAX_PRIVACY_LEVEL = 5
DEFAULT_PRIVACY_LEVEL = 2

PRIVACY_LEVEL_VALIDATORS = [MinValueValidator(MIN_PRIVACY_LEVEL), MaxValueValidator(MAX_PRIVACY_LEVEL)]


class AccessLevel(models.TextChoices):
    NONE = "none", "No access"
    BASIC = "basic", "Basic access"
    FULL = "full", "Full access"


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    REFUNDED = "refunded", "Refunded"


class PrivacyPreferences(TimeStampedModel):
    """A member's global privacy defaults, used wherever no event override is set."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="privacy_preferences"
    )
    default_privacy_level = models.PositiveSmallIntegerField(
        default=DEFAULT_PRIVACY_LEVEL,
        validators=PRIVACY_LEVEL_VALIDATORS,
        help_text="1 shares the full profile, 5 shares only name and membership tier.",
    )
    allow_contact_requests = models.BooleanField(default=True)
    show_in_participant_lists = models.BooleanField(default=True)

    class Meta:
        verbose_name_plural = "Privacy preferences"

    def __str__(self) -> str:
        return f"Privacy preferences of {self.user_id}"


class ParticipantAccess(TimeStampedModel):
    """Whether a member may browse the participants of an event.

    Created when the member registers for the event and updated as the payment progresses.
    """

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="participant_access")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="participant_access")
    has_access = models.BooleanField(default=False)
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    access_level = models.CharField(max_length=10, choices=AccessLevel.choices, default=AccessLevel.NONE)
    access_granted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "event"], name="unique_participant_access_user_event"),
        ]
        verbose_name_plural = "Participant access"

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.event_id}: {self.payment_status}/{self.access_level}"


class EventPrivacyOverride(TimeStampedModel):
    """Event-specific privacy settings. A null field is not set and falls back to the global default."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="privacy_overrides")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="privacy_overrides")
    privacy_level = models.PositiveSmallIntegerField(null=True, blank=True, validators=PRIVACY_LEVEL_VALIDATORS)
    allow_contact = models.BooleanField(null=True, blank=True)
    show_in_list = models.BooleanField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "event"], name="unique_privacy_override_user_event"),
        ]

    def __str__(self) -> str:
        return f"Privacy override of {self.user_id} @ {self.event_id}"


class ParticipantViewLog(models.Model):
    """Append-only audit trail of participant views."""

    class ViewType(models.TextChoices):
        LIST = "list", "List"
        PROFILE = "profile", "Profile"
        CONTACT = "contact", "Contact"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    viewer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="+")
    participant = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="+")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="participant_view_logs")
    view_type = models.CharField(max_length=10, choices=ViewType.choices)
    access_level = models.CharField(max_length=10, choices=AccessLevel.choices)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)
    viewed_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-viewed_at"]
        indexes = [
            models.Index(fields=["viewer", "event"], name="participant_view_viewer_idx"),
            models.Index(fields=["participant", "event"], name="participant_view_subject_idx"),
        ]


class ContactRequest(TimeStampedModel):
    """A request from one participant to get in touch with another."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        ACCEPTED = "accepted", "Accepted"
        DECLINED = "declined", "Declined"

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_contact_requests"
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="received_contact_requests"
    )
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="contact_requests")
    message = models.TextField(max_length=2000)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True)

    def __str__(self) -> str:
        return f"{self.sender_id} -> {self.recipient_id} @ {self.event_id}"
