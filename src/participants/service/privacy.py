"""Privacy resolver: a member's effective privacy policy for an event.

The per-event override is merged over the member's global defaults field by field; a field the
override does not set keeps the default.
"""

import typing as t
from uuid import UUID

import structlog
from django.db import transaction
from pydantic import BaseModel, ConfigDict, Field

from participants.models import (
    DEFAULT_PRIVACY_LEVEL,
    MAX_PRIVACY_LEVEL,
    MIN_PRIVACY_LEVEL,
    EventPrivacyOverride,
    PrivacyPreferences,
)
from participants.service import get_event, store_guard

logger = structlog.get_logger(__name__)

PrivacyLevel = t.Annotated[int, Field(ge=MIN_PRIVACY_LEVEL, le=MAX_PRIVACY_LEVEL)]


class PrivacyPolicy(BaseModel):
    """A fully specified privacy policy."""

    model_config = ConfigDict(frozen=True)

    privacy_level: PrivacyLevel = DEFAULT_PRIVACY_LEVEL
    allow_contact: bool = True
    show_in_list: bool = True


class PrivacyOverride(BaseModel):
    """A partial policy; None means "not set"."""

    privacy_level: PrivacyLevel | None = None
    allow_contact: bool | None = None
    show_in_list: bool | None = None


def merge_privacy(defaults: PrivacyPolicy, override: PrivacyOverride | None) -> PrivacyPolicy:
    """Merge an event override over the global defaults, field by field."""
    if override is None:
        return defaults
    updates = {key: value for key, value in override.model_dump().items() if value is not None}
    return defaults.model_copy(update=updates)


def policy_from_preferences(preferences: PrivacyPreferences | None) -> PrivacyPolicy:
    """Global defaults of a member. Members without stored preferences get the model defaults."""
    if preferences is None:
        return PrivacyPolicy()
    return PrivacyPolicy(
        privacy_level=preferences.default_privacy_level,
        allow_contact=preferences.allow_contact_requests,
        show_in_list=preferences.show_in_participant_lists,
    )


def override_from_model(override: EventPrivacyOverride | None) -> PrivacyOverride | None:
    if override is None:
        return None
    return PrivacyOverride(
        privacy_level=override.privacy_level,
        allow_contact=override.allow_contact,
        show_in_list=override.show_in_list,
    )


@store_guard
def resolve_privacy(participant_id: UUID, event_id: UUID) -> PrivacyPolicy:
    """The effective privacy policy of a participant for an event."""
    preferences = PrivacyPreferences.objects.filter(user_id=participant_id).first()
    override = EventPrivacyOverride.objects.filter(user_id=participant_id, event_id=event_id).first()
    return merge_privacy(policy_from_preferences(preferences), override_from_model(override))


@store_guard
def resolve_privacy_bulk(participant_ids: t.Collection[UUID], event_id: UUID) -> dict[UUID, PrivacyPolicy]:
    """Effective privacy policies of many participants of one event, in two queries."""
    if not participant_ids:
        return {}
    preferences = {p.user_id: p for p in PrivacyPreferences.objects.filter(user_id__in=participant_ids)}
    overrides = {
        o.user_id: o for o in EventPrivacyOverride.objects.filter(user_id__in=participant_ids, event_id=event_id)
    }
    return {
        participant_id: merge_privacy(
            policy_from_preferences(preferences.get(participant_id)),
            override_from_model(overrides.get(participant_id)),
        )
        for participant_id in participant_ids
    }


def get_effective_privacy(user_id: UUID, event_id: UUID) -> PrivacyPolicy:
    """A member's own effective settings for an event.

    Raises:
        EventNotFoundError: If the event does not exist.
    """
    get_event(event_id)
    return resolve_privacy(user_id, event_id)


def get_privacy_preferences(user_id: UUID) -> PrivacyPreferences:
    """A member's global defaults, created on first access."""
    preferences, _ = PrivacyPreferences.objects.get_or_create(user_id=user_id)
    return preferences


@transaction.atomic
def update_privacy_preferences(user_id: UUID, payload: BaseModel) -> PrivacyPreferences:
    """Update the global defaults with the fields present in the payload."""
    preferences = get_privacy_preferences(user_id)
    preferences = PrivacyPreferences.objects.select_for_update().get(pk=preferences.pk)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(preferences, key, value)
    preferences.save()
    logger.info("privacy_preferences_updated", user_id=str(user_id), fields=sorted(payload.model_fields_set))
    return preferences


@transaction.atomic
def update_privacy_override(user_id: UUID, event_id: UUID, payload: PrivacyOverride) -> PrivacyPolicy:
    """Write the fields present in the payload to the member's override for an event.

    Fields absent from the payload keep their stored value. A field explicitly set to None is
    cleared and falls back to the global default again.

    Raises:
        EventNotFoundError: If the event does not exist.
    """
    event = get_event(event_id)
    override = EventPrivacyOverride.objects.select_for_update().filter(user_id=user_id, event=event).first()
    if override is None:
        override = EventPrivacyOverride(user_id=user_id, event=event)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(override, key, value)
    override.save()
    logger.info(
        "privacy_override_updated",
        user_id=str(user_id),
        event_id=str(event_id),
        fields=sorted(payload.model_fields_set),
    )
    return resolve_privacy(user_id, event_id)


@transaction.atomic
def reset_privacy_override(user_id: UUID, event_id: UUID) -> PrivacyPolicy:
    """Drop the member's override for an event, falling back to the global defaults.

    Raises:
        EventNotFoundError: If the event does not exist.
    """
    get_event(event_id)
    deleted, _ = EventPrivacyOverride.objects.filter(user_id=user_id, event_id=event_id).delete()
    if deleted:
        logger.info("privacy_override_reset", user_id=str(user_id), event_id=str(event_id))
    return resolve_privacy(user_id, event_id)
