"""Participant listing, detail and contact for a viewer."""

from uuid import UUID

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q, QuerySet
from pydantic import BaseModel, Field

from accounts.models import MaisonUser
from participants.exceptions import AccessDeniedError, ParticipantNotFoundError
from participants.models import AccessLevel, ContactRequest, ParticipantAccess, ParticipantViewLog, PaymentStatus
from participants.service import get_event, store_guard
from participants.service.access import can_initiate_contact, get_access_level
from participants.service.privacy import PrivacyPolicy, resolve_privacy, resolve_privacy_bulk
from participants.service.redaction import PROFESSION, RedactedParticipant, exposed_fields, redact_participant
from participants.service.view_log import log_participant_views

logger = structlog.get_logger(__name__)


class ParticipantFilters(BaseModel):
    membership_tier: str | None = None
    profession: str | None = None
    min_privacy_level: int | None = Field(None, ge=1, le=5)


class ParticipantListResult(BaseModel):
    participants: list[RedactedParticipant]
    total_count: int
    page: int
    page_size: int
    viewer_access: AccessLevel


class ParticipantDetailResult(BaseModel):
    participant: RedactedParticipant
    viewer_access: AccessLevel


class ParticipantCounts(BaseModel):
    total: int
    paid: int
    unpaid: int
    by_tier: dict[str, int]


def _paid_participants(event_id: UUID) -> QuerySet[MaisonUser]:
    return MaisonUser.objects.filter(
        participant_access__event_id=event_id, participant_access__payment_status=PaymentStatus.PAID
    )


def _visible_participants(event_id: UUID, viewer_id: UUID) -> list[tuple[MaisonUser, PrivacyPolicy]]:
    """Paid participants of the event other than the viewer, with show_in_list policies only."""
    users = list(_paid_participants(event_id).exclude(pk=viewer_id).distinct())
    policies = resolve_privacy_bulk([user.pk for user in users], event_id)
    return [(user, policies[user.pk]) for user in users if policies[user.pk].show_in_list]


def _matches(
    user: MaisonUser, policy: PrivacyPolicy, filters: ParticipantFilters, access_level: AccessLevel
) -> bool:
    if filters.membership_tier and user.membership_tier != filters.membership_tier:
        return False
    if filters.profession:
        # A profession the viewer may not see never matches.
        if PROFESSION not in exposed_fields(policy.privacy_level, access_level):
            return False
        if filters.profession.lower() not in user.profession.lower():
            return False
    if filters.min_privacy_level and policy.privacy_level < filters.min_privacy_level:
        return False
    return True


def _get_visible_participant(event_id: UUID, participant_id: UUID) -> tuple[MaisonUser, PrivacyPolicy]:
    user = _paid_participants(event_id).filter(pk=participant_id).first()
    if user is None:
        raise ParticipantNotFoundError(f"Participant {participant_id} is not part of event {event_id}.")
    policy = resolve_privacy(user.pk, event_id)
    if not policy.show_in_list:
        raise ParticipantNotFoundError(f"Participant {participant_id} is not part of event {event_id}.")
    return user, policy


@store_guard
def list_event_participants(
    viewer_id: UUID,
    event_id: UUID,
    *,
    page: int = 1,
    page_size: int | None = None,
    filters: ParticipantFilters | None = None,
    ip_address: str | None = None,
    user_agent: str = "",
) -> ParticipantListResult:
    """List the participants of an event as the viewer may see them.

    Viewers without access get an empty page and a zero count, not an error. Participants who
    hide themselves from lists are dropped before redaction and never counted.

    Raises:
        EventNotFoundError: If the event does not exist.
    """
    get_event(event_id)
    page = max(page, 1)
    page_size = page_size or settings.MAISON_PARTICIPANT_PAGE_SIZE_DEFAULT
    page_size = min(max(page_size, 1), settings.MAISON_PARTICIPANT_PAGE_SIZE_MAX)
    access_level = get_access_level(viewer_id, event_id)
    if access_level == AccessLevel.NONE:
        return ParticipantListResult(
            participants=[], total_count=0, page=page, page_size=page_size, viewer_access=access_level
        )

    filters = filters or ParticipantFilters()
    candidates = [
        (u, p) for u, p in _visible_participants(event_id, viewer_id) if _matches(u, p, filters, access_level)
    ]
    candidates.sort(key=lambda pair: (-pair[0].tier_rank, pair[0].first_name.lower(), pair[0].last_name.lower()))
    offset = (page - 1) * page_size
    participants = [redact_participant(u, p, access_level) for u, p in candidates[offset : offset + page_size]]

    log_participant_views(
        viewer_id=viewer_id,
        participant_ids=[participant.id for participant in participants],
        event_id=event_id,
        view_type=ParticipantViewLog.ViewType.LIST,
        access_level=access_level,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    return ParticipantListResult(
        participants=participants,
        total_count=len(candidates),
        page=page,
        page_size=page_size,
        viewer_access=access_level,
    )


@store_guard
def get_participant_detail(
    viewer_id: UUID,
    event_id: UUID,
    participant_id: UUID,
    *,
    ip_address: str | None = None,
    user_agent: str = "",
) -> ParticipantDetailResult:
    """A single participant as the viewer may see them.

    Raises:
        EventNotFoundError: If the event does not exist.
        AccessDeniedError: If the viewer has no access to the event's participants.
        ParticipantNotFoundError: If the participant is not a visible participant of the event.
    """
    get_event(event_id)
    access_level = get_access_level(viewer_id, event_id)
    if access_level == AccessLevel.NONE:
        raise AccessDeniedError("Payment required to view participants.")
    user, policy = _get_visible_participant(event_id, participant_id)
    participant = redact_participant(user, policy, access_level)

    log_participant_views(
        viewer_id=viewer_id,
        participant_ids=[participant.id],
        event_id=event_id,
        view_type=ParticipantViewLog.ViewType.PROFILE,
        access_level=access_level,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    return ParticipantDetailResult(participant=participant, viewer_access=access_level)


def initiate_contact(
    viewer_id: UUID,
    event_id: UUID,
    participant_id: UUID,
    message: str,
    *,
    ip_address: str | None = None,
    user_agent: str = "",
) -> ContactRequest:
    """Send a contact request to another participant of the event.

    Raises:
        EventNotFoundError: If the event does not exist.
        AccessDeniedError: If the viewer has no access or the participant does not accept contact.
        ParticipantNotFoundError: If the participant is not a visible participant of the event.
        ValidationError: If the message is empty or the viewer contacts themselves.
    """
    message = message.strip()
    if not message:
        raise ValidationError({"message": ["Message is required."]})
    if participant_id == viewer_id:
        raise ValidationError({"participant_id": ["You cannot contact yourself."]})

    event = get_event(event_id)
    access_level = get_access_level(viewer_id, event_id)
    if access_level == AccessLevel.NONE:
        raise AccessDeniedError("Payment required to contact participants.")
    user, policy = _get_visible_participant(event_id, participant_id)
    if not can_initiate_contact(access_level, policy):
        raise AccessDeniedError("This participant does not accept contact requests.")

    with transaction.atomic():
        contact_request = ContactRequest.objects.create(
            sender_id=viewer_id, recipient=user, event=event, message=message
        )
    logger.info(
        "participant_contact_initiated",
        contact_request_id=str(contact_request.pk),
        sender_id=str(viewer_id),
        recipient_id=str(participant_id),
        event_id=str(event_id),
    )

    log_participant_views(
        viewer_id=viewer_id,
        participant_ids=[user.pk],
        event_id=event_id,
        view_type=ParticipantViewLog.ViewType.CONTACT,
        access_level=access_level,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    return contact_request


@store_guard
def get_participant_counts(event_id: UUID) -> ParticipantCounts:
    """Headcounts of an event; they reveal no individual and are visible to every member.

    Raises:
        EventNotFoundError: If the event does not exist.
    """
    get_event(event_id)
    records = ParticipantAccess.objects.filter(event_id=event_id)
    paid_q = Q(payment_status=PaymentStatus.PAID)
    totals = records.aggregate(total=Count("id"), paid=Count("id", filter=paid_q))
    by_tier = (
        records.filter(paid_q)
        .values("user__membership_tier")
        .annotate(count=Count("id"))
        .order_by("user__membership_tier")
    )
    return ParticipantCounts(
        total=totals["total"],
        paid=totals["paid"],
        unpaid=totals["total"] - totals["paid"],
        by_tier={row["user__membership_tier"]: row["count"] for row in by_tier},
    )
