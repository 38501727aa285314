"""Access gate: what a viewer may see of an event's participants."""

from uuid import UUID

import structlog
from django.conf import settings
from django.db import transaction
from django.utils import timezone
from pydantic import BaseModel

from participants.models import AccessLevel, ParticipantAccess, PaymentStatus
from participants.service import get_event, store_guard
from participants.service.privacy import PrivacyPolicy

logger = structlog.get_logger(__name__)

ACCESS_RANK: dict[AccessLevel, int] = {
    AccessLevel.NONE: 0,
    AccessLevel.BASIC: 1,
    AccessLevel.FULL: 2,
}


class ParticipantAccessCheck(BaseModel):
    has_access: bool
    access_level: AccessLevel
    payment_required: bool
    payment_status: PaymentStatus | None = None


def has_at_least(access_level: AccessLevel, required: AccessLevel) -> bool:
    """Whether access_level grants everything required grants."""
    return ACCESS_RANK[AccessLevel(access_level)] >= ACCESS_RANK[required]


def resolve_access_level(record: ParticipantAccess | None, membership_tier: str | None = None) -> AccessLevel:
    """Derive the effective access level from an access record.

    No record, an unpaid record or a record without the access flag grant nothing. A paid
    "basic" record is escalated to "full" for the membership tiers in MAISON_FULL_ACCESS_TIERS.
    """
    if record is None or not record.has_access or record.payment_status != PaymentStatus.PAID:
        return AccessLevel.NONE
    level = AccessLevel(record.access_level)
    if level == AccessLevel.BASIC and membership_tier in settings.MAISON_FULL_ACCESS_TIERS:
        return AccessLevel.FULL
    return level


def can_initiate_contact(access_level: AccessLevel, target_policy: PrivacyPolicy) -> bool:
    """A viewer may reach out with at least basic access, if the target accepts contact."""
    return has_at_least(access_level, AccessLevel.BASIC) and target_policy.allow_contact


def _get_access_record(viewer_id: UUID, event_id: UUID) -> ParticipantAccess | None:
    return ParticipantAccess.objects.select_related("user").filter(user_id=viewer_id, event_id=event_id).first()


@store_guard
def get_access_level(viewer_id: UUID, event_id: UUID) -> AccessLevel:
    """The viewer's access level for the participants of an event. No side effects."""
    record = _get_access_record(viewer_id, event_id)
    return resolve_access_level(record, record.user.membership_tier if record else None)


@store_guard
def check_participant_access(viewer_id: UUID, event_id: UUID) -> ParticipantAccessCheck:
    """Check whether the viewer may see the event's participant list.

    Raises:
        EventNotFoundError: If the event does not exist.
    """
    get_event(event_id)
    record = _get_access_record(viewer_id, event_id)
    level = resolve_access_level(record, record.user.membership_tier if record else None)
    has_access = level != AccessLevel.NONE
    return ParticipantAccessCheck(
        has_access=has_access,
        access_level=level,
        payment_required=not has_access,
        payment_status=PaymentStatus(record.payment_status) if record else None,
    )


@transaction.atomic
def update_participant_access(user_id: UUID, event_id: UUID, payment_status: PaymentStatus) -> ParticipantAccess:
    """Create or update a member's access record after a payment status change.

    A payment grants basic access (an existing full grant is kept). Pending and refunded
    payments revoke access.
    """
    event = get_event(event_id)
    record = ParticipantAccess.objects.select_for_update().filter(user_id=user_id, event=event).first()
    if record is None:
        record = ParticipantAccess(user_id=user_id, event=event)

    previous_status = None if record._state.adding else record.payment_status
    record.payment_status = payment_status
    if payment_status == PaymentStatus.PAID:
        record.has_access = True
        if record.access_level != AccessLevel.FULL:
            record.access_level = AccessLevel.BASIC
        if record.access_granted_at is None:
            record.access_granted_at = timezone.now()
    else:
        record.has_access = False
        record.access_level = AccessLevel.NONE
    record.save()

    logger.info(
        "participant_access_updated",
        user_id=str(user_id),
        event_id=str(event_id),
        previous_payment_status=previous_status,
        payment_status=str(payment_status),
        access_level=str(record.access_level),
    )
    return record
