"""View logger: fire-and-forget audit of participant views."""

import typing as t
from uuid import UUID

import structlog

from participants.models import AccessLevel, ParticipantViewLog
from participants.tasks import record_participant_views

logger = structlog.get_logger(__name__)


def log_participant_views(
    *,
    viewer_id: UUID,
    participant_ids: t.Sequence[UUID],
    event_id: UUID,
    view_type: ParticipantViewLog.ViewType,
    access_level: AccessLevel,
    ip_address: str | None = None,
    user_agent: str = "",
) -> None:
    """Dispatch the audit write for a computed response.

    Never raises: a failure to enqueue or (in eager mode) to write is logged and dropped, the
    response it belongs to is already final.
    """
    if not participant_ids:
        return
    try:
        record_participant_views.delay(
            viewer_id=str(viewer_id),
            participant_ids=[str(participant_id) for participant_id in participant_ids],
            event_id=str(event_id),
            view_type=str(view_type),
            access_level=str(access_level),
            ip_address=ip_address,
            user_agent=user_agent,
        )
    except Exception:
        logger.exception(
            "participant_view_log_failed",
            viewer_id=str(viewer_id),
            event_id=str(event_id),
            view_type=str(view_type),
            count=len(participant_ids),
        )
