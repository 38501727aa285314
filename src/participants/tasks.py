import structlog
from celery import shared_task

from participants.models import ParticipantViewLog

logger = structlog.get_logger(__name__)


@shared_task
def record_participant_views(
    *,
    viewer_id: str,
    participant_ids: list[str],
    event_id: str,
    view_type: str,
    access_level: str,
    ip_address: str | None = None,
    user_agent: str = "",
) -> int:
    """Append one view log row per viewed participant.

    Returns:
        The number of rows written.
    """
    entries = [
        ParticipantViewLog(
            viewer_id=viewer_id,
            participant_id=participant_id,
            event_id=event_id,
            view_type=view_type,
            access_level=access_level,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        for participant_id in participant_ids
    ]
    ParticipantViewLog.objects.bulk_create(entries)
    logger.debug("participant_views_recorded", event_id=event_id, view_type=view_type, count=len(entries))
    return len(entries)
