"""Controller for browsing the participants of an event."""

from uuid import UUID

from ninja import Query
from ninja_extra import api_controller, permissions, route

from common.authentication import MemberJWTAuth
from common.controllers import UserAwareController
from common.throttling import ContactRequestThrottle, WriteThrottle
from participants import models, schema
from participants.service import access as access_service
from participants.service import participants as participant_service
from participants.service import privacy as privacy_service
from participants.service.access import ParticipantAccessCheck
from participants.service.participants import ParticipantCounts, ParticipantDetailResult, ParticipantListResult
from participants.service.privacy import PrivacyOverride, PrivacyPolicy


@api_controller("/events", auth=MemberJWTAuth(), tags=["Participants"])
class ParticipantController(UserAwareController):
    @route.get("/{event_id}/participants", url_name="list_event_participants", response=ParticipantListResult)
    def list_participants(
        self,
        event_id: UUID,
        params: schema.ParticipantListParams = Query(...),  # type: ignore[type-arg]
    ) -> ParticipantListResult:
        """List the other participants of an event, redacted to what you may see.

        Requires a paid registration for the event; without one the list is empty and
        total_count is 0. Each participant's own privacy level decides which fields are shown.
        Supports filtering by membership_tier, profession and min_privacy_level.
        """
        return participant_service.list_event_participants(
            self.user().pk,
            event_id,
            page=params.page,
            page_size=params.page_size,
            filters=params.to_filters(),
            ip_address=self.client_ip(),
            user_agent=self.user_agent(),
        )

    @route.get("/{event_id}/participant-access", url_name="check_participant_access", response=ParticipantAccessCheck)
    def check_participant_access(self, event_id: UUID) -> ParticipantAccessCheck:
        """Check whether you may see the participants of an event, and at which access level."""
        return access_service.check_participant_access(self.user().pk, event_id)

    @route.get("/{event_id}/participant-stats", url_name="event_participant_stats", response=ParticipantCounts)
    def get_participant_stats(self, event_id: UUID) -> ParticipantCounts:
        """Headcounts of an event by payment status and membership tier. No access required."""
        return participant_service.get_participant_counts(event_id)

    @route.get(
        "/{event_id}/participants/{participant_id}",
        url_name="get_event_participant",
        response=ParticipantDetailResult,
    )
    def get_participant(self, event_id: UUID, participant_id: UUID) -> ParticipantDetailResult:
        """Get one participant of an event. Returns 403 without access, 404 if not visible."""
        return participant_service.get_participant_detail(
            self.user().pk,
            event_id,
            participant_id,
            ip_address=self.client_ip(),
            user_agent=self.user_agent(),
        )

    @route.post(
        "/{event_id}/participants/{participant_id}/contact",
        url_name="contact_event_participant",
        response={201: schema.ContactRequestSchema},
        throttle=ContactRequestThrottle(),
    )
    def contact_participant(
        self, event_id: UUID, participant_id: UUID, payload: schema.ContactRequestCreateSchema
    ) -> tuple[int, models.ContactRequest]:
        """Send a contact request to another participant.

        Returns 403 if you have no access or the participant does not accept contact requests.
        """
        contact_request = participant_service.initiate_contact(
            self.user().pk,
            event_id,
            participant_id,
            payload.message,
            ip_address=self.client_ip(),
            user_agent=self.user_agent(),
        )
        return 201, contact_request

    @route.get("/{event_id}/privacy-settings", url_name="get_event_privacy_settings", response=PrivacyPolicy)
    def get_privacy_settings(self, event_id: UUID) -> PrivacyPolicy:
        """Your effective privacy settings for this event (override merged over your defaults)."""
        return privacy_service.get_effective_privacy(self.user().pk, event_id)

    @route.put(
        "/{event_id}/privacy-settings",
        url_name="update_event_privacy_settings",
        response=PrivacyPolicy,
        throttle=WriteThrottle(),
    )
    def update_privacy_settings(self, event_id: UUID, payload: PrivacyOverride) -> PrivacyPolicy:
        """Override your privacy settings for this event.

        Only the fields you send are changed. Send a field as null to fall back to your
        global default for it again.
        """
        return privacy_service.update_privacy_override(self.user().pk, event_id, payload)

    @route.delete("/{event_id}/privacy-settings", url_name="reset_event_privacy_settings", response=PrivacyPolicy)
    def reset_privacy_settings(self, event_id: UUID) -> PrivacyPolicy:
        """Drop your override for this event and use your global defaults."""
        return privacy_service.reset_privacy_override(self.user().pk, event_id)

    @route.put(
        "/{event_id}/participants/{user_id}/access",
        url_name="update_participant_access",
        response=schema.ParticipantAccessSchema,
        permissions=[permissions.IsAdminUser],
    )
    def update_participant_access(
        self, event_id: UUID, user_id: UUID, payload: schema.ParticipantAccessUpdateSchema
    ) -> models.ParticipantAccess:
        """Staff only: record a payment status change for a member's registration."""
        return access_service.update_participant_access(user_id, event_id, payload.payment_status)
