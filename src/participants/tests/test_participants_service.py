"""Tests for participant listing, detail, contact and counts."""

import typing as t
import uuid
from unittest.mock import patch

import pytest
from django.core.exceptions import ValidationError
from django.db import DatabaseError

from accounts.models import MaisonUser
from conftest import MaisonUserFactory
from events.models import Event
from participants.exceptions import (
    AccessDeniedError,
    EventNotFoundError,
    ParticipantNotFoundError,
    StoreUnavailableError,
)
from participants.models import AccessLevel, ContactRequest, EventPrivacyOverride, ParticipantViewLog, PaymentStatus
from participants.service import participants as participant_service
from participants.service.participants import ParticipantFilters

from .conftest import GrantAccess, SetPrivacy

pytestmark = pytest.mark.django_db


def _ids(result: participant_service.ParticipantListResult) -> list[uuid.UUID]:
    return [p.id for p in result.participants]


class TestListEventParticipants:
    def test_basic_viewer_sees_redacted_participant(
        self, viewer: MaisonUser, participant: MaisonUser, event: Event
    ) -> None:
        result = participant_service.list_event_participants(viewer.pk, event.pk)

        assert result.viewer_access == AccessLevel.BASIC
        assert result.total_count == 1
        [listed] = result.participants
        assert listed.id == participant.pk
        assert listed.company == "Acme"
        assert listed.email is None

    def test_full_viewer_sees_one_more_level(
        self, full_viewer: MaisonUser, participant: MaisonUser, event: Event
    ) -> None:
        [listed] = participant_service.list_event_participants(full_viewer.pk, event.pk).participants

        assert listed.email == "paula@example.com"
        assert listed.phone_number == "+436601234567"

    def test_viewer_is_not_listed(self, viewer: MaisonUser, participant: MaisonUser, event: Event) -> None:
        assert viewer.pk not in _ids(participant_service.list_event_participants(viewer.pk, event.pk))

    def test_unpaid_participants_are_not_listed(
        self, viewer: MaisonUser, unpaid_viewer: MaisonUser, participant: MaisonUser, event: Event
    ) -> None:
        assert _ids(participant_service.list_event_participants(viewer.pk, event.pk)) == [participant.pk]

    def test_unpaid_viewer_gets_empty_list(
        self, unpaid_viewer: MaisonUser, participant: MaisonUser, event: Event
    ) -> None:
        result = participant_service.list_event_participants(unpaid_viewer.pk, event.pk)

        assert result.participants == []
        assert result.total_count == 0
        assert result.viewer_access == AccessLevel.NONE

    def test_unregistered_viewer_gets_empty_list(self, user: MaisonUser, participant: MaisonUser, event: Event) -> None:
        result = participant_service.list_event_participants(user.pk, event.pk)

        assert result.participants == []
        assert result.total_count == 0

    @pytest.mark.parametrize("access_level", [AccessLevel.BASIC, AccessLevel.FULL])
    def test_hidden_participant_is_excluded_for_every_viewer(
        self,
        access_level: AccessLevel,
        maison_user_factory: MaisonUserFactory,
        grant_access: GrantAccess,
        set_privacy: SetPrivacy,
        participant: MaisonUser,
        event: Event,
    ) -> None:
        member = maison_user_factory()
        grant_access(member, access_level=access_level)
        set_privacy(participant, 1, show_in_list=False)

        result = participant_service.list_event_participants(member.pk, event.pk)

        assert result.participants == []
        assert result.total_count == 0

    def test_event_override_hides_participant(
        self, viewer: MaisonUser, participant: MaisonUser, event: Event
    ) -> None:
        EventPrivacyOverride.objects.create(user=participant, event=event, show_in_list=False)

        assert participant_service.list_event_participants(viewer.pk, event.pk).total_count == 0

    def test_unknown_event(self, viewer: MaisonUser) -> None:
        with pytest.raises(EventNotFoundError):
            participant_service.list_event_participants(viewer.pk, uuid.uuid4())

    def test_ordering_by_tier_then_name(
        self, viewer: MaisonUser, maison_user_factory: MaisonUserFactory, grant_access: GrantAccess, event: Event
    ) -> None:
        tier = MaisonUser.MembershipTier
        members = {
            "gold_bob": maison_user_factory(first_name="Bob", last_name="B", membership_tier=tier.GOLD),
            "black_zoe": maison_user_factory(first_name="Zoe", last_name="Z", membership_tier=tier.BLACK_CARD),
            "gold_amy": maison_user_factory(first_name="Amy", last_name="A", membership_tier=tier.GOLD),
            "diamond_carl": maison_user_factory(first_name="Carl", last_name="C", membership_tier=tier.DIAMOND),
        }
        for member in members.values():
            grant_access(member)

        result = participant_service.list_event_participants(viewer.pk, event.pk)

        expected = [members[key].pk for key in ("black_zoe", "diamond_carl", "gold_amy", "gold_bob")]
        assert _ids(result) == expected

    def test_pagination(
        self, viewer: MaisonUser, maison_user_factory: MaisonUserFactory, grant_access: GrantAccess, event: Event
    ) -> None:
        members = [maison_user_factory(first_name=name, last_name="X") for name in ("Ann", "Ben", "Cid")]
        for member in members:
            grant_access(member)

        result = participant_service.list_event_participants(viewer.pk, event.pk, page=2, page_size=2)

        assert _ids(result) == [members[2].pk]
        assert result.total_count == 3
        assert result.page == 2
        assert result.page_size == 2

    def test_page_size_is_clamped(self, settings: t.Any, viewer: MaisonUser, event: Event) -> None:
        settings.MAISON_PARTICIPANT_PAGE_SIZE_MAX = 10

        result = participant_service.list_event_participants(viewer.pk, event.pk, page_size=500)

        assert result.page_size == 10

    def test_default_page_size(self, settings: t.Any, viewer: MaisonUser, event: Event) -> None:
        settings.MAISON_PARTICIPANT_PAGE_SIZE_DEFAULT = 7

        assert participant_service.list_event_participants(viewer.pk, event.pk).page_size == 7

    def test_filters(
        self,
        viewer: MaisonUser,
        participant: MaisonUser,
        maison_user_factory: MaisonUserFactory,
        grant_access: GrantAccess,
        set_privacy: SetPrivacy,
        event: Event,
    ) -> None:
        lawyer = maison_user_factory(profession="Lawyer", membership_tier=MaisonUser.MembershipTier.DIAMOND)
        grant_access(lawyer)
        set_privacy(lawyer, 4)

        def listed(**filters: t.Any) -> list[uuid.UUID]:
            result = participant_service.list_event_participants(
                viewer.pk, event.pk, filters=ParticipantFilters(**filters)
            )
            return _ids(result)

        assert listed(membership_tier="Platinum") == [participant.pk]
        assert listed(profession="software") == [participant.pk]
        assert listed(min_privacy_level=3) == [lawyer.pk]
        assert listed(membership_tier="Gold") == []

    @pytest.mark.parametrize("level", [3, 4, 5])
    def test_profession_filter_skips_hidden_professions(
        self, viewer: MaisonUser, participant: MaisonUser, set_privacy: SetPrivacy, event: Event, level: int
    ) -> None:
        set_privacy(participant, level)

        def total(profession: str) -> int:
            filters = ParticipantFilters(profession=profession)
            return participant_service.list_event_participants(viewer.pk, event.pk, filters=filters).total_count

        assert participant_service.list_event_participants(viewer.pk, event.pk).participants[0].profession is None
        assert total("software engineer") == 0
        assert total("lawyer") == 0

    def test_profession_filter_uses_unlocked_level_for_full_viewer(
        self, full_viewer: MaisonUser, participant: MaisonUser, set_privacy: SetPrivacy, event: Event
    ) -> None:
        set_privacy(participant, 3)

        result = participant_service.list_event_participants(
            full_viewer.pk, event.pk, filters=ParticipantFilters(profession="software")
        )

        assert _ids(result) == [participant.pk]
        assert result.participants[0].profession == "Software Engineer"

    def test_views_are_logged(self, viewer: MaisonUser, participant: MaisonUser, event: Event) -> None:
        participant_service.list_event_participants(
            viewer.pk, event.pk, ip_address="203.0.113.7", user_agent="pytest"
        )

        log = ParticipantViewLog.objects.get()
        assert log.viewer_id == viewer.pk
        assert log.participant_id == participant.pk
        assert log.event_id == event.pk
        assert log.view_type == ParticipantViewLog.ViewType.LIST
        assert log.access_level == AccessLevel.BASIC
        assert log.ip_address == "203.0.113.7"
        assert log.user_agent == "pytest"

    def test_empty_list_is_not_logged(self, unpaid_viewer: MaisonUser, participant: MaisonUser, event: Event) -> None:
        participant_service.list_event_participants(unpaid_viewer.pk, event.pk)

        assert not ParticipantViewLog.objects.exists()

    def test_view_log_failure_does_not_fail_the_listing(
        self, viewer: MaisonUser, participant: MaisonUser, event: Event
    ) -> None:
        with patch(
            "participants.service.view_log.record_participant_views.delay", side_effect=RuntimeError("broker down")
        ):
            result = participant_service.list_event_participants(viewer.pk, event.pk)

        assert _ids(result) == [participant.pk]
        assert not ParticipantViewLog.objects.exists()

    def test_store_failure_raises_store_unavailable(
        self, viewer: MaisonUser, event: Event, store_logs: list[t.MutableMapping[str, t.Any]]
    ) -> None:
        """A failing store is an error, never a silently empty list."""
        with patch("participants.service.participants._paid_participants", side_effect=DatabaseError("gone")):
            with pytest.raises(StoreUnavailableError) as exc_info:
                participant_service.list_event_participants(viewer.pk, event.pk)

        assert exc_info.value.operation == "list_event_participants"
        [entry] = [e for e in store_logs if e["event"] == "participant_store_unavailable"]
        assert entry["arguments"]["viewer_id"] == str(viewer.pk)
        assert entry["arguments"]["event_id"] == str(event.pk)


class TestGetParticipantDetail:
    def test_returns_redacted_participant(self, viewer: MaisonUser, participant: MaisonUser, event: Event) -> None:
        result = participant_service.get_participant_detail(viewer.pk, event.pk, participant.pk)

        assert result.participant.id == participant.pk
        assert result.participant.bio == "Builds things."
        assert result.viewer_access == AccessLevel.BASIC
        assert ParticipantViewLog.objects.get().view_type == ParticipantViewLog.ViewType.PROFILE

    def test_no_access_is_denied(self, unpaid_viewer: MaisonUser, participant: MaisonUser, event: Event) -> None:
        with pytest.raises(AccessDeniedError):
            participant_service.get_participant_detail(unpaid_viewer.pk, event.pk, participant.pk)

    def test_hidden_participant_is_not_found(
        self, viewer: MaisonUser, participant: MaisonUser, set_privacy: SetPrivacy, event: Event
    ) -> None:
        set_privacy(participant, 2, show_in_list=False)

        with pytest.raises(ParticipantNotFoundError):
            participant_service.get_participant_detail(viewer.pk, event.pk, participant.pk)

    def test_unpaid_participant_is_not_found(self, viewer: MaisonUser, unpaid_viewer: MaisonUser, event: Event) -> None:
        with pytest.raises(ParticipantNotFoundError):
            participant_service.get_participant_detail(viewer.pk, event.pk, unpaid_viewer.pk)

    def test_non_participant_is_not_found(self, viewer: MaisonUser, user: MaisonUser, event: Event) -> None:
        with pytest.raises(ParticipantNotFoundError):
            participant_service.get_participant_detail(viewer.pk, event.pk, user.pk)


class TestInitiateContact:
    def test_creates_contact_request(self, viewer: MaisonUser, participant: MaisonUser, event: Event) -> None:
        contact_request = participant_service.initiate_contact(
            viewer.pk, event.pk, participant.pk, "  Coffee after the keynote?  "
        )

        assert contact_request.sender_id == viewer.pk
        assert contact_request.recipient_id == participant.pk
        assert contact_request.event_id == event.pk
        assert contact_request.message == "Coffee after the keynote?"
        assert contact_request.status == ContactRequest.Status.PENDING
        assert ParticipantViewLog.objects.get().view_type == ParticipantViewLog.ViewType.CONTACT

    def test_participant_declining_contact(
        self, viewer: MaisonUser, participant: MaisonUser, set_privacy: SetPrivacy, event: Event
    ) -> None:
        set_privacy(participant, 2, allow_contact=False)

        with pytest.raises(AccessDeniedError):
            participant_service.initiate_contact(viewer.pk, event.pk, participant.pk, "Hello")
        assert not ContactRequest.objects.exists()

    def test_no_access_is_denied(self, unpaid_viewer: MaisonUser, participant: MaisonUser, event: Event) -> None:
        with pytest.raises(AccessDeniedError):
            participant_service.initiate_contact(unpaid_viewer.pk, event.pk, participant.pk, "Hello")

    def test_blank_message(self, viewer: MaisonUser, participant: MaisonUser, event: Event) -> None:
        with pytest.raises(ValidationError) as exc_info:
            participant_service.initiate_contact(viewer.pk, event.pk, participant.pk, "   ")

        assert "message" in exc_info.value.error_dict

    def test_contacting_yourself(self, viewer: MaisonUser, event: Event) -> None:
        with pytest.raises(ValidationError):
            participant_service.initiate_contact(viewer.pk, event.pk, viewer.pk, "Hello me")


class TestGetParticipantCounts:
    def test_counts(
        self,
        viewer: MaisonUser,
        full_viewer: MaisonUser,
        unpaid_viewer: MaisonUser,
        participant: MaisonUser,
        event: Event,
    ) -> None:
        counts = participant_service.get_participant_counts(event.pk)

        assert counts.total == 4
        assert counts.paid == 3
        assert counts.unpaid == 1
        assert counts.by_tier == {"Gold": 2, "Platinum": 1}

    def test_empty_event(self, event: Event) -> None:
        counts = participant_service.get_participant_counts(event.pk)

        assert counts.total == 0
        assert counts.by_tier == {}

    def test_refund_moves_member_to_unpaid(
        self, viewer: MaisonUser, grant_access: GrantAccess, maison_user_factory: MaisonUserFactory, event: Event
    ) -> None:
        grant_access(maison_user_factory(), payment_status=PaymentStatus.REFUNDED)

        counts = participant_service.get_participant_counts(event.pk)

        assert counts.paid == 1
        assert counts.unpaid == 1
