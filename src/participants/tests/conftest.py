import typing as t
from unittest.mock import patch

import pytest
import structlog
from django.test.client import Client
from structlog.testing import capture_logs

from accounts.models import MaisonUser
from conftest import MaisonUserFactory, auth_client
from events.models import Event
from participants.models import AccessLevel, ParticipantAccess, PaymentStatus, PrivacyPreferences

GrantAccess = t.Callable[..., ParticipantAccess]
SetPrivacy = t.Callable[..., PrivacyPreferences]


@pytest.fixture
def grant_access(event: Event) -> GrantAccess:
    """Register a member for the event with the given payment status and access level."""

    def _grant(
        user: MaisonUser,
        *,
        payment_status: PaymentStatus = PaymentStatus.PAID,
        access_level: AccessLevel = AccessLevel.BASIC,
        target: Event | None = None,
    ) -> ParticipantAccess:
        paid = payment_status == PaymentStatus.PAID
        return ParticipantAccess.objects.create(
            user=user,
            event=target or event,
            has_access=paid,
            payment_status=payment_status,
            access_level=access_level if paid else AccessLevel.NONE,
        )

    return _grant


@pytest.fixture
def set_privacy() -> SetPrivacy:
    """Set a member's global privacy defaults."""

    def _set(
        user: MaisonUser, level: int = 2, *, allow_contact: bool = True, show_in_list: bool = True
    ) -> PrivacyPreferences:
        preferences = PrivacyPreferences.objects.get(user=user)
        preferences.default_privacy_level = level
        preferences.allow_contact_requests = allow_contact
        preferences.show_in_participant_lists = show_in_list
        preferences.save()
        return preferences

    return _set


@pytest.fixture
def viewer(maison_user_factory: MaisonUserFactory, grant_access: GrantAccess) -> MaisonUser:
    """A Gold member with a paid, basic registration."""
    member = maison_user_factory(first_name="Vera", last_name="Viewer", membership_tier=MaisonUser.MembershipTier.GOLD)
    grant_access(member)
    return member


@pytest.fixture
def full_viewer(maison_user_factory: MaisonUserFactory, grant_access: GrantAccess) -> MaisonUser:
    """A Gold member whose registration was upgraded to full access."""
    member = maison_user_factory(first_name="Felix", last_name="Full", membership_tier=MaisonUser.MembershipTier.GOLD)
    grant_access(member, access_level=AccessLevel.FULL)
    return member


@pytest.fixture
def unpaid_viewer(maison_user_factory: MaisonUserFactory, grant_access: GrantAccess) -> MaisonUser:
    member = maison_user_factory(first_name="Ursula", last_name="Unpaid")
    grant_access(member, payment_status=PaymentStatus.PENDING)
    return member


@pytest.fixture
def participant(maison_user_factory: MaisonUserFactory, grant_access: GrantAccess) -> MaisonUser:
    """A paid Platinum participant with a complete profile."""
    member = maison_user_factory(
        first_name="Paula",
        last_name="Parker",
        email="paula@example.com",
        phone_number="+43 660 1234567",
        membership_tier=MaisonUser.MembershipTier.PLATINUM,
        age=37,
        profession="Software Engineer",
        company="Acme",
        city="Vienna",
        bio="Builds things.",
        interests=["sailing", "wine"],
        profile_picture="https://example.com/paula.jpg",
    )
    grant_access(member)
    return member


@pytest.fixture
def viewer_client(viewer: MaisonUser) -> Client:
    return auth_client(viewer)


@pytest.fixture
def full_viewer_client(full_viewer: MaisonUser) -> Client:
    return auth_client(full_viewer)


@pytest.fixture
def unpaid_viewer_client(unpaid_viewer: MaisonUser) -> Client:
    return auth_client(unpaid_viewer)


@pytest.fixture
def store_logs() -> t.Iterator[list[t.MutableMapping[str, t.Any]]]:
    """Capture the events logged by the store guard.

    Loggers are cached on first use, so the guard gets a fresh one while capturing.
    """
    with capture_logs() as logs, patch("participants.service.logger", structlog.get_logger("participants.service")):
        yield logs
