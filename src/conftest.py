"""
This conftest.py provides fixtures shared by every app's tests.
"""

import secrets
import string
import typing as t
from datetime import datetime, time, timedelta

import faker
import pytest
from django.core.cache import cache
from django.test.client import Client
from django.utils import timezone
from ninja_jwt.tokens import RefreshToken

from accounts.models import MaisonUser
from events.models import Event
from maison.celery import app as celery_app


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously.

    This ensures that Celery tasks run immediately in the same process,
    allowing tests to verify their side effects without async complications.
    """
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    # The celery app reads its configuration once, at import.
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_eager_propagates = True


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Clear the cache before each test so throttle counters start from zero."""
    cache.clear()


class MaisonUserFactory:
    """Factory for creating MaisonUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> MaisonUser:
        username = kwargs.pop(
            "username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(8)) + "@user.test"
        )
        email = kwargs.pop("email", username + ("@test.com" if "@" not in username else ""))
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        return MaisonUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> MaisonUser:
        return self.create_user(**kwargs)


@pytest.fixture
def maison_user_factory() -> MaisonUserFactory:
    return MaisonUserFactory()


@pytest.fixture
def user(maison_user_factory: MaisonUserFactory) -> MaisonUser:
    """A Gold member."""
    return maison_user_factory(membership_tier=MaisonUser.MembershipTier.GOLD)


@pytest.fixture
def superuser(maison_user_factory: MaisonUserFactory) -> MaisonUser:
    """A superuser."""
    return maison_user_factory(is_superuser=True, is_staff=True)


@pytest.fixture
def next_week() -> datetime:
    today = timezone.now()
    same_time_next_week = today + timedelta(days=7)
    noon = time(hour=12, minute=0)
    return timezone.make_aware(
        datetime.combine(same_time_next_week.date(), noon),
        timezone.get_current_timezone(),
    )


@pytest.fixture
def event(next_week: datetime) -> Event:
    return Event.objects.create(
        name="Winter Gala",
        slug="winter-gala",
        status=Event.EventStatus.OPEN,
        start=next_week,
        end=next_week + timedelta(hours=5),
    )


def auth_client(user: MaisonUser) -> Client:
    """A test client authenticated as the given user."""
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")  # type: ignore[attr-defined]


@pytest.fixture
def user_client(user: MaisonUser) -> Client:
    return auth_client(user)


@pytest.fixture
def superuser_client(superuser: MaisonUser) -> Client:
    return auth_client(superuser)
