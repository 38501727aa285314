from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import CommandError, call_command

from accounts.models import MaisonUser
from conftest import MaisonUserFactory

pytestmark = pytest.mark.django_db


def test_get_jwt_by_email(maison_user_factory: MaisonUserFactory) -> None:
    user = maison_user_factory(username="paula", email="paula@example.com")
    out = StringIO()

    call_command("get_jwt", "paula@example.com", stdout=out)

    assert str(user.pk) in out.getvalue()
    assert "Access Token:" in out.getvalue()


def test_get_jwt_access_only(maison_user_factory: MaisonUserFactory) -> None:
    maison_user_factory(username="paula")
    out = StringIO()

    call_command("get_jwt", "paula", access_only=True, stdout=out)

    assert out.getvalue().count(".") == 2


def test_get_jwt_unknown_member() -> None:
    with pytest.raises(CommandError):
        call_command("get_jwt", "nobody@example.com")


def test_bootstrap_creates_superuser_and_example_data() -> None:
    with patch("common.management.commands.bootstrap.call_command") as mock_call_command:
        call_command("bootstrap", stdout=StringIO())

    admin = MaisonUser.objects.get(username="admin@maison.test")
    assert admin.is_superuser
    assert admin.membership_tier == MaisonUser.MembershipTier.BLACK_CARD
    assert [c.args[0] for c in mock_call_command.call_args_list] == ["migrate", "bootstrap_events"]


def test_bootstrap_keeps_existing_superuser() -> None:
    MaisonUser.objects.create_superuser(username="admin@maison.test", password="changed")
    out = StringIO()

    with patch("common.management.commands.bootstrap.call_command"):
        call_command("bootstrap", stdout=out)

    assert "already exists" in out.getvalue()
