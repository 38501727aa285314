"""Get JWT tokens for a member, to try the API by hand."""

import typing as t

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError, CommandParser
from django.db.models import Q
from ninja_jwt.tokens import RefreshToken


class Command(BaseCommand):
    help = "Get JWT access and refresh tokens for a member by username or email."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("identifier", type=str, help="Username or email address of the member")
        parser.add_argument("--access-only", action="store_true", help="Print only the access token")

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        """Generate JWT tokens for the specified member."""
        identifier = options["identifier"]
        User = get_user_model()

        user = User.objects.filter(Q(username=identifier) | Q(email=identifier)).first()
        if user is None:
            raise CommandError(f'Member "{identifier}" does not exist')

        refresh = RefreshToken.for_user(user)
        if options["access_only"]:
            self.stdout.write(str(refresh.access_token))  # type: ignore[attr-defined]
            return

        self.stdout.write(self.style.SUCCESS(f"\nJWT Tokens for: {user.username}"))
        self.stdout.write(self.style.SUCCESS(f"User ID: {user.pk}"))
        self.stdout.write(self.style.SUCCESS(f"Membership tier: {getattr(user, 'membership_tier', '-')}"))
        self.stdout.write("")
        self.stdout.write(self.style.SUCCESS("Access Token:"))
        self.stdout.write(str(refresh.access_token))  # type: ignore[attr-defined]
        self.stdout.write("")
        self.stdout.write(self.style.SUCCESS("Refresh Token:"))
        self.stdout.write(str(refresh))
