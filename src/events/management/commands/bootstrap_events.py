# src/events/management/commands/bootstrap_events.py

import typing as t
from datetime import timedelta

import structlog
from django.core.management.base import BaseCommand, CommandParser
from django.db import transaction
from django.utils import timezone
from faker import Faker

from accounts.models import MaisonUser
from events.models import Event
from participants.models import AccessLevel, EventPrivacyOverride, PaymentStatus, PrivacyPreferences
from participants.service.access import update_participant_access

logger = structlog.get_logger(__name__)

PROFESSIONS = [
    "Software Engineer",
    "Private Banker",
    "Surgeon",
    "Founder & CEO",
    "Corporate Lawyer",
    "Real Estate Developer",
    "Management Consultant",
    "Professor of Economics",
    "Marketing Director",
    "Sculptor",
]
INTERESTS = ["sailing", "wine", "golf", "art", "opera", "polo", "travel", "cigars", "philanthropy", "tennis"]


class Command(BaseCommand):
    """Bootstrap example events with a realistic mix of members.

    Every member gets a membership tier, global privacy defaults and a registration for the
    gala. Some registrations are unpaid or refunded, some members hide from lists or override
    their privacy for the gala only, so every branch of the participant view shows up in the
    demo data.
    """

    help = "Bootstrap example events and participants."

    def __init__(self, *args: t.Any, **kwargs: t.Any) -> None:
        super().__init__(*args, **kwargs)
        self.fake = Faker("en_US")

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("--members", type=int, default=24, help="Number of members to create.")
        parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible data.")

    @transaction.atomic
    def handle(self, *args: t.Any, **options: t.Any) -> None:
        """Bootstrap example data."""
        if options["seed"] is not None:
            self.fake.seed_instance(options["seed"])
        logger.info("bootstrap_events_started", members=options["members"])

        gala, tasting = self._create_events()
        members = [self._create_member(index) for index in range(options["members"])]
        for index, member in enumerate(members):
            self._register(member, gala, index)
            if index % 3 == 0:
                update_participant_access(member.pk, tasting.pk, PaymentStatus.PAID)

        logger.info("bootstrap_events_completed", events=2, members=len(members))
        self.stdout.write(self.style.SUCCESS(f"Created 2 events and {len(members)} members."))

    def _create_events(self) -> tuple[Event, Event]:
        start = timezone.now() + timedelta(days=14)
        gala, _ = Event.objects.get_or_create(
            slug="winter-gala",
            defaults={
                "name": "Winter Gala",
                "description": "Black tie dinner at the old opera house.",
                "status": Event.EventStatus.OPEN,
                "start": start,
                "end": start + timedelta(hours=6),
                "capacity": 200,
            },
        )
        tasting, _ = Event.objects.get_or_create(
            slug="private-tasting",
            defaults={
                "name": "Private Tasting",
                "description": "Rare vintages, twelve seats.",
                "status": Event.EventStatus.OPEN,
                "start": start + timedelta(days=7),
                "capacity": 12,
            },
        )
        return gala, tasting

    def _create_member(self, index: int) -> MaisonUser:
        first_name, last_name = self.fake.first_name(), self.fake.last_name()
        email = f"{first_name}.{last_name}.{index}@members.maison.test".lower()
        tiers = MaisonUser.MembershipTier.values
        member = MaisonUser.objects.create_user(
            username=email,
            email=email,
            password="password",
            first_name=first_name,
            last_name=last_name,
            membership_tier=tiers[index % len(tiers)],
            phone_number=f"+4366{self.fake.numerify('########')}",
            age=self.fake.random_int(min=24, max=78),
            profession=self.fake.random_element(PROFESSIONS),
            company=self.fake.company(),
            city=self.fake.city(),
            bio=self.fake.sentence(nb_words=12),
            interests=self.fake.random_elements(INTERESTS, length=3, unique=True),
        )
        PrivacyPreferences.objects.filter(user=member).update(
            default_privacy_level=index % 5 + 1,
            allow_contact_requests=index % 4 != 0,
            show_in_participant_lists=index % 7 != 6,
        )
        return member

    def _register(self, member: MaisonUser, event: Event, index: int) -> None:
        if index % 8 == 5:
            update_participant_access(member.pk, event.pk, PaymentStatus.PENDING)
            return
        record = update_participant_access(member.pk, event.pk, PaymentStatus.PAID)
        if index % 8 == 7:
            update_participant_access(member.pk, event.pk, PaymentStatus.REFUNDED)
        elif index % 6 == 1:
            record.access_level = AccessLevel.FULL
            record.save(update_fields=["access_level", "updated_at"])
        if index % 5 == 2:
            EventPrivacyOverride.objects.update_or_create(user=member, event=event, defaults={"privacy_level": 5})
