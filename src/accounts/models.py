import re
import typing as t
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from accounts.validators import normalize_phone_number, validate_interests, validate_phone_number


class MaisonUserManager(UserManager["MaisonUser"]):
    """Manager for MaisonUser."""


class MaisonUser(AbstractUser):
    class MembershipTier(models.TextChoices):
        GOLD = "Gold", "Gold"
        PLATINUM = "Platinum", "Platinum"
        DIAMOND = "Diamond", "Diamond"
        BLACK_CARD = "Black Card", "Black Card"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone_number = models.CharField(
        max_length=20, unique=True, null=True, blank=True, validators=[validate_phone_number], help_text="Phone number"
    )
    membership_tier = models.CharField(
        max_length=20, choices=MembershipTier.choices, default=MembershipTier.GOLD, db_index=True
    )
    age = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(18), MaxValueValidator(120)]
    )
    profession = models.CharField(max_length=255, blank=True)
    company = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=255, blank=True)
    bio = models.TextField(blank=True)
    interests = models.JSONField(default=list, blank=True, validators=[validate_interests])
    profile_picture = models.URLField(max_length=500, blank=True)

    objects = MaisonUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Normalize the phone number before saving."""
        if self.phone_number:
            self.phone_number = normalize_phone_number(self.phone_number)
        super().save(*args, **kwargs)

    @property
    def tier_rank(self) -> int:
        """Position of the membership tier, higher is more exclusive."""
        return MEMBERSHIP_TIER_RANK.get(self.membership_tier, 0)

    @property
    def display_name(self) -> str:
        """Display name."""
        return self.get_full_name() or re.sub(r"(\W|_)+", " ", self.username.split("@")[0]).title()


MEMBERSHIP_TIER_RANK: dict[str, int] = {
    MaisonUser.MembershipTier.GOLD: 1,
    MaisonUser.MembershipTier.PLATINUM: 2,
    MaisonUser.MembershipTier.DIAMOND: 3,
    MaisonUser.MembershipTier.BLACK_CARD: 4,
}
