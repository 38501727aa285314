"""Field redactor: which attributes of a participant a viewer gets to see.

The exposure table is keyed by privacy level. Each level adds fields on top of every more
private level, so level 5 exposes the least and level 1 the whole profile. A viewer with
"basic" access sees the fields of the participant's level; "full" access unlocks one more
level of detail, except at level 5 whose floor holds regardless of the viewer.
"""

import re
import typing as t
from uuid import UUID

from django.conf import settings
from pydantic import BaseModel

from accounts.models import MaisonUser
from participants.exceptions import AccessDeniedError
from participants.models import MAX_PRIVACY_LEVEL, MIN_PRIVACY_LEVEL, AccessLevel
from participants.service.access import can_initiate_contact, has_at_least
from participants.service.privacy import PrivacyPolicy

DISPLAY_NAME = "display_name"
MEMBERSHIP_TIER = "membership_tier"
PROFILE_PICTURE = "profile_picture"
PROFESSION_CATEGORY = "profession_category"
FULL_NAME = "full_name"
CITY = "city"
AGE_RANGE = "age_range"
INTERESTS = "interests"
PROFESSION = "profession"
COMPANY = "company"
BIO = "bio"
EMAIL = "email"
PHONE_NUMBER = "phone_number"

DEFAULT_FIELD_ADDITIONS: dict[int, tuple[str, ...]] = {
    5: (DISPLAY_NAME, MEMBERSHIP_TIER),
    4: (PROFILE_PICTURE, PROFESSION_CATEGORY),
    3: (FULL_NAME, CITY, AGE_RANGE, INTERESTS),
    2: (PROFESSION, COMPANY, BIO),
    1: (EMAIL, PHONE_NUMBER),
}

# Listing metadata every viewer with access gets on top of the table fields. The effective
# level is observable through the min_privacy_level filter anyway.
ALWAYS_EXPOSED_METADATA: frozenset[str] = frozenset({"id", "privacy_level", "can_contact"})

PROFESSION_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Technology": ("software", "engineer", "developer", "tech", "it", "data", "ai", "machine learning"),
    "Finance": ("finance", "banking", "banker", "investment", "fund", "trading", "analyst", "wealth"),
    "Healthcare": ("doctor", "physician", "medical", "health", "nurse", "surgeon"),
    "Business": ("ceo", "manager", "director", "executive", "business", "entrepreneur", "founder"),
    "Legal": ("lawyer", "attorney", "legal", "counsel", "judge"),
    "Real Estate": ("real estate", "property", "development", "construction"),
    "Consulting": ("consultant", "consulting", "advisory"),
    "Education": ("professor", "teacher", "education", "academic"),
    "Media": ("media", "journalist", "marketing", "advertising", "pr"),
}
DEFAULT_PROFESSION_CATEGORY = "Professional"

AGE_BRACKETS: tuple[tuple[int, str], ...] = (
    (25, "18-24"),
    (30, "25-29"),
    (35, "30-34"),
    (40, "35-39"),
    (45, "40-44"),
    (50, "45-49"),
    (55, "50-54"),
    (60, "55-59"),
    (65, "60-64"),
)


class RedactedParticipant(BaseModel):
    id: UUID
    display_name: str
    membership_tier: str
    privacy_level: int
    can_contact: bool
    profile_picture: str | None = None
    profession_category: str | None = None
    city: str | None = None
    age_range: str | None = None
    interests: list[str] | None = None
    profession: str | None = None
    company: str | None = None
    bio: str | None = None
    email: str | None = None
    phone_number: str | None = None


def build_field_tiers(additions: t.Mapping[int, t.Iterable[str]]) -> dict[int, frozenset[str]]:
    """Accumulate per-level additions into the full field set of each privacy level."""
    missing = set(range(MIN_PRIVACY_LEVEL, MAX_PRIVACY_LEVEL + 1)) - set(additions)
    if missing:
        raise ValueError(f"Field exposure table is missing privacy levels {sorted(missing)}.")
    tiers: dict[int, frozenset[str]] = {}
    exposed: frozenset[str] = frozenset()
    for level in range(MAX_PRIVACY_LEVEL, MIN_PRIVACY_LEVEL - 1, -1):
        exposed = exposed | frozenset(additions[level])
        tiers[level] = exposed
    return tiers


def get_field_tiers() -> dict[int, frozenset[str]]:
    """The configured exposure table."""
    additions = getattr(settings, "MAISON_PARTICIPANT_FIELD_TIERS", None) or DEFAULT_FIELD_ADDITIONS
    return build_field_tiers({int(level): fields for level, fields in additions.items()})


def exposed_fields(
    privacy_level: int, access_level: AccessLevel, tiers: t.Mapping[int, frozenset[str]] | None = None
) -> frozenset[str]:
    """The fields a viewer with access_level sees of a participant at privacy_level."""
    if not has_at_least(access_level, AccessLevel.BASIC):
        return frozenset()
    tiers = tiers or get_field_tiers()
    level = privacy_level
    if access_level == AccessLevel.FULL and MIN_PRIVACY_LEVEL < privacy_level < MAX_PRIVACY_LEVEL:
        level = privacy_level - 1
    return tiers[level]


def profession_category(profession: str | None) -> str:
    """Generalize a free-text profession into a coarse category."""
    if not profession:
        return DEFAULT_PROFESSION_CATEGORY
    lowered = profession.lower()
    for category, keywords in PROFESSION_CATEGORIES.items():
        if any(re.search(rf"\b{re.escape(keyword)}\b", lowered) for keyword in keywords):
            return category
    return DEFAULT_PROFESSION_CATEGORY


def age_range(age: int | None) -> str | None:
    if age is None:
        return None
    for upper_bound, label in AGE_BRACKETS:
        if age < upper_bound:
            return label
    return "65+"


def display_name(participant: MaisonUser, *, full: bool) -> str:
    """Full name, or first name and last initial."""
    first, last = participant.first_name.strip(), participant.last_name.strip()
    if full:
        return f"{first} {last}".strip() or participant.display_name
    if first and last:
        return f"{first} {last[0]}."
    return first or "Member"


FIELD_EXTRACTORS: dict[str, t.Callable[[MaisonUser], t.Any]] = {
    PROFILE_PICTURE: lambda p: p.profile_picture or None,
    PROFESSION_CATEGORY: lambda p: profession_category(p.profession),
    CITY: lambda p: p.city or None,
    AGE_RANGE: lambda p: age_range(p.age),
    INTERESTS: lambda p: list(p.interests or []),
    PROFESSION: lambda p: p.profession or None,
    COMPANY: lambda p: p.company or None,
    BIO: lambda p: p.bio or None,
    EMAIL: lambda p: p.email or None,
    PHONE_NUMBER: lambda p: p.phone_number or None,
}


def redact_participant(
    participant: MaisonUser,
    policy: PrivacyPolicy,
    access_level: AccessLevel,
    tiers: t.Mapping[int, frozenset[str]] | None = None,
) -> RedactedParticipant:
    """Apply the effective policy of a participant against the viewer's access level.

    Raises:
        AccessDeniedError: If the viewer has no access; such viewers never see participants.
    """
    fields = exposed_fields(policy.privacy_level, access_level, tiers)
    if not fields:
        raise AccessDeniedError("Participant details require at least basic access.")
    data: dict[str, t.Any] = {
        field: extractor(participant) for field, extractor in FIELD_EXTRACTORS.items() if field in fields
    }
    return RedactedParticipant(
        id=participant.pk,
        display_name=display_name(participant, full=FULL_NAME in fields),
        membership_tier=participant.membership_tier,
        privacy_level=policy.privacy_level,
        can_contact=can_initiate_contact(access_level, policy),
        **data,
    )
