"""Participant visibility settings."""

from decouple import Csv, config

# Membership tiers whose paid "basic" access is escalated to "full".
MAISON_FULL_ACCESS_TIERS = config("MAISON_FULL_ACCESS_TIERS", default="Diamond,Black Card", cast=Csv())

MAISON_PARTICIPANT_PAGE_SIZE_DEFAULT = config("MAISON_PARTICIPANT_PAGE_SIZE_DEFAULT", default=20, cast=int)
MAISON_PARTICIPANT_PAGE_SIZE_MAX = config("MAISON_PARTICIPANT_PAGE_SIZE_MAX", default=100, cast=int)

# Optional override of the field exposure table, keyed by privacy level (1-5).
# Each value lists the fields *added* at that level on top of every more private level.
# None means participants.service.redaction.DEFAULT_FIELD_ADDITIONS is used.
MAISON_PARTICIPANT_FIELD_TIERS: dict[int, list[str]] | None = None
