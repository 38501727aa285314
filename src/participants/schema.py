"""Request and response schemas of the participants API."""

from datetime import datetime
from uuid import UUID

from ninja import Field, ModelSchema, Schema

from common.schema import OneToTwoThousandString
from participants.models import MAX_PRIVACY_LEVEL, MIN_PRIVACY_LEVEL, ContactRequest, PaymentStatus, PrivacyPreferences
from participants.service.participants import ParticipantFilters


class ParticipantListParams(Schema):
    page: int = Field(1, ge=1)
    page_size: int | None = Field(None, ge=1, le=100)
    membership_tier: str | None = None
    profession: str | None = Field(None, max_length=100)
    min_privacy_level: int | None = Field(None, ge=MIN_PRIVACY_LEVEL, le=MAX_PRIVACY_LEVEL)

    def to_filters(self) -> ParticipantFilters:
        return ParticipantFilters(
            membership_tier=self.membership_tier,
            profession=self.profession,
            min_privacy_level=self.min_privacy_level,
        )


class ContactRequestCreateSchema(Schema):
    message: OneToTwoThousandString


class ContactRequestSchema(ModelSchema):
    recipient_id: UUID
    event_id: UUID
    created_at: datetime

    class Meta:
        model = ContactRequest
        fields = ["id", "message", "status", "created_at"]


class PrivacyPreferencesSchema(ModelSchema):
    class Meta:
        model = PrivacyPreferences
        fields = ["default_privacy_level", "allow_contact_requests", "show_in_participant_lists"]


class PrivacyPreferencesUpdateSchema(Schema):
    default_privacy_level: int | None = Field(None, ge=MIN_PRIVACY_LEVEL, le=MAX_PRIVACY_LEVEL)
    allow_contact_requests: bool | None = None
    show_in_participant_lists: bool | None = None


class ParticipantAccessUpdateSchema(Schema):
    payment_status: PaymentStatus


class ParticipantAccessSchema(Schema):
    user_id: UUID
    event_id: UUID
    has_access: bool
    payment_status: str
    access_level: str
    access_granted_at: datetime | None = None
