"""Controller for a member's global privacy defaults."""

from ninja_extra import api_controller, route

from common.authentication import MemberJWTAuth
from common.controllers import UserAwareController
from participants import models, schema
from participants.service import privacy as privacy_service


@api_controller("/preferences", auth=MemberJWTAuth(), tags=["User Preferences"])
class PrivacyPreferencesController(UserAwareController):
    @route.get("/privacy", url_name="get_privacy_preferences", response=schema.PrivacyPreferencesSchema)
    def get_privacy_preferences(self) -> models.PrivacyPreferences:
        """Get your global privacy defaults, used for every event without an override."""
        return privacy_service.get_privacy_preferences(self.user().pk)

    @route.put("/privacy", url_name="update_privacy_preferences", response=schema.PrivacyPreferencesSchema)
    def update_privacy_preferences(
        self, payload: schema.PrivacyPreferencesUpdateSchema
    ) -> models.PrivacyPreferences:
        """Update your global privacy defaults. Omitted fields are left unchanged."""
        return privacy_service.update_privacy_preferences(self.user().pk, payload)
