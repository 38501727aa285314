from .participants import ParticipantController
from .preferences import PrivacyPreferencesController

__all__ = ["ParticipantController", "PrivacyPreferencesController"]
