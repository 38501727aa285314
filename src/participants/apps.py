from django.apps import AppConfig


class ParticipantsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "participants"

    def ready(self) -> None:
        """Connect signal receivers."""
        from participants import signals  # noqa: F401
