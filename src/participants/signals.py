import typing as t

import structlog
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from participants.models import PrivacyPreferences

logger = structlog.get_logger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def handle_user_creation(sender: type, instance: t.Any, created: bool, **kwargs: t.Any) -> None:
    """Create the global privacy defaults of a new member."""
    if not created:
        return
    PrivacyPreferences.objects.get_or_create(user=instance)
    logger.debug("privacy_preferences_created", user_id=str(instance.pk))
