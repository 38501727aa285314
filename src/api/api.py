from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI
from ninja_jwt.controller import NinjaJWTDefaultController

from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from participants.controllers import ParticipantController, PrivacyPreferencesController
from participants.exceptions import AccessDeniedError, NotFoundError, StoreUnavailableError

from .exception_handlers import (
    handle_access_denied_error,
    handle_django_validation_error,
    handle_general_exception,
    handle_not_found_error,
    handle_store_unavailable_error,
)

api = NinjaExtraAPI(
    title="Maison Backend API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Maison API {settings.VERSION}",
    app_name=f"maison-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION, demo=settings.DEMO_MODE)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    # Auth controllers
    NinjaJWTDefaultController,
    # Participant controllers
    ParticipantController,
    PrivacyPreferencesController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    NotFoundError: handle_not_found_error,
    AccessDeniedError: handle_access_denied_error,
    StoreUnavailableError: handle_store_unavailable_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
