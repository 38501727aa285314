"""Exception handlers for the API."""

import traceback
import typing as t

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from common.utils import obfuscate
from participants.exceptions import AccessDeniedError, NotFoundError, StoreUnavailableError

logger = structlog.get_logger(__name__)


def _request_metadata(request: HttpRequest) -> dict[str, t.Any]:
    metadata: dict[str, t.Any] = {
        "headers": obfuscate(dict(request.headers)),
        "method": request.method,
        "path": request.path,
        "GET": obfuscate(request.GET.dict()),
        # request.user is set by the auth flow
        "user": str(request.user) if getattr(request, "user", None) else None,
    }
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            metadata["json_payload"] = obfuscate(orjson.loads(request.body))
        except (orjson.JSONDecodeError, TypeError):  # pragma: no cover
            metadata["json_payload"] = None
    return metadata


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    logger.exception("INTERNAL_SERVER_ERROR", exc_info=True, stack_info=True, **_request_metadata(request))
    data = {"detail": "Internal Server Error."}
    is_staff = getattr(request, "user", None) and request.user.is_staff
    if settings.DEBUG or is_staff:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.warning("VALIDATION_ERROR", path=request.path)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(exc.messages)}
    return Response(status=400, data={"errors": error_dict})


def handle_not_found_error(request: HttpRequest, exc: NotFoundError | t.Type[NotFoundError]) -> Response:
    """Handle a missing event or participant."""
    return Response(status=404, data={"detail": str(exc) or "Not found."})


def handle_access_denied_error(request: HttpRequest, exc: AccessDeniedError | t.Type[AccessDeniedError]) -> Response:
    """Handle a viewer without enough participant access."""
    return Response(status=403, data={"detail": str(exc) or "You do not have access to this resource."})


def handle_store_unavailable_error(
    request: HttpRequest, exc: StoreUnavailableError | t.Type[StoreUnavailableError]
) -> Response:
    """Handle an unreachable access or privacy store.

    The underlying error is not leaked to the client.
    """
    logger.error("PARTICIPANT_STORE_UNAVAILABLE", path=request.path, operation=getattr(exc, "operation", None))
    return Response(status=500, data={"detail": "Participant data is temporarily unavailable."})
