import functools
import inspect
import typing as t
from uuid import UUID

import structlog
from django.db import DatabaseError

from events.models import Event
from participants.exceptions import EventNotFoundError, StoreUnavailableError

logger = structlog.get_logger(__name__)

P = t.ParamSpec("P")
R = t.TypeVar("R")


def store_guard(func: t.Callable[P, R]) -> t.Callable[P, R]:
    """Surface database failures of a store read as StoreUnavailableError.

    The failure is logged with the operation name and its bound arguments. Missing rows are
    not failures and never reach this guard.
    """
    signature = inspect.signature(func)

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except DatabaseError as e:
            bound = signature.bind(*args, **kwargs)
            logger.exception(
                "participant_store_unavailable",
                operation=func.__name__,
                arguments={k: str(v) for k, v in bound.arguments.items()},
            )
            raise StoreUnavailableError(func.__name__) from e

    return wrapper


def get_event(event_id: UUID) -> Event:
    """Fetch an event or raise EventNotFoundError."""
    try:
        return Event.objects.get(pk=event_id)
    except Event.DoesNotExist as e:
        raise EventNotFoundError(f"Event {event_id} does not exist.") from e
