class ParticipantsError(Exception):
    """Base class for participant visibility errors."""


class NotFoundError(ParticipantsError):
    """Raised when a requested resource does not exist or is not visible."""


class EventNotFoundError(NotFoundError):
    """Raised when the event does not exist."""


class ParticipantNotFoundError(NotFoundError):
    """Raised when a participant is absent from the event or hidden from lists."""


class AccessDeniedError(ParticipantsError):
    """Raised when the viewer lacks the access level an operation requires."""


class StoreUnavailableError(ParticipantsError):
    """Raised when reading the access-control or privacy stores fails."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Participant store unavailable during {operation}.")
