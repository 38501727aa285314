import typing as t

from django.contrib.auth.models import AnonymousUser
from ninja_extra import ControllerBase

from accounts.models import MaisonUser
from common.utils import get_client_ip, get_user_agent


class UserAwareController(ControllerBase):
    def maybe_user(self) -> MaisonUser | AnonymousUser:
        """Get the user for this request."""
        return t.cast(MaisonUser | AnonymousUser, self.context.request.user)  # type: ignore[union-attr]

    def user(self) -> MaisonUser:
        """Get the user for this request."""
        return t.cast(MaisonUser, self.context.request.user)  # type: ignore[union-attr]

    def client_ip(self) -> str | None:
        """The client IP address for audit logging."""
        return get_client_ip(self.context.request)  # type: ignore[arg-type]

    def user_agent(self) -> str:
        """The client user agent for audit logging."""
        return get_user_agent(self.context.request)  # type: ignore[arg-type]
